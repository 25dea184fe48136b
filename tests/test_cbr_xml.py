from __future__ import annotations

from datetime import date

import pytest

from cbr_rates.errors import FeedFormatError
from cbr_rates.ingestion.cbr_xml import CBRXMLParser, parse_cbr_xml

FEED = """<?xml version="1.0" encoding="windows-1251"?>
<ValCurs Date="02.03.2024" name="Foreign Currency Market">
    <Valute ID="R01235">
        <NumCode>840</NumCode>
        <CharCode>USD</CharCode>
        <Nominal>1</Nominal>
        <Name>US Dollar</Name>
        <Value>91,3336</Value>
        <VunitRate>91,3336</VunitRate>
    </Valute>
    <Valute ID="R01820">
        <NumCode>392</NumCode>
        <CharCode>JPY</CharCode>
        <Nominal>100</Nominal>
        <Name>Японских иен</Name>
        <Value>60,8413</Value>
        <VunitRate>0,608413</VunitRate>
    </Valute>
</ValCurs>
"""


def _payload(text: str = FEED) -> bytes:
    return text.encode("windows-1251")


def test_parser_reads_feed_date_and_records() -> None:
    feed = CBRXMLParser().parse(_payload(), requested_date=date(2024, 3, 3))

    assert feed.as_of_date == date(2024, 3, 2)
    assert feed.requested_date == date(2024, 3, 3)
    assert [record.currency_code for record in feed.records] == ["USD", "JPY"]
    usd, jpy = feed.records
    assert usd.numeric_code == "840"
    assert usd.rate_text == "91,3336"
    assert usd.valute_id == "R01235"
    assert jpy.nominal == 100
    assert {record.as_of_date for record in feed.records} == {date(2024, 3, 2)}


def test_parser_decodes_windows_1251_names() -> None:
    feed = parse_cbr_xml(_payload())

    assert feed.records[1].display_name == "Японских иен"


def test_parser_accepts_slash_dates_and_empty_feeds() -> None:
    feed = parse_cbr_xml(_payload('<ValCurs Date="01/01/2030" name="Foreign Currency Market"/>'))

    assert feed.as_of_date == date(2030, 1, 1)
    assert len(feed) == 0


@pytest.mark.parametrize(
    "payload",
    [
        b"",
        b"<html><body>Service unavailable</body></html>",
        b"definitely not xml",
        _payload('<ValCurs name="Foreign Currency Market"></ValCurs>'),
        _payload('<ValCurs Date="yesterday"></ValCurs>'),
    ],
)
def test_parser_rejects_documents_without_valid_valcurs(payload: bytes) -> None:
    with pytest.raises(FeedFormatError):
        CBRXMLParser().parse(payload)


def test_parser_rejects_non_integer_nominal() -> None:
    with pytest.raises(FeedFormatError, match="Nominal"):
        parse_cbr_xml(_payload(FEED.replace("<Nominal>100</Nominal>", "<Nominal>ten</Nominal>")))


def test_parser_rejects_valute_without_char_code() -> None:
    broken = FEED.replace("<CharCode>USD</CharCode>", "")

    with pytest.raises(FeedFormatError, match="CharCode"):
        parse_cbr_xml(_payload(broken))


def test_parser_keeps_non_numeric_value_text_for_the_aggregator() -> None:
    feed = parse_cbr_xml(_payload(FEED.replace("91,3336</Value>", "n/a</Value>")))

    assert feed.records[0].rate_text == "n/a"
