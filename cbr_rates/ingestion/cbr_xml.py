"""Parse CBR ``ValCurs`` XML documents into ``DailyRateRecord`` rows."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import Tag
from lxml import etree

from cbr_rates.errors import FeedFormatError
from cbr_rates.ingestion.models import DailyFeed, DailyRateRecord
from cbr_rates.utils.cbr import CBR_FEED_DATE_FORMATS
from cbr_rates.utils.date_range import parse_date
from cbr_rates.utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass
class ValCursLocators:
    """Element and attribute names used by the CBR daily feed."""

    root: str = "ValCurs"
    date_attr: str = "Date"
    valute: str = "Valute"
    id_attr: str = "ID"
    num_code: str = "NumCode"
    char_code: str = "CharCode"
    nominal: str = "Nominal"
    name: str = "Name"
    value: str = "Value"


class CBRXMLParser:
    """Convert one day's CBR XML payload into a :class:`DailyFeed`.

    The feed is served as windows-1251 with a matching XML declaration, so raw
    bytes should be passed straight in and the declared encoding is honoured by
    the lxml tree builder. Rate values are kept as text; turning the decimal
    comma into a number is the aggregator's job.
    """

    def __init__(self, *, date_formats: tuple[str, ...] = CBR_FEED_DATE_FORMATS) -> None:
        self.date_formats = date_formats
        self.locators = ValCursLocators()

    def parse(self, payload: bytes | str, *, requested_date: date | None = None) -> DailyFeed:
        if not payload:
            raise FeedFormatError("Empty feed payload")

        try:
            soup = BeautifulSoup(payload, "xml")
        except (ParserRejectedMarkup, etree.LxmlError) as exc:
            raise FeedFormatError(f"Payload is not parseable XML: {exc}") from exc
        root = soup.find(self.locators.root)
        if not isinstance(root, Tag):
            raise FeedFormatError(f"Payload has no <{self.locators.root}> root element")

        as_of_date = self._feed_date(root)
        records = [
            self._record(valute, as_of_date)
            for valute in root.find_all(self.locators.valute, recursive=False)
        ]
        if requested_date is not None and requested_date != as_of_date:
            LOGGER.debug("Requested %s, feed is dated %s", requested_date, as_of_date)
        return DailyFeed(as_of_date=as_of_date, records=records, requested_date=requested_date)

    def _feed_date(self, root: Tag) -> date:
        raw = root.get(self.locators.date_attr)
        if not raw:
            raise FeedFormatError(
                f"<{self.locators.root}> is missing the {self.locators.date_attr} attribute"
            )
        try:
            return parse_date(str(raw), self.date_formats)
        except ValueError as exc:
            raise FeedFormatError(f"Unparseable feed date: {raw!r}") from exc

    def _record(self, valute: Tag, as_of_date: date) -> DailyRateRecord:
        char_code = self._child_text(valute, self.locators.char_code)
        nominal_raw = self._child_text(valute, self.locators.nominal)
        try:
            nominal = int(nominal_raw)
        except ValueError as exc:
            raise FeedFormatError(
                f"Nominal for {char_code} is not an integer: {nominal_raw!r}"
            ) from exc
        valute_id = valute.get(self.locators.id_attr)
        return DailyRateRecord(
            currency_code=char_code,
            numeric_code=self._child_text(valute, self.locators.num_code),
            display_name=self._child_text(valute, self.locators.name),
            nominal=nominal,
            rate_text=self._child_text(valute, self.locators.value),
            as_of_date=as_of_date,
            valute_id=str(valute_id) if valute_id else None,
        )

    @staticmethod
    def _child_text(valute: Tag, name: str) -> str:
        element = valute.find(name, recursive=False)
        if element is None:
            raise FeedFormatError(f"<Valute> is missing the <{name}> element")
        return element.get_text(strip=True)


def parse_cbr_xml(payload: bytes | str, *, requested_date: date | None = None) -> DailyFeed:
    """Shortcut for ``CBRXMLParser().parse(payload)``."""

    return CBRXMLParser().parse(payload, requested_date=requested_date)


__all__ = ["CBRXMLParser", "ValCursLocators", "parse_cbr_xml"]
