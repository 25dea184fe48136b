"""CBR-specific constants shared across the package."""

from __future__ import annotations

CBR_DAILY_URL = "https://www.cbr.ru/scripts/XML_daily_eng.asp?date_req={date_req}"
CBR_REQUEST_DATE_FORMAT = "%d/%m/%Y"
# ValCurs/@Date is published as 02.03.2024; older archives used slashes.
CBR_FEED_DATE_FORMATS = ("%d.%m.%Y", "%d/%m/%Y")

DEFAULT_WINDOW_DAYS = 90
DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = "Mozilla/5.0"


def build_daily_url(date_req: str, *, template: str = CBR_DAILY_URL) -> str:
    """Fill the ``date_req`` placeholder of the daily feed URL."""

    return template.format(date_req=date_req)


__all__ = [
    "CBR_DAILY_URL",
    "CBR_REQUEST_DATE_FORMAT",
    "CBR_FEED_DATE_FORMATS",
    "DEFAULT_WINDOW_DAYS",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "build_daily_url",
]
