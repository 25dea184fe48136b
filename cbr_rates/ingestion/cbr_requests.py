"""requests-based downloader for the CBR daily rates XML feed."""

from __future__ import annotations

from datetime import date
from typing import Optional

import requests

from cbr_rates.errors import TransportError
from cbr_rates.utils.cbr import (
    CBR_DAILY_URL,
    CBR_REQUEST_DATE_FORMAT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    build_daily_url,
)
from cbr_rates.utils.logger import get_logger

LOGGER = get_logger(__name__)


class CBRRequestsClient:
    """Issue one GET per calendar day against the CBR ``XML_daily`` endpoint."""

    def __init__(
        self,
        *,
        url_template: str = CBR_DAILY_URL,
        timeout: float = DEFAULT_TIMEOUT,
        date_format: str = CBR_REQUEST_DATE_FORMAT,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url_template = url_template
        self.timeout = timeout
        self.date_format = date_format
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    def url_for(self, day: date) -> str:
        """Return the feed URL for ``day``."""

        return build_daily_url(day.strftime(self.date_format), template=self.url_template)

    def fetch(self, day: date) -> bytes:
        """Download the raw XML published for ``day``.

        The body is returned undecoded: the feed declares its own
        (windows-1251) encoding and the parser honours it.
        """

        url = self.url_for(day)
        LOGGER.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc
        self._raise_with_context(response, url)
        return response.content

    @staticmethod
    def _raise_with_context(response: requests.Response, url: str) -> None:
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = response.status_code
            raise TransportError(
                f"CBR responded with HTTP {status} for {url}.", url=url, status=status
            ) from exc

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "CBRRequestsClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["CBRRequestsClient"]
