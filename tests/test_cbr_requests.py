from __future__ import annotations

from datetime import date
from typing import Any

import pytest
import requests

from cbr_rates.errors import TransportError
from cbr_rates.ingestion.cbr_requests import CBRRequestsClient
from cbr_rates.ingestion.strategy import FeedClient


class _FakeResponse:
    def __init__(self, content: bytes = b"<ValCurs/>", status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class _FakeSession:
    def __init__(
        self, response: _FakeResponse | None = None, error: Exception | None = None
    ) -> None:
        self.headers: dict[str, str] = {}
        self.response = response or _FakeResponse()
        self.error = error
        self.calls: list[tuple[str, Any]] = []
        self.closed = False

    def get(self, url: str, timeout: Any = None) -> _FakeResponse:
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self) -> None:
        self.closed = True


def test_fetch_requests_day_with_cbr_date_format() -> None:
    session = _FakeSession(_FakeResponse(b"payload"))
    client = CBRRequestsClient(session=session, timeout=5)  # type: ignore[arg-type]

    body = client.fetch(date(2024, 3, 8))

    assert body == b"payload"
    assert session.calls == [
        ("https://www.cbr.ru/scripts/XML_daily_eng.asp?date_req=08/03/2024", 5)
    ]
    assert session.headers["User-Agent"] == "Mozilla/5.0"


def test_fetch_wraps_http_errors() -> None:
    session = _FakeSession(_FakeResponse(status_code=503))
    client = CBRRequestsClient(session=session)  # type: ignore[arg-type]

    with pytest.raises(TransportError) as excinfo:
        client.fetch(date(2024, 3, 8))

    assert excinfo.value.status == 503
    assert "08/03/2024" in str(excinfo.value.url)
    assert isinstance(excinfo.value.__cause__, requests.HTTPError)


def test_fetch_wraps_connection_errors() -> None:
    session = _FakeSession(error=requests.ConnectionError("boom"))
    client = CBRRequestsClient(session=session)  # type: ignore[arg-type]

    with pytest.raises(TransportError, match="boom"):
        client.fetch(date(2024, 3, 8))


def test_custom_url_template() -> None:
    client = CBRRequestsClient(
        session=_FakeSession(),  # type: ignore[arg-type]
        url_template="http://mirror.local/daily?d={date_req}",
        date_format="%Y-%m-%d",
    )

    assert client.url_for(date(2024, 1, 2)) == "http://mirror.local/daily?d=2024-01-02"


def test_context_manager_only_closes_owned_sessions(monkeypatch) -> None:
    injected = _FakeSession()
    with CBRRequestsClient(session=injected):  # type: ignore[arg-type]
        pass
    assert injected.closed is False

    owned = _FakeSession()
    monkeypatch.setattr(requests, "Session", lambda: owned)
    with CBRRequestsClient() as client:
        assert client.session is owned
    assert owned.closed is True


def test_client_satisfies_feed_client_protocol() -> None:
    client: FeedClient = CBRRequestsClient(session=_FakeSession())  # type: ignore[arg-type]

    assert client.fetch(date(2024, 1, 1)) == b"<ValCurs/>"
