"""Abstractions for pluggable feed clients."""

from __future__ import annotations

from datetime import date
from typing import Protocol


class FeedClient(Protocol):
    """Contract for fetching one day's raw feed.

    Implementations return the undecoded response body for ``day`` and raise
    :class:`cbr_rates.errors.TransportError` when the download fails.
    """

    def fetch(self, day: date) -> bytes:
        ...  # pragma: no cover - protocol definition


__all__ = ["FeedClient"]
