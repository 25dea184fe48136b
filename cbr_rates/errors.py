"""Exception hierarchy raised by the feed client and parser."""

from __future__ import annotations


class CBRRatesError(Exception):
    """Base class for errors raised by :mod:`cbr_rates`."""


class TransportError(CBRRatesError, RuntimeError):
    """A single day's feed could not be downloaded."""

    def __init__(self, message: str, *, url: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class FeedFormatError(CBRRatesError, ValueError):
    """A downloaded payload is not a well-formed ``ValCurs`` document."""


__all__ = ["CBRRatesError", "TransportError", "FeedFormatError"]
