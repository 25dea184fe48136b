"""Public interface for the cbr_rates package."""

from __future__ import annotations

from importlib import metadata as importlib_metadata
from typing import Any

from cbr_rates.errors import CBRRatesError, FeedFormatError, TransportError
from cbr_rates.ingestion.models import DailyFeed, DailyRateRecord
from cbr_rates.stats.aggregator import (
    CurrencyAggregate,
    SkipReason,
    StatisticsAggregator,
    normalise_rate_text,
    parse_rate,
)

__all__ = [
    "__version__",
    "AnalysisResult",
    "CBRRatesError",
    "CBRRequestsClient",
    "CBRXMLParser",
    "CurrencyAggregate",
    "DailyFeed",
    "DailyRateRecord",
    "FeedFormatError",
    "SkipReason",
    "StatisticsAggregator",
    "TransportError",
    "analyze_cbr_rates",
    "normalise_rate_text",
    "parse_rate",
]

try:
    __version__ = importlib_metadata.version("cbr-rates")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


def __getattr__(name: str) -> Any:
    """Lazily import the network-facing helpers (requests, bs4)."""

    if name in {"analyze_cbr_rates", "AnalysisResult"}:
        from cbr_rates.analysis import trailing_summary

        return getattr(trailing_summary, name)
    if name == "CBRRequestsClient":
        from cbr_rates.ingestion.cbr_requests import CBRRequestsClient as _client

        return _client
    if name == "CBRXMLParser":
        from cbr_rates.ingestion.cbr_xml import CBRXMLParser as _parser

        return _parser
    raise AttributeError(f"module 'cbr_rates' has no attribute {name}")
