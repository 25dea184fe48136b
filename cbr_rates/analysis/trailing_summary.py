"""CLI + helpers for summarising CBR exchange rates over the trailing 90 days."""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from cbr_rates.errors import FeedFormatError, TransportError
from cbr_rates.ingestion.cbr_requests import CBRRequestsClient
from cbr_rates.ingestion.cbr_xml import CBRXMLParser
from cbr_rates.ingestion.strategy import FeedClient
from cbr_rates.stats.aggregator import CurrencyAggregate, StatisticsAggregator
from cbr_rates.stats.report import RENDERERS
from cbr_rates.utils.cbr import DEFAULT_TIMEOUT, DEFAULT_WINDOW_DAYS
from cbr_rates.utils.date_range import DateRange, trailing_window
from cbr_rates.utils.logger import get_logger, set_log_level

LOGGER = get_logger(__name__)

__all__ = ["AnalysisResult", "analyze_cbr_rates", "parse_args", "main"]


@dataclass(slots=True)
class AnalysisResult:
    """Finalized aggregates plus bookkeeping about the run."""

    window: DateRange
    aggregates: list[CurrencyAggregate] = field(default_factory=list)
    days_processed: int = 0
    days_skipped: int = 0
    records_skipped: int = 0

    @property
    def days_total(self) -> int:
        return self.days_processed + self.days_skipped


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=sorted(RENDERERS),
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Per-request timeout in seconds",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    )
    return parser.parse_args(argv)


def _process_day(
    day: date,
    *,
    client: FeedClient,
    parser: CBRXMLParser,
    aggregator: StatisticsAggregator,
    result: AnalysisResult,
) -> None:
    try:
        payload = client.fetch(day)
        feed = parser.parse(payload, requested_date=day)
    except TransportError as exc:
        LOGGER.warning("Skipping %s: %s", day, exc)
        result.days_skipped += 1
        return
    except FeedFormatError as exc:
        LOGGER.warning("Skipping %s: malformed feed (%s)", day, exc)
        result.days_skipped += 1
        return

    skipped = aggregator.fold_feed(feed)
    result.days_processed += 1
    result.records_skipped += len(skipped)
    LOGGER.info("%s → %s rates (feed dated %s)", day, len(feed) - len(skipped), feed.as_of_date)


def analyze_cbr_rates(
    *,
    end: date | None = None,
    client: FeedClient | None = None,
    parser: CBRXMLParser | None = None,
    aggregator: StatisticsAggregator | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> AnalysisResult:
    """Fetch every day of the trailing window ending on ``end`` and aggregate the rates.

    Days whose download or parse fails are logged and skipped; the run always
    returns whatever was accumulated.
    """

    window = trailing_window(end or date.today(), window_days)
    feed_parser = parser or CBRXMLParser()
    stats = aggregator if aggregator is not None else StatisticsAggregator()
    result = AnalysisResult(window=window)
    owns_client = client is None
    feed_client: FeedClient = client if client is not None else CBRRequestsClient(timeout=timeout)

    LOGGER.info("Collecting CBR rates from %s to %s", window.start, window.end)
    started = time.perf_counter()
    try:
        for day in window.days():
            _process_day(
                day, client=feed_client, parser=feed_parser, aggregator=stats, result=result
            )
    finally:
        if owns_client and isinstance(feed_client, CBRRequestsClient):
            feed_client.close()

    result.aggregates = stats.finalize()
    LOGGER.info(
        "Processed %s/%s days in %.2f s: %s currencies, %s days skipped, %s rates skipped",
        result.days_processed,
        result.days_total,
        time.perf_counter() - started,
        len(result.aggregates),
        result.days_skipped,
        result.records_skipped,
    )
    return result


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    set_log_level(args.log_level)
    result = analyze_cbr_rates(timeout=args.timeout)
    if result.aggregates:
        print(RENDERERS[args.output_format](result.aggregates))
    else:
        LOGGER.warning("No rates collected for %s → %s", result.window.start, result.window.end)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
