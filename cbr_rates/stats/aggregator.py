"""Streaming per-currency statistics over daily CBR feeds.

Each record is folded into a running :class:`CurrencyAggregate` in one pass:
min/max with the date they were reached, a running total and a count. The
average is only derived in :meth:`StatisticsAggregator.finalize`.

Extremes move on strict inequality only, so when the same extreme value is
published on several days the first one folded keeps the date. Feeding days
out of chronological order therefore changes which date is reported for a
tied extreme, but never the values themselves.

The aggregator is not thread-safe; fold from a single thread.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Iterator

from cbr_rates.ingestion.models import DailyFeed, DailyRateRecord
from cbr_rates.utils.logger import get_logger

LOGGER = get_logger(__name__)


class SkipReason(str, Enum):
    """Why a record was left out of the statistics."""

    NOT_NUMERIC = "not_numeric"


@dataclass(slots=True)
class CurrencyAggregate:
    """Running statistics for one currency code."""

    currency_code: str
    display_name: str
    numeric_code: str
    nominal: int
    min_value: float
    max_value: float
    min_date: date
    max_date: date
    total: float
    count: int = 1
    average: float | None = None

    @classmethod
    def first(cls, record: DailyRateRecord, value: float) -> "CurrencyAggregate":
        return cls(
            currency_code=record.currency_code,
            display_name=record.display_name,
            numeric_code=record.numeric_code,
            nominal=record.nominal,
            min_value=value,
            max_value=value,
            min_date=record.as_of_date,
            max_date=record.as_of_date,
            total=value,
        )

    def observe(self, value: float, as_of_date: date) -> None:
        self.total += value
        self.count += 1
        if value > self.max_value:
            self.max_value = value
            self.max_date = as_of_date
        if value < self.min_value:
            self.min_value = value
            self.min_date = as_of_date

    def finalize(self) -> None:
        if self.count > 0:
            self.average = self.total / self.count


def normalise_rate_text(text: str) -> str:
    """Turn a CBR decimal-comma rate (``"75,5012"``) into ``"75.5012"``."""

    return text.strip().replace(",", ".")


def parse_rate(text: str) -> float | None:
    """Return the numeric rate for ``text`` or ``None`` when it is not a finite number."""

    try:
        value = float(normalise_rate_text(text))
    except (TypeError, ValueError, AttributeError):
        return None
    if not math.isfinite(value):
        return None
    return value


class StatisticsAggregator:
    """Fold :class:`DailyRateRecord` rows into per-currency aggregates.

    ``table`` may be supplied to share or inspect state; by default every
    aggregator owns a fresh one.
    """

    def __init__(self, table: dict[str, CurrencyAggregate] | None = None) -> None:
        self.table: dict[str, CurrencyAggregate] = table if table is not None else {}

    def fold(self, record: DailyRateRecord) -> SkipReason | None:
        """Fold one record; return a :class:`SkipReason` if it was ignored."""

        value = parse_rate(record.rate_text)
        if value is None:
            return SkipReason.NOT_NUMERIC

        aggregate = self.table.get(record.currency_code)
        if aggregate is None:
            self.table[record.currency_code] = CurrencyAggregate.first(record, value)
        else:
            aggregate.observe(value, record.as_of_date)
        return None

    def fold_feed(self, feed: DailyFeed | Iterable[DailyRateRecord]) -> list[DailyRateRecord]:
        """Fold every record of one day's feed and return the skipped ones."""

        records = feed.records if isinstance(feed, DailyFeed) else feed
        skipped: list[DailyRateRecord] = []
        for record in records:
            reason = self.fold(record)
            if reason is not None:
                LOGGER.warning(
                    "Skipping %s rate %r for %s (%s)",
                    record.currency_code,
                    record.rate_text,
                    record.as_of_date,
                    reason.value,
                )
                skipped.append(record)
        return skipped

    def finalize(self) -> list[CurrencyAggregate]:
        """Compute averages and return all aggregates ordered by currency code."""

        for aggregate in self.table.values():
            aggregate.finalize()
        return [self.table[code] for code in sorted(self.table)]

    def get(self, currency_code: str) -> CurrencyAggregate | None:
        return self.table.get(currency_code)

    def __contains__(self, currency_code: object) -> bool:
        return currency_code in self.table

    def __len__(self) -> int:
        return len(self.table)

    def __iter__(self) -> Iterator[CurrencyAggregate]:
        return iter(self.table.values())


__all__ = [
    "CurrencyAggregate",
    "SkipReason",
    "StatisticsAggregator",
    "normalise_rate_text",
    "parse_rate",
]
