"""Utility helpers for walking the trailing window of feed days."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, Tuple


@dataclass(frozen=True)
class DateRange:
    """Container representing a closed date range."""

    start: date
    end: date

    def as_tuple(self) -> Tuple[date, date]:
        """Return the range as a tuple of ``(start, end)``."""
        return (self.start, self.end)

    def days(self) -> Iterator[date]:
        """Yield every calendar day in the range, oldest first."""
        return iter_days(self.start, self.end)

    def __len__(self) -> int:
        return (self.end - self.start).days + 1


def parse_date(value: str | date, formats: Iterable[str] = ("%Y-%m-%d",)) -> date:
    """Parse ``value`` using the first matching format in ``formats``."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    cleaned = value.strip()
    for fmt in formats:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised date: {value!r}")


def trailing_window(end: str | date, window_days: int) -> DateRange:
    """Return the ``window_days`` calendar days ending on ``end`` (inclusive)."""

    if window_days <= 0:
        raise ValueError("window_days must be positive")
    end_date = parse_date(end)
    return DateRange(start=end_date - timedelta(days=window_days - 1), end=end_date)


def iter_days(start: str | date, end: str | date) -> Iterator[date]:
    """Yield each day from ``start`` to ``end`` inclusive."""

    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date > end_date:
        raise ValueError("start date must not be after end date")

    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)
