"""Data models shared across ingestion modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(slots=True)
class DailyRateRecord:
    """Representation of a single ``Valute`` entry of one CBR daily feed."""

    currency_code: str
    numeric_code: str
    display_name: str
    nominal: int
    rate_text: str
    as_of_date: date
    valute_id: str | None = None


@dataclass(slots=True)
class DailyFeed:
    """All records published in one ``ValCurs`` document."""

    as_of_date: date
    records: list[DailyRateRecord] = field(default_factory=list)
    requested_date: date | None = None

    def __len__(self) -> int:
        return len(self.records)
