"""Render finalized currency aggregates as text lines or JSON."""

from __future__ import annotations

import json
from typing import Any, Iterable

from cbr_rates.stats.aggregator import CurrencyAggregate

TEXT_DATE_FORMAT = "%d.%m.%Y"


def format_aggregate(aggregate: CurrencyAggregate) -> str:
    """Return the one-line summary for ``aggregate``."""

    if aggregate.average is None:
        raise ValueError(f"Aggregate for {aggregate.currency_code} has not been finalized")
    return (
        f"{aggregate.display_name} ({aggregate.currency_code}, {aggregate.numeric_code})"
        f" - Nominal: {aggregate.nominal},"
        f" Max: {aggregate.max_value:f} ({aggregate.max_date.strftime(TEXT_DATE_FORMAT)}),"
        f" Min: {aggregate.min_value:f} ({aggregate.min_date.strftime(TEXT_DATE_FORMAT)}),"
        f" Average: {aggregate.average:f}"
    )


def render_text(aggregates: Iterable[CurrencyAggregate]) -> str:
    return "\n".join(format_aggregate(aggregate) for aggregate in aggregates)


def as_dict(aggregate: CurrencyAggregate) -> dict[str, Any]:
    """Return a JSON-friendly payload for ``aggregate``."""

    return {
        "currency_code": aggregate.currency_code,
        "numeric_code": aggregate.numeric_code,
        "name": aggregate.display_name,
        "nominal": aggregate.nominal,
        "max": {"value": aggregate.max_value, "date": aggregate.max_date.isoformat()},
        "min": {"value": aggregate.min_value, "date": aggregate.min_date.isoformat()},
        "average": aggregate.average,
        "count": aggregate.count,
    }


def render_json(aggregates: Iterable[CurrencyAggregate]) -> str:
    payload = [as_dict(aggregate) for aggregate in aggregates]
    return json.dumps(payload, ensure_ascii=False, indent=2)


RENDERERS = {"text": render_text, "json": render_json}


__all__ = ["format_aggregate", "render_text", "render_json", "as_dict", "RENDERERS"]
