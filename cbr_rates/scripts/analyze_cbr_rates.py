"""CLI entry point for the 90-day CBR rate summary."""

from __future__ import annotations

from cbr_rates.analysis.trailing_summary import main

if __name__ == "__main__":  # pragma: no cover - thin wrapper
    raise SystemExit(main())
