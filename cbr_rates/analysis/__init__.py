"""Rate analysis runs for :mod:`cbr_rates`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

__all__ = ["AnalysisResult", "analyze_cbr_rates"]

if TYPE_CHECKING:  # pragma: no cover - import only for static analyzers
    from cbr_rates.analysis.trailing_summary import AnalysisResult as AnalysisResult
    from cbr_rates.analysis.trailing_summary import analyze_cbr_rates as analyze_cbr_rates


def __getattr__(name: str) -> Any:
    """Lazily expose the driver so importing the package does not pull in requests."""

    if name == "analyze_cbr_rates":
        from cbr_rates.analysis.trailing_summary import analyze_cbr_rates as _analyze

        return _analyze
    if name == "AnalysisResult":
        from cbr_rates.analysis.trailing_summary import AnalysisResult as _result

        return _result
    raise AttributeError(f"module 'cbr_rates.analysis' has no attribute {name}")
