"""Compare a session result against an earlier one, metric by metric."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from typerank.core.results import AggregateResult


@dataclass(frozen=True)
class MetricComparison:
    current: float
    past: float
    difference: float
    # None when the past value is zero.
    percent_change: Optional[float]
    is_better: bool


def is_better(current: float, past: float, higher_is_better: bool = True) -> bool:
    if higher_is_better:
        return current > past
    return current < past


def percent_change(current: float, past: float) -> Optional[float]:
    if past == 0:
        return None
    return (current - past) / past * 100.0


def compare_metric(current: float, past: float, higher_is_better: bool = True) -> MetricComparison:
    return MetricComparison(
        current=current,
        past=past,
        difference=current - past,
        percent_change=percent_change(current, past),
        is_better=is_better(current, past, higher_is_better),
    )


def compare_results(current: AggregateResult, past: AggregateResult) -> Dict[str, MetricComparison]:
    """Shorter total time counts as better; every other metric prefers higher values."""
    return {
        "score": compare_metric(current.total_score, past.total_score),
        "accuracy": compare_metric(current.average_accuracy, past.average_accuracy),
        "wpm": compare_metric(current.total_wpm, past.total_wpm),
        "cpm": compare_metric(current.total_cpm, past.total_cpm),
        "time": compare_metric(current.total_elapsed_time, past.total_elapsed_time, higher_is_better=False),
    }
