"""Tests for typerank.core.comparison – comparing two session results."""

from __future__ import annotations

import pytest

from typerank.core.comparison import MetricComparison, compare_metric, compare_results, is_better, percent_change
from typerank.core.results import AggregateResult


class TestHelpers:
    def test_is_better_higher(self):
        assert is_better(10, 5)
        assert not is_better(5, 5)

    def test_is_better_lower(self):
        assert is_better(3, 5, higher_is_better=False)
        assert not is_better(7, 5, higher_is_better=False)

    def test_percent_change(self):
        assert percent_change(150, 100) == pytest.approx(50.0)
        assert percent_change(50, 100) == pytest.approx(-50.0)

    def test_percent_change_from_zero(self):
        assert percent_change(10, 0) is None

    def test_compare_metric(self):
        assert compare_metric(120, 100) == MetricComparison(
            current=120, past=100, difference=20, percent_change=20.0, is_better=True
        )


class TestCompareResults:
    def test_all_metrics(self):
        current = AggregateResult(average_accuracy=97.5, total_wpm=60, total_cpm=300, total_score=900, total_elapsed_time=40.0)
        past = AggregateResult(average_accuracy=95.0, total_wpm=50, total_cpm=250, total_score=1000, total_elapsed_time=45.0)
        report = compare_results(current, past)
        assert set(report) == {"score", "accuracy", "wpm", "cpm", "time"}
        assert report["score"].is_better is False
        assert report["score"].difference == -100
        assert report["accuracy"].difference == pytest.approx(2.5)
        assert report["wpm"].percent_change == pytest.approx(20.0)
        assert report["cpm"].is_better is True

    def test_shorter_time_is_better(self):
        current = AggregateResult(total_elapsed_time=40.0)
        past = AggregateResult(total_elapsed_time=45.0)
        assert compare_results(current, past)["time"].is_better is True

    def test_zero_past(self):
        report = compare_results(AggregateResult(total_score=100), AggregateResult())
        assert report["score"].percent_change is None
