"""Composite score from accuracy, speed and difficulty."""

from __future__ import annotations

from typing import Dict, Sequence

from typerank.core.metrics import round_half_up

ACCURACY_WEIGHT = 500.0
WPM_WEIGHT = 3.5
CPM_WEIGHT = 0.5

PERFECT_BONUS = 1.25
SPEED_BONUS = 1.05
SPEED_BONUS_WPM = 150

DIFFICULTY_MULTIPLIERS: Dict[str, float] = {
    "easy": 1.0,
    "medium": 1.3,
    "hard": 1.7,
}


def accuracy_score(accuracy: float) -> float:
    """Quadratic reward: 100% accuracy is worth ACCURACY_WEIGHT points."""
    return (accuracy / 100.0) ** 2 * ACCURACY_WEIGHT


def speed_score(wpm: float, cpm: float) -> float:
    return wpm * WPM_WEIGHT + cpm * CPM_WEIGHT


def difficulty_multiplier(difficulty: str) -> float:
    return DIFFICULTY_MULTIPLIERS.get(difficulty, 1.0)


def calculate_score(accuracy: float, wpm: float, cpm: float, difficulty: str = "easy") -> int:
    """Add accuracy and speed components, then apply the bonuses.

    Accuracy and speed are weighted independently and summed; a perfect
    answer earns PERFECT_BONUS, WPM at or above SPEED_BONUS_WPM earns
    SPEED_BONUS, and the difficulty multiplier is applied last.
    """
    total = accuracy_score(accuracy) + speed_score(wpm, cpm)
    if accuracy == 100:
        total *= PERFECT_BONUS
    if wpm >= SPEED_BONUS_WPM:
        total *= SPEED_BONUS
    total *= difficulty_multiplier(difficulty)
    return round_half_up(total)


def aggregate_score(scores: Sequence[int]) -> int:
    """Average per-question score, so sessions of any length compare fairly."""
    if not scores:
        return 0
    return round_half_up(sum(scores) / len(scores))
