"""Rank tiers and titles derived from a session's score, accuracy and speed."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class RankTier:
    rank: str
    min_score: int


# Highest tier first.
RANK_TIERS: Tuple[RankTier, ...] = (
    RankTier("SSS", 3000),
    RankTier("SS", 2500),
    RankTier("S", 2000),
    RankTier("A+", 1700),
    RankTier("A", 1400),
    RankTier("A-", 1200),
    RankTier("B+", 1000),
    RankTier("B", 800),
    RankTier("B-", 600),
    RankTier("C+", 450),
    RankTier("C", 300),
    RankTier("C-", 150),
    RankTier("D", 0),
)

RANK_PHRASES: Dict[str, str] = {
    "SSS": "Legendary",
    "SS": "Transcendent",
    "S": "Exceptional",
    "A+": "Excellent",
    "A": "Seasoned",
    "A-": "Advanced",
    "B+": "Intermediate",
    "B": "Standard",
    "B-": "Ordinary",
    "C+": "Apprentice",
    "C": "Novice",
    "C-": "Fledgling",
    "D": "Entry-Level",
}
UNKNOWN_RANK_PHRASE = "Unknown"


@dataclass(frozen=True)
class RankEvaluation:
    rank: str
    title: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RankEvaluation":
        return cls(rank=str(data["rank"]), title=str(data["title"]))


def rank_tier(score: float) -> RankTier:
    for tier in RANK_TIERS:
        if score >= tier.min_score:
            return tier
    # Negative scores land on the lowest tier.
    return RANK_TIERS[-1]


def rank_of(score: float) -> str:
    return rank_tier(score).rank


def rank_phrase(rank: str) -> str:
    return RANK_PHRASES.get(rank, UNKNOWN_RANK_PHRASE)


def accuracy_adjective(accuracy: float) -> str:
    if accuracy == 100:
        return "Perfectionist"
    if accuracy >= 98:
        return "Precise"
    if accuracy >= 95:
        return "Accurate"
    if accuracy >= 90:
        return "Attentive"
    if accuracy >= 80:
        return "Careful"
    if accuracy >= 70:
        return "Composed"
    if accuracy >= 60:
        return "Rough-Edged"
    return "Fearless"


def speed_adjective(wpm: float) -> str:
    if wpm >= 100:
        return "Lightning"
    if wpm >= 80:
        return "High-Speed"
    if wpm >= 60:
        return "Swift"
    if wpm >= 40:
        return "Steady"
    if wpm >= 20:
        return "Easygoing"
    return "Leisurely"


def title_type(accuracy: float, wpm: float) -> str:
    """Classify an (accuracy, wpm) pair into one of the title archetypes."""
    if accuracy == 100:
        if wpm >= 80:
            return "perfect_fast"
        if wpm >= 40:
            return "perfect_normal"
        return "perfect_slow"

    if accuracy >= 95:
        if wpm >= 60:
            return "accurate_fast"
        if wpm >= 30:
            return "accurate_normal"
        return "accurate_slow"

    if accuracy >= 80:
        if wpm >= 60:
            return "balanced_fast"
        return "balanced_normal"

    if wpm >= 60:
        return "speed_focused"
    if wpm >= 30:
        return "developing"
    return "beginner"


def title_of(accuracy: float, wpm: float, rank: str) -> str:
    kind = title_type(accuracy, wpm)
    phrase = rank_phrase(rank)

    if kind == "perfect_fast":
        return f"{phrase} Perfectionist Lightning Typist"
    if kind == "perfect_normal":
        return f"{phrase} Perfectionist Typist"
    if kind == "perfect_slow":
        return f"{phrase} Perfectionist Deliberate Typist"
    if kind == "accurate_fast":
        return f"{speed_adjective(wpm)} {accuracy_adjective(accuracy)} Typist"
    if kind == "accurate_normal":
        return f"{phrase} {accuracy_adjective(accuracy)} Typist"
    if kind == "accurate_slow":
        return f"{accuracy_adjective(accuracy)} {phrase} Typist"
    if kind == "balanced_fast":
        return f"{phrase} {speed_adjective(wpm)} Typist"
    if kind == "speed_focused":
        return f"{speed_adjective(wpm)} Rough-Cut Typist"
    if kind == "developing":
        return f"Up-and-Coming {phrase} Typist"
    if kind == "beginner":
        return f"{phrase} Typing Beginner"
    return f"{phrase} Typist"


def evaluate(score: float, accuracy: float, wpm: float) -> RankEvaluation:
    rank = rank_of(score)
    return RankEvaluation(rank=rank, title=title_of(accuracy, wpm, rank))
