"""Per-question and per-session typing results."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Sequence

from typerank.core.metrics import chars_per_minute, words_per_minute
from typerank.core.scoring import aggregate_score, calculate_score
from typerank.core.text import accuracy


@dataclass(frozen=True)
class QuestionResult:
    """Result of a single finished question."""

    target_text: str
    user_input: str
    difficulty: str
    accuracy: float
    wpm: int
    cpm: int
    score: int
    elapsed_time: float
    char_count: int
    input_event_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuestionResult":
        return cls(
            target_text=str(data["target_text"]),
            user_input=str(data["user_input"]),
            difficulty=str(data["difficulty"]),
            accuracy=float(data["accuracy"]),
            wpm=int(data["wpm"]),
            cpm=int(data["cpm"]),
            score=int(data["score"]),
            elapsed_time=float(data["elapsed_time"]),
            char_count=int(data["char_count"]),
            input_event_count=int(data.get("input_event_count", 0)),
        )


@dataclass(frozen=True)
class AggregateResult:
    """Summary of a whole session.

    ``total_score`` carries the average per-question score, not the sum.
    """

    average_accuracy: float = 0.0
    total_wpm: int = 0
    total_cpm: int = 0
    average_score: int = 0
    total_score: int = 0
    total_elapsed_time: float = 0.0
    question_count: int = 0
    total_chars: int = 0
    total_input_events: int = 0
    results: List[QuestionResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AggregateResult":
        return cls(
            average_accuracy=float(data["average_accuracy"]),
            total_wpm=int(data["total_wpm"]),
            total_cpm=int(data["total_cpm"]),
            average_score=int(data.get("average_score", data["total_score"])),
            total_score=int(data["total_score"]),
            total_elapsed_time=float(data["total_elapsed_time"]),
            question_count=int(data["question_count"]),
            total_chars=int(data.get("total_chars", 0)),
            total_input_events=int(data.get("total_input_events", 0)),
            results=[QuestionResult.from_dict(r) for r in data.get("results", [])],
        )


def calculate_question_result(
    target_text: str,
    user_input: str,
    difficulty: str,
    elapsed_ms: float,
    input_event_count: int = 0,
) -> QuestionResult:
    """Score one answer. Speed is measured on what was typed, in the time it took."""
    acc = accuracy(target_text, user_input).accuracy
    wpm = words_per_minute(len(user_input), elapsed_ms)
    cpm = chars_per_minute(len(user_input), elapsed_ms)
    return QuestionResult(
        target_text=target_text,
        user_input=user_input,
        difficulty=difficulty,
        accuracy=acc,
        wpm=wpm,
        cpm=cpm,
        score=calculate_score(acc, wpm, cpm, difficulty),
        elapsed_time=round(elapsed_ms / 1000.0, 2),
        char_count=len(target_text),
        input_event_count=input_event_count,
    )


def calculate_aggregate_result(results: Sequence[QuestionResult], total_elapsed_ms: float) -> AggregateResult:
    if not results:
        return AggregateResult()

    average_accuracy = sum(r.accuracy for r in results) / len(results)
    total_chars = sum(r.char_count for r in results)
    average = aggregate_score([r.score for r in results])

    return AggregateResult(
        average_accuracy=round(average_accuracy, 2),
        total_wpm=words_per_minute(total_chars, total_elapsed_ms),
        total_cpm=chars_per_minute(total_chars, total_elapsed_ms),
        average_score=average,
        total_score=average,
        total_elapsed_time=round(total_elapsed_ms / 1000.0, 2),
        question_count=len(results),
        total_chars=total_chars,
        total_input_events=sum(r.input_event_count for r in results),
        results=list(results),
    )
