"""Shared fixtures: a controllable clock and a small in-memory question corpus."""

from __future__ import annotations

import random

import pytest

from typerank.core.questions import Question, QuestionRepository


class FakeClock:
    """Callable clock returning seconds; advanced explicitly by tests."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def questions() -> list:
    return [
        Question(id=1, text="あいうえお", difficulty="easy"),
        Question(id=2, text="かきくけこ", difficulty="easy"),
        Question(id=3, text="さしすせそ", difficulty="easy"),
        Question(id=4, text="たちつてとなにぬねの", difficulty="medium"),
        Question(id=5, text="はひふへほまみむめも", difficulty="medium"),
        Question(id=6, text="やゆよらりるれろわをん", difficulty="hard"),
    ]


@pytest.fixture()
def repository(questions: list) -> QuestionRepository:
    return QuestionRepository(questions=questions, rng=random.Random(7))
