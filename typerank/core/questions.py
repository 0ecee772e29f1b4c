from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import yaml

DIFFICULTIES = ("easy", "medium", "hard")
ALL = "all"

DEFAULT_QUESTIONS_PATH = Path(__file__).resolve().parent.parent / "data" / "questions.yaml"


class QuestionPoolError(ValueError):
    """A question pool cannot be drawn with the requested size or difficulty."""


@dataclass(frozen=True)
class Question:
    id: int
    text: str
    difficulty: str


class QuestionRepository:
    """Read-only question corpus loaded from a YAML file."""

    def __init__(
        self,
        path: Optional[Path] = None,
        rng: Optional[random.Random] = None,
        questions: Optional[List[Question]] = None,
    ) -> None:
        """Load from ``path`` (the bundled corpus by default) unless ``questions`` are given."""
        self._path = Path(path) if path is not None else DEFAULT_QUESTIONS_PATH
        self._rng = rng or random.Random()
        if questions is not None:
            self._questions = {q.id: q for q in questions}
        else:
            self._questions = self._load_questions()

    def all(self) -> List[Question]:
        return list(self._questions.values())

    def get(self, question_id: int) -> Optional[Question]:
        return self._questions.get(question_id)

    def by_difficulty(self, difficulty: str) -> List[Question]:
        if difficulty == ALL:
            return self.all()
        return [q for q in self._questions.values() if q.difficulty == difficulty]

    def random_subset(self, count: int, difficulty: str = ALL) -> List[Question]:
        """Sample up to ``count`` distinct questions of the given difficulty."""
        if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
            raise QuestionPoolError(f"Question count must be a positive integer, got {count!r}")
        pool = self.by_difficulty(difficulty)
        if not pool:
            raise QuestionPoolError(f"No questions available for difficulty {difficulty!r}")
        return self._rng.sample(pool, min(count, len(pool)))

    def _load_questions(self) -> Dict[int, Question]:
        if not self._path.exists():
            raise FileNotFoundError(f"Question file not found: {self._path}")

        raw = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict) or not isinstance(raw.get("questions"), list):
            raise ValueError(f"{self._path.name}: expected YAML with a 'questions' list")

        questions: Dict[int, Question] = {}
        for index, item in enumerate(raw["questions"]):
            if not isinstance(item, dict):
                raise ValueError(f"{self._path.name}: entry {index} is not a mapping")
            qid = item.get("id")
            text = item.get("text")
            difficulty = item.get("difficulty")
            if isinstance(qid, bool) or not isinstance(qid, int):
                raise ValueError(f"{self._path.name}: entry {index} has missing or invalid 'id'")
            if not text or not isinstance(text, str) or not text.strip():
                raise ValueError(f"{self._path.name}: question {qid} has missing or invalid 'text'")
            if difficulty not in DIFFICULTIES:
                raise ValueError(f"{self._path.name}: question {qid} has invalid 'difficulty' {difficulty!r}")
            if qid in questions:
                raise ValueError(f"{self._path.name}: duplicate question id {qid}")
            questions[qid] = Question(id=qid, text=text.strip(), difficulty=difficulty)

        if not questions:
            raise ValueError(f"{self._path.name}: 'questions' is empty")
        return questions
