from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from typerank.core.questions import ALL, DIFFICULTIES, Question, QuestionRepository
from typerank.core.results import (
    AggregateResult,
    QuestionResult,
    calculate_aggregate_result,
    calculate_question_result,
)

logger = logging.getLogger(__name__)

READY = "ready"
PLAYING = "playing"
FINISHED = "finished"

COUNT_MODE = "count"
TIME_MODE = "time"
MODES = (COUNT_MODE, TIME_MODE)

# Time mode draws a large pool so the clock runs out before the questions do.
TIME_MODE_POOL_SIZE = 50


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session at one moment."""

    state: str
    mode: str
    mode_value: int
    difficulty: str
    current_question: Optional[Question]
    current_index: int
    total_questions: Optional[int]
    user_input: str
    results: Tuple[QuestionResult, ...]
    total_result: Optional[AggregateResult]
    elapsed_ms: float
    remaining_ms: Optional[float]


class TypingSession:
    """A multi-question typing session that ends after N questions or N seconds.

    Lifecycle is ``ready -> playing -> finished``; only ``reset`` leaves
    ``finished``. Calling an operation from the wrong state does nothing,
    so duplicate calls from the UI are harmless.
    """

    def __init__(
        self,
        mode: str = COUNT_MODE,
        mode_value: int = 5,
        difficulty: str = ALL,
        repository: Optional[QuestionRepository] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._repository = repository or QuestionRepository()
        self._clock = clock
        self._configure(mode, mode_value, difficulty)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> str:
        return self._state

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def mode_value(self) -> int:
        return self._mode_value

    @property
    def difficulty(self) -> str:
        return self._difficulty

    @property
    def index(self) -> int:
        """Index of the current question (0-based)."""
        return self._index

    @property
    def questions(self) -> List[Question]:
        return list(self._questions)

    @property
    def results(self) -> List[QuestionResult]:
        return list(self._results)

    @property
    def user_input(self) -> str:
        return self._user_input

    @property
    def input_event_count(self) -> int:
        """Input events recorded for the current question."""
        return self._input_event_count

    @property
    def total_result(self) -> Optional[AggregateResult]:
        return self._total_result

    @property
    def time_limit_ms(self) -> Optional[float]:
        return self._time_limit_ms

    @property
    def game_start_time(self) -> Optional[float]:
        """Millisecond timestamp of start(), or None before the game starts."""
        return self._game_start_time

    @property
    def question_start_time(self) -> Optional[float]:
        return self._question_start_time

    def current_question(self) -> Optional[Question]:
        if self._index < len(self._questions):
            return self._questions[self._index]
        return None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        if self._state != READY:
            logger.debug("start() ignored in state %s", self._state)
            return
        now = self._now_ms()
        self._state = PLAYING
        self._game_start_time = now
        self._question_start_time = now
        self._index = 0
        self._results = []
        self._user_input = ""
        self._input_event_count = 0
        logger.debug("Session started: mode=%s value=%s", self._mode, self._mode_value)

    def update_input(self, text: str) -> None:
        if self._state != PLAYING:
            return
        self._user_input = text
        self._input_event_count += 1

    def submit_answer(self) -> None:
        """Score the buffered answer and move on; blank answers are ignored."""
        if self._state != PLAYING:
            return
        if not self._user_input.strip():
            return
        self.finish_question()

    def finish_question(self) -> None:
        if self._state != PLAYING:
            logger.debug("finish_question() ignored in state %s", self._state)
            return

        question = self._questions[self._index]
        now = self._now_ms()
        result = calculate_question_result(
            question.text,
            self._user_input,
            question.difficulty,
            now - self._question_start_time,
            input_event_count=self._input_event_count,
        )
        self._results.append(result)

        if self._mode == TIME_MODE and now - self._game_start_time >= self._time_limit_ms:
            self.finish_game()
            return

        self._index += 1
        if self._index >= len(self._questions):
            self.finish_game()
            return

        self._user_input = ""
        self._input_event_count = 0
        self._question_start_time = self._now_ms()

    def finish_game(self) -> None:
        if self._state != PLAYING:
            logger.debug("finish_game() ignored in state %s", self._state)
            return
        self._state = FINISHED
        total_elapsed = self._now_ms() - self._game_start_time
        self._total_result = calculate_aggregate_result(self._results, total_elapsed)
        logger.debug(
            "Session finished: %d questions, score %d",
            self._total_result.question_count,
            self._total_result.total_score,
        )

    def check_time_limit(self) -> bool:
        """End a time-mode game whose clock has run out.

        A non-blank buffered answer is scored before the game ends.
        Returns True when the session is finished.
        """
        if self._mode == TIME_MODE and self._state == PLAYING:
            if self._now_ms() - self._game_start_time >= self._time_limit_ms:
                if self._user_input.strip():
                    self.finish_question()
                else:
                    self.finish_game()
        return self._state == FINISHED

    def reset(self, mode: str = COUNT_MODE, mode_value: int = 5, difficulty: str = ALL) -> None:
        self._configure(mode, mode_value, difficulty)

    # ------------------------------------------------------------------
    # Timing
    # ------------------------------------------------------------------

    def elapsed_ms(self) -> float:
        if self._state == READY:
            return 0.0
        if self._state == FINISHED:
            return self._total_result.total_elapsed_time * 1000.0 if self._total_result else 0.0
        return self._now_ms() - self._game_start_time

    def remaining_ms(self) -> Optional[float]:
        """Time left in a running time-mode game; None otherwise."""
        if self._mode != TIME_MODE or self._state != PLAYING:
            return None
        return max(0.0, self._time_limit_ms - self.elapsed_ms())

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            state=self._state,
            mode=self._mode,
            mode_value=self._mode_value,
            difficulty=self._difficulty,
            current_question=self.current_question(),
            current_index=self._index,
            total_questions=len(self._questions) if self._mode == COUNT_MODE else None,
            user_input=self._user_input,
            results=tuple(self._results),
            total_result=self._total_result,
            elapsed_ms=self.elapsed_ms(),
            remaining_ms=self.remaining_ms(),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _configure(self, mode: str, mode_value: int, difficulty: str) -> None:
        if mode not in MODES:
            raise ValueError(f"Unknown mode {mode!r}; expected one of {MODES}")
        if difficulty != ALL and difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty {difficulty!r}")
        if mode == TIME_MODE and (isinstance(mode_value, bool) or not isinstance(mode_value, int) or mode_value <= 0):
            raise ValueError(f"Time limit must be a positive number of seconds, got {mode_value!r}")

        pool_size = TIME_MODE_POOL_SIZE if mode == TIME_MODE else mode_value
        questions = self._repository.random_subset(pool_size, difficulty)

        self._mode = mode
        self._mode_value = mode_value
        self._difficulty = difficulty
        self._state = READY
        self._questions = questions
        self._index = 0
        self._results: List[QuestionResult] = []
        self._user_input = ""
        self._input_event_count = 0
        self._game_start_time: Optional[float] = None
        self._question_start_time: Optional[float] = None
        self._total_result: Optional[AggregateResult] = None
        self._time_limit_ms: Optional[float] = mode_value * 1000.0 if mode == TIME_MODE else None

    def _now_ms(self) -> float:
        return self._clock() * 1000.0
