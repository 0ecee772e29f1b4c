"""Finished-session history kept as a capped, newest-first JSON array in a blob store."""

from __future__ import annotations

import json
import logging
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from typerank.core.input_method import INPUT_METHODS
from typerank.core.metrics import round_half_up
from typerank.core.ranking import RankEvaluation
from typerank.core.results import AggregateResult
from typerank.core.storage import BlobStore

logger = logging.getLogger(__name__)

HISTORY_KEY = "typerank-history"
MAX_HISTORY_SIZE = 1000
ALL = "all"

_RECORD_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


@dataclass(frozen=True)
class HistoryRecord:
    id: str
    timestamp: str
    input_method: str
    mode: str
    mode_value: int
    difficulty: str
    result: AggregateResult
    rank_evaluation: RankEvaluation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "input_method": self.input_method,
            "mode": self.mode,
            "mode_value": self.mode_value,
            "difficulty": self.difficulty,
            "result": self.result.to_dict(),
            "rank_evaluation": self.rank_evaluation.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryRecord":
        return cls(
            id=str(data["id"]),
            timestamp=str(data["timestamp"]),
            input_method=str(data["input_method"]),
            mode=str(data["mode"]),
            mode_value=int(data["mode_value"]),
            difficulty=str(data["difficulty"]),
            result=AggregateResult.from_dict(data["result"]),
            rank_evaluation=RankEvaluation.from_dict(data["rank_evaluation"]),
        )

    @property
    def recorded_at(self) -> datetime:
        value = datetime.fromisoformat(self.timestamp.replace("Z", "+00:00"))
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


@dataclass(frozen=True)
class HistoryStatistics:
    count: int = 0
    average_score: int = 0
    average_accuracy: float = 0.0
    average_wpm: int = 0
    average_cpm: int = 0
    best_score: int = 0
    best_accuracy: float = 0.0
    best_wpm: int = 0
    best_cpm: int = 0
    total_play_time: float = 0.0


_SORT_KEYS: Dict[str, Callable[[HistoryRecord], float]] = {
    "score": lambda r: r.result.total_score,
    "accuracy": lambda r: r.result.average_accuracy,
    "wpm": lambda r: r.result.total_wpm,
    "cpm": lambda r: r.result.total_cpm,
}


def _parse_record(data: Any) -> HistoryRecord:
    """Build a record, failing early on a timestamp that cannot be ordered."""
    record = HistoryRecord.from_dict(data)
    _ = record.recorded_at
    return record


def _newest_first(records: List[HistoryRecord]) -> List[HistoryRecord]:
    return sorted(records, key=lambda r: r.recorded_at, reverse=True)


class HistoryRepository:
    """Saved sessions, newest first, at most ``max_size`` of them.

    Storage problems never escape this class: reads fall back to an empty
    history and writes report False.
    """

    def __init__(
        self,
        store: BlobStore,
        key: str = HISTORY_KEY,
        max_size: int = MAX_HISTORY_SIZE,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._key = key
        self._max_size = max_size
        self._clock = clock

    def all(self) -> List[HistoryRecord]:
        try:
            raw = self._store.get(self._key)
            if not raw:
                return []
            payload = json.loads(raw)
            if not isinstance(payload, list):
                logger.warning("History under %s is not a list; ignoring it", self._key)
                return []
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not load history from %s: %s", self._key, e)
            return []

        # A bad record is dropped on its own so the rest survive the next write.
        records: List[HistoryRecord] = []
        for index, item in enumerate(payload):
            try:
                records.append(_parse_record(item))
            except _RECORD_ERRORS as e:
                logger.warning("Skipping malformed history record %d in %s: %s", index, self._key, e)
        return _newest_first(records)

    def get_by_id(self, record_id: str) -> Optional[HistoryRecord]:
        return next((r for r in self.all() if r.id == record_id), None)

    def save(
        self,
        input_method: str,
        mode: str,
        mode_value: int,
        difficulty: str,
        result: AggregateResult,
        rank_evaluation: RankEvaluation,
    ) -> bool:
        now = self._clock()
        record = HistoryRecord(
            id=f"{int(now * 1000)}-{uuid.uuid4().hex[:9]}",
            timestamp=datetime.fromtimestamp(now, tz=timezone.utc).isoformat(),
            input_method=input_method,
            mode=mode,
            mode_value=mode_value,
            difficulty=difficulty,
            result=result,
            rank_evaluation=rank_evaluation,
        )
        history = self.all()
        history.insert(0, record)
        return self._write(history[: self._max_size])

    def delete(self, record_id: str) -> bool:
        history = self.all()
        remaining = [r for r in history if r.id != record_id]
        if len(remaining) == len(history):
            return False
        return self._write(remaining)

    def clear(self) -> bool:
        try:
            self._store.remove(self._key)
        except (OSError, ValueError) as e:
            logger.warning("Could not clear history %s: %s", self._key, e)
            return False
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def filter_by_input_method(self, input_method: str = ALL) -> List[HistoryRecord]:
        history = self.all()
        if input_method == ALL:
            return history
        return [r for r in history if r.input_method == input_method]

    def filter_by_difficulty(self, difficulty: str = ALL) -> List[HistoryRecord]:
        history = self.all()
        if difficulty == ALL:
            return history
        return [r for r in history if r.difficulty == difficulty]

    def records_for_comparison(
        self,
        input_method: str = ALL,
        mode: Optional[str] = None,
        difficulty: Optional[str] = None,
    ) -> List[HistoryRecord]:
        history = self.filter_by_input_method(input_method)
        if mode:
            history = [r for r in history if r.mode == mode]
        if difficulty and difficulty != ALL:
            history = [r for r in history if r.difficulty == difficulty]
        return history

    def statistics(self, input_method: str = ALL) -> HistoryStatistics:
        history = self.filter_by_input_method(input_method)
        if not history:
            return HistoryStatistics()

        count = len(history)
        scores = [r.result.total_score for r in history]
        accuracies = [r.result.average_accuracy for r in history]
        wpms = [r.result.total_wpm for r in history]
        cpms = [r.result.total_cpm for r in history]

        return HistoryStatistics(
            count=count,
            average_score=round_half_up(sum(scores) / count),
            average_accuracy=round(sum(accuracies) / count, 2),
            average_wpm=round_half_up(sum(wpms) / count),
            average_cpm=round_half_up(sum(cpms) / count),
            best_score=max(scores),
            best_accuracy=max(accuracies),
            best_wpm=max(wpms),
            best_cpm=max(cpms),
            total_play_time=round(sum(r.result.total_elapsed_time for r in history), 2),
        )

    def comparison_stats(self) -> Dict[str, HistoryStatistics]:
        """Statistics per input method, plus the combined bucket under ``all``."""
        stats = {method: self.statistics(method) for method in INPUT_METHODS}
        stats[ALL] = self.statistics(ALL)
        return stats

    def best_record(self, sort_by: str = "score", input_method: str = ALL) -> Optional[HistoryRecord]:
        history = self.filter_by_input_method(input_method)
        if not history:
            return None
        key = _SORT_KEYS.get(sort_by, _SORT_KEYS["score"])
        # Ties go to the newest record.
        return sorted(history, key=key, reverse=True)[0]

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def export(self) -> str:
        return json.dumps([r.to_dict() for r in self.all()], indent=2, ensure_ascii=False)

    def import_json(self, text: str) -> bool:
        """Merge exported history into the stored one, skipping ids already present."""
        try:
            payload = json.loads(text)
            if not isinstance(payload, list):
                raise ValueError("expected a JSON array of history records")
            imported = _newest_first([_parse_record(item) for item in payload])
        except _RECORD_ERRORS as e:
            logger.warning("Could not import history: %s", e)
            return False

        merged = self.all()
        seen = {r.id for r in merged}
        for record in imported:
            if record.id not in seen:
                merged.append(record)
                seen.add(record.id)

        return self._write(_newest_first(merged)[: self._max_size])

    def _write(self, records: List[HistoryRecord]) -> bool:
        try:
            payload = json.dumps([r.to_dict() for r in records], ensure_ascii=False)
            self._store.set(self._key, payload)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not save history to %s: %s", self._key, e)
            return False
        return True
