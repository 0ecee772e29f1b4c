"""Application setup for the TypeRank scoring core: logging, data directory and wiring."""

import logging
import os
from pathlib import Path
from typing import Optional

from typerank.core.history import HistoryRepository
from typerank.core.input_method import classify
from typerank.core.questions import QuestionRepository
from typerank.core.ranking import RankEvaluation, evaluate
from typerank.core.session import FINISHED, TypingSession
from typerank.core.storage import FileBlobStore

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def data_dir() -> Path:
    """Where history is kept: $TYPERANK_HOME, or ~/.typerank."""
    override = os.environ.get("TYPERANK_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".typerank"


def create_history(directory: Optional[Path] = None) -> HistoryRepository:
    return HistoryRepository(FileBlobStore(directory or data_dir()))


def record_session(session: TypingSession, history: HistoryRepository) -> Optional[RankEvaluation]:
    """Rank a finished session and save it to history.

    Returns the evaluation, or None if the session has not finished or the
    save failed.
    """
    result = session.total_result
    if session.state != FINISHED or result is None:
        return None

    evaluation = evaluate(result.total_score, result.average_accuracy, result.total_wpm)
    saved = history.save(
        input_method=classify(result.total_input_events, result.total_chars),
        mode=session.mode,
        mode_value=session.mode_value,
        difficulty=session.difficulty,
        result=result,
        rank_evaluation=evaluation,
    )
    if not saved:
        logger.warning("Session result was not saved to history")
        return None
    logger.info("Saved session: rank %s, score %d", evaluation.rank, result.total_score)
    return evaluation


def new_session(mode: str = "count", mode_value: int = 5, difficulty: str = "all") -> TypingSession:
    return TypingSession(mode, mode_value, difficulty, repository=QuestionRepository())
