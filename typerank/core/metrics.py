"""Typing speed metrics.

A word is counted as five characters, which keeps WPM meaningful for text
that is not delimited by whitespace.
"""

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)

CHARS_PER_WORD = 5
MS_PER_MINUTE = 60_000


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, as score displays expect."""
    return int(math.floor(value + 0.5))


def _minutes(elapsed_ms: float) -> float:
    return elapsed_ms / MS_PER_MINUTE


def words_per_minute(char_count: int, elapsed_ms: float) -> int:
    if elapsed_ms <= 0:
        logger.debug("Non-positive elapsed time %s ms; WPM reported as 0", elapsed_ms)
        return 0
    words = char_count / CHARS_PER_WORD
    return round_half_up(words / _minutes(elapsed_ms))


def chars_per_minute(char_count: int, elapsed_ms: float) -> int:
    if elapsed_ms <= 0:
        logger.debug("Non-positive elapsed time %s ms; CPM reported as 0", elapsed_ms)
        return 0
    return round_half_up(char_count / _minutes(elapsed_ms))
