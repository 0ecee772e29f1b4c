"""Guess how a session was typed from how often the input changed per character.

Keyboards produce roughly one input event per character; dictation and
paste-style input deliver whole phrases in a handful of events.
"""

from __future__ import annotations

KEYBOARD = "keyboard"
VOICE = "voice"
OTHER = "other"

INPUT_METHODS = (KEYBOARD, VOICE, OTHER)

HIGH_FREQUENCY = 0.5
# Corrections lower the ratio; still a keyboard. Same outcome as HIGH_FREQUENCY.
MEDIUM_FREQUENCY = 0.15
LOW_FREQUENCY = 0.05


def classify(total_input_events: int, total_chars: int) -> str:
    if not total_input_events or not total_chars:
        return KEYBOARD

    ratio = total_input_events / total_chars
    if ratio >= HIGH_FREQUENCY:
        return KEYBOARD
    if ratio >= MEDIUM_FREQUENCY:
        return KEYBOARD
    if ratio >= LOW_FREQUENCY:
        return VOICE
    return OTHER


def confidence(total_input_events: int, total_chars: int) -> float:
    """Rough confidence in classify(); grows with the sample size."""
    samples = min(total_input_events or 0, total_chars or 0)
    if samples < 10:
        return 0.5
    if samples < 50:
        return 0.7
    return 0.9
