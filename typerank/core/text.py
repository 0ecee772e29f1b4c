"""Text normalization, edit distance and aligned diffs between target and typed text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

_SPACE_RUN = re.compile(r" {2,}")

CORRECT = "correct"
INCORRECT = "incorrect"
MISSING = "missing"
EXTRA = "extra"


@dataclass(frozen=True)
class AccuracyResult:
    """Edit-distance based accuracy of one typed answer."""

    accuracy: float
    correct_chars: int
    total_chars: int
    edit_distance: int


@dataclass(frozen=True)
class DiffEntry:
    char: str
    kind: str
    expected: Optional[str] = None


@dataclass(frozen=True)
class DiffStats:
    correct: int = 0
    incorrect: int = 0
    missing: int = 0
    extra: int = 0
    total: int = 0


def normalize(text: str) -> str:
    """Strip surrounding whitespace and collapse runs of plain spaces to one."""
    return _SPACE_RUN.sub(" ", text.strip())


def edit_distance_table(target: str, typed: str) -> List[List[int]]:
    """Levenshtein table; cell [i][j] is the distance between target[:i] and typed[:j]."""
    m, n = len(target), len(typed)
    table = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        table[i][0] = i
    for j in range(n + 1):
        table[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if target[i - 1] == typed[j - 1]:
                table[i][j] = table[i - 1][j - 1]
            else:
                table[i][j] = min(
                    table[i - 1][j] + 1,
                    table[i][j - 1] + 1,
                    table[i - 1][j - 1] + 1,
                )
    return table


def edit_distance(target: str, typed: str) -> int:
    """Minimum number of single-character edits between the normalized strings."""
    a, b = normalize(target), normalize(typed)
    return edit_distance_table(a, b)[len(a)][len(b)]


def accuracy(target_text: str, typed_text: str) -> AccuracyResult:
    """Score typed text against the target.

    Accuracy is the share of target characters not consumed by edits,
    floored at zero and rounded to two decimals. An empty target always
    scores 0 and reports the typed length as the distance.
    """
    target = normalize(target_text)
    typed = normalize(typed_text)
    total = len(target)

    if total == 0:
        return AccuracyResult(accuracy=0.0, correct_chars=0, total_chars=0, edit_distance=len(typed))

    distance = edit_distance_table(target, typed)[total][len(typed)]
    correct = max(0, total - distance)
    return AccuracyResult(
        accuracy=round(correct / total * 100.0, 2),
        correct_chars=correct,
        total_chars=total,
        edit_distance=distance,
    )


def diff(target_text: str, typed_text: str) -> List[DiffEntry]:
    """Align typed text to the target by backtracking the edit-distance table.

    When several minimal alignments exist the walk prefers, in order:
    a match, a substitution, an extra typed character, a missing target
    character.
    """
    target = normalize(target_text)
    typed = normalize(typed_text)
    table = edit_distance_table(target, typed)

    entries: List[DiffEntry] = []
    i, j = len(target), len(typed)
    while i > 0 or j > 0:
        if i > 0 and j > 0 and target[i - 1] == typed[j - 1]:
            entries.append(DiffEntry(char=typed[j - 1], kind=CORRECT, expected=target[i - 1]))
            i -= 1
            j -= 1
        elif i > 0 and j > 0 and table[i][j] == table[i - 1][j - 1] + 1:
            entries.append(DiffEntry(char=typed[j - 1], kind=INCORRECT, expected=target[i - 1]))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or table[i][j] == table[i][j - 1] + 1):
            entries.append(DiffEntry(char=typed[j - 1], kind=EXTRA))
            j -= 1
        else:
            entries.append(DiffEntry(char=target[i - 1], kind=MISSING, expected=target[i - 1]))
            i -= 1

    entries.reverse()
    return entries


def diff_stats(entries: List[DiffEntry]) -> DiffStats:
    counts = {CORRECT: 0, INCORRECT: 0, MISSING: 0, EXTRA: 0}
    for entry in entries:
        if entry.kind in counts:
            counts[entry.kind] += 1
    return DiffStats(
        correct=counts[CORRECT],
        incorrect=counts[INCORRECT],
        missing=counts[MISSING],
        extra=counts[EXTRA],
        total=len(entries),
    )
