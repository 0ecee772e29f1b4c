"""Tests for typerank.core.ranking – tiers, archetypes and titles."""

from __future__ import annotations

import pytest

from typerank.core.ranking import (
    RANK_PHRASES,
    RANK_TIERS,
    RankEvaluation,
    RankTier,
    accuracy_adjective,
    evaluate,
    rank_of,
    rank_tier,
    speed_adjective,
    title_of,
    title_type,
)


# ===========================================================================
# Tier table
# ===========================================================================

class TestTierTable:
    def test_thirteen_tiers(self):
        assert len(RANK_TIERS) == 13

    def test_descending(self):
        mins = [t.min_score for t in RANK_TIERS]
        assert mins == sorted(mins, reverse=True)

    def test_lowest_is_d_at_zero(self):
        assert RANK_TIERS[-1] == RankTier("D", 0)

    def test_every_rank_has_a_phrase(self):
        assert {t.rank for t in RANK_TIERS} == set(RANK_PHRASES)


# ===========================================================================
# rank_of
# ===========================================================================

class TestRankOf:
    @pytest.mark.parametrize(
        "score, rank",
        [
            (3000, "SSS"),
            (2999, "SS"),
            (2500, "SS"),
            (2000, "S"),
            (1983, "A+"),
            (1700, "A+"),
            (1699, "A"),
            (1200, "A-"),
            (1000, "B+"),
            (800, "B"),
            (600, "B-"),
            (450, "C+"),
            (300, "C"),
            (150, "C-"),
            (149, "D"),
            (0, "D"),
        ],
    )
    def test_boundaries(self, score, rank):
        assert rank_of(score) == rank

    def test_huge_score(self):
        assert rank_of(10**9) == "SSS"

    def test_negative_score_is_lowest(self):
        assert rank_of(-50) == "D"
        assert rank_tier(-1) is RANK_TIERS[-1]


# ===========================================================================
# title_type
# ===========================================================================

class TestTitleType:
    @pytest.mark.parametrize(
        "accuracy, wpm, expected",
        [
            (100, 80, "perfect_fast"),
            (100, 79, "perfect_normal"),
            (100, 40, "perfect_normal"),
            (100, 39, "perfect_slow"),
            (99.9, 60, "accurate_fast"),
            (95, 30, "accurate_normal"),
            (95, 29, "accurate_slow"),
            (94.99, 60, "balanced_fast"),
            (80, 59, "balanced_normal"),
            (79.99, 60, "speed_focused"),
            (50, 30, "developing"),
            (0, 29, "beginner"),
        ],
    )
    def test_archetypes(self, accuracy, wpm, expected):
        assert title_type(accuracy, wpm) == expected


# ===========================================================================
# Adjectives
# ===========================================================================

class TestAdjectives:
    @pytest.mark.parametrize(
        "accuracy, expected",
        [
            (100, "Perfectionist"),
            (98, "Precise"),
            (95, "Accurate"),
            (90, "Attentive"),
            (80, "Careful"),
            (70, "Composed"),
            (60, "Rough-Edged"),
            (59.99, "Fearless"),
        ],
    )
    def test_accuracy_bands(self, accuracy, expected):
        assert accuracy_adjective(accuracy) == expected

    @pytest.mark.parametrize(
        "wpm, expected",
        [(100, "Lightning"), (80, "High-Speed"), (60, "Swift"), (40, "Steady"), (20, "Easygoing"), (19, "Leisurely")],
    )
    def test_speed_bands(self, wpm, expected):
        assert speed_adjective(wpm) == expected


# ===========================================================================
# title_of
# ===========================================================================

class TestTitleOf:
    def test_perfect_fast(self):
        assert title_of(100, 90, "S") == "Exceptional Perfectionist Lightning Typist"

    def test_perfect_normal(self):
        assert title_of(100, 50, "A") == "Seasoned Perfectionist Typist"

    def test_perfect_slow(self):
        assert title_of(100, 10, "C") == "Novice Perfectionist Deliberate Typist"

    def test_accurate_fast_uses_adjectives_only(self):
        assert title_of(98.5, 85, "A+") == "High-Speed Precise Typist"

    def test_accurate_normal(self):
        assert title_of(96, 45, "B") == "Standard Accurate Typist"

    def test_accurate_slow(self):
        assert title_of(96, 10, "C-") == "Accurate Fledgling Typist"

    def test_balanced_fast(self):
        assert title_of(85, 70, "B+") == "Intermediate Swift Typist"

    def test_balanced_normal(self):
        assert title_of(85, 20, "B-") == "Ordinary Typist"

    def test_speed_focused(self):
        assert title_of(40, 120, "C+") == "Lightning Rough-Cut Typist"

    def test_developing(self):
        assert title_of(60, 35, "C") == "Up-and-Coming Novice Typist"

    def test_beginner(self):
        assert title_of(10, 5, "D") == "Entry-Level Typing Beginner"

    def test_unknown_rank(self):
        assert title_of(85, 20, "Z") == "Unknown Typist"

    def test_deterministic(self):
        assert title_of(97, 65, "S") == title_of(97, 65, "S")


# ===========================================================================
# evaluate
# ===========================================================================

class TestEvaluate:
    def test_combines_rank_and_title(self):
        evaluation = evaluate(1983, 100, 120)
        assert evaluation == RankEvaluation(rank="A+", title="Excellent Perfectionist Lightning Typist")

    def test_dict_round_trip(self):
        evaluation = evaluate(420, 72, 25)
        assert RankEvaluation.from_dict(evaluation.to_dict()) == evaluation
