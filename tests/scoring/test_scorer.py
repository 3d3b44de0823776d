from __future__ import annotations

import itertools

import pytest

from tipscore.domain.value_objects.breakdown import ScoringBreakdown
from tipscore.domain.value_objects.quotas import Quotas
from tipscore.domain.value_objects.score_pick import tendency_of
from tipscore.scoring.scorer import score_prediction, score_with_quotas

QH, QD, QA = 2, 4, 6


def test_exact_score_earns_everything() -> None:
    b = score_prediction(2, 1, 2, 1, QH, QD, QA)
    assert b == ScoringBreakdown(tendency_points=2, goal_diff_bonus=1, exact_score_bonus=3, total=6)


def test_exact_rare_outcome_reaches_maximum() -> None:
    b = score_prediction(0, 2, 0, 2, QH, QD, QA)
    assert b.total == 10


def test_wrong_tendency_scores_nothing() -> None:
    b = score_prediction(1, 1, 2, 0, QH, QD, QA)
    assert b == ScoringBreakdown(tendency_points=0, goal_diff_bonus=0, exact_score_bonus=0, total=0)


def test_right_tendency_wrong_difference() -> None:
    b = score_prediction(3, 1, 1, 0, QH, QD, QA)
    assert (b.tendency_points, b.goal_diff_bonus, b.exact_score_bonus) == (QH, 0, 0)
    assert b.total == QH


def test_right_difference_not_exact() -> None:
    b = score_prediction(3, 1, 2, 0, QH, QD, QA)
    assert (b.tendency_points, b.goal_diff_bonus, b.exact_score_bonus, b.total) == (2, 1, 0, 3)


def test_draw_with_other_scoreline_gets_draw_quota_and_diff_bonus() -> None:
    b = score_prediction(1, 1, 2, 2, QH, QD, QA)
    assert (b.tendency_points, b.goal_diff_bonus, b.exact_score_bonus) == (QD, 1, 0)


def test_away_win_uses_away_quota() -> None:
    b = score_prediction(0, 1, 1, 3, QH, QD, QA)
    assert b.tendency_points == QA
    assert b.goal_diff_bonus == 0


def test_score_with_quotas_matches_positional_form() -> None:
    quotas = Quotas(home=4, draw=6, away=2)
    assert score_with_quotas(1, 0, 2, 1, quotas) == score_prediction(1, 0, 2, 1, 4, 6, 2)


@pytest.mark.parametrize("quotas", [(2, 2, 2), (2, 4, 6), (6, 6, 6), (4, 2, 6)])
def test_properties_over_small_scorelines(quotas: tuple[int, int, int]) -> None:
    qh, qd, qa = quotas
    goals = range(0, 4)
    for ph, pa, ah, aa in itertools.product(goals, repeat=4):
        b = score_prediction(ph, pa, ah, aa, qh, qd, qa)
        assert 0 <= b.total <= 10
        assert b.total == b.tendency_points + b.goal_diff_bonus + b.exact_score_bonus
        assert b.goal_diff_bonus in (0, 1)
        assert b.exact_score_bonus in (0, 3)
        if (ph, pa) == (ah, aa):
            expected = {"HOME": qh, "DRAW": qd, "AWAY": qa}[tendency_of(ah, aa).value]
            assert b.tendency_points == expected
            assert b.goal_diff_bonus == 1
        if tendency_of(ph, pa) != tendency_of(ah, aa):
            assert b.tendency_points == 0
            assert b.goal_diff_bonus == 0
            assert b.exact_score_bonus == 0
        assert score_prediction(ph, pa, ah, aa, qh, qd, qa) == b
