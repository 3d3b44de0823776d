from __future__ import annotations

from tipscore.domain.value_objects.breakdown import ScoringBreakdown
from tipscore.domain.value_objects.enums import StreakOutcome, StreakType
from tipscore.domain.value_objects.streak import ModelStreak
from tipscore.scoring.streaks import advance_streak, classify_breakdown

EXACT = StreakOutcome.EXACT
TENDENCY = StreakOutcome.TENDENCY
WRONG = StreakOutcome.WRONG


def _run(outcomes: list[StreakOutcome]) -> ModelStreak:
    streak = ModelStreak()
    for o in outcomes:
        streak = advance_streak(streak, o)
    return streak


def test_classify_breakdown() -> None:
    exact = ScoringBreakdown(tendency_points=2, goal_diff_bonus=1, exact_score_bonus=3, total=6)
    tendency = ScoringBreakdown(tendency_points=4, goal_diff_bonus=0, exact_score_bonus=0, total=4)
    wrong = ScoringBreakdown(tendency_points=0, goal_diff_bonus=0, exact_score_bonus=0, total=0)
    assert classify_breakdown(exact) == EXACT
    assert classify_breakdown(tendency) == TENDENCY
    assert classify_breakdown(wrong) == WRONG


def test_winning_streak_grows_and_records_best() -> None:
    s = _run([TENDENCY, TENDENCY, TENDENCY])
    assert s.current == 3
    assert s.current_type == StreakType.TENDENCY
    assert s.best == 3
    assert s.best_tendency == 3
    assert s.best_exact == 0


def test_losing_streak_is_negative_and_records_worst() -> None:
    s = _run([TENDENCY, WRONG, WRONG, WRONG])
    assert s.current == -3
    assert s.current_type == StreakType.NONE
    assert s.worst == -3
    assert s.best == 1


def test_exact_marks_the_running_streak() -> None:
    s = _run([TENDENCY, EXACT, TENDENCY])
    assert s.current == 3
    assert s.current_type == StreakType.EXACT
    assert s.best_exact == 1
    assert s.current_exact_run == 0


def test_consecutive_exact_hits() -> None:
    s = _run([EXACT, EXACT, TENDENCY, EXACT, EXACT, EXACT, WRONG])
    assert s.best_exact == 3
    assert s.current_exact_run == 0
    assert s.best == 6
    assert s.current == -1


def test_win_after_losses_restarts_at_one() -> None:
    s = _run([WRONG, WRONG, TENDENCY])
    assert s.current == 1
    assert s.worst == -2
    assert s.current_type == StreakType.TENDENCY
