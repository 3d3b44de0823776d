from __future__ import annotations

from tipscore.domain.value_objects.breakdown import ScoringBreakdown
from tipscore.domain.value_objects.enums import Tendency
from tipscore.domain.value_objects.quotas import Quotas
from tipscore.domain.value_objects.score_pick import tendency_of
from tipscore.domain.value_objects.scoring_rules import DEFAULT_RULES, ScoringRules


def score_prediction(
    predicted_home: int,
    predicted_away: int,
    actual_home: int,
    actual_away: int,
    quota_home: int,
    quota_draw: int,
    quota_away: int,
    *,
    rules: ScoringRules = DEFAULT_RULES,
) -> ScoringBreakdown:
    """Score one prediction against the final result.

    Args:
        predicted_home: Predicted home goals
        predicted_away: Predicted away goals
        actual_home: Final home goals
        actual_away: Final away goals
        quota_home: Home win quota of the match
        quota_draw: Draw quota of the match
        quota_away: Away win quota of the match

    Returns:
        Breakdown of tendency points (the quota of the actual outcome when
        the tendency is right), goal difference bonus and exact score bonus.
    """
    predicted_tendency = tendency_of(predicted_home, predicted_away)
    actual_tendency = tendency_of(actual_home, actual_away)
    tendency_correct = predicted_tendency == actual_tendency

    tendency_points = 0
    if tendency_correct:
        tendency_points = {
            Tendency.HOME: quota_home,
            Tendency.DRAW: quota_draw,
            Tendency.AWAY: quota_away,
        }[actual_tendency]

    # Goal difference only counts on top of the right tendency
    goal_diff_bonus = 0
    if tendency_correct and predicted_home - predicted_away == actual_home - actual_away:
        goal_diff_bonus = rules.goal_diff_bonus

    exact_score_bonus = 0
    if predicted_home == actual_home and predicted_away == actual_away:
        exact_score_bonus = rules.exact_score_bonus

    return ScoringBreakdown(
        tendency_points=tendency_points,
        goal_diff_bonus=goal_diff_bonus,
        exact_score_bonus=exact_score_bonus,
        total=tendency_points + goal_diff_bonus + exact_score_bonus,
    )


def score_with_quotas(
    predicted_home: int,
    predicted_away: int,
    actual_home: int,
    actual_away: int,
    quotas: Quotas,
    *,
    rules: ScoringRules = DEFAULT_RULES,
) -> ScoringBreakdown:
    """Convenience wrapper taking a :class:`Quotas` value."""
    return score_prediction(
        predicted_home,
        predicted_away,
        actual_home,
        actual_away,
        quotas.home,
        quotas.draw,
        quotas.away,
        rules=rules,
    )
