from __future__ import annotations

from tipscore.domain.value_objects.breakdown import ScoringBreakdown
from tipscore.domain.value_objects.enums import StreakOutcome, StreakType
from tipscore.domain.value_objects.streak import ModelStreak


def classify_breakdown(breakdown: ScoringBreakdown) -> StreakOutcome:
    if breakdown.is_exact:
        return StreakOutcome.EXACT
    if breakdown.is_correct_tendency:
        return StreakOutcome.TENDENCY
    return StreakOutcome.WRONG


def advance_streak(streak: ModelStreak, outcome: StreakOutcome) -> ModelStreak:
    """Return ``streak`` updated with one more scored prediction."""
    if outcome == StreakOutcome.WRONG:
        current = streak.current - 1 if streak.current < 0 else -1
        return streak.model_copy(
            update={
                "current": current,
                "current_type": StreakType.NONE,
                "worst": min(streak.worst, current),
                "current_exact_run": 0,
            }
        )

    current = streak.current + 1 if streak.current > 0 else 1
    if outcome == StreakOutcome.EXACT or (
        streak.current > 0 and streak.current_type == StreakType.EXACT
    ):
        current_type = StreakType.EXACT
    else:
        current_type = StreakType.TENDENCY
    exact_run = streak.current_exact_run + 1 if outcome == StreakOutcome.EXACT else 0
    return streak.model_copy(
        update={
            "current": current,
            "current_type": current_type,
            "best": max(streak.best, current),
            "best_tendency": max(streak.best_tendency, current),
            "current_exact_run": exact_run,
            "best_exact": max(streak.best_exact, exact_run),
        }
    )
