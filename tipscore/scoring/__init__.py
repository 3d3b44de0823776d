"""Quota scoring core: pure functions, no I/O."""

from .quotas import calculate_quotas, quota_for_share
from .scorer import score_prediction, score_with_quotas
from .streaks import advance_streak, classify_breakdown
from .upset import called_upset_correctly, get_underdog, is_upset_result

__all__ = [
    "advance_streak",
    "calculate_quotas",
    "called_upset_correctly",
    "classify_breakdown",
    "get_underdog",
    "is_upset_result",
    "quota_for_share",
    "score_prediction",
    "score_with_quotas",
]
