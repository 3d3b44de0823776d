"""Upset detection.

An upset is a match won by the underdog, the side with the clearly lower
pre-match win percentage. Upsets are shown next to results; they never
change any points.
"""

from __future__ import annotations

from typing import Optional

from tipscore.domain.value_objects.enums import Side

UPSET_MARGIN_PCT = 5.0


def get_underdog(
    home_win_pct: Optional[float],
    away_win_pct: Optional[float],
    margin: float = UPSET_MARGIN_PCT,
) -> Optional[Side]:
    """Return the underdog side, or ``None`` without a clear favourite."""
    if home_win_pct is None or away_win_pct is None:
        return None
    if abs(home_win_pct - away_win_pct) < margin:
        return None
    return Side.HOME if home_win_pct < away_win_pct else Side.AWAY


def _side_won(side: Side, home_goals: int, away_goals: int) -> bool:
    if side == Side.HOME:
        return home_goals > away_goals
    return away_goals > home_goals


def is_upset_result(
    home_win_pct: Optional[float],
    away_win_pct: Optional[float],
    actual_home: int,
    actual_away: int,
    margin: float = UPSET_MARGIN_PCT,
) -> bool:
    underdog = get_underdog(home_win_pct, away_win_pct, margin)
    if underdog is None:
        return False
    return _side_won(underdog, actual_home, actual_away)


def predicted_underdog_win(
    predicted_home: int, predicted_away: int, underdog: Optional[Side]
) -> bool:
    if underdog is None:
        return False
    return _side_won(underdog, predicted_home, predicted_away)


def called_upset_correctly(
    predicted_home: int,
    predicted_away: int,
    actual_home: int,
    actual_away: int,
    home_win_pct: Optional[float],
    away_win_pct: Optional[float],
    margin: float = UPSET_MARGIN_PCT,
) -> bool:
    """True when an upset happened and the prediction backed the underdog."""
    underdog = get_underdog(home_win_pct, away_win_pct, margin)
    if underdog is None:
        return False
    if not _side_won(underdog, actual_home, actual_away):
        return False
    return predicted_underdog_win(predicted_home, predicted_away, underdog)
