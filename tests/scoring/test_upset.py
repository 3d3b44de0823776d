from __future__ import annotations

from tipscore.domain.value_objects.enums import Side
from tipscore.scoring.upset import (
    called_upset_correctly,
    get_underdog,
    is_upset_result,
    predicted_underdog_win,
)


def test_underdog_requires_both_percentages_and_margin() -> None:
    assert get_underdog(None, 40.0) is None
    assert get_underdog(40.0, None) is None
    assert get_underdog(40.0, 44.9) is None
    assert get_underdog(20.0, 60.0) == Side.HOME
    assert get_underdog(60.0, 20.0) == Side.AWAY


def test_margin_boundary_is_a_clear_favourite() -> None:
    assert get_underdog(40.0, 45.0) == Side.HOME
    assert get_underdog(40.0, 45.0, margin=10.0) is None


def test_upset_when_underdog_wins() -> None:
    assert is_upset_result(20.0, 60.0, 2, 1)
    assert not is_upset_result(20.0, 60.0, 1, 1)
    assert not is_upset_result(20.0, 60.0, 0, 2)
    assert is_upset_result(70.0, 15.0, 0, 1)
    assert not is_upset_result(None, None, 5, 0)


def test_predicted_underdog_win() -> None:
    assert predicted_underdog_win(2, 1, Side.HOME)
    assert not predicted_underdog_win(1, 1, Side.HOME)
    assert predicted_underdog_win(0, 3, Side.AWAY)
    assert not predicted_underdog_win(0, 3, None)


def test_called_upset_correctly() -> None:
    assert called_upset_correctly(1, 0, 2, 1, 20.0, 60.0)
    assert not called_upset_correctly(0, 1, 2, 1, 20.0, 60.0)
    assert not called_upset_correctly(1, 0, 0, 1, 20.0, 60.0)
    assert not called_upset_correctly(1, 0, 1, 0, 50.0, 52.0)
