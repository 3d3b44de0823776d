from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .enums import Tendency


def tendency_of(home_goals: int, away_goals: int) -> Tendency:
    """Coarse outcome of a scoreline."""
    if home_goals > away_goals:
        return Tendency.HOME
    if home_goals < away_goals:
        return Tendency.AWAY
    return Tendency.DRAW


class ScorePick(BaseModel):
    """A single model's forecast scoreline for one match."""

    predicted_home: int = Field(..., ge=0, description="Predicted home goals")
    predicted_away: int = Field(..., ge=0, description="Predicted away goals")

    model_config = ConfigDict(frozen=True)

    @property
    def tendency(self) -> Tendency:
        return tendency_of(self.predicted_home, self.predicted_away)

    @property
    def goal_diff(self) -> int:
        return self.predicted_home - self.predicted_away

    @classmethod
    def parse(cls, text: str) -> "ScorePick":
        """Build a pick from ``"H-A"`` notation, e.g. ``"2-1"``.

        >>> ScorePick.parse("2-1").tendency
        <Tendency.HOME: 'HOME'>
        """
        parts = text.strip().split("-")
        if len(parts) != 2:
            raise ValueError(f"Invalid score {text!r}, expected H-A")
        try:
            home, away = int(parts[0]), int(parts[1])
        except ValueError as exc:
            raise ValueError(f"Invalid score {text!r}, expected H-A") from exc
        return cls(predicted_home=home, predicted_away=away)

    def __str__(self) -> str:
        return f"{self.predicted_home}-{self.predicted_away}"
