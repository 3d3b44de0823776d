from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScoringBreakdown(BaseModel):
    """Points earned by one prediction once its match has finished."""

    tendency_points: int = Field(..., ge=0, description="Quota if the tendency was right")
    goal_diff_bonus: int = Field(..., ge=0, description="Bonus for the right goal difference")
    exact_score_bonus: int = Field(..., ge=0, description="Bonus for the exact scoreline")
    total: int = Field(..., ge=0, description="Sum of all parts")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _total_is_sum(self) -> "ScoringBreakdown":
        if self.total != self.tendency_points + self.goal_diff_bonus + self.exact_score_bonus:
            raise ValueError("total must equal the sum of the breakdown parts")
        return self

    @property
    def is_exact(self) -> bool:
        return self.exact_score_bonus > 0

    @property
    def is_correct_tendency(self) -> bool:
        return self.tendency_points > 0
