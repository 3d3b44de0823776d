from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .enums import StreakType


class ModelStreak(BaseModel):
    """Running form of a prediction model.

    ``current`` is positive for consecutive correct tendencies and negative
    for consecutive misses.
    """

    current: int = 0
    current_type: StreakType = StreakType.NONE
    best: int = Field(0, ge=0)
    worst: int = Field(0, le=0)
    best_exact: int = Field(0, ge=0)
    best_tendency: int = Field(0, ge=0)
    current_exact_run: int = Field(0, ge=0)

    model_config = ConfigDict(frozen=True)
