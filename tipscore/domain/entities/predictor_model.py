from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..value_objects.ids import ModelId
from ..value_objects.streak import ModelStreak


class PredictorModel(BaseModel):
    """An AI model taking part in the prediction leaderboard."""

    id: ModelId = Field(..., min_length=1, description="Stable slug, e.g. 'gpt-4o'")
    display_name: str = Field(..., min_length=1)
    provider: str = ""
    active: bool = True
    streak: ModelStreak = Field(default_factory=ModelStreak)

    model_config = ConfigDict(frozen=True)
