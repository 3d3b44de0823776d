from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..value_objects.breakdown import ScoringBreakdown
from ..value_objects.enums import PredictionStatus, Tendency
from ..value_objects.ids import MatchId, ModelId, PredictionId
from ..value_objects.score_pick import ScorePick, tendency_of


def _utc(v: datetime | str | None) -> datetime | None:
    if v is None:
        return None
    if isinstance(v, str):
        v = datetime.fromisoformat(v)
    if v.tzinfo is None:
        raise ValueError("timestamps must be timezone-aware")
    return v.astimezone(timezone.utc)


class Prediction(BaseModel):
    id: PredictionId | None = None
    match_id: MatchId
    model_id: ModelId
    predicted_home: int = Field(..., ge=0)
    predicted_away: int = Field(..., ge=0)
    status: PredictionStatus = PredictionStatus.PENDING
    breakdown: ScoringBreakdown | None = None
    created_at_utc: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    scored_at_utc: datetime | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("created_at_utc", "scored_at_utc", mode="before")
    @classmethod
    def _ensure_utc(cls, v: datetime | str | None) -> datetime | None:
        return _utc(v)

    @model_validator(mode="after")
    def _check_status_requirements(self) -> "Prediction":
        if self.status == PredictionStatus.SCORED and self.breakdown is None:
            raise ValueError("breakdown must be provided when status is SCORED")
        if self.status != PredictionStatus.SCORED and self.breakdown is not None:
            raise ValueError("breakdown is only allowed on SCORED predictions")
        return self

    @property
    def pick(self) -> ScorePick:
        return ScorePick(predicted_home=self.predicted_home, predicted_away=self.predicted_away)

    @property
    def tendency(self) -> Tendency:
        return tendency_of(self.predicted_home, self.predicted_away)

    def scored(self, breakdown: ScoringBreakdown, at: datetime) -> "Prediction":
        """Return a copy carrying ``breakdown``."""
        return self.model_copy(
            update={
                "status": PredictionStatus.SCORED,
                "breakdown": breakdown,
                "scored_at_utc": _utc(at),
            }
        )
