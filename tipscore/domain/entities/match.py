from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..value_objects.enums import MatchStatus
from ..value_objects.ids import MatchId
from ..value_objects.quotas import Quotas


class Match(BaseModel):
    id: MatchId | None = Field(default=None, description="Storage identifier")
    home_team: str = Field(..., description="Home team name")
    away_team: str = Field(..., description="Away team name")
    kickoff_utc: datetime = Field(..., description="Kickoff time in UTC")
    status: MatchStatus = Field(MatchStatus.SCHEDULED, description="Current match status")
    home_score: int | None = Field(default=None, ge=0, description="Final home goals")
    away_score: int | None = Field(default=None, ge=0, description="Final away goals")
    quotas: Quotas | None = Field(default=None, description="Quotas from the last settlement")
    is_upset: bool = Field(default=False, description="Underdog won (display only)")
    home_win_pct: float | None = Field(
        default=None, ge=0, le=100, description="Pre-match home win probability in percent"
    )
    away_win_pct: float | None = Field(
        default=None, ge=0, le=100, description="Pre-match away win probability in percent"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("kickoff_utc", mode="before")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        if isinstance(v, str):
            v = datetime.fromisoformat(v)
        if v.tzinfo is None:
            raise ValueError("kickoff_utc must be timezone-aware")
        return v.astimezone(timezone.utc)

    @model_validator(mode="after")
    def _require_score_if_finished(self) -> "Match":
        if self.status == MatchStatus.FINISHED:
            if self.home_score is None or self.away_score is None:
                raise ValueError("Finished match must have a final score")
        return self

    @property
    def is_finished(self) -> bool:
        return self.status == MatchStatus.FINISHED

    @property
    def label(self) -> str:
        score = ""
        if self.home_score is not None and self.away_score is not None:
            score = f" {self.home_score}-{self.away_score}"
        return f"{self.home_team} vs {self.away_team}{score}"
