from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .enums import Tendency

MIN_QUOTA = 2
MAX_QUOTA = 6


class Quotas(BaseModel):
    """Points awarded for a correct tendency, per outcome of one match."""

    home: int = Field(..., ge=MIN_QUOTA, le=MAX_QUOTA, description="Quota for a home win")
    draw: int = Field(..., ge=MIN_QUOTA, le=MAX_QUOTA, description="Quota for a draw")
    away: int = Field(..., ge=MIN_QUOTA, le=MAX_QUOTA, description="Quota for an away win")

    model_config = ConfigDict(frozen=True)

    def for_tendency(self, tendency: Tendency) -> int:
        return {
            Tendency.HOME: self.home,
            Tendency.DRAW: self.draw,
            Tendency.AWAY: self.away,
        }[tendency]

    def as_dict(self) -> dict[str, int]:
        return {"home": self.home, "draw": self.draw, "away": self.away}

    def __str__(self) -> str:
        return f"H={self.home} D={self.draw} A={self.away}"
