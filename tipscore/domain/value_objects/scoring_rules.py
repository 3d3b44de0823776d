from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .quotas import MAX_QUOTA, MIN_QUOTA


class ScoringRules(BaseModel):
    """Thresholds and point values of the quota scoring system.

    An outcome picked by at least ``common_share`` of the models is worth
    ``common_quota``; at least ``uncommon_share`` is worth ``uncommon_quota``;
    anything rarer (including nobody) is worth ``rare_quota``. Both share
    thresholds are inclusive toward the lower quota.
    """

    common_share: float = Field(0.5, gt=0, le=1)
    uncommon_share: float = Field(0.25, gt=0, le=1)
    common_quota: int = Field(2, ge=MIN_QUOTA, le=MAX_QUOTA)
    uncommon_quota: int = Field(4, ge=MIN_QUOTA, le=MAX_QUOTA)
    rare_quota: int = Field(6, ge=MIN_QUOTA, le=MAX_QUOTA)
    empty_quota: int = Field(2, ge=MIN_QUOTA, le=MAX_QUOTA)
    goal_diff_bonus: int = Field(1, ge=0)
    exact_score_bonus: int = Field(3, ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_ordering(self) -> "ScoringRules":
        if not self.uncommon_share < self.common_share:
            raise ValueError("uncommon_share must be lower than common_share")
        if not self.common_quota <= self.uncommon_quota <= self.rare_quota:
            raise ValueError("quotas must not decrease as outcomes get rarer")
        return self

    @property
    def max_points(self) -> int:
        return self.rare_quota + self.goal_diff_bonus + self.exact_score_bonus


DEFAULT_RULES = ScoringRules()
