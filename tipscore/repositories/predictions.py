from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from tipscore.domain.entities.prediction import Prediction
from tipscore.domain.value_objects.breakdown import ScoringBreakdown


class PredictionsRepo(ABC):
    """Repository interface for predictions."""

    @abstractmethod
    def get_by_id(self, prediction_id: int) -> Optional[Prediction]:
        """Return a prediction by its identifier."""

    @abstractmethod
    def list_by_match(self, match_id: int, *, include_void: bool = False) -> list[Prediction]:
        """List all predictions for a match."""

    @abstractmethod
    def list_by_model(self, model_id: str) -> list[Prediction]:
        """List all predictions of one model."""

    @abstractmethod
    def list_scored(self, *, since: datetime | None = None) -> list[Prediction]:
        """List scored predictions, optionally only for matches kicked off at or after ``since``."""

    @abstractmethod
    def insert(self, prediction: Prediction) -> int:
        """Persist a new prediction; at most one per (match, model)."""

    @abstractmethod
    def save_breakdown(
        self, prediction_id: int, breakdown: ScoringBreakdown, scored_at: datetime
    ) -> None:
        """Store the points of a prediction and mark it scored."""

    @abstractmethod
    def mark_void(self, prediction_id: int) -> None:
        """Exclude a prediction from scoring."""

    @abstractmethod
    def delete(self, prediction_id: int) -> None:
        """Remove a prediction by identifier."""
