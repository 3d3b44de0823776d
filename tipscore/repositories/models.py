from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from tipscore.domain.entities.predictor_model import PredictorModel
from tipscore.domain.value_objects.streak import ModelStreak


class ModelsRepo(ABC):
    """Repository interface for prediction models."""

    @abstractmethod
    def get_by_id(self, model_id: str) -> Optional[PredictorModel]:
        """Return a model by its slug."""

    @abstractmethod
    def list_all(self, *, active_only: bool = False) -> list[PredictorModel]:
        """List models ordered by display name."""

    @abstractmethod
    def upsert(self, model: PredictorModel) -> None:
        """Insert a model or update its descriptive fields."""

    @abstractmethod
    def save_streak(self, model_id: str, streak: ModelStreak) -> None:
        """Store the streak of a model."""
