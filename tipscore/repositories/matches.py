from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from tipscore.domain.entities.match import Match
from tipscore.domain.value_objects.enums import MatchStatus
from tipscore.domain.value_objects.quotas import Quotas


class MatchesRepo(ABC):
    """Abstract repository interface for :class:`Match` entities."""

    @abstractmethod
    def get_by_id(self, match_id: int) -> Optional[Match]:
        """Return a match by its identifier if present."""

    @abstractmethod
    def list_by_status(self, status: MatchStatus) -> list[Match]:
        """List matches in ``status`` ordered by kickoff."""

    @abstractmethod
    def insert(self, match: Match) -> int:
        """Persist a new match and return the assigned identifier."""

    @abstractmethod
    def update_result(
        self, match_id: int, status: MatchStatus, home_score: int | None, away_score: int | None
    ) -> None:
        """Update the status and (final) score of a match."""

    @abstractmethod
    def save_quotas(self, match_id: int, quotas: Quotas) -> None:
        """Store the quotas computed for a match."""

    @abstractmethod
    def set_upset(self, match_id: int, is_upset: bool) -> None:
        """Flag whether the result was an upset."""

    @abstractmethod
    def delete(self, match_id: int) -> None:
        """Remove a match by its identifier."""
