from __future__ import annotations

import sqlite3
from collections import defaultdict
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Iterable, Optional

from tipscore.domain.entities.prediction import Prediction
from tipscore.domain.value_objects.enums import PredictionStatus
from tipscore.domain.value_objects.streak import ModelStreak
from tipscore.repositories.models import ModelsRepo
from tipscore.repositories.predictions import PredictionsRepo
from tipscore.repositories.sqlite import ModelsRepoSqlite, PredictionsRepoSqlite


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    model_id: str
    display_name: str
    total_points: int
    scored_predictions: int
    exact_scores: int
    correct_tendencies: int
    avg_points: float
    tendency_accuracy: float

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ModelStats:
    model_id: str
    display_name: str
    total_predictions: int
    scored_predictions: int
    total_points: int
    avg_points: float
    exact_scores: int
    correct_tendencies: int
    wrong_tendencies: int
    max_points: Optional[int]
    min_points: Optional[int]
    streak: ModelStreak

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["streak"] = self.streak.model_dump(mode="json")
        return data


@dataclass
class _Tally:
    total_points: int = 0
    scored: int = 0
    exact: int = 0
    correct: int = 0

    def add(self, prediction: Prediction) -> None:
        b = prediction.breakdown
        if b is None:
            return
        self.total_points += b.total
        self.scored += 1
        if b.is_exact:
            self.exact += 1
        if b.is_correct_tendency:
            self.correct += 1

    @property
    def avg_points(self) -> float:
        return round(self.total_points / self.scored, 2) if self.scored else 0.0

    @property
    def accuracy(self) -> float:
        return round(self.correct / self.scored * 100, 1) if self.scored else 0.0


def _tally(predictions: Iterable[Prediction]) -> dict[str, _Tally]:
    out: dict[str, _Tally] = defaultdict(_Tally)
    for p in predictions:
        out[p.model_id].add(p)
    return out


class LeaderboardService:
    """Rank models by the points of their scored predictions."""

    def __init__(
        self,
        conn: sqlite3.Connection,
        *,
        predictions: PredictionsRepo | None = None,
        models: ModelsRepo | None = None,
    ) -> None:
        self.predictions = predictions or PredictionsRepoSqlite(conn)
        self.models = models or ModelsRepoSqlite(conn)

    def leaderboard(
        self, limit: int = 30, *, since: datetime | None = None, active_only: bool = True
    ) -> list[LeaderboardEntry]:
        """Ranking by total points, then average points, then name.

        ``since`` restricts the ranking to matches kicked off at or after it
        (weekly / monthly views).
        """
        tallies = _tally(self.predictions.list_scored(since=since))
        models = self.models.list_all(active_only=active_only)
        rows = [(m, tallies.get(m.id, _Tally())) for m in models]
        rows.sort(key=lambda r: (-r[1].total_points, -r[1].avg_points, r[0].display_name))
        return [
            LeaderboardEntry(
                rank=i,
                model_id=m.id,
                display_name=m.display_name,
                total_points=t.total_points,
                scored_predictions=t.scored,
                exact_scores=t.exact,
                correct_tendencies=t.correct,
                avg_points=t.avg_points,
                tendency_accuracy=t.accuracy,
            )
            for i, (m, t) in enumerate(rows[: max(0, limit)], start=1)
        ]

    def model_stats(self, model_id: str) -> Optional[ModelStats]:
        model = self.models.get_by_id(model_id)
        if model is None:
            return None
        predictions = self.predictions.list_by_model(model_id)
        scored = [p for p in predictions if p.status == PredictionStatus.SCORED]
        tally = _tally(scored)[model_id] if scored else _Tally()
        totals = [p.breakdown.total for p in scored if p.breakdown is not None]
        return ModelStats(
            model_id=model.id,
            display_name=model.display_name,
            total_predictions=len(predictions),
            scored_predictions=tally.scored,
            total_points=tally.total_points,
            avg_points=tally.avg_points,
            exact_scores=tally.exact,
            correct_tendencies=tally.correct,
            wrong_tendencies=tally.scored - tally.correct,
            max_points=max(totals) if totals else None,
            min_points=min(totals) if totals else None,
            streak=model.streak,
        )
