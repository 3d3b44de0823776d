from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional

from tipscore.config.settings import Settings
from tipscore.domain.entities.match import Match
from tipscore.domain.entities.prediction import Prediction
from tipscore.domain.value_objects.enums import (
    MatchStatus,
    PredictionStatus,
    SkipReason,
    StreakOutcome,
)
from tipscore.domain.value_objects.quotas import Quotas
from tipscore.repositories.matches import MatchesRepo
from tipscore.repositories.models import ModelsRepo
from tipscore.repositories.predictions import PredictionsRepo
from tipscore.repositories.sqlite import (
    MatchesRepoSqlite,
    ModelsRepoSqlite,
    PredictionsRepoSqlite,
    immediate_transaction,
)
from tipscore.scoring.quotas import calculate_quotas
from tipscore.scoring.scorer import score_with_quotas
from tipscore.scoring.streaks import advance_streak, classify_breakdown
from tipscore.scoring.upset import is_upset_result

logger = logging.getLogger(__name__)


def _known_pct(pct: Optional[float]) -> Optional[float]:
    return pct if pct is not None and pct > 0 else None


@dataclass
class SettlementResult:
    match_id: int
    skipped: bool = False
    reason: Optional[SkipReason] = None
    quotas: Optional[Quotas] = None
    previous_quotas: Optional[Quotas] = None
    scored: int = 0
    total_points: int = 0
    exact_hits: int = 0
    is_upset: bool = False

    @property
    def avg_points(self) -> float:
        return round(self.total_points / self.scored, 2) if self.scored else 0.0

    @property
    def quotas_changed(self) -> bool:
        return self.quotas is not None and self.quotas != self.previous_quotas


@dataclass
class RescoreSummary:
    results: list[SettlementResult] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    @property
    def rescored(self) -> int:
        return sum(1 for r in self.results if not r.skipped)

    @property
    def quota_changes(self) -> int:
        return sum(1 for r in self.results if r.quotas_changed)


class SettlementService:
    """Score every prediction of a finished match.

    Settlement is two-phase: quotas are computed once over the whole
    prediction set of the match, then each prediction is scored with those
    shared quotas. Both phases and all writes run in one ``BEGIN IMMEDIATE``
    transaction, so concurrent settlements of the same database serialize and
    a failure leaves nothing half-written.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        settings: Settings,
        *,
        matches: MatchesRepo | None = None,
        predictions: PredictionsRepo | None = None,
        models: ModelsRepo | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._conn = conn
        self.settings = settings
        self.matches = matches or MatchesRepoSqlite(conn)
        self.predictions = predictions or PredictionsRepoSqlite(conn)
        self.models = models or ModelsRepoSqlite(conn)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def settle_match(self, match_id: int, *, rescore: bool = False) -> SettlementResult:
        """Compute quotas and score all predictions of ``match_id``.

        Without ``rescore`` a match whose predictions are already scored is
        skipped. With ``rescore`` the quotas are recomputed from scratch and
        every breakdown is overwritten; model streaks only advance for
        predictions that had not been scored before. A rescore after a
        corrected final score therefore rewrites the breakdowns but keeps the
        streaks classified against the first result.
        """
        logger.info("Settling match", extra={"match_id": match_id, "rescore": rescore})
        try:
            with immediate_transaction(self._conn):
                result = self._settle_locked(match_id, rescore=rescore)
        except Exception:
            logger.exception("Settlement failed", extra={"match_id": match_id})
            raise

        if result.skipped:
            logger.info(
                "Settlement skipped",
                extra={
                    "match_id": match_id,
                    "reason": result.reason.value if result.reason else None,
                },
            )
        else:
            logger.info(
                "Settlement done",
                extra={
                    "match_id": match_id,
                    "scored": result.scored,
                    "total_points": result.total_points,
                    "avg_points": result.avg_points,
                    "exact_hits": result.exact_hits,
                },
            )
        return result

    def _settle_locked(self, match_id: int, *, rescore: bool) -> SettlementResult:
        match = self.matches.get_by_id(match_id)
        if match is None:
            return SettlementResult(match_id, skipped=True, reason=SkipReason.MATCH_NOT_FOUND)
        if not match.is_finished:
            return SettlementResult(match_id, skipped=True, reason=SkipReason.MATCH_NOT_FINISHED)

        predictions = self.predictions.list_by_match(match_id)
        if not predictions:
            return SettlementResult(match_id, skipped=True, reason=SkipReason.NO_PREDICTIONS)

        # Idempotency guard, checked under the write lock
        if not rescore and any(p.status == PredictionStatus.SCORED for p in predictions):
            return SettlementResult(
                match_id,
                skipped=True,
                reason=SkipReason.ALREADY_SCORED,
                quotas=match.quotas,
                previous_quotas=match.quotas,
            )

        return self._score_all(match, predictions)

    def _score_all(self, match: Match, predictions: list[Prediction]) -> SettlementResult:
        assert match.id is not None
        assert match.home_score is not None and match.away_score is not None
        actual_home, actual_away = match.home_score, match.away_score
        rules = self.settings.rules

        # A 0% win probability means the match had no pre-match analysis
        upset = is_upset_result(
            _known_pct(match.home_win_pct),
            _known_pct(match.away_win_pct),
            actual_home,
            actual_away,
            margin=self.settings.upset_margin_pct,
        )
        self.matches.set_upset(match.id, upset)

        # Phase 1: one aggregate over the whole prediction set
        quotas = calculate_quotas([p.pick for p in predictions], rules)
        self.matches.save_quotas(match.id, quotas)
        logger.info("Quotas computed", extra={"match_id": match.id, "quotas": quotas.as_dict()})

        # Phase 2: score each prediction against the shared quotas
        result = SettlementResult(
            match.id, quotas=quotas, previous_quotas=match.quotas, is_upset=upset
        )
        scored_at = self._clock()
        for prediction in predictions:
            assert prediction.id is not None
            breakdown = score_with_quotas(
                prediction.predicted_home,
                prediction.predicted_away,
                actual_home,
                actual_away,
                quotas,
                rules=rules,
            )
            self.predictions.save_breakdown(prediction.id, breakdown, scored_at)
            if prediction.status == PredictionStatus.PENDING:
                self._advance_model_streak(prediction, classify_breakdown(breakdown))

            result.scored += 1
            result.total_points += breakdown.total
            if breakdown.is_exact:
                result.exact_hits += 1
                logger.info(
                    "Exact score",
                    extra={
                        "match_id": match.id,
                        "model_id": prediction.model_id,
                        "predicted": str(prediction.pick),
                        "points": breakdown.total,
                    },
                )
            else:
                logger.debug(
                    "Scored prediction",
                    extra={
                        "match_id": match.id,
                        "model_id": prediction.model_id,
                        "predicted": str(prediction.pick),
                        "points": breakdown.total,
                    },
                )
        return result

    def _advance_model_streak(self, prediction: Prediction, outcome: StreakOutcome) -> None:
        model = self.models.get_by_id(prediction.model_id)
        if model is None:
            logger.warning(
                "Prediction references unknown model",
                extra={"match_id": prediction.match_id, "model_id": prediction.model_id},
            )
            return
        self.models.save_streak(model.id, advance_streak(model.streak, outcome))

    def rescore_all(self) -> RescoreSummary:
        """Re-settle every finished match in kickoff order."""
        summary = RescoreSummary()
        finished = self.matches.list_by_status(MatchStatus.FINISHED)
        logger.info("Rescoring finished matches", extra={"count": len(finished)})
        for match in finished:
            assert match.id is not None
            try:
                summary.results.append(self.settle_match(match.id, rescore=True))
            except (sqlite3.Error, ValueError):
                # Already logged by settle_match; keep going with the other matches
                summary.failed.append(match.id)
        logger.info(
            "Rescore finished",
            extra={
                "rescored": summary.rescored,
                "quota_changes": summary.quota_changes,
                "failed": len(summary.failed),
            },
        )
        return summary
