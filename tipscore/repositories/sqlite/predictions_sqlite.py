from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Optional

from tipscore.domain.entities.prediction import Prediction
from tipscore.domain.value_objects.breakdown import ScoringBreakdown
from tipscore.domain.value_objects.enums import PredictionStatus
from tipscore.domain.value_objects.ids import MatchId, ModelId, PredictionId

from ..predictions import PredictionsRepo

_COLUMNS = """
    p.prediction_id, p.match_id, p.model_id, p.predicted_home, p.predicted_away, p.status,
    p.tendency_points, p.goal_diff_bonus, p.exact_score_bonus, p.total_points,
    p.created_at_utc, p.scored_at_utc
"""


def _row_to_prediction(row: tuple) -> Prediction:
    breakdown = None
    status = PredictionStatus(row[5])
    if status == PredictionStatus.SCORED:
        breakdown = ScoringBreakdown(
            tendency_points=row[6],
            goal_diff_bonus=row[7],
            exact_score_bonus=row[8],
            total=row[9],
        )
    return Prediction(
        id=PredictionId(row[0]),
        match_id=MatchId(row[1]),
        model_id=ModelId(row[2]),
        predicted_home=row[3],
        predicted_away=row[4],
        status=status,
        breakdown=breakdown,
        created_at_utc=row[10],
        scored_at_utc=row[11],
    )


class PredictionsRepoSqlite(PredictionsRepo):
    """SQLite implementation of :class:`PredictionsRepo`."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS predictions (
                prediction_id INTEGER PRIMARY KEY,
                match_id INTEGER NOT NULL,
                model_id TEXT NOT NULL,
                predicted_home INTEGER NOT NULL CHECK(predicted_home >= 0),
                predicted_away INTEGER NOT NULL CHECK(predicted_away >= 0),
                status TEXT NOT NULL DEFAULT 'PENDING'
                    CHECK(status IN ('PENDING','SCORED','VOID')),
                tendency_points INTEGER CHECK(tendency_points >= 0),
                goal_diff_bonus INTEGER CHECK(goal_diff_bonus >= 0),
                exact_score_bonus INTEGER CHECK(exact_score_bonus >= 0),
                total_points INTEGER CHECK(total_points >= 0),
                created_at_utc TEXT NOT NULL,
                scored_at_utc TEXT,
                FOREIGN KEY (match_id) REFERENCES matches(match_id) ON DELETE CASCADE,
                FOREIGN KEY (model_id) REFERENCES models(model_id)
            )
            """
        )
        # One prediction per (match_id, model_id)
        self._conn.execute(
            "CREATE UNIQUE INDEX IF NOT EXISTS ux_predictions_match_model "
            "ON predictions(match_id, model_id)"
        )
        self._conn.execute(
            "CREATE INDEX IF NOT EXISTS ix_predictions_model ON predictions(model_id)"
        )

    def get_by_id(self, prediction_id: int) -> Optional[Prediction]:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM predictions p WHERE p.prediction_id = ?",
            (prediction_id,),
        ).fetchone()
        return _row_to_prediction(row) if row else None

    def list_by_match(self, match_id: int, *, include_void: bool = False) -> list[Prediction]:
        sql = f"SELECT {_COLUMNS} FROM predictions p WHERE p.match_id = ?"
        if not include_void:
            sql += " AND p.status != 'VOID'"
        sql += " ORDER BY p.prediction_id"
        rows = self._conn.execute(sql, (match_id,)).fetchall()
        return [_row_to_prediction(r) for r in rows]

    def list_by_model(self, model_id: str) -> list[Prediction]:
        rows = self._conn.execute(
            f"SELECT {_COLUMNS} FROM predictions p WHERE p.model_id = ? ORDER BY p.prediction_id",
            (model_id,),
        ).fetchall()
        return [_row_to_prediction(r) for r in rows]

    def list_scored(self, *, since: datetime | None = None) -> list[Prediction]:
        sql = (
            f"SELECT {_COLUMNS} FROM predictions p "
            "JOIN matches m ON m.match_id = p.match_id "
            "WHERE p.status = 'SCORED'"
        )
        params: tuple = ()
        if since is not None:
            if since.tzinfo is None:
                raise ValueError("since must be timezone-aware")
            sql += " AND m.kickoff_utc >= ?"
            params = (since.astimezone(timezone.utc).isoformat(),)
        sql += " ORDER BY m.kickoff_utc, p.prediction_id"
        return [_row_to_prediction(r) for r in self._conn.execute(sql, params).fetchall()]

    def insert(self, prediction: Prediction) -> int:
        cur = self._conn.execute(
            """
            INSERT INTO predictions (
                prediction_id, match_id, model_id, predicted_home, predicted_away, status,
                tendency_points, goal_diff_bonus, exact_score_bonus, total_points,
                created_at_utc, scored_at_utc
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                prediction.id,
                prediction.match_id,
                prediction.model_id,
                prediction.predicted_home,
                prediction.predicted_away,
                prediction.status.value,
                prediction.breakdown.tendency_points if prediction.breakdown else None,
                prediction.breakdown.goal_diff_bonus if prediction.breakdown else None,
                prediction.breakdown.exact_score_bonus if prediction.breakdown else None,
                prediction.breakdown.total if prediction.breakdown else None,
                prediction.created_at_utc.isoformat(),
                prediction.scored_at_utc.isoformat() if prediction.scored_at_utc else None,
            ),
        )
        rowid = cur.lastrowid
        if rowid is None:
            raise RuntimeError("SQLite insert failed: no lastrowid (table: predictions)")
        return int(rowid)

    def save_breakdown(
        self, prediction_id: int, breakdown: ScoringBreakdown, scored_at: datetime
    ) -> None:
        cur = self._conn.execute(
            """
            UPDATE predictions SET
                tendency_points = ?,
                goal_diff_bonus = ?,
                exact_score_bonus = ?,
                total_points = ?,
                status = 'SCORED',
                scored_at_utc = ?
            WHERE prediction_id = ?
            """,
            (
                breakdown.tendency_points,
                breakdown.goal_diff_bonus,
                breakdown.exact_score_bonus,
                breakdown.total,
                scored_at.astimezone(timezone.utc).isoformat(),
                prediction_id,
            ),
        )
        if cur.rowcount == 0:
            raise ValueError(f"Unknown prediction: {prediction_id}")

    def mark_void(self, prediction_id: int) -> None:
        self._conn.execute(
            """
            UPDATE predictions SET
                status = 'VOID',
                tendency_points = NULL,
                goal_diff_bonus = NULL,
                exact_score_bonus = NULL,
                total_points = NULL,
                scored_at_utc = NULL
            WHERE prediction_id = ?
            """,
            (prediction_id,),
        )

    def delete(self, prediction_id: int) -> None:
        self._conn.execute("DELETE FROM predictions WHERE prediction_id = ?", (prediction_id,))
