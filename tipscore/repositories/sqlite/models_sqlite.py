from __future__ import annotations

import sqlite3
from typing import Optional

from tipscore.domain.entities.predictor_model import PredictorModel
from tipscore.domain.value_objects.enums import StreakType
from tipscore.domain.value_objects.ids import ModelId
from tipscore.domain.value_objects.streak import ModelStreak

from ..models import ModelsRepo

_COLUMNS = """
    model_id, display_name, provider, active,
    current_streak, current_streak_type, best_streak, worst_streak,
    best_exact_streak, best_tendency_streak, current_exact_run
"""


def _row_to_model(row: tuple) -> PredictorModel:
    return PredictorModel(
        id=ModelId(row[0]),
        display_name=row[1],
        provider=row[2] or "",
        active=bool(row[3]),
        streak=ModelStreak(
            current=row[4],
            current_type=StreakType(row[5]),
            best=row[6],
            worst=row[7],
            best_exact=row[8],
            best_tendency=row[9],
            current_exact_run=row[10],
        ),
    )


class ModelsRepoSqlite(ModelsRepo):
    """SQLite implementation of :class:`ModelsRepo`."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS models (
                model_id TEXT PRIMARY KEY,
                display_name TEXT NOT NULL,
                provider TEXT NOT NULL DEFAULT '',
                active INTEGER NOT NULL DEFAULT 1 CHECK(active IN (0,1)),
                current_streak INTEGER NOT NULL DEFAULT 0,
                current_streak_type TEXT NOT NULL DEFAULT 'NONE'
                    CHECK(current_streak_type IN ('NONE','EXACT','TENDENCY')),
                best_streak INTEGER NOT NULL DEFAULT 0,
                worst_streak INTEGER NOT NULL DEFAULT 0,
                best_exact_streak INTEGER NOT NULL DEFAULT 0,
                best_tendency_streak INTEGER NOT NULL DEFAULT 0,
                current_exact_run INTEGER NOT NULL DEFAULT 0
            )
            """
        )

    def get_by_id(self, model_id: str) -> Optional[PredictorModel]:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM models WHERE model_id = ?", (model_id,)
        ).fetchone()
        return _row_to_model(row) if row else None

    def list_all(self, *, active_only: bool = False) -> list[PredictorModel]:
        sql = f"SELECT {_COLUMNS} FROM models"
        if active_only:
            sql += " WHERE active = 1"
        sql += " ORDER BY display_name, model_id"
        return [_row_to_model(r) for r in self._conn.execute(sql).fetchall()]

    def upsert(self, model: PredictorModel) -> None:
        # Streak columns are owned by save_streak and survive re-registration
        self._conn.execute(
            """
            INSERT INTO models (model_id, display_name, provider, active)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(model_id) DO UPDATE SET
                display_name=excluded.display_name,
                provider=excluded.provider,
                active=excluded.active
            """,
            (model.id, model.display_name, model.provider, int(model.active)),
        )

    def save_streak(self, model_id: str, streak: ModelStreak) -> None:
        cur = self._conn.execute(
            """
            UPDATE models SET
                current_streak = ?,
                current_streak_type = ?,
                best_streak = ?,
                worst_streak = ?,
                best_exact_streak = ?,
                best_tendency_streak = ?,
                current_exact_run = ?
            WHERE model_id = ?
            """,
            (
                streak.current,
                streak.current_type.value,
                streak.best,
                streak.worst,
                streak.best_exact,
                streak.best_tendency,
                streak.current_exact_run,
                model_id,
            ),
        )
        if cur.rowcount == 0:
            raise ValueError(f"Unknown model: {model_id}")
