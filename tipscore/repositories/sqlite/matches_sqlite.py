from __future__ import annotations

import sqlite3
from typing import Optional

from tipscore.domain.entities.match import Match
from tipscore.domain.value_objects.enums import MatchStatus
from tipscore.domain.value_objects.ids import MatchId
from tipscore.domain.value_objects.quotas import Quotas

from ..matches import MatchesRepo

_COLUMNS = """
    match_id, home_team, away_team, kickoff_utc, status, home_score, away_score,
    quota_home, quota_draw, quota_away, is_upset, home_win_pct, away_win_pct
"""


def _row_to_match(row: tuple) -> Match:
    quotas = None
    if row[7] is not None and row[8] is not None and row[9] is not None:
        quotas = Quotas(home=row[7], draw=row[8], away=row[9])
    return Match(
        id=MatchId(row[0]),
        home_team=row[1],
        away_team=row[2],
        kickoff_utc=row[3],
        status=MatchStatus(row[4]),
        home_score=row[5],
        away_score=row[6],
        quotas=quotas,
        is_upset=bool(row[10]),
        home_win_pct=row[11],
        away_win_pct=row[12],
    )


class MatchesRepoSqlite(MatchesRepo):
    """SQLite implementation of :class:`MatchesRepo`.

    Example:
        >>> from datetime import datetime, timezone
        >>> from tipscore.repositories.sqlite.connection import connect
        >>> repo = MatchesRepoSqlite(connect())
        >>> match_id = repo.insert(
        ...     Match(home_team="A", away_team="B", kickoff_utc=datetime.now(timezone.utc))
        ... )
        >>> repo.get_by_id(match_id).home_team
        'A'
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS matches (
                match_id INTEGER PRIMARY KEY,
                home_team TEXT NOT NULL,
                away_team TEXT NOT NULL,
                kickoff_utc TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'SCHEDULED'
                    CHECK(status IN ('SCHEDULED','LIVE','FINISHED','POSTPONED','CANCELLED')),
                home_score INTEGER CHECK(home_score >= 0),
                away_score INTEGER CHECK(away_score >= 0),
                quota_home INTEGER CHECK(quota_home BETWEEN 2 AND 6),
                quota_draw INTEGER CHECK(quota_draw BETWEEN 2 AND 6),
                quota_away INTEGER CHECK(quota_away BETWEEN 2 AND 6),
                is_upset INTEGER NOT NULL DEFAULT 0 CHECK(is_upset IN (0,1)),
                home_win_pct REAL,
                away_win_pct REAL
            )
            """
        )
        self._conn.execute(
            "CREATE INDEX IF NOT EXISTS ix_matches_status_kickoff ON matches(status, kickoff_utc)"
        )

    def get_by_id(self, match_id: int) -> Optional[Match]:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM matches WHERE match_id = ?", (match_id,)
        ).fetchone()
        return _row_to_match(row) if row else None

    def list_by_status(self, status: MatchStatus) -> list[Match]:
        rows = self._conn.execute(
            f"SELECT {_COLUMNS} FROM matches WHERE status = ? ORDER BY kickoff_utc, match_id",
            (status.value,),
        ).fetchall()
        return [_row_to_match(r) for r in rows]

    def insert(self, match: Match) -> int:
        quotas = match.quotas
        cur = self._conn.execute(
            """
            INSERT INTO matches (
                match_id, home_team, away_team, kickoff_utc, status, home_score, away_score,
                quota_home, quota_draw, quota_away, is_upset, home_win_pct, away_win_pct
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                match.id,
                match.home_team,
                match.away_team,
                match.kickoff_utc.isoformat(),
                match.status.value,
                match.home_score,
                match.away_score,
                quotas.home if quotas else None,
                quotas.draw if quotas else None,
                quotas.away if quotas else None,
                int(match.is_upset),
                match.home_win_pct,
                match.away_win_pct,
            ),
        )
        rowid = cur.lastrowid
        if rowid is None:
            raise RuntimeError("SQLite insert failed: no lastrowid (table: matches)")
        return int(rowid)

    def update_result(
        self, match_id: int, status: MatchStatus, home_score: int | None, away_score: int | None
    ) -> None:
        if status == MatchStatus.FINISHED and (home_score is None or away_score is None):
            raise ValueError("Finished match must have a final score")
        cur = self._conn.execute(
            "UPDATE matches SET status = ?, home_score = ?, away_score = ? WHERE match_id = ?",
            (status.value, home_score, away_score, match_id),
        )
        if cur.rowcount == 0:
            raise ValueError(f"Unknown match: {match_id}")

    def save_quotas(self, match_id: int, quotas: Quotas) -> None:
        self._conn.execute(
            "UPDATE matches SET quota_home = ?, quota_draw = ?, quota_away = ? WHERE match_id = ?",
            (quotas.home, quotas.draw, quotas.away, match_id),
        )

    def set_upset(self, match_id: int, is_upset: bool) -> None:
        self._conn.execute(
            "UPDATE matches SET is_upset = ? WHERE match_id = ?", (int(is_upset), match_id)
        )

    def delete(self, match_id: int) -> None:
        self._conn.execute("DELETE FROM matches WHERE match_id = ?", (match_id,))
