"""SQLite adapters for the repository interfaces."""

from __future__ import annotations

import sqlite3

from .connection import connect, immediate_transaction
from .matches_sqlite import MatchesRepoSqlite
from .models_sqlite import ModelsRepoSqlite
from .predictions_sqlite import PredictionsRepoSqlite


def ensure_schema(conn: sqlite3.Connection) -> None:
    # Programmatic schema init via repos so it always matches code
    ModelsRepoSqlite(conn)
    MatchesRepoSqlite(conn)
    PredictionsRepoSqlite(conn)


__all__ = [
    "MatchesRepoSqlite",
    "ModelsRepoSqlite",
    "PredictionsRepoSqlite",
    "connect",
    "ensure_schema",
    "immediate_transaction",
]
