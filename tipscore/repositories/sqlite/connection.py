from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

MEMORY = ":memory:"


def connect(path: str | Path = MEMORY) -> sqlite3.Connection:
    """Open a connection in autocommit mode with foreign keys enforced.

    Every statement commits on its own unless it runs inside
    :func:`immediate_transaction`.
    """
    if str(path) != MEMORY:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), isolation_level=None)
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


@contextmanager
def immediate_transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run a block under SQLite's write lock, committing or rolling back as a whole.

    ``BEGIN IMMEDIATE`` takes the database write lock up front, so two
    settlements of the same database serialize instead of interleaving.
    """
    conn.execute("BEGIN IMMEDIATE")
    try:
        yield conn
    except BaseException:
        conn.execute("ROLLBACK")
        raise
    conn.execute("COMMIT")
