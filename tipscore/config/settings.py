"""Application settings for the scoring workflow.

Environment variables are loaded from a ``.env`` file using ``python-dotenv``
and exposed through an immutable Pydantic settings object. A fresh object is
built on every :func:`load_settings` call and handed to the services that
need it.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from tipscore.domain.value_objects.scoring_rules import DEFAULT_RULES, ScoringRules
from tipscore.scoring.upset import UPSET_MARGIN_PCT

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_DB_PATH = Path("data") / "tipscore.sqlite3"
DB_PATH_ENV = "TIPSCORE_DB_PATH"
UPSET_MARGIN_ENV = "TIPSCORE_UPSET_MARGIN"


class Settings(BaseModel):
    """Immutable settings object passed into the services."""

    database_path: Path = DEFAULT_DB_PATH
    upset_margin_pct: float = Field(UPSET_MARGIN_PCT, ge=0, le=100)
    rules: ScoringRules = DEFAULT_RULES

    model_config = ConfigDict(frozen=True)


def load_settings(*, db_path: str | Path | None = None) -> Settings:
    """Construct a ``Settings`` instance based on environment variables.

    ``db_path`` overrides ``TIPSCORE_DB_PATH`` (used by the CLI ``--db`` flag).
    """
    load_dotenv()

    raw_path = db_path if db_path is not None else os.getenv(DB_PATH_ENV)
    database_path = Path(raw_path) if raw_path else DEFAULT_DB_PATH

    raw_margin = os.getenv(UPSET_MARGIN_ENV)
    if raw_margin is None or raw_margin.strip() == "":
        margin = UPSET_MARGIN_PCT
    else:
        try:
            margin = float(raw_margin)
        except ValueError as exc:
            raise RuntimeError(f"{UPSET_MARGIN_ENV} must be a number, got {raw_margin!r}") from exc

    return Settings(database_path=database_path, upset_margin_pct=margin)
