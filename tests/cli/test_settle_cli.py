from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

import pytest

import tipscore.cli.settle as settle_cli
from tipscore.domain.entities import Match, Prediction, PredictorModel
from tipscore.domain.value_objects.enums import MatchStatus
from tipscore.domain.value_objects.ids import MatchId, ModelId
from tipscore.repositories.sqlite import (
    MatchesRepoSqlite,
    ModelsRepoSqlite,
    PredictionsRepoSqlite,
    connect,
    ensure_schema,
)


@pytest.fixture
def db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[Path, int]:
    """A database with one finished match and three predictions."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TIPSCORE_DB_PATH", raising=False)
    monkeypatch.delenv("TIPSCORE_UPSET_MARGIN", raising=False)
    path = tmp_path / "data" / "t.sqlite3"
    conn = connect(path)
    ensure_schema(conn)
    mid = MatchesRepoSqlite(conn).insert(
        Match(
            home_team="Bayern",
            away_team="Dortmund",
            kickoff_utc=datetime(2025, 5, 10, 16, 30, tzinfo=timezone.utc),
            status=MatchStatus.FINISHED,
            home_score=2,
            away_score=1,
        )
    )
    for slug, (h, a) in {"a": (2, 1), "b": (1, 1), "c": (1, 0)}.items():
        ModelsRepoSqlite(conn).upsert(PredictorModel(id=ModelId(slug), display_name=slug.upper()))
        PredictionsRepoSqlite(conn).insert(
            Prediction(
                match_id=MatchId(mid), model_id=ModelId(slug), predicted_home=h, predicted_away=a
            )
        )
    conn.close()
    return path, mid


def test_quotas_command_prints_counts(capsys: pytest.CaptureFixture[str]) -> None:
    rc = settle_cli.main(["quotas", "2-1", "1-0", "1-1", "0-2"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Predictions: 4" in out
    assert "HOME: 2" in out and "DRAW: 1" in out and "AWAY: 1" in out
    assert "Quotas: H=2 D=4 A=4" in out


def test_quotas_command_json_for_empty_set(capsys: pytest.CaptureFixture[str]) -> None:
    assert settle_cli.main(["quotas", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == {"home": 2, "draw": 2, "away": 2}


def test_quotas_command_rejects_bad_pick(capsys: pytest.CaptureFixture[str]) -> None:
    assert settle_cli.main(["quotas", "2:1"]) == 1
    assert "Invalid score" in capsys.readouterr().err


def test_score_command(capsys: pytest.CaptureFixture[str]) -> None:
    rc = settle_cli.main(["score", "0-1", "--actual", "0-1", "--quotas", "2,6,6", "--json"])
    assert rc == 0
    assert json.loads(capsys.readouterr().out) == {
        "tendency_points": 6,
        "goal_diff_bonus": 1,
        "exact_score_bonus": 3,
        "total": 10,
    }

    assert settle_cli.main(["score", "2-0", "--actual", "3-1", "--quotas", "2,4,6"]) == 0
    out = capsys.readouterr().out
    assert "2-0 vs 3-1" in out and "goal_diff=1" in out and "total=3" in out


@pytest.mark.parametrize("quotas", ["2,4", "1,4,6", "a,b,c"])
def test_score_command_rejects_bad_quotas(
    quotas: str, capsys: pytest.CaptureFixture[str]
) -> None:
    assert settle_cli.main(["score", "1-0", "--actual", "1-0", "--quotas", quotas]) == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_settle_command_scores_then_skips(
    db: tuple[Path, int], capsys: pytest.CaptureFixture[str]
) -> None:
    path, mid = db
    assert settle_cli.main(["--db", str(path), "settle", str(mid)]) == 0
    out = capsys.readouterr().out
    assert f"Match {mid}: quotas H=2 D=4 A=6" in out
    assert "scored=3 points=9" in out and "exact=1" in out

    assert settle_cli.main(["--db", str(path), "settle", str(mid)]) == 0
    assert "skipped (ALREADY_SCORED)" in capsys.readouterr().out

    assert settle_cli.main(["--db", str(path), "settle", str(mid), "--rescore"]) == 0
    assert "scored=3" in capsys.readouterr().out


def test_rescore_all_command(
    db: tuple[Path, int], capsys: pytest.CaptureFixture[str], tmp_path: Path
) -> None:
    path, _ = db
    assert settle_cli.main(["--db", str(path), "rescore-all"]) == 0
    out = capsys.readouterr().out
    assert "Rescored 1 matches, quota changes: 1, failed: 0" in out
    assert (tmp_path / "logs" / "app.log").exists()


def test_db_path_from_environment(
    db: tuple[Path, int], monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    path, mid = db
    monkeypatch.setenv("TIPSCORE_DB_PATH", str(path))
    assert settle_cli.main(["settle", str(mid)]) == 0
    assert "scored=3" in capsys.readouterr().out


def test_connection_closed_even_when_settlement_fails(
    db: tuple[Path, int], monkeypatch: pytest.MonkeyPatch
) -> None:
    path, mid = db
    opened: list[sqlite3.Connection] = []

    def tracking_connect(p):  # type: ignore[no-untyped-def]
        conn = connect(p)
        opened.append(conn)
        return conn

    def failing_settle(self, match_id, *, rescore=False):  # type: ignore[no-untyped-def]
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(settle_cli, "connect", tracking_connect)
    monkeypatch.setattr(settle_cli.SettlementService, "settle_match", failing_settle)
    with pytest.raises(sqlite3.OperationalError):
        settle_cli.main(["--db", str(path), "settle", str(mid)])
    assert len(opened) == 1
    with pytest.raises(sqlite3.ProgrammingError):
        opened[0].execute("SELECT 1")
