from pathlib import Path

import pytest

from tipscore.config.settings import DEFAULT_DB_PATH, Settings, load_settings
from tipscore.domain.value_objects.scoring_rules import DEFAULT_RULES


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("tipscore.config.settings.load_dotenv", lambda *a, **kw: False)
    monkeypatch.delenv("TIPSCORE_DB_PATH", raising=False)
    monkeypatch.delenv("TIPSCORE_UPSET_MARGIN", raising=False)


def test_defaults() -> None:
    s = load_settings()
    assert s.database_path == DEFAULT_DB_PATH
    assert s.upset_margin_pct == 5.0
    assert s.rules == DEFAULT_RULES


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIPSCORE_DB_PATH", "/tmp/x.sqlite3")
    monkeypatch.setenv("TIPSCORE_UPSET_MARGIN", "7.5")
    s = load_settings()
    assert s.database_path == Path("/tmp/x.sqlite3")
    assert s.upset_margin_pct == 7.5


def test_explicit_db_path_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIPSCORE_DB_PATH", "/tmp/env.sqlite3")
    assert load_settings(db_path="other.sqlite3").database_path == Path("other.sqlite3")


def test_invalid_margin(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIPSCORE_UPSET_MARGIN", "lots")
    with pytest.raises(RuntimeError, match="TIPSCORE_UPSET_MARGIN"):
        load_settings()
    monkeypatch.setenv("TIPSCORE_UPSET_MARGIN", "150")
    with pytest.raises(ValueError):
        load_settings()


def test_settings_are_immutable_and_independent() -> None:
    a = load_settings()
    b = load_settings()
    assert a == b and a is not b
    with pytest.raises(ValueError):
        a.upset_margin_pct = 1.0  # type: ignore[misc]
    assert isinstance(Settings(), Settings)
