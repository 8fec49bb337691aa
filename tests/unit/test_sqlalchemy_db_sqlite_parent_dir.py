from __future__ import annotations

from pathlib import Path

from personabot.infrastructure.stores.sqlalchemy_db import DEFAULT_DB_URL, create_db_engine, get_db_url, sqlite_path


def test_create_db_engine_creates_parent_dir_for_relative_sqlite(monkeypatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    assert not (tmp_path / "data").exists()

    engine = create_db_engine("sqlite:///data/test.db")
    try:
        assert (tmp_path / "data").is_dir()
        # Ensure connection works and file can be created.
        with engine.connect() as conn:
            conn.exec_driver_sql("select 1")
    finally:
        engine.dispose()


def test_sqlite_path_parsing():
    assert sqlite_path("sqlite:///data/x.db") == Path("data/x.db")
    assert sqlite_path("sqlite:////abs/x.db") == Path("/abs/x.db")
    assert sqlite_path("sqlite:///:memory:") is None
    assert sqlite_path("postgresql://localhost/db") is None


def test_db_url_env_override(monkeypatch):
    assert get_db_url() == DEFAULT_DB_URL
    monkeypatch.setenv("PERSONABOT_DB_URL", "sqlite:///other.db")
    assert get_db_url() == "sqlite:///other.db"
