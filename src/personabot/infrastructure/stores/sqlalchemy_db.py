from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

DEFAULT_DB_URL = "sqlite:///data/personabot.db"
DB_URL_ENV = "PERSONABOT_DB_URL"


def get_db_url() -> str:
    return os.getenv(DB_URL_ENV) or DEFAULT_DB_URL


def sqlite_path(db_url: str) -> Optional[Path]:
    """Filesystem path of a sqlite URL, or None for in-memory/non-sqlite URLs."""
    if not db_url.startswith("sqlite:///"):
        return None
    # sqlite:///relative/path.db or sqlite:////abs/path.db
    path = db_url[len("sqlite:///"):].split("?", 1)[0]
    if path in ("", ":memory:"):
        return None
    return Path(path).expanduser()


def _ensure_sqlite_parent_dir(db_url: str) -> None:
    path = sqlite_path(db_url)
    if path is not None:
        path.resolve().parent.mkdir(parents=True, exist_ok=True)


def create_db_engine(db_url: Optional[str] = None) -> Engine:
    url = db_url or get_db_url()
    _ensure_sqlite_parent_dir(url)
    connect_args = {}
    if url.startswith("sqlite:"):
        connect_args = {"check_same_thread": False}
    return create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True, expire_on_commit=False)


class SessionProvider:
    """Light wrapper to create/close SQLAlchemy sessions."""

    def __init__(self, db_url: Optional[str] = None):
        self.engine = create_db_engine(db_url)
        self._factory = create_session_factory(self.engine)

    def session(self) -> Session:
        return self._factory()

    def dispose(self) -> None:
        self.engine.dispose()
