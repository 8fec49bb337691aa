"""
Pydantic configuration models with YAML / dict loading and env overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

DB_URL_ENV = "PERSONABOT_DB_URL"
LOG_LEVEL_ENV = "PERSONABOT_LOG_LEVEL"


class ResponderConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    history_capacity: int = Field(default=10, gt=0)
    mood_window: int = Field(default=3, gt=0)
    recall_limit: int = Field(default=10, ge=0)
    suggestion_limit: int = Field(default=3, ge=0, le=3)
    memory_write_timeout: float = Field(default=0.25, gt=0)
    max_pending_writes: int = Field(default=32, gt=0)
    default_persona: str = "neochat"
    randomize_suggestions: bool = False
    seed: Optional[int] = None
    max_sessions: int = Field(default=1024, gt=0)


class MemoryConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    backend: Literal["memory", "sqlalchemy"] = "memory"
    db_url: Optional[str] = None


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    level: str = "INFO"
    file: Optional[str] = None
    rotation: str = "10 MB"
    retention: str = "7 days"
    serialize: bool = False


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    responder: ResponderConfig = Field(default_factory=ResponderConfig)
    memory: MemoryConfig = Field(default_factory=MemoryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    raw: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_yaml(cls, path: str | Path, *, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        file_path = Path(path).expanduser()
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {file_path}")
        data = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {file_path}")
        return cls.from_dict(data, env=env)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        raw = dict(data or {})
        # keep the raw mapping around for callers that need unmodelled keys
        return cls.model_validate({**raw, "raw": raw}).with_env_overrides(env)

    @classmethod
    def default(cls, *, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        return cls().with_env_overrides(env)

    def with_env_overrides(self, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if env is None else env
        updated = self
        db_url = env.get(DB_URL_ENV)
        if db_url:
            updated = updated.model_copy(
                update={"memory": updated.memory.model_copy(update={"db_url": db_url, "backend": "sqlalchemy"})}
            )
        level = env.get(LOG_LEVEL_ENV)
        if level:
            updated = updated.model_copy(
                update={"logging": updated.logging.model_copy(update={"level": level.upper()})}
            )
        return updated
