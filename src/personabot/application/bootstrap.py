"""
Wiring: build stores, personas and responders from an `AppConfig`.
"""

from __future__ import annotations

import random
from typing import Optional

from loguru import logger

from personabot.analysis import SessionMoodRegistry
from personabot.application.ports import MemoryStorePort
from personabot.application.responder import PersonaResponder
from personabot.application.suggestions import SuggestionGenerator
from personabot.config import AppConfig
from personabot.infrastructure.stores import InMemoryMemoryStore, SqlAlchemyMemoryStore
from personabot.memory import ContextLoader, MemoryWriter
from personabot.personas import PersonaRegistry


def create_memory_store(config: Optional[AppConfig] = None) -> MemoryStorePort:
    config = config or AppConfig.default()
    if config.memory.backend == "sqlalchemy":
        logger.debug(f"using sqlalchemy memory store ({config.memory.db_url or 'default url'})")
        return SqlAlchemyMemoryStore(config.memory.db_url)
    return InMemoryMemoryStore()


def create_persona_registry(config: Optional[AppConfig] = None) -> PersonaRegistry:
    config = config or AppConfig.default()
    return PersonaRegistry.with_builtins(default=config.responder.default_persona)


def create_responder(
    persona: Optional[str] = None,
    config: Optional[AppConfig] = None,
    *,
    store: Optional[MemoryStorePort] = None,
    registry: Optional[PersonaRegistry] = None,
    rng: Optional[random.Random] = None,
) -> PersonaResponder:
    config = config or AppConfig.default()
    rc = config.responder
    registry = registry or create_persona_registry(config)
    store = store if store is not None else create_memory_store(config)
    if rng is None and rc.randomize_suggestions:
        rng = random.Random(rc.seed)
    return PersonaResponder(
        registry.get(persona or rc.default_persona),
        moods=SessionMoodRegistry(capacity=rc.history_capacity, window=rc.mood_window, max_sessions=rc.max_sessions),
        context_loader=ContextLoader(store, limit=rc.recall_limit),
        memory_writer=MemoryWriter(store, timeout=rc.memory_write_timeout, max_pending=rc.max_pending_writes),
        suggestions=SuggestionGenerator(limit=rc.suggestion_limit, rng=rng),
    )
