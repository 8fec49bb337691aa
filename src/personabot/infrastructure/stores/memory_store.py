from __future__ import annotations

import logging
from datetime import timezone
from typing import List, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError

from personabot.core.errors import PersistenceFailure
from personabot.infrastructure.stores.models import AgentMemoryModel, Base
from personabot.infrastructure.stores.sqlalchemy_db import SessionProvider, get_db_url
from personabot.memory.schema import MemoryRecord

logger = logging.getLogger(__name__)


class SqlAlchemyMemoryStore:
    """
    SQL-backed memory store (SQLite by default).

    Records are append-only; recall returns newest first.
    """

    def __init__(self, db_url: Optional[str] = None, *, auto_create_schema: bool = True):
        self.db_url = db_url or get_db_url()
        self._provider = SessionProvider(self.db_url)
        if auto_create_schema:
            Base.metadata.create_all(self._provider.engine)

    def store(self, record: MemoryRecord) -> bool:
        row = AgentMemoryModel(
            owner=record.owner,
            memory_type=record.type,
            emotion_label=record.emotion_label,
            importance_score=record.importance_score,
            persona=record.persona,
            created_at=record.timestamp,
        )
        row.set_content(dict(record.content))
        try:
            with self._provider.session() as session:
                session.add(row)
                session.commit()
        except SQLAlchemyError as exc:
            logger.warning("Failed to store memory for %s: %s", record.owner, exc)
            raise PersistenceFailure(message=str(exc), context={"owner": record.owner}) from exc
        return True

    def recall(self, owner: str, limit: int = 10) -> List[MemoryRecord]:
        stmt = (
            select(AgentMemoryModel)
            .where(AgentMemoryModel.owner == owner)
            .order_by(desc(AgentMemoryModel.created_at), desc(AgentMemoryModel.id))
            .limit(max(int(limit), 0))
        )
        try:
            with self._provider.session() as session:
                rows = session.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            logger.warning("Failed to recall memories for %s: %s", owner, exc)
            raise PersistenceFailure(message=str(exc), context={"owner": owner}) from exc
        return [self._row_to_record(r) for r in rows]

    def count(self, owner: Optional[str] = None) -> int:
        stmt = select(func.count(AgentMemoryModel.id))
        if owner is not None:
            stmt = stmt.where(AgentMemoryModel.owner == owner)
        with self._provider.session() as session:
            return int(session.execute(stmt).scalar_one())

    def close(self) -> None:
        self._provider.dispose()

    @staticmethod
    def _row_to_record(row: AgentMemoryModel) -> MemoryRecord:
        created = row.created_at
        if created.tzinfo is None:
            # sqlite drops tzinfo on the way back
            created = created.replace(tzinfo=timezone.utc)
        return MemoryRecord(
            type=row.memory_type,  # type: ignore[arg-type]
            content=row.get_content(),
            owner=row.owner,
            emotion_label=row.emotion_label,
            importance_score=row.importance_score,
            persona=row.persona,
            timestamp=created,
        )
