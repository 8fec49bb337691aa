from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class AgentMemoryModel(Base):
    """
    Append-only turn summaries, preferences and facts per owner.

    `content_json` holds the record's content map; rows are never updated.
    """

    __tablename__ = "agent_memories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    owner: Mapped[str] = mapped_column(String(128), index=True)
    memory_type: Mapped[str] = mapped_column(String(32), default="conversation", index=True)
    content_json: Mapped[str] = mapped_column(Text, default="{}")
    emotion_label: Mapped[str] = mapped_column(String(32), default="neutral")
    importance_score: Mapped[int] = mapped_column(Integer, default=3)
    persona: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    def set_content(self, data: Dict[str, Any]) -> None:
        self.content_json = json.dumps(data or {}, ensure_ascii=False)

    def get_content(self) -> Dict[str, Any]:
        try:
            data = json.loads(self.content_json or "{}")
        except json.JSONDecodeError:
            return {}
        return data if isinstance(data, dict) else {}
