from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from personabot.memory.schema import MemoryRecord


@runtime_checkable
class MemoryStorePort(Protocol):
    """
    Narrow memory surface the responder depends on.

    Implementations may keep records in process, in SQLite or in any SQL
    database; the core never sees more than these two calls.
    """

    def recall(self, owner: str, limit: int = 10) -> List[MemoryRecord]:
        """Most recent records for `owner`, newest first, at most `limit`."""

    def store(self, record: MemoryRecord) -> bool:
        """Append one record; returns True once it is durable."""
