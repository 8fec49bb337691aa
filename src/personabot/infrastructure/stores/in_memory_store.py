from __future__ import annotations

import threading
from collections import defaultdict
from typing import Dict, List

from personabot.memory.schema import MemoryRecord


class InMemoryMemoryStore:
    """Thread-safe per-owner lists (useful for tests and the REPL)."""

    def __init__(self) -> None:
        self._records: Dict[str, List[MemoryRecord]] = defaultdict(list)
        self._lock = threading.Lock()

    def store(self, record: MemoryRecord) -> bool:
        with self._lock:
            self._records[record.owner].append(record)
        return True

    def recall(self, owner: str, limit: int = 10) -> List[MemoryRecord]:
        if limit <= 0:
            return []
        with self._lock:
            records = list(self._records.get(owner, ()))
        return records[::-1][:limit]

    def count(self, owner: str | None = None) -> int:
        with self._lock:
            if owner is not None:
                return len(self._records.get(owner, ()))
            return sum(len(v) for v in self._records.values())

    def close(self) -> None:
        return None
