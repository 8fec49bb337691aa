"""
Read-only assembly of prior memories into a per-turn context bundle.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from personabot.memory.schema import MemoryRecord

if TYPE_CHECKING:
    from personabot.application.ports import MemoryStorePort

DEFAULT_RECALL_LIMIT = 10
EMOTION_WINDOW = 3


@dataclass(frozen=True)
class ContextBundle:
    memories: Tuple[MemoryRecord, ...] = ()
    preferences: Mapping[str, Any] = field(default_factory=dict)
    emotional_state: str = "neutral"
    extra: Mapping[str, Any] = field(default_factory=dict)
    recall_failed: bool = False

    @classmethod
    def empty(cls, extra: Optional[Mapping[str, Any]] = None, *, recall_failed: bool = False) -> "ContextBundle":
        return cls(extra=dict(extra or {}), recall_failed=recall_failed)

    def __len__(self) -> int:
        return len(self.memories)


def derive_preferences(records: Sequence[MemoryRecord]) -> Dict[str, Any]:
    prefs: Dict[str, Any] = {}
    # newest first: the first value seen for a key wins
    for r in records:
        if r.type != "preference":
            continue
        key = r.content.get("key")
        if key and key not in prefs:
            prefs[str(key)] = r.content.get("value")
    return prefs


def last_emotional_state(records: Sequence[MemoryRecord], window: int = EMOTION_WINDOW) -> str:
    labels = [r.emotion_label for r in records[:window] if r.emotion_label]
    if not labels:
        return "neutral"
    return Counter(labels).most_common(1)[0][0]


class ContextLoader:
    def __init__(self, store: "MemoryStorePort", *, limit: int = DEFAULT_RECALL_LIMIT):
        self.store = store
        self.limit = max(int(limit), 0)

    def load(self, owner: str, extra: Optional[Mapping[str, Any]] = None) -> ContextBundle:
        try:
            records: List[MemoryRecord] = list(self.store.recall(owner, self.limit))[: self.limit]
        except Exception as exc:  # noqa: BLE001
            logger.warning(f"memory recall failed for {owner}, continuing with empty context: {exc}")
            return ContextBundle.empty(extra, recall_failed=True)
        return ContextBundle(
            memories=tuple(records),
            preferences=derive_preferences(records),
            emotional_state=last_emotional_state(records),
            extra=dict(extra or {}),
        )
