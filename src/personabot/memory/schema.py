from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Literal, Mapping, Optional

MemoryType = Literal["conversation", "preference", "fact", "goal"]

MIN_IMPORTANCE = 0
MAX_IMPORTANCE = 10


def clamp_importance(score: Any) -> int:
    try:
        value = int(score)
    except (TypeError, ValueError):
        value = MIN_IMPORTANCE
    return max(MIN_IMPORTANCE, min(value, MAX_IMPORTANCE))


@dataclass(frozen=True)
class MemoryRecord:
    """
    One persisted turn summary (or preference/fact).

    Created once and never mutated; `content` is exposed read-only.
    """

    type: MemoryType
    content: Mapping[str, Any]
    owner: str
    emotion_label: str = "neutral"
    importance_score: int = 3
    persona: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        object.__setattr__(self, "content", MappingProxyType(dict(self.content or {})))
        object.__setattr__(self, "importance_score", clamp_importance(self.importance_score))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "content": dict(self.content),
            "owner": self.owner,
            "emotion_label": self.emotion_label,
            "importance_score": self.importance_score,
            "persona": self.persona,
            "timestamp": self.timestamp.isoformat(),
        }
