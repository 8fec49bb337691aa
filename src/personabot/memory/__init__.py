"""
Memory: record schema, read-side context loading and write-side persistence.
"""

from .context_loader import ContextBundle, ContextLoader, derive_preferences, last_emotional_state
from .schema import MemoryRecord, clamp_importance
from .writer import MemoryWriter, build_turn_record, calculate_importance

__all__ = [
    "ContextBundle",
    "ContextLoader",
    "derive_preferences",
    "last_emotional_state",
    "MemoryRecord",
    "clamp_importance",
    "MemoryWriter",
    "build_turn_record",
    "calculate_importance",
]
