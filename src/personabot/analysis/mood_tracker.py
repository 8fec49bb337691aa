"""
Per-session mood history.

`MoodHistory` is a bounded FIFO of emotion analyses with a majority-vote
aggregate over the most recent entries. `SessionMoodRegistry` owns one history
per session and serializes turns of the same session behind a per-session lock.
"""

from __future__ import annotations

import threading
from collections import Counter, OrderedDict, deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterator, List, Optional

from loguru import logger

from personabot.domain.emotion import EmotionAnalysis, EmotionCategory, MoodState

DEFAULT_CAPACITY = 10
DEFAULT_WINDOW = 3


class MoodHistory:
    def __init__(self, capacity: int = DEFAULT_CAPACITY, window: int = DEFAULT_WINDOW):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if window <= 0:
            raise ValueError("window must be positive")
        self.capacity = capacity
        self.window = window
        self._entries: Deque[EmotionAnalysis] = deque(maxlen=capacity)
        self._state = MoodState.NEUTRAL

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[EmotionAnalysis]:
        return list(self._entries)

    @property
    def state(self) -> MoodState:
        return self._state

    def record(self, analysis: EmotionAnalysis) -> MoodState:
        """Append (the deque evicts the oldest at capacity) and recompute the mood."""
        self._entries.append(analysis)
        self._state = aggregate_mood(self.entries[-self.window:])
        return self._state

    def dominant_emotion(self) -> EmotionCategory:
        return dominant_emotion(self.entries[-self.window:])


def dominant_emotion(recent: List[EmotionAnalysis]) -> EmotionCategory:
    if not recent:
        return EmotionCategory.NEUTRAL
    # Counter keeps first-seen order, so ties go to the earliest entry.
    counts = Counter(a.primary_emotion for a in recent)
    return counts.most_common(1)[0][0]


def aggregate_mood(recent: List[EmotionAnalysis]) -> MoodState:
    if not recent:
        return MoodState.NEUTRAL
    return MoodState.for_emotion(dominant_emotion(recent))


@dataclass
class _SessionSlot:
    history: MoodHistory
    lock: threading.RLock = field(default_factory=threading.RLock)
    # turns currently holding or waiting on `lock`; guarded by the registry
    in_use: int = 0


class SessionMoodRegistry:
    """
    Session id -> MoodHistory, bounded by `max_sessions` (least recently used
    idle session evicted first).

    A session with a turn in flight is never evicted; the registry may exceed
    `max_sessions` until those turns finish.
    """

    def __init__(
        self,
        *,
        capacity: int = DEFAULT_CAPACITY,
        window: int = DEFAULT_WINDOW,
        max_sessions: int = 1024,
    ):
        self.capacity = capacity
        self.window = window
        self.max_sessions = max_sessions
        self._slots: "OrderedDict[str, _SessionSlot]" = OrderedDict()
        self._guard = threading.Lock()

    def __len__(self) -> int:
        with self._guard:
            return len(self._slots)

    def _acquire(self, session_id: str) -> _SessionSlot:
        with self._guard:
            slot = self._slots.get(session_id)
            if slot is None:
                slot = _SessionSlot(history=MoodHistory(self.capacity, self.window))
                self._slots[session_id] = slot
            else:
                self._slots.move_to_end(session_id)
            slot.in_use += 1
            self._evict_idle()
            return slot

    def _release(self, slot: _SessionSlot) -> None:
        with self._guard:
            slot.in_use -= 1
            self._evict_idle()

    def _evict_idle(self) -> None:
        # caller holds self._guard
        excess = len(self._slots) - self.max_sessions
        if excess <= 0:
            return
        for sid in list(self._slots):
            if excess <= 0:
                break
            if self._slots[sid].in_use:
                continue
            del self._slots[sid]
            excess -= 1
            logger.debug(f"mood registry evicted session {sid}")

    @contextmanager
    def session(self, session_id: str) -> Iterator[MoodHistory]:
        """Exclusive access to one session's history for the duration of a turn."""
        slot = self._acquire(session_id)
        try:
            with slot.lock:
                yield slot.history
        finally:
            self._release(slot)

    def get(self, session_id: str) -> Optional[MoodHistory]:
        with self._guard:
            slot = self._slots.get(session_id)
        return slot.history if slot else None

    def snapshot(self) -> Dict[str, str]:
        with self._guard:
            return {sid: slot.history.state.value for sid, slot in self._slots.items()}

    def reset(self, session_id: Optional[str] = None) -> None:
        with self._guard:
            if session_id is None:
                self._slots.clear()
            else:
                self._slots.pop(session_id, None)
