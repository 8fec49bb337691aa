"""
Importance scoring and fire-and-forget persistence of turn summaries.

    importance = 3
               + 2  if the emotion label is excited/anxious/inspired/frustrated
               + 1  if confidence > 0.8
               + 1  if the primary category or intent is goal_setting/personal_sharing
    clamped to [0, 10]
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from threading import BoundedSemaphore
from typing import TYPE_CHECKING, Iterable, Optional

from loguru import logger

from personabot.core.errors import PersistenceFailure
from personabot.domain.emotion import EmotionAnalysis
from personabot.memory.schema import MemoryRecord, clamp_importance

if TYPE_CHECKING:
    from personabot.application.ports import MemoryStorePort

BASE_IMPORTANCE = 3
SALIENT_EMOTIONS = frozenset({"excited", "anxious", "inspired", "frustrated"})
SALIENT_TOPICS = frozenset({"goal_setting", "personal_sharing"})
DEFAULT_WRITE_TIMEOUT = 0.25
DEFAULT_MAX_PENDING = 32


def calculate_importance(analysis: EmotionAnalysis, *, primary_category: str = "", intent: str = "") -> int:
    score = BASE_IMPORTANCE
    if analysis.primary_emotion.label in SALIENT_EMOTIONS:
        score += 2
    if analysis.confidence > 0.8:
        score += 1
    # intent counts as well as category; see "Importance" in DESIGN.md
    if primary_category in SALIENT_TOPICS or intent in SALIENT_TOPICS:
        score += 1
    return clamp_importance(score)


def build_turn_record(
    *,
    owner: str,
    text: str,
    response: str,
    analysis: EmotionAnalysis,
    intent: str,
    keywords: Iterable[str],
    primary_category: str = "",
    persona: Optional[str] = None,
) -> MemoryRecord:
    return MemoryRecord(
        type="conversation",
        content={
            "input": text,
            "response": response,
            "emotion": analysis.primary_emotion.value,
            "intent": intent,
            "keywords": list(keywords),
        },
        owner=owner,
        emotion_label=analysis.primary_emotion.label,
        importance_score=calculate_importance(analysis, primary_category=primary_category, intent=intent),
        persona=persona,
    )


class MemoryWriter:
    """
    Submits store calls to a small worker pool and waits at most `timeout`
    seconds. Failures and timeouts are logged and swallowed.

    At most `max_pending` writes may be queued or running; further writes are
    dropped until the store catches up.
    """

    def __init__(
        self,
        store: "MemoryStorePort",
        *,
        timeout: float = DEFAULT_WRITE_TIMEOUT,
        max_workers: int = 2,
        max_pending: int = DEFAULT_MAX_PENDING,
    ):
        if max_pending <= 0:
            raise ValueError("max_pending must be positive")
        self.store = store
        self.timeout = timeout
        self.max_pending = max_pending
        self._slots = BoundedSemaphore(max_pending)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="memory-writer")

    def _store(self, record: MemoryRecord) -> bool:
        try:
            ok = self.store.store(record)
        except Exception as exc:  # noqa: BLE001
            raise PersistenceFailure(message=f"store raised: {exc}", context={"owner": record.owner}) from exc
        if ok is False:
            raise PersistenceFailure(message="store rejected record", context={"owner": record.owner})
        return True

    def _run(self, record: MemoryRecord) -> bool:
        try:
            return self._store(record)
        finally:
            # released before the future resolves
            self._slots.release()

    def submit(self, record: MemoryRecord) -> "Future[bool]":
        """Raises PersistenceFailure when `max_pending` writes are already in flight."""
        if not self._slots.acquire(blocking=False):
            raise PersistenceFailure(
                message=f"{self.max_pending} memory writes already pending",
                context={"owner": record.owner},
            )
        try:
            return self._executor.submit(self._run, record)
        except RuntimeError:
            self._slots.release()
            raise

    def write(self, record: MemoryRecord) -> bool:
        """True when the record was acknowledged within the timeout."""
        try:
            future = self.submit(record)
        except RuntimeError as exc:
            logger.warning(f"memory writer unavailable for {record.owner}: {exc}")
            return False
        except PersistenceFailure as exc:
            logger.warning(f"dropping memory write for {record.owner}: {exc}")
            return False
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeout:
            logger.warning(f"memory write for {record.owner} exceeded {self.timeout}s, continuing")
            return False
        except PersistenceFailure as exc:
            logger.warning(f"memory write for {record.owner} failed: {exc}")
            return False

    def close(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
