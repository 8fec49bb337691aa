from datetime import datetime, timedelta, timezone

from personabot.infrastructure.stores import InMemoryMemoryStore
from personabot.memory import ContextLoader, MemoryRecord


def _record(owner, *, type="conversation", content=None, emotion="neutral", minutes=0):
    return MemoryRecord(
        type=type,
        content=content or {"input": "x"},
        owner=owner,
        emotion_label=emotion,
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes),
    )


class _BrokenStore:
    def recall(self, owner, limit=10):
        raise TimeoutError("store unreachable")

    def store(self, record):
        return True


class TestContextLoader:
    def test_empty_history(self):
        bundle = ContextLoader(InMemoryMemoryStore()).load("nobody", {"mood": "ok"})
        assert len(bundle) == 0
        assert bundle.emotional_state == "neutral"
        assert bundle.preferences == {}
        assert bundle.extra == {"mood": "ok"}

    def test_recall_is_bounded_and_newest_first(self):
        store = InMemoryMemoryStore()
        for i in range(15):
            store.store(_record("u", content={"input": str(i)}, minutes=i))
        bundle = ContextLoader(store, limit=10).load("u")

        assert len(bundle) == 10
        assert bundle.memories[0].content["input"] == "14"
        assert bundle.memories[-1].content["input"] == "5"

    def test_preferences_newest_wins(self):
        store = InMemoryMemoryStore()
        store.store(_record("u", type="preference", content={"key": "tone", "value": "formal"}))
        store.store(_record("u", type="preference", content={"key": "tone", "value": "casual"}, minutes=1))
        store.store(_record("u", type="preference", content={"key": "name", "value": "Sam"}, minutes=2))

        bundle = ContextLoader(store).load("u")
        assert bundle.preferences == {"tone": "casual", "name": "Sam"}

    def test_emotional_state_from_three_most_recent(self):
        store = InMemoryMemoryStore()
        for i, label in enumerate(["happy", "happy", "happy", "sad", "anxious", "sad"]):
            store.store(_record("u", emotion=label, minutes=i))
        assert ContextLoader(store).load("u").emotional_state == "sad"

    def test_recall_failure_yields_empty_bundle(self):
        bundle = ContextLoader(_BrokenStore()).load("u", {"k": "v"})
        assert bundle.recall_failed is True
        assert len(bundle) == 0
        assert bundle.extra == {"k": "v"}
