import threading
import time

import pytest

from personabot.domain.emotion import EmotionAnalysis, EmotionCategory, IntensityBand
from personabot.infrastructure.stores import InMemoryMemoryStore
from personabot.memory import MemoryRecord, MemoryWriter, build_turn_record, calculate_importance, clamp_importance


def _analysis(emotion=EmotionCategory.NEUTRAL, confidence=0.0):
    return EmotionAnalysis(primary_emotion=emotion, intensity=IntensityBand.from_score(confidence), confidence=confidence)


class TestImportance:
    def test_base(self):
        assert calculate_importance(_analysis()) == 3

    def test_salient_emotion(self):
        assert calculate_importance(_analysis(EmotionCategory.EXCITEMENT, 0.3)) == 5
        assert calculate_importance(_analysis(EmotionCategory.FEAR, 0.3)) == 5
        assert calculate_importance(_analysis(EmotionCategory.ANGER, 0.3)) == 5
        assert calculate_importance(_analysis(EmotionCategory.JOY, 0.3)) == 3

    def test_high_confidence(self):
        assert calculate_importance(_analysis(EmotionCategory.JOY, 0.81)) == 4
        assert calculate_importance(_analysis(EmotionCategory.JOY, 0.8)) == 3

    def test_topic_from_category_or_intent(self):
        assert calculate_importance(_analysis(), primary_category="goal_setting") == 4
        assert calculate_importance(_analysis(), intent="personal_sharing") == 4

    def test_maximum(self):
        score = calculate_importance(_analysis(EmotionCategory.FEAR, 0.9), intent="goal_setting")
        assert score == 7
        assert 0 <= score <= 10

    @pytest.mark.parametrize("raw,expected", [(-5, 0), (3, 3), (42, 10), ("7", 7), (None, 0)])
    def test_clamp(self, raw, expected):
        assert clamp_importance(raw) == expected


def test_turn_record_content():
    record = build_turn_record(
        owner="u1",
        text="I want to learn piano",
        response="Great goal!",
        analysis=_analysis(EmotionCategory.EXCITEMENT, 0.5),
        intent="goal_setting",
        keywords=["want", "learn", "piano"],
        persona="neochat",
    )
    assert record.type == "conversation"
    assert dict(record.content) == {
        "input": "I want to learn piano",
        "response": "Great goal!",
        "emotion": "excitement",
        "intent": "goal_setting",
        "keywords": ["want", "learn", "piano"],
    }
    assert record.emotion_label == "excited"
    assert record.importance_score == 6


class _FailingStore:
    def recall(self, owner, limit=10):
        return []

    def store(self, record):
        raise ConnectionError("database unreachable")


class _RejectingStore(_FailingStore):
    def store(self, record):
        return False


class _SlowStore(_FailingStore):
    def __init__(self):
        self.release = threading.Event()
        self.stored = []

    def store(self, record):
        self.release.wait(2.0)
        self.stored.append(record)
        return True


def _record():
    return MemoryRecord(type="conversation", content={"input": "x"}, owner="u1")


class TestMemoryWriter:
    def test_successful_write(self):
        store = InMemoryMemoryStore()
        writer = MemoryWriter(store, timeout=1.0)
        try:
            assert writer.write(_record()) is True
        finally:
            writer.close()
        assert store.count("u1") == 1

    @pytest.mark.parametrize("store_cls", [_FailingStore, _RejectingStore])
    def test_failure_is_swallowed(self, store_cls):
        writer = MemoryWriter(store_cls(), timeout=1.0)
        try:
            assert writer.write(_record()) is False
        finally:
            writer.close()

    def test_slow_store_does_not_block(self):
        store = _SlowStore()
        writer = MemoryWriter(store, timeout=0.05)
        try:
            start = time.perf_counter()
            assert writer.write(_record()) is False
            assert time.perf_counter() - start < 1.0
        finally:
            store.release.set()
            writer.close()
        # the write still lands once the store catches up
        assert len(store.stored) == 1

    def test_pending_writes_are_bounded(self):
        store = _SlowStore()
        writer = MemoryWriter(store, timeout=0.01, max_workers=1, max_pending=2)
        try:
            results = [writer.write(_record()) for _ in range(20)]
            assert results == [False] * 20
        finally:
            store.release.set()
            writer.close()
        # only the first two were accepted, the rest were dropped
        assert len(store.stored) == 2

    def test_slot_freed_after_completion(self):
        store = InMemoryMemoryStore()
        writer = MemoryWriter(store, timeout=1.0, max_pending=1)
        try:
            assert all(writer.write(_record()) for _ in range(5))
        finally:
            writer.close()
        assert store.count("u1") == 5

    def test_invalid_bound(self):
        with pytest.raises(ValueError):
            MemoryWriter(InMemoryMemoryStore(), max_pending=0)

    def test_write_after_close(self):
        writer = MemoryWriter(InMemoryMemoryStore())
        writer.close()
        assert writer.write(_record()) is False
