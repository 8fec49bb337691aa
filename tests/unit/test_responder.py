import json
import threading

import pytest

from personabot.application import ErrorHandler, PersonaResponder, create_responder
from personabot.application.ports import TemplateProviderPort
from personabot.config import AppConfig
from personabot.dispatch import ResponseDispatcher
from personabot.domain.emotion import EmotionCategory
from personabot.infrastructure.stores import InMemoryMemoryStore
from personabot.personas import FALLBACK_RESPONSES, Persona, neochat


class _DownStore:
    def __init__(self):
        self.calls = 0

    def recall(self, owner, limit=10):
        self.calls += 1
        raise ConnectionError("store offline")

    def store(self, record):
        self.calls += 1
        raise ConnectionError("store offline")


def _responder(persona="neochat", store=None):
    return create_responder(persona, AppConfig.default(env={}), store=store or InMemoryMemoryStore())


@pytest.fixture
def responder():
    r = _responder()
    yield r
    r.close()


class TestHappyPath:
    def test_strong_positive_emotion(self, responder):
        envelope = responder.process("u1", "I am extremely happy and excited!")
        assert envelope.error_flag is False
        assert envelope.emotion in {"joy", "excitement"}
        assert envelope.intensity in {"high", "very_high", "extreme"}
        assert envelope.confidence > 0
        assert envelope.text
        assert envelope.persona == "neochat"

    def test_empty_text_uses_defaults(self, responder):
        envelope = responder.process("u1", "")
        assert envelope.error_flag is False
        assert envelope.emotion == "neutral"
        assert envelope.classification["primary_category"] == "casual"
        assert envelope.text

    @pytest.mark.parametrize("bad", [None, 42, ["hello"], {"text": "hi"}])
    def test_non_string_text_never_raises(self, responder, bad):
        envelope = responder.process("u1", bad)
        assert envelope.text

    def test_suggestions_bounded(self, responder):
        envelope = responder.process("u1", "What is machine learning?")
        assert 0 < len(envelope.suggestions) <= 3

    def test_envelope_json(self, responder):
        envelope = responder.process("u1", "hello there")
        data = json.loads(envelope.to_json())
        assert data["text"] == envelope.text
        assert data["classification"] == envelope.classification
        assert data["error_flag"] is False


class TestSessions:
    def test_history_keeps_last_ten_turns(self, responder):
        responder.process("u1", "I am furious", {"session_id": "s1"})
        for _ in range(10):
            responder.process("u1", "I am happy", {"session_id": "s1"})

        history = responder.history("s1")
        assert len(history) == 10
        assert all(entry.primary_emotion is EmotionCategory.JOY for entry in history.entries)

    def test_sessions_are_independent(self, responder):
        responder.process("u1", "I am so sad", {"session_id": "a"})
        responder.process("u1", "I am happy", {"session_id": "b"})
        assert len(responder.history("a")) == 1
        assert len(responder.history("b")) == 1

    def test_session_defaults_to_user_ref(self, responder):
        responder.process("alice", "hi")
        assert responder.history("alice") is not None

    def test_concurrent_turns_on_one_session(self, responder):
        errors = []

        def worker():
            for _ in range(5):
                envelope = responder.process("u1", "I am happy", {"session_id": "shared"})
                if envelope.error_flag:
                    errors.append(envelope)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(responder.history("shared")) == 10


class TestDeterminism:
    def test_same_input_same_core_result(self):
        a, b = _responder(), _responder()
        try:
            first = a.process("u1", "I'm worried about my exam tomorrow")
            second = b.process("u1", "I'm worried about my exam tomorrow")
        finally:
            a.close()
            b.close()
        assert first.emotion == second.emotion
        assert first.intensity == second.intensity
        assert first.classification == second.classification
        assert first.text == second.text


class TestCarebot:
    def test_emergency_is_critical(self):
        responder = _responder("carebot")
        try:
            envelope = responder.process("u1", "This is an emergency, please help")
        finally:
            responder.close()
        assert envelope.classification["primary_category"] == "crisis_intervention"
        assert envelope.classification["urgency_level"] == "critical"
        assert "emergency" in envelope.text


class TestMemory:
    def test_turn_is_persisted(self):
        store = InMemoryMemoryStore()
        responder = _responder(store=store)
        try:
            responder.process("u1", "I want to learn piano")
        finally:
            responder.close()
        (record,) = store.recall("u1")
        assert record.content["input"] == "I want to learn piano"
        assert record.persona == "neochat"

    def test_store_failure_does_not_change_response(self):
        healthy, broken_store = InMemoryMemoryStore(), _DownStore()
        ok, broken = _responder(store=healthy), _responder(store=broken_store)
        try:
            expected = ok.process("u1", "I feel so sad today")
            actual = broken.process("u1", "I feel so sad today")
        finally:
            ok.close()
            broken.close()

        assert actual.error_flag is False
        assert actual.text == expected.text
        assert actual.classification == expected.classification
        assert broken_store.calls == 2
        assert healthy.count("u1") == 1


class _CannedProvider:
    """Template provider that is not a ResponseDispatcher."""

    def __init__(self, text="Canned reply.", raises=False):
        self.text = text
        self.raises = raises
        self.calls = []

    def render(self, primary_category, classification, raw_text):
        self.calls.append((primary_category, classification.primary_category, raw_text))
        if self.raises:
            raise ConnectionError("template service down")
        return self.text


class TestTemplateProvider:
    def test_plain_provider_renders_turn(self):
        provider = _CannedProvider()
        assert isinstance(provider, TemplateProviderPort)
        responder = PersonaResponder(Persona(neochat.CONFIG, neochat.CLASSIFIER, provider))

        envelope = responder.process("u1", "hello there")

        assert envelope.error_flag is False
        assert "Canned reply." in envelope.text
        assert provider.calls == [("greeting", "greeting", "hello there")]
        assert envelope.classification["primary_category"] == "greeting"


def _broken_persona(generator):
    dispatcher = ResponseDispatcher({}, default=generator, name="broken")
    return Persona(neochat.CONFIG, neochat.CLASSIFIER, dispatcher)


def _boom(_request):
    raise RuntimeError("template exploded")


class TestFallback:
    @pytest.mark.parametrize("generator", [_boom, lambda _r: "", lambda _r: "   "])
    def test_generator_failure_yields_fallback(self, generator):
        responder = PersonaResponder(_broken_persona(generator))
        envelope = responder.process("u1", "hello")

        assert envelope.error_flag is True
        assert envelope.text
        assert envelope.confidence == 0.5
        assert envelope.processing_time == 0.1
        assert envelope.suggestions == []
        assert envelope.classification["primary_category"] == "casual"

    def test_fallback_text_is_a_known_apology(self):
        text = ErrorHandler().fallback_text(_broken_persona(_boom))
        assert any(apology in text for apology in FALLBACK_RESPONSES)

    def test_failing_plain_provider_yields_fallback(self):
        responder = PersonaResponder(Persona(neochat.CONFIG, neochat.CLASSIFIER, _CannedProvider(raises=True)))
        envelope = responder.process("u1", "hello")
        assert envelope.error_flag is True
        assert envelope.suggestions == []

    def test_blank_plain_provider_yields_fallback(self):
        responder = PersonaResponder(Persona(neochat.CONFIG, neochat.CLASSIFIER, _CannedProvider(text="  ")))
        assert responder.process("u1", "hello").error_flag is True

    def test_failed_turn_still_recorded_in_history(self):
        responder = PersonaResponder(_broken_persona(_boom))
        responder.process("u1", "I am happy", {"session_id": "s"})
        assert len(responder.history("s")) == 1
