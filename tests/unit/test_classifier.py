import pytest

from personabot.classification import (
    Rule,
    Waterfall,
    build_classifier,
    contains_any,
    has_word,
    rule,
    waterfall,
)
from personabot.core.errors import ClassificationFailure


@pytest.fixture
def classifier():
    return build_classifier(
        "demo",
        categories=[rule("billing", "invoice", "refund"), rule("support", "help", "broken")],
        default="general",
        level_name="priority_level",
        levels=[rule("high", "urgent"), rule("low", "whenever")],
        default_level="normal",
        attributes={"channel": ([rule("email", "email")], "chat")},
    )


class TestWaterfall:
    def test_first_match_wins(self, classifier):
        result = classifier.classify("I need help with my invoice")
        assert result.primary_category == "billing"

    def test_default_when_nothing_matches(self, classifier):
        result = classifier.classify("good morning")
        assert result.primary_category == "general"
        assert result.level == "normal"
        assert result.get("channel") == "chat"

    @pytest.mark.parametrize("text", ["", None, 12])
    def test_empty_or_non_text(self, classifier, text):
        assert classifier.classify(text).primary_category == "general"

    def test_case_insensitive(self, classifier):
        assert classifier.classify("REFUND please").primary_category == "billing"

    def test_attributes_are_independent(self, classifier):
        result = classifier.classify("urgent: my email is broken")
        assert result.primary_category == "support"
        assert result.level == "high"
        assert result.get("channel") == "email"

    def test_missing_default_raises_at_construction(self):
        with pytest.raises(ClassificationFailure):
            waterfall("broken", [rule("a", "a")], default="")

    def test_raising_predicate_is_no_match(self):
        def boom(text):
            raise RuntimeError("bad predicate")

        wf = Waterfall(rules=(Rule("bad", boom), rule("ok", "ok")), default="fallback")
        assert wf.evaluate("ok") == "ok"
        assert wf.evaluate("nothing") == "fallback"

    def test_labels(self, classifier):
        assert classifier.categories == {"billing", "support", "general"}


class TestResult:
    def test_to_dict_uses_level_name(self, classifier):
        data = classifier.classify("refund whenever").to_dict()
        assert data == {"domain": "demo", "primary_category": "billing", "priority_level": "low", "channel": "chat"}

    def test_default_result(self, classifier):
        result = classifier.default_result()
        assert (result.primary_category, result.level, result.get("channel")) == ("general", "normal", "chat")


def test_predicate_helpers():
    assert contains_any("lo")("hello")
    assert not has_word("lo")("hello")
    assert has_word("good morning")("well, good morning!")
