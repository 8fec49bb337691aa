from __future__ import annotations

import re
from typing import Any, List

from personabot.analysis import lexicons
from personabot.analysis.emotion_scorer import tokenize
from personabot.classification import Rule, has_word, waterfall
from personabot.domain.turn import Entity, InputAnalysis

_QUESTION_WORDS = has_word("what", "how", "why", "when", "where", "who", "can you", "could you")

INTENT_WATERFALL = waterfall(
    "intent",
    [
        Rule("greeting", has_word("hi", "hello", "hey", "greetings", "good morning", "good afternoon", "good evening")),
        Rule("farewell", has_word("bye", "goodbye", "see you", "farewell", "thanks", "thank you", "good night")),
        Rule("goal_setting", has_word(
            "goal", "goals", "i want to", "i plan to", "i'm going to", "aim to", "resolution", "achieve",
        )),
        Rule("personal_sharing", has_word(
            "i feel", "i'm feeling", "i am feeling", "my family", "my friend", "my partner", "i've been", "personally",
        )),
        Rule("question", lambda t: "?" in t or _QUESTION_WORDS(t)),
        Rule("task", has_word("help me", "please", "create", "generate", "make", "build")),
    ],
    default="casual",
)

_NON_WORD_RX = re.compile(r"[^\w\s]")
_NUMBER_RX = re.compile(r"\d+")
_TECH_MATCHERS = [(term, has_word(term)) for term in lexicons.TECH_TERMS]


def extract_keywords(text: str, *, min_length: int = 3) -> List[str]:
    words = _NON_WORD_RX.sub("", (text or "").lower()).split()
    seen: List[str] = []
    for w in words:
        if len(w) >= min_length and w not in seen:
            seen.append(w)
    return seen


def extract_entities(text: str) -> List[Entity]:
    lowered = (text or "").lower()
    entities = [
        Entity(type="technology", value=term)
        for term, found in _TECH_MATCHERS
        if found(lowered)
    ]
    entities.extend(Entity(type="number", value=n) for n in _NUMBER_RX.findall(text or ""))
    return entities


def detect_input_type(text: str) -> str:
    if "[voice]" in text:
        return "voice"
    if text.startswith("/"):
        return "command"
    if "```" in text:
        return "code"
    return "text"


def detect_sentiment(text: str) -> str:
    tokens = tokenize(text)
    positive = sum(1 for t in tokens if t in lexicons.POSITIVE_WORDS)
    negative = sum(1 for t in tokens if t in lexicons.NEGATIVE_WORDS)
    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


class InputAnalyzer:
    """Intent, keywords, entities, input type and coarse sentiment of one turn."""

    def __init__(self, intent_waterfall=INTENT_WATERFALL, *, keyword_min_length: int = 3):
        self.intent_waterfall = intent_waterfall
        self.keyword_min_length = keyword_min_length

    def analyze(self, text: Any) -> InputAnalysis:
        if not isinstance(text, str) or not text.strip():
            return InputAnalysis(intent=self.intent_waterfall.default)
        stripped = text.strip()
        return InputAnalysis(
            intent=self.intent_waterfall.evaluate(stripped.lower()),
            keywords=tuple(extract_keywords(stripped, min_length=self.keyword_min_length)),
            entities=tuple(extract_entities(stripped)),
            input_type=detect_input_type(stripped),
            sentiment=detect_sentiment(stripped),
        )


__all__ = [
    "INTENT_WATERFALL",
    "InputAnalyzer",
    "detect_input_type",
    "detect_sentiment",
    "extract_entities",
    "extract_keywords",
]
