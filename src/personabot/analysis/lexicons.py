"""
Word lists behind every heuristic in the analysis stage.

All entries are lowercase single tokens unless they live in a *_PHRASES tuple,
which is matched against the normalized text instead of the token list.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import FrozenSet, Mapping

from personabot.domain.emotion import EmotionCategory


def _words(*items: str) -> FrozenSet[str]:
    return frozenset(items)


EMOTION_WORDS: Mapping[EmotionCategory, FrozenSet[str]] = MappingProxyType({
    EmotionCategory.JOY: _words(
        "happy", "happier", "happiest", "joy", "joyful", "excited", "amazing", "wonderful",
        "fantastic", "great", "awesome", "love", "perfect", "brilliant", "glad", "delighted",
        "cheerful",
    ),
    EmotionCategory.SADNESS: _words(
        "sad", "sadder", "unhappy", "depressed", "down", "terrible", "awful", "horrible",
        "worst", "crying", "cry", "heartbroken", "devastated", "miserable", "grief",
    ),
    EmotionCategory.ANGER: _words(
        "angry", "furious", "mad", "frustrated", "frustrating", "annoyed", "annoying", "hate",
        "stupid", "ridiculous", "outrageous", "infuriating", "irritated", "livid",
    ),
    EmotionCategory.FEAR: _words(
        "worried", "worry", "anxious", "anxiety", "scared", "afraid", "nervous", "terrified",
        "panic", "panicking", "stress", "stressed", "overwhelmed", "uncertain", "fear",
    ),
    EmotionCategory.EXCITEMENT: _words(
        "excited", "exciting", "thrilled", "pumped", "enthusiastic", "eager", "amazing",
        "incredible", "fantastic", "stoked",
    ),
    EmotionCategory.LOVE: _words(
        "love", "loved", "adore", "cherish", "appreciate", "grateful", "thankful", "blessed",
        "heart", "care", "caring", "fond",
    ),
    EmotionCategory.CALM: _words(
        "calm", "peaceful", "serene", "tranquil", "relaxed", "relaxing", "content", "centered",
        "meditative", "blissful", "rested",
    ),
})

INTENSIFIERS = _words("very", "extremely", "incredibly", "absolutely", "totally")
INTENSIFIER_BOOST = 0.2

URGENCY_WORDS = _words("urgent", "asap", "quickly", "immediately", "now", "emergency")
UNCERTAINTY_WORDS = _words("maybe", "perhaps", "unsure", "confused")
UNCERTAINTY_PHRASES = ("don't know", "not sure")

COLLABORATIVE_WORDS = _words("we", "us", "together", "team", "group")
SOLITARY_WORDS = _words("alone", "lonely", "isolated", "myself")

PAST_WORDS = _words("yesterday", "past", "before", "earlier", "was")
FUTURE_WORDS = _words("tomorrow", "future", "will", "later")
FUTURE_PHRASES = ("going to",)

HIGH_ENERGY_WORDS = _words("energetic", "pumped", "active", "dynamic", "vibrant")
LOW_ENERGY_WORDS = _words("tired", "exhausted", "drained", "sluggish", "lethargic")

SOCIAL_WORDS = _words("social", "party", "friends", "people", "together")
INTROSPECTIVE_WORDS = _words("alone", "quiet", "solitude", "private", "isolated")

CLEAR_THINKING_WORDS = _words("clear", "focused", "sharp", "alert", "concentrated")
CONFUSED_THINKING_WORDS = _words("confused", "foggy", "unclear", "scattered", "overwhelmed")

# Sentiment and entity heuristics used by the input analyzer.
POSITIVE_WORDS = _words("good", "great", "awesome", "excellent", "love", "like", "happy", "yes")
NEGATIVE_WORDS = _words("bad", "terrible", "hate", "no", "sad", "angry", "frustrated")

TECH_TERMS = ("ai", "machine learning", "neural network", "algorithm", "code", "programming")
