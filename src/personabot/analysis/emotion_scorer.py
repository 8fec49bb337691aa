"""
Lexicon-based emotion scoring.

    score(category) = min(1, matches / max(tokens, 1) + 0.2 * intensifiers)

The intensifier boost lifts every category, so intensifier-only text leans
towards the first declared category.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Sequence, Tuple

from loguru import logger

from personabot.analysis import lexicons
from personabot.core.errors import AnalysisFailure, Result
from personabot.domain.emotion import (
    SCORED_EMOTIONS,
    ContextualFlags,
    EmotionAnalysis,
    EmotionCategory,
    IntensityBand,
    MoodIndicators,
    clamp,
)

_TOKEN_RX = re.compile(r"[a-z0-9']+")


def normalize_text(text: str) -> str:
    return re.sub(r"\s+", " ", (text or "").strip().lower()).replace("’", "'")


def tokenize(text: str) -> List[str]:
    tokens = (t.strip("'") for t in _TOKEN_RX.findall(normalize_text(text)))
    return [t for t in tokens if t]


@dataclass(frozen=True)
class EmotionLexicon:
    words: Mapping[EmotionCategory, FrozenSet[str]] = field(default_factory=lambda: lexicons.EMOTION_WORDS)
    order: Tuple[EmotionCategory, ...] = SCORED_EMOTIONS
    intensifiers: FrozenSet[str] = lexicons.INTENSIFIERS
    intensifier_boost: float = lexicons.INTENSIFIER_BOOST


def _pick(tokens: Sequence[str], first: FrozenSet[str], second: FrozenSet[str], labels: Tuple[str, str, str]) -> str:
    if any(t in first for t in tokens):
        return labels[0]
    if any(t in second for t in tokens):
        return labels[1]
    return labels[2]


class EmotionScoringEngine:
    def __init__(self, lexicon: EmotionLexicon | None = None):
        self.lexicon = lexicon or EmotionLexicon()

    def analyze(self, text: Any) -> EmotionAnalysis:
        """Never raises; failures degrade to the neutral analysis."""
        result = self.score(text)
        if not result.is_ok():
            logger.warning(f"emotion scoring recovered to neutral: {result.error}")
        return result.unwrap_or(EmotionAnalysis.neutral())

    def score(self, text: Any) -> Result[EmotionAnalysis, AnalysisFailure]:
        if not isinstance(text, str) or not text.strip():
            return Result.ok(EmotionAnalysis.neutral())
        try:
            return Result.ok(self._score_text(text))
        except Exception as exc:  # noqa: BLE001
            return Result.err(AnalysisFailure(message=str(exc), context={"text_length": len(text)}))

    def category_scores(self, tokens: Sequence[str]) -> Dict[EmotionCategory, float]:
        denom = max(len(tokens), 1)
        intensifiers = sum(1 for t in tokens if t in self.lexicon.intensifiers)
        scores: Dict[EmotionCategory, float] = {}
        for category in self.lexicon.order:
            vocab = self.lexicon.words.get(category, frozenset())
            matches = sum(1 for t in tokens if t in vocab)
            scores[category] = clamp(matches / denom + intensifiers * self.lexicon.intensifier_boost)
        return scores

    def _score_text(self, text: str) -> EmotionAnalysis:
        tokens = tokenize(text)
        scores = self.category_scores(tokens)

        primary = EmotionCategory.NEUTRAL
        primary_score = 0.0
        for category in self.lexicon.order:
            # strict ">" keeps the earliest declared category on ties
            if scores[category] > primary_score:
                primary, primary_score = category, scores[category]

        return EmotionAnalysis(
            primary_emotion=primary,
            intensity=IntensityBand.from_score(primary_score),
            confidence=min(primary_score, 1.0),
            category_scores=scores,
            contextual_flags=self.contextual_flags(text, tokens),
            mood_indicators=self.mood_indicators(tokens),
        )

    @staticmethod
    def contextual_flags(text: str, tokens: Sequence[str]) -> ContextualFlags:
        normalized = normalize_text(text)
        uncertainty = any(t in lexicons.UNCERTAINTY_WORDS for t in tokens) or any(
            p in normalized for p in lexicons.UNCERTAINTY_PHRASES
        )
        if any(t in lexicons.COLLABORATIVE_WORDS for t in tokens):
            social = "collaborative"
        elif any(t in lexicons.SOLITARY_WORDS for t in tokens):
            social = "solitary"
        else:
            social = "individual"
        if any(t in lexicons.PAST_WORDS for t in tokens):
            temporal = "past"
        elif any(t in lexicons.FUTURE_WORDS for t in tokens) or any(
            p in normalized for p in lexicons.FUTURE_PHRASES
        ):
            temporal = "future"
        else:
            temporal = "present"
        return ContextualFlags(
            question="?" in text,
            urgency=any(t in lexicons.URGENCY_WORDS for t in tokens),
            uncertainty=uncertainty,
            social_context=social,
            temporal_context=temporal,
        )

    @staticmethod
    def mood_indicators(tokens: Sequence[str]) -> MoodIndicators:
        return MoodIndicators(
            energy=_pick(tokens, lexicons.HIGH_ENERGY_WORDS, lexicons.LOW_ENERGY_WORDS, ("high", "low", "moderate")),
            social_mood=_pick(
                tokens, lexicons.SOCIAL_WORDS, lexicons.INTROSPECTIVE_WORDS, ("social", "introspective", "neutral")
            ),
            cognitive_state=_pick(
                tokens, lexicons.CLEAR_THINKING_WORDS, lexicons.CONFUSED_THINKING_WORDS, ("clear", "confused", "normal")
            ),
        )
