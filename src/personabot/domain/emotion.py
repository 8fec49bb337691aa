"""
Emotion data model: categories, intensity bands, mood states and the per-turn
analysis result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Tuple


class EmotionCategory(str, Enum):
    JOY = "joy"
    SADNESS = "sadness"
    ANGER = "anger"
    FEAR = "fear"
    EXCITEMENT = "excitement"
    LOVE = "love"
    CALM = "calm"
    NEUTRAL = "neutral"

    @property
    def label(self) -> str:
        """Conversational adjective used in memory records and templates."""
        return _EMOTION_LABELS[self]


# Declared scoring order; ties resolve to the earliest member.
SCORED_EMOTIONS: Tuple[EmotionCategory, ...] = (
    EmotionCategory.JOY,
    EmotionCategory.SADNESS,
    EmotionCategory.ANGER,
    EmotionCategory.FEAR,
    EmotionCategory.EXCITEMENT,
    EmotionCategory.LOVE,
    EmotionCategory.CALM,
)

_EMOTION_LABELS = {
    EmotionCategory.JOY: "happy",
    EmotionCategory.SADNESS: "sad",
    EmotionCategory.ANGER: "frustrated",
    EmotionCategory.FEAR: "anxious",
    EmotionCategory.EXCITEMENT: "excited",
    EmotionCategory.LOVE: "loving",
    EmotionCategory.CALM: "calm",
    EmotionCategory.NEUTRAL: "neutral",
}


class IntensityBand(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"
    EXTREME = "extreme"

    @property
    def rank(self) -> int:
        return _BAND_ORDER.index(self)

    @classmethod
    def from_score(cls, score: float) -> "IntensityBand":
        if score < 0.2:
            return cls.LOW
        if score < 0.4:
            return cls.MODERATE
        if score < 0.6:
            return cls.HIGH
        if score < 0.8:
            return cls.VERY_HIGH
        return cls.EXTREME


_BAND_ORDER = (
    IntensityBand.LOW,
    IntensityBand.MODERATE,
    IntensityBand.HIGH,
    IntensityBand.VERY_HIGH,
    IntensityBand.EXTREME,
)


class MoodState(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    AGITATED = "agitated"
    PEACEFUL = "peaceful"
    NEUTRAL = "neutral"

    @classmethod
    def for_emotion(cls, emotion: EmotionCategory) -> "MoodState":
        return _MOOD_BY_EMOTION.get(emotion, cls.NEUTRAL)


_MOOD_BY_EMOTION = {
    EmotionCategory.JOY: MoodState.POSITIVE,
    EmotionCategory.EXCITEMENT: MoodState.POSITIVE,
    EmotionCategory.LOVE: MoodState.POSITIVE,
    EmotionCategory.SADNESS: MoodState.NEGATIVE,
    EmotionCategory.FEAR: MoodState.NEGATIVE,
    EmotionCategory.ANGER: MoodState.AGITATED,
    EmotionCategory.CALM: MoodState.PEACEFUL,
}


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(float(value), hi))


@dataclass(frozen=True)
class ContextualFlags:
    question: bool = False
    urgency: bool = False
    uncertainty: bool = False
    social_context: str = "individual"  # collaborative/solitary/individual
    temporal_context: str = "present"  # past/future/present

    def to_dict(self) -> Dict[str, Any]:
        return {
            "question": self.question,
            "urgency": self.urgency,
            "uncertainty": self.uncertainty,
            "social_context": self.social_context,
            "temporal_context": self.temporal_context,
        }


@dataclass(frozen=True)
class MoodIndicators:
    energy: str = "moderate"  # high/low/moderate
    social_mood: str = "neutral"  # social/introspective/neutral
    cognitive_state: str = "normal"  # clear/confused/normal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "energy": self.energy,
            "social_mood": self.social_mood,
            "cognitive_state": self.cognitive_state,
        }


@dataclass(frozen=True)
class EmotionAnalysis:
    primary_emotion: EmotionCategory
    intensity: IntensityBand
    confidence: float
    category_scores: Dict[EmotionCategory, float] = field(default_factory=dict)
    contextual_flags: ContextualFlags = field(default_factory=ContextualFlags)
    mood_indicators: MoodIndicators = field(default_factory=MoodIndicators)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        object.__setattr__(self, "confidence", clamp(self.confidence))

    @property
    def primary_score(self) -> float:
        return self.category_scores.get(self.primary_emotion, 0.0)

    @classmethod
    def neutral(cls) -> "EmotionAnalysis":
        return cls(
            primary_emotion=EmotionCategory.NEUTRAL,
            intensity=IntensityBand.LOW,
            confidence=0.0,
            category_scores={e: 0.0 for e in SCORED_EMOTIONS},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primary_emotion": self.primary_emotion.value,
            "intensity": self.intensity.value,
            "confidence": round(self.confidence, 4),
            "category_scores": {k.value: round(v, 4) for k, v in self.category_scores.items()},
            "contextual_flags": self.contextual_flags.to_dict(),
            "mood_indicators": self.mood_indicators.to_dict(),
            "timestamp": self.timestamp.isoformat(),
        }
