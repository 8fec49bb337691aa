"""
Per-turn data model: the immutable request, the input analysis and the
caller-facing response envelope.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from personabot.domain.classification import ClassificationResult
from personabot.domain.emotion import EmotionAnalysis, MoodState


@dataclass(frozen=True)
class TurnContext:
    mood: Optional[str] = None
    emotion_data: Mapping[str, Any] = field(default_factory=dict)
    memory_hints: Tuple[str, ...] = ()
    session_id: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "TurnContext":
        data = dict(data or {})
        hints = data.pop("memory_hints", None) or ()
        if isinstance(hints, str):
            hints = (hints,)
        emotion_data = data.pop("emotion_data", None) or {}
        session_id = data.pop("session_id", None)
        return cls(
            mood=data.pop("mood", None),
            emotion_data=MappingProxyType(dict(emotion_data)),
            memory_hints=tuple(str(h) for h in hints),
            session_id=str(session_id) if session_id is not None else None,
            extra=MappingProxyType(data),
        )


@dataclass(frozen=True)
class TurnInput:
    text: str
    user_ref: Optional[str] = None
    context: TurnContext = field(default_factory=TurnContext)

    @classmethod
    def build(
        cls, user_ref: Optional[str], text: Any, context: Optional[Mapping[str, Any]] = None
    ) -> "TurnInput":
        return cls(
            text=text if isinstance(text, str) else "",
            user_ref=str(user_ref) if user_ref is not None else None,
            context=TurnContext.from_mapping(context),
        )

    @property
    def session_key(self) -> str:
        return self.context.session_id or self.user_ref or "anonymous"


@dataclass(frozen=True)
class Entity:
    type: str
    value: str


@dataclass(frozen=True)
class InputAnalysis:
    intent: str = "casual"
    keywords: Tuple[str, ...] = ()
    entities: Tuple[Entity, ...] = ()
    input_type: str = "text"
    sentiment: str = "neutral"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "intent": self.intent,
            "keywords": list(self.keywords),
            "entities": [{"type": e.type, "value": e.value} for e in self.entities],
            "input_type": self.input_type,
            "sentiment": self.sentiment,
        }


@dataclass
class ResponseEnvelope:
    """The only object handed back to the caller of `process`."""

    text: str
    classification: Dict[str, Any]
    confidence: float
    processing_time: float
    suggestions: List[str] = field(default_factory=list)
    error_flag: bool = False
    persona: str = ""
    emotion: str = "neutral"
    intensity: str = "low"
    mood_state: str = MoodState.NEUTRAL.value
    intent: str = "casual"

    @classmethod
    def from_turn(
        cls,
        *,
        text: str,
        persona: str,
        classification: ClassificationResult,
        analysis: EmotionAnalysis,
        mood_state: MoodState,
        intent: str,
        suggestions: List[str],
        processing_time: float,
    ) -> "ResponseEnvelope":
        return cls(
            text=text,
            classification=classification.to_dict(),
            confidence=analysis.confidence,
            processing_time=processing_time,
            suggestions=list(suggestions),
            error_flag=False,
            persona=persona,
            emotion=analysis.primary_emotion.value,
            intensity=analysis.intensity.value,
            mood_state=mood_state.value,
            intent=intent,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "classification": dict(self.classification),
            "confidence": round(self.confidence, 4),
            "processing_time": round(self.processing_time, 4),
            "suggestions": list(self.suggestions),
            "error_flag": self.error_flag,
            "persona": self.persona,
            "emotion": self.emotion,
            "intensity": self.intensity,
            "mood_state": self.mood_state,
            "intent": self.intent,
        }

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, **kwargs)
