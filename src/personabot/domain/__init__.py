"""
Domain models shared by every pipeline stage.
"""

from .classification import ClassificationResult
from .emotion import (
    ContextualFlags,
    EmotionAnalysis,
    EmotionCategory,
    IntensityBand,
    MoodIndicators,
    MoodState,
    SCORED_EMOTIONS,
)
from .turn import Entity, InputAnalysis, ResponseEnvelope, TurnContext, TurnInput

__all__ = [
    "ClassificationResult",
    "ContextualFlags",
    "EmotionAnalysis",
    "EmotionCategory",
    "IntensityBand",
    "MoodIndicators",
    "MoodState",
    "SCORED_EMOTIONS",
    "Entity",
    "InputAnalysis",
    "ResponseEnvelope",
    "TurnContext",
    "TurnInput",
]
