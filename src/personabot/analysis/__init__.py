"""
Turn analysis: emotion scoring, input analysis and per-session mood tracking.
"""

from .emotion_scorer import EmotionLexicon, EmotionScoringEngine, normalize_text, tokenize
from .input_analyzer import INTENT_WATERFALL, InputAnalyzer
from .mood_tracker import MoodHistory, SessionMoodRegistry, aggregate_mood

__all__ = [
    "EmotionLexicon",
    "EmotionScoringEngine",
    "normalize_text",
    "tokenize",
    "INTENT_WATERFALL",
    "InputAnalyzer",
    "MoodHistory",
    "SessionMoodRegistry",
    "aggregate_mood",
]
