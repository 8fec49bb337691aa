"""EmotiSense: mood-aware empathetic companion."""

from __future__ import annotations

from personabot.classification import build_classifier, rule, word_rule
from personabot.dispatch import RenderRequest, ResponseDispatcher
from personabot.domain.emotion import EmotionCategory, IntensityBand, MoodState
from personabot.personas.base import Persona, PersonaConfig
from personabot.personas.filters import ToneProfile

NAME = "emotisense"

CLASSIFIER = build_classifier(
    "emotional_need",
    categories=[
        rule("mood_check", "how am i", "my mood", "check in", "check-in"),
        rule("venting", "vent", "rant", "fed up", "sick of", "can't stand"),
        rule("celebration", "celebrate", "good news", "promotion", "proud", "passed"),
        rule("reassurance", "reassure", "will it be okay", "will it be ok", "worried", "scared"),
    ],
    default="empathetic_reflection",
    level_name="urgency_level",
    levels=[word_rule("high", "urgent", "emergency", "immediately", "now", "can't cope")],
    default_level="normal",
)

_OPENERS = {
    EmotionCategory.JOY: "I can sense your happiness!",
    EmotionCategory.SADNESS: "I notice you might be feeling down right now.",
    EmotionCategory.ANGER: "I can feel the frustration in your words.",
    EmotionCategory.FEAR: "I sense some worry in what you wrote.",
    EmotionCategory.EXCITEMENT: "Your excitement is contagious!",
    EmotionCategory.LOVE: "There's real warmth in your message.",
    EmotionCategory.CALM: "Your calm energy comes through.",
}

_INTENSITY_NOTES = {
    IntensityBand.EXTREME: "The intensity of what you're feeling comes through very clearly.",
    IntensityBand.VERY_HIGH: "You're experiencing this quite strongly.",
    IntensityBand.HIGH: "This feeling seems significant for you.",
}

_SHIFTS = {
    (MoodState.NEGATIVE, MoodState.POSITIVE): "I notice your mood has lifted!",
    (MoodState.AGITATED, MoodState.PEACEFUL): "I sense the tension has eased.",
    (MoodState.POSITIVE, MoodState.NEGATIVE): "I notice your energy has shifted.",
}


def _reflection(request: RenderRequest) -> str:
    analysis = request.analysis
    parts = []
    shift = _SHIFTS.get((request.previous_mood, request.mood_state))
    if shift:
        parts.append(shift)
    parts.append(_OPENERS.get(analysis.primary_emotion, "I'm tuning into how you feel."))
    note = _INTENSITY_NOTES.get(analysis.intensity)
    if note:
        parts.append(note)
    flags = analysis.contextual_flags
    if flags.urgency:
        parts.append("This feels urgent to you.")
    if flags.uncertainty:
        parts.append("Uncertainty can be hard to sit with.")
    return " ".join(parts)


def mood_check(request: RenderRequest) -> str:
    return f"Lately your mood reads as {request.mood_state.value}. {_reflection(request)} Does that match how you feel?"


def venting(request: RenderRequest) -> str:
    return f"{_reflection(request)} Let it all out, I'm listening without judgment."


def celebration(request: RenderRequest) -> str:
    return f"{_reflection(request)} That deserves a celebration. Tell me everything!"


def reassurance(request: RenderRequest) -> str:
    return f"{_reflection(request)} It's natural to feel this way, and you don't have to figure it out alone."


def empathetic_reflection(request: RenderRequest) -> str:
    return f"{_reflection(request)} How can I best support you right now?"


DISPATCHER = ResponseDispatcher(
    {
        "mood_check": mood_check,
        "venting": venting,
        "celebration": celebration,
        "reassurance": reassurance,
    },
    default=empathetic_reflection,
    name=NAME,
)

CONFIG = PersonaConfig(
    name=NAME,
    display_name="EmotiSense",
    tagline="Emotional intelligence that listens",
    emoji="💙",
    tone=ToneProfile(agreeableness=9, neuroticism=5, conscientiousness=5, playfulness=6, extraversion=6),
    base_suggestions=("How are you feeling about this?",),
    suggestions={
        "joy": ("Share this positive energy with someone you care about", "Capture this moment in a journal"),
        "sadness": ("Take some time for self-care", "Connect with a supportive friend"),
        "anger": ("Take some deep breaths or a quick walk", "Write down your thoughts to process them"),
        "fear": ("Ground yourself with deep breathing", "Break the situation into manageable steps"),
        "excitement": ("Channel this energy into something productive", "Share your enthusiasm with others"),
        "love": ("Tell someone special how you feel", "Practice gratitude for the love in your life"),
        "calm": ("Enjoy this peaceful moment mindfully", "Use this clarity for reflection"),
        "default": ("Take a moment to check in with yourself", "Notice what you're feeling without judgment"),
    },
)


def build() -> Persona:
    return Persona(CONFIG, CLASSIFIER, DISPATCHER)
