"""CareBot: supportive care triage."""

from __future__ import annotations

from personabot.classification import build_classifier, rule
from personabot.dispatch import RenderRequest, ResponseDispatcher
from personabot.personas.base import Persona, PersonaConfig
from personabot.personas.filters import ToneProfile

NAME = "carebot"

CLASSIFIER = build_classifier(
    "care_type",
    # crisis language always wins over the softer categories
    categories=[
        rule("crisis_intervention", "crisis", "emergency", "urgent"),
        rule("health_support", "sick", "health", "medical"),
        rule("emotional_support", "sad", "depressed", "anxious"),
        rule("problem_solving", "problem", "issue", "help"),
        rule("companionship", "lonely", "alone", "talk"),
        rule("educational_support", "learn", "how to", "guide"),
    ],
    default="general_care",
    level_name="urgency_level",
    levels=[
        rule("critical", "emergency", "urgent", "crisis", "immediate", "help me", "can't"),
        rule("high", "soon", "quickly"),
        rule("low", "when you can", "no rush"),
    ],
    default_level="medium",
    attributes={
        "support_type": (
            [
                rule("active_listening", "listen", "hear"),
                rule("guidance_and_advice", "advice", "what should"),
                rule("resource_connection", "resources", "help me find"),
                rule("crisis_intervention", "emergency", "crisis"),
            ],
            "comprehensive_support",
        ),
        "complexity": (
            [
                rule("high", "complicated", "complex", "multiple", "many", "overwhelming"),
                rule("low", "simple", "basic"),
            ],
            "medium",
        ),
    },
)

_URGENCY_NOTICE = {
    "critical": "This sounds like a critical situation. Please reach out to emergency services or a crisis line now. ",
    "high": "I can tell this is pressing, so let's take it carefully. ",
}

_EMOTION_SUPPORT = {
    "sad": "It's okay to feel sad.",
    "anxious": "Anxiety can feel overwhelming, and we can work through it together.",
    "frustrated": "Your frustration is valid; it usually means something important needs attention.",
}


def _with_notice(request: RenderRequest, body: str) -> str:
    return _URGENCY_NOTICE.get(request.classification.level, "") + body


def crisis_intervention(request: RenderRequest) -> str:
    return (
        "I'm really glad you reached out. You don't have to face this alone. "
        "If you are in danger, contact your local emergency number right away. "
        "I'm here to stay with you while you do."
    )


def health_support(request: RenderRequest) -> str:
    return _with_notice(
        request,
        "I can share general health information, but a medical professional should look at symptoms that worry you.",
    )


def emotional_support(request: RenderRequest) -> str:
    label = request.analysis.primary_emotion.label
    support = _EMOTION_SUPPORT.get(label, "Whatever you're feeling right now is valid.")
    return _with_notice(request, f"{support} Would you like to tell me what's been weighing on you?")


def problem_solving(request: RenderRequest) -> str:
    if request.classification.get("complexity") == "high":
        opener = "Let's break it into smaller pieces"
    else:
        opener = "Let's look at it together"
    return _with_notice(request, f"{opener}. What part of the problem feels most urgent?")


def companionship(request: RenderRequest) -> str:
    return "I'm here and happy to keep you company. What's on your mind today?"


def educational_support(request: RenderRequest) -> str:
    return "Learning is a kind of self-care. Tell me what you want to understand and we'll go step by step."


def general_care(request: RenderRequest) -> str:
    return _with_notice(request, "I'm here to support you. How can I take care of you today?")


DISPATCHER = ResponseDispatcher(
    {
        "crisis_intervention": crisis_intervention,
        "health_support": health_support,
        "emotional_support": emotional_support,
        "problem_solving": problem_solving,
        "companionship": companionship,
        "educational_support": educational_support,
    },
    default=general_care,
    name=NAME,
)

CONFIG = PersonaConfig(
    name=NAME,
    display_name="CareBot",
    tagline="Compassionate support, one step at a time",
    emoji="💝",
    tone=ToneProfile(agreeableness=9, neuroticism=7, conscientiousness=7, playfulness=3, extraversion=5),
    suggestions={
        "crisis_intervention": ("Would you like crisis line numbers?", "Can I help you find someone to call?"),
        "sad": ("Would you like a gentle breathing exercise?",),
        "anxious": ("Want to try a grounding exercise?",),
        "default": ("Would you like some self-care ideas?",),
    },
)


def build() -> Persona:
    return Persona(CONFIG, CLASSIFIER, DISPATCHER)
