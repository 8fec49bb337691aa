"""NeoChat: general-purpose conversational companion, keyed off the turn intent."""

from __future__ import annotations

from personabot.analysis.input_analyzer import INTENT_WATERFALL
from personabot.classification import build_classifier, word_rule
from personabot.dispatch import RenderRequest, ResponseDispatcher, constant
from personabot.domain.emotion import EmotionCategory
from personabot.personas.base import Persona, PersonaConfig
from personabot.personas.filters import ToneProfile

NAME = "neochat"

CLASSIFIER = build_classifier(
    "intent",
    categories=INTENT_WATERFALL.rules,
    default=INTENT_WATERFALL.default,
    level_name="urgency_level",
    levels=[word_rule("high", "urgent", "asap", "emergency", "immediately", "right now")],
    default_level="normal",
)


def question(request: RenderRequest) -> str:
    keywords = request.input_analysis.keywords
    if keywords:
        return f"Great question! Let's dig into {keywords[-1]} together. What have you tried so far?"
    return "Great question! Let me break this down for you."


def goal_setting(request: RenderRequest) -> str:
    return "I love that you're setting a goal. What's the first small step you could take this week?"


def personal_sharing(request: RenderRequest) -> str:
    emotion = request.analysis.primary_emotion
    if emotion is EmotionCategory.NEUTRAL:
        return "Thank you for sharing that with me. How has it been sitting with you?"
    return f"Thank you for sharing that with me. It sounds like you're feeling {emotion.label}."


def task(request: RenderRequest) -> str:
    return "I'm here to help! Tell me a bit more about what you need and we'll tackle it step by step."


def casual(request: RenderRequest) -> str:
    return "I'm enjoying our conversation! What would you like to chat about?"


DISPATCHER = ResponseDispatcher(
    {
        "greeting": constant("Hey there! I'm NeoChat. What's on your mind today?"),
        "farewell": constant("Take care! It was great chatting with you. Come back anytime."),
        "goal_setting": goal_setting,
        "personal_sharing": personal_sharing,
        "question": question,
        "task": task,
    },
    default=casual,
    name=NAME,
)

CONFIG = PersonaConfig(
    name=NAME,
    display_name="NeoChat",
    tagline="Your versatile conversation partner",
    emoji="💬",
    tone=ToneProfile(agreeableness=7, neuroticism=3, conscientiousness=5, playfulness=8, extraversion=8),
    suggestions={
        "question": ("Want me to explain it step by step?",),
        "goal_setting": ("Shall we break that goal into milestones?",),
        "default": ("Want to talk about your day?",),
    },
)


def build() -> Persona:
    return Persona(CONFIG, CLASSIFIER, DISPATCHER)
