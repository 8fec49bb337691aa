"""CallGhost: communications and telephony assistant."""

from __future__ import annotations

from personabot.classification import build_classifier, rule
from personabot.dispatch import Generator, RenderRequest, ResponseDispatcher
from personabot.personas.base import Persona, PersonaConfig
from personabot.personas.filters import ToneProfile

NAME = "callghost"

CLASSIFIER = build_classifier(
    "communication_type",
    categories=[
        rule("voice_call", "call", "phone", "voice"),
        rule("video_call", "video", "conference", "meeting"),
        rule("text_messaging", "sms", "text", "message"),
        rule("email_communication", "email", "mail"),
        rule("instant_messaging", "chat", "instant"),
        rule("voip_telephony", "voip", "sip"),
        rule("call_routing", "routing", "switch"),
        rule("pbx_system", "pbx", "system"),
    ],
    default="general_communication",
    level_name="priority_level",
    levels=[
        rule("emergency", "urgent", "emergency", "critical", "immediate", "911"),
        rule("high", "high", "priority"),
        rule("normal", "normal", "standard"),
        rule("low", "low", "batch"),
    ],
    default_level="normal",
    attributes={
        "protocol": (
            [
                rule("sip", "sip"),
                rule("webrtc", "webrtc"),
                rule("h323", "h.323"),
                rule("pstn", "pstn", "landline"),
                rule("gsm", "gsm", "cellular"),
                rule("smtp", "smtp", "email"),
                rule("xmpp", "xmpp", "jabber"),
            ],
            "multi_protocol",
        ),
    },
)

_CHANNELS = {
    "voice_call": "Voice calls",
    "video_call": "Video meetings",
    "text_messaging": "SMS messaging",
    "email_communication": "Email",
    "instant_messaging": "Instant messaging",
    "voip_telephony": "VoIP telephony",
    "call_routing": "Call routing",
    "pbx_system": "PBX systems",
}


def _channel(category: str) -> Generator:
    label = _CHANNELS[category]

    def _gen(request: RenderRequest) -> str:
        cls = request.classification
        text = f"{label} it is. I'll plan this over {cls.get('protocol')} at {cls.level} priority."
        if cls.level == "emergency":
            text = "For a real emergency, dial your local emergency number directly. " + text
        return text

    return _gen


def general_communication(request: RenderRequest) -> str:
    return "I handle calls, video, messaging, email and routing. How do you need to reach people?"


DISPATCHER = ResponseDispatcher(
    {category: _channel(category) for category in _CHANNELS},
    default=general_communication,
    name=NAME,
)

CONFIG = PersonaConfig(
    name=NAME,
    display_name="CallGhost",
    tagline="Every channel, one assistant",
    emoji="📞",
    tone=ToneProfile(agreeableness=6, neuroticism=4, conscientiousness=6, playfulness=7, extraversion=9),
    suggestions={
        "call_routing": ("Want to compare routing strategies?",),
        "voice_call": ("Should I set up call recording?",),
        "default": ("Would you like a channel recommendation?",),
    },
)


def build() -> Persona:
    return Persona(CONFIG, CLASSIFIER, DISPATCHER)
