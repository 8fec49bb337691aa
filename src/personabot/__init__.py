"""
PersonaBot - multi-persona conversational responder.

Per turn: emotion scoring, per-session mood tracking, keyword-waterfall
classification, template dispatch, persona filtering, suggestions and memory
write-back, all behind a no-throw `PersonaResponder.process`.
"""

from __future__ import annotations

__version__ = "0.3.0"


# lazy imports keep `import personabot` cheap and avoid import cycles
def __getattr__(name: str):
    if name == "PersonaResponder":
        from personabot.application.responder import PersonaResponder
        return PersonaResponder
    if name == "create_responder":
        from personabot.application.bootstrap import create_responder
        return create_responder
    if name == "AppConfig":
        from personabot.config import AppConfig
        return AppConfig
    if name == "PersonaRegistry":
        from personabot.personas import PersonaRegistry
        return PersonaRegistry
    if name == "ResponseEnvelope":
        from personabot.domain.turn import ResponseEnvelope
        return ResponseEnvelope
    if name == "Pipeline":
        from personabot.core.pipeline import Pipeline
        return Pipeline

    raise AttributeError(f"module 'personabot' has no attribute '{name}'")


__all__ = [
    "__version__",
    "PersonaResponder",
    "create_responder",
    "AppConfig",
    "PersonaRegistry",
    "ResponseEnvelope",
    "Pipeline",
]
