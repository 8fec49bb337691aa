"""
Application layer: the responder pipeline, its collaborators and wiring.
"""

from .bootstrap import create_memory_store, create_persona_registry, create_responder
from .error_handler import ErrorHandler
from .responder import PersonaResponder, TurnState
from .suggestions import SuggestionGenerator

__all__ = [
    "create_memory_store",
    "create_persona_registry",
    "create_responder",
    "ErrorHandler",
    "PersonaResponder",
    "TurnState",
    "SuggestionGenerator",
]
