"""
Built-in personas: config records, domain classifiers, templates and filters.
"""

from .base import BASE_SUGGESTIONS, FALLBACK_RESPONSES, Persona, PersonaConfig
from .filters import PersonaFilter, ToneProfile
from .registry import BUILTIN_FACTORIES, PersonaRegistry

__all__ = [
    "BASE_SUGGESTIONS",
    "FALLBACK_RESPONSES",
    "Persona",
    "PersonaConfig",
    "PersonaFilter",
    "ToneProfile",
    "BUILTIN_FACTORIES",
    "PersonaRegistry",
]
