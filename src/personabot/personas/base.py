"""
Persona strategy: an immutable config record plus the classifier, template
provider and text filter that give one agent its voice.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, List, Mapping, Optional, Sequence, Tuple

from personabot.classification import CategoryClassifier
from personabot.core.errors import TemplateFailure
from personabot.dispatch import RenderRequest, ResponseDispatcher
from personabot.domain.classification import ClassificationResult
from personabot.domain.emotion import EmotionAnalysis
from personabot.personas.filters import PersonaFilter, ToneProfile

if TYPE_CHECKING:
    from personabot.application.ports import TemplateProviderPort

BASE_SUGGESTIONS: Tuple[str, ...] = (
    "Tell me more about that",
    "How are you feeling about this?",
    "What would you like to explore next?",
)

FALLBACK_RESPONSES: Tuple[str, ...] = (
    "I'm having trouble processing that right now. Could you try rephrasing?",
    "Something went wrong on my end. Let me try again.",
    "I need a moment to gather my thoughts. Can you give me a different input?",
)


def _frozen_table(table: Optional[Mapping[str, Sequence[str]]]) -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType({k: tuple(v) for k, v in (table or {}).items()})


@dataclass(frozen=True)
class PersonaConfig:
    """Built once at startup; never mutated afterwards."""

    name: str
    display_name: str
    tagline: str = ""
    emoji: str = ""
    tone: ToneProfile = field(default_factory=ToneProfile)
    base_suggestions: Tuple[str, ...] = BASE_SUGGESTIONS
    # keyed by primary category first, then emotion label ("anxious") or value ("fear")
    suggestions: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    fallback_responses: Tuple[str, ...] = FALLBACK_RESPONSES

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_suggestions", tuple(self.base_suggestions))
        object.__setattr__(self, "fallback_responses", tuple(self.fallback_responses) or FALLBACK_RESPONSES)
        object.__setattr__(self, "suggestions", _frozen_table(self.suggestions))


class Persona:
    def __init__(
        self,
        config: PersonaConfig,
        classifier: CategoryClassifier,
        templates: "TemplateProviderPort",
        text_filter: Optional[PersonaFilter] = None,
    ):
        self.config = config
        self.classifier = classifier
        self.templates = templates
        self.text_filter = text_filter or PersonaFilter.from_tone(config.tone, emoji=config.emoji)

    def __repr__(self) -> str:
        return f"Persona({self.config.name!r}, domain={self.classifier.domain!r})"

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def template_provider(self) -> "TemplateProviderPort":
        return self.templates

    def classify(self, text: str) -> ClassificationResult:
        return self.classifier.classify(text)

    def default_classification(self) -> ClassificationResult:
        return self.classifier.default_result()

    def render(self, request: RenderRequest) -> str:
        if isinstance(self.templates, ResponseDispatcher):
            return self.templates.dispatch(request)
        text = self.templates.render(request.category, request.classification, request.text)
        if not isinstance(text, str) or not text.strip():
            raise TemplateFailure(
                message=f"template provider produced empty text for '{request.category}'",
                context={"category": request.category, "persona": self.name},
            )
        return text

    def filter(self, text: str) -> str:
        return self.text_filter.apply(text)

    def suggestions(self, analysis: EmotionAnalysis, classification: ClassificationResult) -> List[str]:
        """Persona-specific follow-ups for this turn (base pool not included)."""
        table = self.config.suggestions
        for key in (
            classification.primary_category,
            analysis.primary_emotion.label,
            analysis.primary_emotion.value,
        ):
            if key in table:
                return list(table[key])
        return list(table.get("default", ()))

    def fallback_text(self, index: int = 0) -> str:
        responses = self.config.fallback_responses
        return responses[index % len(responses)]
