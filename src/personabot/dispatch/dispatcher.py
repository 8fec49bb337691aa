"""
Category -> generator table with a default generator.

Generators are pure functions of a `RenderRequest`; the dispatcher guarantees
non-empty text or raises `TemplateFailure`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping

from personabot.core.errors import TemplateFailure
from personabot.domain.classification import ClassificationResult
from personabot.domain.emotion import EmotionAnalysis, MoodState
from personabot.domain.turn import InputAnalysis


@dataclass(frozen=True)
class RenderRequest:
    text: str
    classification: ClassificationResult
    analysis: EmotionAnalysis = field(default_factory=EmotionAnalysis.neutral)
    input_analysis: InputAnalysis = field(default_factory=InputAnalysis)
    mood_state: MoodState = MoodState.NEUTRAL
    previous_mood: MoodState = MoodState.NEUTRAL

    @property
    def category(self) -> str:
        return self.classification.primary_category


Generator = Callable[[RenderRequest], str]


class ResponseDispatcher:
    def __init__(self, generators: Mapping[str, Generator], default: Generator, *, name: str = "dispatcher"):
        self.name = name
        self._generators: Mapping[str, Generator] = MappingProxyType(dict(generators))
        self._default = default

    @property
    def categories(self):
        return frozenset(self._generators)

    def generator_for(self, category: str) -> Generator:
        return self._generators.get(category, self._default)

    def dispatch(self, request: RenderRequest) -> str:
        text = self.generator_for(request.category)(request)
        if not isinstance(text, str) or not text.strip():
            raise TemplateFailure(
                message=f"{self.name} produced empty text for '{request.category}'",
                context={"category": request.category},
            )
        return text

    def render(self, primary_category: str, classification: ClassificationResult, raw_text: str) -> str:
        """Template-provider surface: dispatch without analysis data."""
        if classification.primary_category != primary_category:
            classification = ClassificationResult(
                domain=classification.domain,
                primary_category=primary_category,
                level_name=classification.level_name,
                level=classification.level,
                attributes=classification.attributes,
            )
        return self.dispatch(RenderRequest(text=raw_text, classification=classification))


def constant(text: str) -> Generator:
    def _gen(_request: RenderRequest) -> str:
        return text

    return _gen
