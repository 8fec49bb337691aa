from __future__ import annotations

import random
from typing import Iterable, List, Optional

from personabot.domain.classification import ClassificationResult
from personabot.domain.emotion import EmotionAnalysis
from personabot.personas.base import Persona

MAX_SUGGESTIONS = 3


def _dedupe(items: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for item in items:
        if item and item not in seen:
            seen.append(item)
    return seen


class SuggestionGenerator:
    """
    Base pool + persona-specific follow-ups, truncated to `limit`.

    Deterministic unless a `random.Random` is injected, in which case up to
    `limit` entries are sampled from the combined pool.
    """

    def __init__(self, *, limit: int = MAX_SUGGESTIONS, rng: Optional[random.Random] = None):
        self.limit = max(0, min(int(limit), MAX_SUGGESTIONS))
        self.rng = rng

    def pool(self, persona: Persona, analysis: EmotionAnalysis, classification: ClassificationResult) -> List[str]:
        return _dedupe(list(persona.config.base_suggestions) + persona.suggestions(analysis, classification))

    def generate(
        self, persona: Persona, analysis: EmotionAnalysis, classification: ClassificationResult
    ) -> List[str]:
        combined = self.pool(persona, analysis, classification)
        if self.rng is None:
            return combined[: self.limit]
        return self.rng.sample(combined, min(self.limit, len(combined)))
