from __future__ import annotations

from typing import Protocol, runtime_checkable

from personabot.domain.classification import ClassificationResult


@runtime_checkable
class TemplateProviderPort(Protocol):
    """Pure function keyed by category; swapping providers must not change pipeline contracts."""

    def render(self, primary_category: str, classification: ClassificationResult, raw_text: str) -> str:
        """Non-empty response text for the category."""
