"""
Pipeline-boundary guard: turns any failure into the fixed fallback envelope.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from personabot.core.errors import PersonaBotError
from personabot.domain.classification import ClassificationResult
from personabot.domain.emotion import MoodState
from personabot.domain.turn import ResponseEnvelope
from personabot.personas.base import FALLBACK_RESPONSES, Persona

FALLBACK_CONFIDENCE = 0.5
FALLBACK_PROCESSING_TIME = 0.1


class ErrorHandler:
    def fallback_text(self, persona: Optional[Persona]) -> str:
        if persona is None:
            return FALLBACK_RESPONSES[0]
        text = persona.fallback_text()
        try:
            filtered = persona.filter(text)
        except Exception as exc:  # noqa: BLE001
            logger.debug(f"persona filter failed on fallback text: {exc}")
            return text
        return filtered if filtered and filtered.strip() else text

    def fallback_classification(self, persona: Optional[Persona]) -> ClassificationResult:
        if persona is None:
            return ClassificationResult(domain="general", primary_category="general")
        try:
            return persona.default_classification()
        except Exception as exc:  # noqa: BLE001
            logger.debug(f"default classification unavailable: {exc}")
            return ClassificationResult(domain="general", primary_category="general")

    def handle(
        self,
        exc: BaseException,
        *,
        persona: Optional[Persona] = None,
        session_id: str = "",
        stage: str = "",
    ) -> ResponseEnvelope:
        if isinstance(exc, PersonaBotError):
            logger.error(f"[{session_id}] turn fell back at stage '{stage}': {exc} ({exc.severity.value})")
        else:
            logger.opt(exception=exc).error(f"[{session_id}] turn fell back at stage '{stage}': {exc!r}")
        return ResponseEnvelope(
            text=self.fallback_text(persona),
            classification=self.fallback_classification(persona).to_dict(),
            confidence=FALLBACK_CONFIDENCE,
            processing_time=FALLBACK_PROCESSING_TIME,
            suggestions=[],
            error_flag=True,
            persona=persona.name if persona is not None else "",
            mood_state=MoodState.NEUTRAL.value,
        )
