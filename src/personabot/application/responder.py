"""
PersonaResponder: the per-turn analysis-and-response pipeline.

    load_context -> analyze_emotion -> analyze_input -> track_mood -> classify
        -> render -> filter -> suggest -> remember

The whole pass runs under the session's lock; any critical stage failure (or
anything raised outside the pipeline) becomes the fallback envelope.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Callable, List, Mapping, Optional

from loguru import logger

from personabot.analysis import EmotionScoringEngine, InputAnalyzer, MoodHistory, SessionMoodRegistry
from personabot.application.error_handler import ErrorHandler
from personabot.application.suggestions import SuggestionGenerator
from personabot.core.pipeline import Pipeline, PipelineStage, StageResult
from personabot.dispatch import RenderRequest
from personabot.domain.classification import ClassificationResult
from personabot.domain.emotion import EmotionAnalysis, MoodState
from personabot.domain.turn import InputAnalysis, ResponseEnvelope, TurnInput
from personabot.memory import ContextBundle, ContextLoader, MemoryWriter, build_turn_record
from personabot.personas.base import Persona


@dataclass
class TurnState:
    turn: TurnInput
    persona: Persona
    history: MoodHistory
    bundle: ContextBundle = field(default_factory=ContextBundle.empty)
    analysis: EmotionAnalysis = field(default_factory=EmotionAnalysis.neutral)
    input_analysis: InputAnalysis = field(default_factory=InputAnalysis)
    previous_mood: MoodState = MoodState.NEUTRAL
    mood_state: MoodState = MoodState.NEUTRAL
    classification: Optional[ClassificationResult] = None
    text: str = ""
    suggestions: List[str] = field(default_factory=list)
    persisted: bool = False

    @property
    def owner(self) -> str:
        return self.turn.user_ref or self.turn.session_key


def _assign(attr: str) -> Callable[[TurnState, StageResult], TurnState]:
    def _update(state: TurnState, result: StageResult) -> TurnState:
        setattr(state, attr, result.output)
        return state

    return _update


class PersonaResponder:
    def __init__(
        self,
        persona: Persona,
        *,
        scorer: Optional[EmotionScoringEngine] = None,
        input_analyzer: Optional[InputAnalyzer] = None,
        moods: Optional[SessionMoodRegistry] = None,
        context_loader: Optional[ContextLoader] = None,
        memory_writer: Optional[MemoryWriter] = None,
        suggestions: Optional[SuggestionGenerator] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.persona = persona
        self.scorer = scorer or EmotionScoringEngine()
        self.input_analyzer = input_analyzer or InputAnalyzer()
        self.moods = moods or SessionMoodRegistry()
        self.context_loader = context_loader
        self.memory_writer = memory_writer
        self.suggestion_generator = suggestions or SuggestionGenerator()
        self.error_handler = error_handler or ErrorHandler()
        self.pipeline = self._build_pipeline()

    # ---- stages ----

    def _load_context(self, state: TurnState) -> ContextBundle:
        ctx = state.turn.context
        extra = dict(ctx.extra)
        if ctx.mood:
            extra["mood"] = ctx.mood
        if ctx.memory_hints:
            extra["memory_hints"] = list(ctx.memory_hints)
        if self.context_loader is None:
            return ContextBundle.empty(extra)
        return self.context_loader.load(state.owner, extra)

    def _track_mood(self, state: TurnState) -> MoodState:
        state.previous_mood = state.history.state
        return state.history.record(state.analysis)

    def _classify(self, state: TurnState) -> ClassificationResult:
        return state.persona.classify(state.turn.text)

    def _render(self, state: TurnState) -> str:
        request = RenderRequest(
            text=state.turn.text,
            classification=state.classification or state.persona.default_classification(),
            analysis=state.analysis,
            input_analysis=state.input_analysis,
            mood_state=state.mood_state,
            previous_mood=state.previous_mood,
        )
        return state.persona.render(request)

    def _suggest(self, state: TurnState) -> List[str]:
        classification = state.classification or state.persona.default_classification()
        return self.suggestion_generator.generate(state.persona, state.analysis, classification)

    def _remember(self, state: TurnState) -> bool:
        if self.memory_writer is None:
            return False
        classification = state.classification or state.persona.default_classification()
        record = build_turn_record(
            owner=state.owner,
            text=state.turn.text,
            response=state.text,
            analysis=state.analysis,
            intent=state.input_analysis.intent,
            keywords=state.input_analysis.keywords,
            primary_category=classification.primary_category,
            persona=state.persona.name,
        )
        return self.memory_writer.write(record)

    def _build_pipeline(self) -> Pipeline:
        return (
            Pipeline(f"responder.{self.persona.name}")
            .add_stage(PipelineStage(
                "load_context", self._load_context, is_critical=False, update_context=_assign("bundle"),
            ))
            .add_stage(PipelineStage(
                "analyze_emotion", lambda s: self.scorer.analyze(s.turn.text), update_context=_assign("analysis"),
            ))
            .add_stage(PipelineStage(
                "analyze_input",
                lambda s: self.input_analyzer.analyze(s.turn.text),
                is_critical=False,
                update_context=_assign("input_analysis"),
            ))
            .add_stage(PipelineStage("track_mood", self._track_mood, update_context=_assign("mood_state")))
            .add_stage(PipelineStage(
                "classify", self._classify, is_critical=False, update_context=_assign("classification"),
            ))
            .add_stage(PipelineStage("render", self._render, update_context=_assign("text")))
            .add_stage(PipelineStage(
                "filter", lambda s: s.persona.filter(s.text), update_context=_assign("text"),
            ))
            .add_stage(PipelineStage("suggest", self._suggest, update_context=_assign("suggestions")))
            .add_stage(PipelineStage(
                "remember",
                self._remember,
                is_critical=False,
                skip_if=lambda _s: self.memory_writer is None,
                update_context=_assign("persisted"),
            ))
        )

    # ---- entry point ----

    def process(
        self, user_ref: Optional[str], text: Any, context: Optional[Mapping[str, Any]] = None
    ) -> ResponseEnvelope:
        """Never raises; `error_flag` is set only when the fallback envelope was produced."""
        start = perf_counter()
        session_id = "anonymous"
        stage = "prepare"
        try:
            turn = TurnInput.build(user_ref, text, context)
            session_id = turn.session_key
            with self.moods.session(session_id) as history:
                state = TurnState(turn=turn, persona=self.persona, history=history)
                stage = "pipeline"
                result = self.pipeline.run(state)
                if result.failed():
                    failed = result.failed_stage
                    exc = failed.exception if failed and failed.exception else RuntimeError("pipeline failed")
                    return self.error_handler.handle(
                        exc, persona=self.persona, session_id=session_id, stage=failed.name if failed else stage,
                    )
                logger.debug(f"[{session_id}] {self.persona.name} turn timings: {result.timings()}")
                return ResponseEnvelope.from_turn(
                    text=state.text,
                    persona=self.persona.name,
                    classification=state.classification or self.persona.default_classification(),
                    analysis=state.analysis,
                    mood_state=state.mood_state,
                    intent=state.input_analysis.intent,
                    suggestions=state.suggestions,
                    processing_time=perf_counter() - start,
                )
        except Exception as exc:  # noqa: BLE001
            return self.error_handler.handle(exc, persona=self.persona, session_id=session_id, stage=stage)

    def history(self, session_id: str) -> Optional[MoodHistory]:
        return self.moods.get(session_id)

    def close(self) -> None:
        if self.memory_writer is not None:
            self.memory_writer.close()
