"""
Declarative pipeline abstraction: a turn is an ordered list of named stages
instead of a hard-coded call sequence.

Stages are synchronous; one request is one single-threaded pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Callable, Dict, List, Optional

from loguru import logger


@dataclass
class StageResult:
    name: str
    status: str
    output: Any = None
    error: Optional[str] = None
    exception: Optional[BaseException] = None
    duration_ms: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "success"


@dataclass
class PipelineResult:
    stages: List[StageResult] = field(default_factory=list)
    status: str = "success"

    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def failed_stage(self) -> Optional[StageResult]:
        for stage in self.stages:
            if stage.status == "error":
                return stage
        return None

    def timings(self) -> Dict[str, float]:
        return {s.name: round(s.duration_ms or 0.0, 3) for s in self.stages}


class PipelineStage:
    def __init__(
        self,
        name: str,
        run_fn: Callable[[Any], Any],
        *,
        is_critical: bool = True,
        skip_if: Optional[Callable[[Any], bool]] = None,
        update_context: Optional[Callable[[Any, StageResult], Any]] = None,
    ):
        self.name = name
        self.run_fn = run_fn
        self.is_critical = is_critical
        self.skip_if = skip_if
        self.update_context_fn = update_context

    def should_skip(self, ctx: Any) -> bool:
        return bool(self.skip_if and self.skip_if(ctx))

    def run(self, ctx: Any) -> StageResult:
        if self.should_skip(ctx):
            return StageResult(name=self.name, status="skipped")

        start = perf_counter()
        try:
            output = self.run_fn(ctx)
            return StageResult(
                name=self.name,
                status="success",
                output=output,
                duration_ms=(perf_counter() - start) * 1000,
            )
        except Exception as exc:  # noqa: BLE001
            return StageResult(
                name=self.name,
                status="error",
                error=str(exc),
                exception=exc,
                duration_ms=(perf_counter() - start) * 1000,
            )

    def update_context(self, ctx: Any, stage_output: StageResult) -> Any:
        if self.update_context_fn:
            return self.update_context_fn(ctx, stage_output)
        return ctx


class Pipeline:
    def __init__(self, name: str):
        self.name = name
        self.stages: List[PipelineStage] = []

    def add_stage(self, stage: PipelineStage) -> "Pipeline":
        self.stages.append(stage)
        return self

    def run(self, ctx: Any) -> PipelineResult:
        results: List[StageResult] = []
        current_ctx = ctx

        for stage in self.stages:
            stage_result = stage.run(current_ctx)
            results.append(stage_result)

            if stage_result.status == "error":
                if stage.is_critical:
                    logger.warning(f"[{self.name}] critical stage '{stage.name}' failed: {stage_result.error}")
                    return PipelineResult(stages=results, status="failed")
                logger.debug(f"[{self.name}] stage '{stage.name}' failed, continuing: {stage_result.error}")
                continue

            current_ctx = stage.update_context(current_ctx, stage_result)

        return PipelineResult(stages=results, status="success")
