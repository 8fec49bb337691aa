"""
Declarative turn pipeline.
"""

from .pipeline import Pipeline, PipelineStage, PipelineResult, StageResult

__all__ = ["Pipeline", "PipelineStage", "PipelineResult", "StageResult"]
