"""
Pipeline unit tests
"""

from personabot.core.pipeline import Pipeline, PipelineResult, PipelineStage, StageResult


def _set(key):
    def _update(ctx, result):
        ctx[key] = result.output
        return ctx

    return _update


class TestPipelineStage:
    def test_stage_runs_function(self):
        stage = PipelineStage(name="test", run_fn=lambda ctx: ctx["input"] + 1)
        result = stage.run({"input": 5})

        assert result.status == "success"
        assert result.ok
        assert result.output == 6
        assert result.duration_ms is not None

    def test_stage_skips_when_condition_met(self):
        stage = PipelineStage(name="test", run_fn=lambda ctx: 1, skip_if=lambda ctx: ctx.get("skip", False))
        assert stage.run({"skip": True}).status == "skipped"
        assert stage.run({"skip": False}).status == "success"

    def test_stage_captures_exception(self):
        def boom(ctx):
            raise ValueError("nope")

        result = PipelineStage(name="boom", run_fn=boom).run({})
        assert result.status == "error"
        assert isinstance(result.exception, ValueError)
        assert "nope" in result.error


class TestPipeline:
    def test_runs_stages_in_order(self):
        seen = []
        pipeline = (
            Pipeline("p")
            .add_stage(PipelineStage("a", lambda ctx: seen.append("a") or 1, update_context=_set("a")))
            .add_stage(PipelineStage("b", lambda ctx: seen.append("b") or ctx["a"] + 1, update_context=_set("b")))
        )
        ctx = {}
        result = pipeline.run(ctx)

        assert isinstance(result, PipelineResult)
        assert result.status == "success"
        assert seen == ["a", "b"]
        assert ctx == {"a": 1, "b": 2}
        assert set(result.timings()) == {"a", "b"}

    def test_critical_failure_stops(self):
        def boom(ctx):
            raise RuntimeError("critical")

        ran = []
        pipeline = (
            Pipeline("p")
            .add_stage(PipelineStage("boom", boom))
            .add_stage(PipelineStage("after", lambda ctx: ran.append(True)))
        )
        result = pipeline.run({})

        assert result.failed()
        assert result.failed_stage.name == "boom"
        assert ran == []

    def test_non_critical_failure_continues_without_update(self):
        def boom(ctx):
            raise RuntimeError("optional")

        pipeline = (
            Pipeline("p")
            .add_stage(PipelineStage("optional", boom, is_critical=False, update_context=_set("optional")))
            .add_stage(PipelineStage("after", lambda ctx: "done", update_context=_set("after")))
        )
        ctx = {}
        result = pipeline.run(ctx)

        assert result.status == "success"
        assert "optional" not in ctx
        assert ctx["after"] == "done"
        assert [s.status for s in result.stages] == ["error", "success"]


def test_stage_result_ok_property():
    assert StageResult(name="x", status="success").ok
    assert not StageResult(name="x", status="error").ok
