# tests/core/engine/test_engine_halt.py
"""
Testes de halt e de determinação de sucesso.

Os testes asseguram que:
- Halt na posição k encerra o trace com exatamente k+1 registros
- O último registro carrega `signal_kind == HALT` e a saída sem envelope
- `fail`/`pass_` forçam o veredito; sem override vale `is_failure`
- `always_pass` vence qualquer cálculo, inclusive override de sinal
- `Continue` é desembrulhado antes de chegar aos hooks
"""

from railflow.core.facade import Pipeline
from railflow.core.pipeline.step import Step
from railflow.core.pipeline.types import Continue, SignalKind, halt


def _ok(ctx):
    return True


def _unreachable(ctx):
    raise AssertionError("steps after a halt must not run")


def test_halt_at_position_k_yields_k_plus_one_records():
    def stop(ctx):
        ctx["stopped"] = True
        return halt({"result": 7})

    steps = [Step(operation=_ok), Step(operation=_ok), Step(operation=stop), Step(operation=_unreachable)]

    trace = Pipeline(steps=steps).invoke({})

    assert len(trace) == 3
    assert trace.last.signal_kind is SignalKind.HALT
    assert trace.last.output == {"result": 7}
    assert trace.last.success is True
    assert trace.halted is True
    assert trace.context["stopped"] is True


def test_halt_counts_guard_skipped_records():
    steps = [
        Step(operation=_ok, guard=False),
        Step(operation=_ok, track="fail"),
        Step(operation=lambda ctx: halt("bye")),
        Step(operation=_unreachable),
    ]

    trace = Pipeline(steps=steps).invoke({})

    assert len(trace) == 2
    assert trace.output == "bye"


def test_fail_and_pass_override_verdict():
    class Checkout(Pipeline):
        def operations(self):
            return {"reject": self.reject, "accept": self.accept}

        def reject(self, ctx):
            return self.fail("card declined")

        def accept(self, ctx):
            return self.pass_(None)

    rejected = Checkout(steps=[Step(operation="reject"), Step(operation=_unreachable)]).invoke({})
    accepted = Checkout(steps=[Step(operation="accept"), Step(operation=_unreachable)]).invoke({})

    assert rejected.last.success is False
    assert rejected.last.next_track == "fail"
    assert rejected.output == "card declined"
    assert accepted.last.success is True
    assert accepted.output is None


def test_pass_override_on_fail_track():
    steps = [
        Step(operation=lambda ctx: False),
        Step(operation=lambda ctx: halt("rescued", success=True), track="fail"),
    ]

    trace = Pipeline(steps=steps).invoke({})

    assert trace.last.success is True
    assert trace.last.next_track == "fail"


def test_always_pass_wins_over_natural_outcome():
    steps = [
        Step(operation=lambda ctx: None, always_pass=True),
        Step(operation=lambda ctx: halt("x", success=False), always_pass=True),
    ]

    trace = Pipeline(steps=steps).invoke({})

    assert [r.success for r in trace] == [True, True]
    assert [r.next_track for r in trace] == ["default", "default"]
    assert trace.halted is True


def test_always_pass_on_fail_track_keeps_fail_track():
    steps = [
        Step(operation=lambda ctx: 0),
        Step(operation=lambda ctx: "cleanup", track="fail", always_pass=True),
    ]

    trace = Pipeline(steps=steps).invoke({})

    assert trace.last.success is True
    assert trace.last.next_track == "fail"


def test_continue_is_unwrapped_before_hooks():
    seen = []

    class Spy(Pipeline):
        def after_step(self, output):
            seen.append(output)
            return output

    trace = Spy(steps=[Step(operation=lambda ctx: Continue(0))]).invoke({})

    assert seen == [0]
    assert trace.last.output == 0
    assert trace.last.success is False


def test_after_step_can_replace_falsy_output():
    class Defaults(Pipeline):
        def after_step(self, output):
            return {"empty": True} if output is None else output

    trace = Defaults(steps=[Step(operation=lambda ctx: None)]).invoke({})

    assert trace.last.output == {"empty": True}
    assert trace.last.success is True


def test_after_flow_control_observes_every_record(RecordingPipeline):
    steps = [Step(operation=_ok), Step(operation=lambda ctx: halt(1)), Step(operation=_unreachable)]
    pipeline = RecordingPipeline(steps=steps)

    trace = pipeline.invoke({})

    assert pipeline.observed == list(trace.records())


def test_continue_from_after_step_is_unwrapped_in_record():
    class Enveloping(Pipeline):
        def after_step(self, output):
            return Continue(output)

    trace = Enveloping(steps=[Step(operation=lambda ctx: "x")]).invoke({})

    assert trace.last.output == "x"
    assert trace.last.signal_kind is None


def test_signal_from_after_step_is_recorded_as_halt():
    class Stopping(Pipeline):
        def after_step(self, output):
            return halt(output, success=False)

    trace = Stopping(steps=[Step(operation=_ok), Step(operation=_unreachable)]).invoke({})

    assert len(trace) == 1
    assert trace.last.output is True
    assert trace.last.success is False
    assert trace.last.signal_kind is SignalKind.HALT
