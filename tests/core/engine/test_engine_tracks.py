# tests/core/engine/test_engine_tracks.py
"""
Testes do Engine: filtragem por track e troca de track.

Os testes asseguram que:
- Um pipeline todo no track default, todo bem-sucedido, gera N registros
- Uma falha no meio desvia para o track "fail"; Steps default seguintes
  são pulados sem nenhum registro
- Steps do track "fail" geram registros e nunca têm sucesso sem override
- O cenário canônico par/ímpar produz os traces documentados

Limites explícitos:
    - Guards, halts e aninhamento têm módulos próprios
"""

import pytest

from railflow.core.engine.engine import Engine
from railflow.core.facade import Pipeline
from railflow.core.pipeline.step import Step, resolve_steps


def _engine(steps, hooks=None, **kwargs):
    return Engine(steps=resolve_steps(steps, {}), hooks=hooks or Pipeline(), **kwargs)


def _ok(ctx):
    ctx.setdefault("seen", []).append("ok")
    return True


def _fails(ctx):
    ctx.setdefault("seen", []).append("fails")
    return None


def _recover(ctx):
    ctx["recovered"] = True
    return "logged"


def test_all_default_steps_succeed():
    steps = [Step(operation=_ok) for _ in range(4)]

    trace = _engine(steps).run({})

    assert len(trace) == 4
    assert all(r.success for r in trace)
    assert all(r.track == "default" for r in trace)
    assert trace.last.next_track == "default"
    assert trace.context["seen"] == ["ok"] * 4


def test_empty_pipeline_returns_empty_trace():
    trace = _engine([]).run({"a": 1})

    assert len(trace) == 0


def test_middle_failure_skips_remaining_default_steps():
    """
    Verifica que uma falha desvia para o track "fail" e que Steps do
    track default seguintes não produzem nenhum registro.
    """
    steps = [
        Step(operation=_ok),
        Step(operation=_fails),
        Step(operation=_ok),
        Step(operation=_recover, track="fail"),
        Step(operation=_ok),
    ]

    trace = _engine(steps).run({})

    assert [r.operation for r in trace] == [_ok, _fails, _recover]
    assert [r.success for r in trace] == [True, False, False]
    assert trace[1].next_track == "fail"
    assert trace[2].track == "fail"
    assert trace[2].next_track == "fail"
    assert trace.context["recovered"] is True
    assert trace.context["seen"] == ["ok", "fails"]


def test_fail_track_steps_not_run_while_on_default():
    steps = [Step(operation=_recover, track="fail"), Step(operation=_ok)]

    trace = _engine(steps).run({})

    assert [r.operation for r in trace] == [_ok]


def test_custom_initial_track():
    steps = [Step(operation=_ok), Step(operation=_recover, track="fail")]

    trace = _engine(steps).run({}, track="fail")

    assert [r.operation for r in trace] == [_recover]
    assert trace.success is False


def test_custom_tracks_are_isolated_from_default():
    steps = [Step(operation=_ok, track="audit"), Step(operation=_ok)]

    trace = _engine(steps).run({}, track="audit")

    assert len(trace) == 1
    assert trace.last.track == "audit"
    assert trace.last.next_track == "audit"


@pytest.mark.parametrize(
    "n, expected_ops, final_track",
    [
        (4, ["check_even", "finalize"], "default"),
        (3, ["check_even", "record_fail"], "fail"),
    ],
)
def test_even_odd_scenario(even_odd_registry, even_odd_operations, n, expected_ops, final_track):
    pipeline = Pipeline(steps=even_odd_registry.steps(), operations=even_odd_operations)

    trace = pipeline.invoke({"n": n})

    assert [r.operation for r in trace] == expected_ops
    assert len(trace) == 2
    assert trace.last.track == final_track


def test_record_snapshot_taken_after_step():
    def inc(ctx):
        ctx["n"] += 1
        return True

    trace = _engine([Step(operation=inc), Step(operation=inc)]).run({"n": 0})

    assert [r.context["n"] for r in trace] == [1, 2]


def test_input_context_is_not_mutated():
    def mutate(ctx):
        ctx["items"].append("x")
        return True

    original = {"items": []}
    _engine([Step(operation=mutate)]).run(original)

    assert original == {"items": []}
