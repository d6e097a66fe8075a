# src/railflow/core/engine/engine.py
"""
Engine railway-oriented do railflow.

O Engine percorre a lista ordenada de Steps uma única vez, em ordem de
declaração, filtrando pelo track ativo:

    - Step de outro track → pulo silencioso (nenhum registro)
    - guard falso         → registro com saída `SKIPPED`
    - operação executada  → registro com saída, veredito e próximo track
    - saída `Trace`       → sub-trace inserido no lugar do registro
    - `Signal` de halt    → último registro, encerra a invocação

Decisões arquiteturais:
    - Loop explícito (sem recursão) limitado ao tamanho do pipeline
    - Halt é inspecionado no retorno de cada Step, nunca globalmente
    - Exceções de operações, guards e hooks não são capturadas

Invariantes:
    - Cada Step é avaliado no máximo uma vez por invocação
    - O contexto vivo pertence ao Engine; registros guardam cópias
    - `extra_args` nunca são gravados no contexto
    - Operações e guards recebem as chaves do contexto mescladas com os
      `extra_args` como keywords (ver `pipeline.step`)

Limites explícitos:
    - Não implementa retry, timeout ou execução concorrente
    - Não persiste o trace
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, runtime_checkable

from ..pipeline.context import copy_context, snapshot_context, thaw_context
from ..pipeline.step import BoundStep
from ..pipeline.types import DEFAULT_TRACK, FAIL_TRACK, SKIPPED, Continue, is_signal, unwrap
from ..traceability.trace import FlowControlRecord, Trace

logger = logging.getLogger(__name__)


@runtime_checkable
class PipelineHooks(Protocol):
    """Pontos de extensão consultados pelo Engine a cada Step."""

    def after_step(self, output: Any) -> Any: ...

    def is_failure(self, output: Any) -> bool: ...

    def after_flow_control(self, record: FlowControlRecord) -> None: ...


class Engine:
    """Executor sequencial de Steps com filtragem por track."""

    def __init__(
        self,
        *,
        steps: Sequence[BoundStep],
        hooks: PipelineHooks,
        extra_args: Optional[Mapping[str, Any]] = None,
    ):
        self.steps = tuple(steps)
        self.hooks = hooks
        self.extra_args: Dict[str, Any] = dict(extra_args or {})

    def _arguments(self, context: Mapping[str, Any]) -> Dict[str, Any]:
        return {**context, **self.extra_args}

    def _guard_allows(self, step: BoundStep, context: Dict[str, Any]) -> bool:
        if isinstance(step.guard, bool):
            return step.guard
        guard_context = copy_context(context)
        return step.allows(guard_context, self._arguments(guard_context))

    def _success(self, step: BoundStep, output: Any, active_track: str) -> bool:
        if step.always_pass:
            return True
        if is_signal(output) and output.success is not None:
            return output.success
        if active_track == FAIL_TRACK:
            return False
        return not self.hooks.is_failure(output)

    def _record(self, step: BoundStep, output: Any, context: Dict[str, Any], active_track: str) -> FlowControlRecord:
        success = self._success(step, output, active_track)
        signal = output if is_signal(output) else None

        return FlowControlRecord(
            operation=step.operation,
            track=step.track,
            next_track=step.track if success else FAIL_TRACK,
            context=snapshot_context(context),
            output=unwrap(output),
            success=success,
            signal_kind=signal.kind if signal else None,
        )

    def run(self, context: Mapping[str, Any], track: str = DEFAULT_TRACK) -> Trace:
        trace = Trace()
        live: Dict[str, Any] = copy_context(context)
        active_track = track
        index = 0

        while index < len(self.steps):
            step = self.steps[index]
            index += 1

            if step.track != active_track:
                logger.debug("skip %s: track %r != active %r", step.label, step.track, active_track)
                continue

            if self._guard_allows(step, live):
                output = step.run(live, self._arguments(live))
                if isinstance(output, Continue):
                    output = output.output
                output = self.hooks.after_step(output)

                if isinstance(output, Trace):
                    trace.absorb(output)
                    logger.debug("absorbed %d records from %s", len(output), step.label)
                    last = output.last
                    if last is None:
                        continue
                    active_track = last.next_track
                    live = thaw_context(last.context)
                    if last.halted:
                        logger.debug("nested halt via %s, stopping", step.label)
                        return trace
                    continue
            else:
                logger.debug("guard skipped %s", step.label)
                output = SKIPPED

            record = self._record(step, output, live, active_track)
            trace.append(record)
            self.hooks.after_flow_control(record)
            logger.debug(
                "%s on %r: success=%s next=%r",
                step.label,
                record.track,
                record.success,
                record.next_track,
            )

            if record.halted:
                logger.debug("halt at %s", step.label)
                return trace

            active_track = record.next_track

        return trace
