# src/railflow/core/pipeline/registry.py
"""
Registro ordenado de Steps do pipeline.

O `StepRegistry` é a superfície declarativa usada na definição de um
pipeline: cada chamada acrescenta um Step ao final da lista, preservando
a ordem de declaração.

Especialização:
    `derive()` produz um novo registry com uma cópia por valor da lista
    atual. Acréscimos posteriores no registry original nunca afetam os
    registries derivados (e vice-versa).

Invariantes:
    - A lista reflete exatamente a ordem de registro
    - `steps()` sempre retorna uma tupla imutável
    - Steps inválidos são rejeitados no momento do registro

Limites explícitos:
    - Não resolve tags de operação (ver `resolve_steps`)
    - Não executa pipeline
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .step import GuardRef, OperationRef, Step
from .types import DEFAULT_TRACK, FAIL_TRACK


@dataclass
class StepRegistry:
    """Builder ordenado de Steps; métodos de acréscimo retornam `self`."""

    _steps: List[Step] = field(default_factory=list, repr=False)

    def add(self, step: Step) -> "StepRegistry":
        if not isinstance(step, Step):
            raise TypeError(f"Expected Step, received {type(step).__name__}")
        self._steps = self._steps + [step]
        return self

    def add_step(
        self,
        operation: OperationRef,
        *,
        track: str = DEFAULT_TRACK,
        guard: GuardRef = True,
    ) -> "StepRegistry":
        return self.add(Step(operation=operation, track=track, guard=guard))

    def add_failure_step(self, operation: OperationRef, *, guard: GuardRef = True) -> "StepRegistry":
        """Atalho para um Step no track "fail"."""
        return self.add(Step(operation=operation, track=FAIL_TRACK, guard=guard))

    def add_always_step(
        self,
        operation: OperationRef,
        *,
        guard: GuardRef = True,
        track: str = DEFAULT_TRACK,
    ) -> "StepRegistry":
        """Atalho para um Step com `always_pass=True`."""
        return self.add(Step(operation=operation, track=track, guard=guard, always_pass=True))

    def derive(self) -> "StepRegistry":
        return StepRegistry(_steps=list(self._steps))

    def steps(self) -> Tuple[Step, ...]:
        return tuple(self._steps)

    def __len__(self) -> int:
        return len(self._steps)
