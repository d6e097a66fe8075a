# src/railflow/core/pipeline/__init__.py
"""
# Pipeline Core (railflow)

Este pacote define o modelo de dados de um pipeline railway-oriented.

## Componentes

- **types**: tracks canônicos, `SignalKind`, `Signal`, `Continue`, `halt`, `SKIPPED`
- **step**: `Step` (descritor imutável), `BoundStep`, `resolve_steps`
- **registry**: `StepRegistry` (acréscimo ordenado, `derive()` por valor)
- **context**: snapshot, cópia e merge de contextos

## Princípios

- Falha de negócio é dado (track/sucesso/halt), nunca exceção
- Steps não controlam a ordem de execução
- A lista de Steps é somente leitura durante a execução
"""

from .context import copy_context, merge_context, snapshot_context, thaw_context
from .registry import StepRegistry
from .step import BoundStep, KeywordPolicy, Step, bind_step, keyword_policy, resolve_steps
from .types import (
    DEFAULT_TRACK,
    FAIL_TRACK,
    SKIPPED,
    Continue,
    Signal,
    SignalKind,
    halt,
    is_signal,
    unwrap,
)

__all__ = [
    "BoundStep",
    "Continue",
    "DEFAULT_TRACK",
    "FAIL_TRACK",
    "KeywordPolicy",
    "SKIPPED",
    "Signal",
    "SignalKind",
    "Step",
    "StepRegistry",
    "bind_step",
    "copy_context",
    "halt",
    "is_signal",
    "keyword_policy",
    "merge_context",
    "resolve_steps",
    "snapshot_context",
    "thaw_context",
    "unwrap",
]
