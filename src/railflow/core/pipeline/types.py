# src/railflow/core/pipeline/types.py
"""
Tipos canônicos do pipeline do railflow.

Este módulo define os valores que padronizam a comunicação entre
operações de Steps e o Engine:
    - tracks canônicos (`DEFAULT_TRACK`, `FAIL_TRACK`)
    - `SignalKind` → tipos de sinal de controle de fluxo
    - `Signal`     → resultado marcado que encerra o pipeline (halt)
    - `Continue`   → resultado marcado explícito de continuação
    - `SKIPPED`    → sentinela de saída de um Step pulado por guard

Decisões arquiteturais:
    - Halt é um valor retornado pela operação, nunca uma exceção
    - O Engine inspeciona o retorno de cada Step logo após a chamada,
      portanto um halt é sempre limitado a uma única execução de Step

Limites explícitos:
    - Não executa Steps
    - Não decide sucesso ou troca de track
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

DEFAULT_TRACK = "default"
FAIL_TRACK = "fail"


class SignalKind(str, Enum):
    """Tipos de sinal de controle de fluxo (valor textual estável)."""

    HALT = "halt"


class _SkippedType:
    """Sentinela única de saída para Steps cujo guard avaliou falso.

    É verdadeira em contexto booleano, portanto o `is_failure` padrão
    trata um Step pulado como sucesso.
    """

    _instance: Optional["_SkippedType"] = None

    def __new__(cls) -> "_SkippedType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Skipped"

    def __copy__(self) -> "_SkippedType":
        return self

    def __deepcopy__(self, memo: Any) -> "_SkippedType":
        return self

    def __reduce__(self) -> str:
        return "SKIPPED"


SKIPPED = _SkippedType()


@dataclass(frozen=True)
class Signal:
    """
    Sinal de controle de fluxo retornado por uma operação.

    Campos:
        - kind: tipo do sinal (hoje apenas HALT)
        - output: valor de saída final do pipeline
        - success: override tri-state do veredito de sucesso
          (True/False substituem o cálculo do Engine; None mantém o cálculo)
    """

    kind: SignalKind
    output: Any = None
    success: Optional[bool] = None


@dataclass(frozen=True)
class Continue:
    """Resultado explícito de continuação; o Engine usa apenas `output`."""

    output: Any = None


def halt(output: Any = None, success: Optional[bool] = None) -> Signal:
    """Constrói um sinal de halt; a operação deve retorná-lo."""
    if success is not None and not isinstance(success, bool):
        raise TypeError("success override must be True, False or None")
    return Signal(kind=SignalKind.HALT, output=output, success=success)


def is_signal(value: Any) -> bool:
    return isinstance(value, Signal)


def unwrap(value: Any) -> Any:
    """Remove o envelope de `Signal`/`Continue`, devolvendo a saída crua."""
    if isinstance(value, (Signal, Continue)):
        return value.output
    return value
