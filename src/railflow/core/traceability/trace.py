# src/railflow/core/traceability/trace.py
"""
Trace: rastreabilidade de decisões de controle de fluxo.

Cada invocação de pipeline produz um `Trace`, a sequência ordenada de
`FlowControlRecord`s emitidos pelo Engine. Um registro descreve a
execução (ou o pulo por guard) de um Step: o track do Step, o track ativo
dali em diante, um snapshot congelado do contexto, a saída e o veredito.

Quando a operação de um Step delega a um pipeline aninhado, o sub-trace
inteiro é inserido no lugar de um único registro (`absorb`). O trace final
é sempre um caminho de auditoria plano e completo.

Invariantes:
    - O trace é append-only durante uma invocação
    - O snapshot de contexto de um registro nunca muda após criado
    - A ordem dos registros reflete a ordem real de execução

Limites explícitos:
    - Não executa Steps
    - Não persiste registros (sem I/O)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from ..pipeline.context import copy_context
from ..pipeline.step import OperationRef, operation_label
from ..pipeline.types import SignalKind


@dataclass(frozen=True)
class FlowControlRecord:
    """
    Registro imutável de uma decisão de controle de fluxo.

    Campos:
        - operation: referência da operação do Step (tag ou callable)
        - track: track do Step
        - next_track: track ativo a partir deste registro
        - context: snapshot do contexto após o Step, somente leitura no
          primeiro nível; containers aninhados pertencem ao registro e não
          devem ser mutados (use `to_dict` ou `thaw_context` para uma cópia)
        - output: saída do Step (sem envelope de Signal)
        - success: veredito de sucesso
        - signal_kind: tipo do sinal emitido, se houver
    """

    operation: OperationRef
    track: str
    next_track: str
    context: Mapping[str, Any]
    output: Any
    success: bool
    signal_kind: Optional[SignalKind] = None

    @property
    def halted(self) -> bool:
        return self.signal_kind is SignalKind.HALT

    def to_dict(self) -> Dict[str, Any]:
        """Representação em dicionário com contexto copiado (independente)."""
        return {
            "operation": operation_label(self.operation),
            "track": self.track,
            "next_track": self.next_track,
            "context": copy_context(self.context),
            "output": self.output,
            "success": self.success,
            "signal": self.signal_kind.value if self.signal_kind else None,
        }


class Trace:
    """Sequência ordenada de registros de uma invocação."""

    def __init__(self, records: Optional[List[FlowControlRecord]] = None) -> None:
        self._records: List[FlowControlRecord] = []
        for record in records or []:
            self.append(record)

    def append(self, record: FlowControlRecord) -> None:
        if not isinstance(record, FlowControlRecord):
            raise TypeError(f"Expected FlowControlRecord, received {type(record).__name__}")
        self._records.append(record)

    def absorb(self, sub_trace: "Trace") -> None:
        """Insere, em ordem, todos os registros de outro trace."""
        if not isinstance(sub_trace, Trace):
            raise TypeError(f"Expected Trace, received {type(sub_trace).__name__}")
        self._records.extend(sub_trace.records())

    def records(self) -> Tuple[FlowControlRecord, ...]:
        return tuple(self._records)

    # -----------------------------
    # Acessores derivados do último registro
    # -----------------------------
    @property
    def last(self) -> Optional[FlowControlRecord]:
        return self._records[-1] if self._records else None

    @property
    def output(self) -> Any:
        return self.last.output if self.last else None

    @property
    def success(self) -> bool:
        return self.last.success if self.last else True

    @property
    def context(self) -> Optional[Mapping[str, Any]]:
        return self.last.context if self.last else None

    @property
    def next_track(self) -> Optional[str]:
        return self.last.next_track if self.last else None

    @property
    def halted(self) -> bool:
        return bool(self.last and self.last.halted)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "records": [r.to_dict() for r in self._records],
            "success": self.success,
            "halted": self.halted,
        }

    # -----------------------------
    # Protocolo de sequência
    # -----------------------------
    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[FlowControlRecord]:
        return iter(tuple(self._records))

    def __getitem__(self, index: int) -> FlowControlRecord:
        return self._records[index]

    def __bool__(self) -> bool:
        # um sub-trace vazio continua sendo um trace (não "falsy")
        return True

    def __repr__(self) -> str:
        return f"Trace(records={len(self._records)}, success={self.success}, halted={self.halted})"
