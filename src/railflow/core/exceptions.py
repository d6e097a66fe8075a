"""
railflow: exceções canônicas

Este módulo define as exceções tipadas internas do railflow.

Objetivo:
- Separar falhas de construção (configuração de pipeline) de falhas de negócio
- Carregar dados estruturados para diagnóstico (details + hint)
- Evitar ValueError/TypeError genéricos nos guardrails de build

Regras:
- Falha de negócio é dado no trace, nunca exceção.
- Exceções levantadas por operações do usuário não são encapsuladas aqui.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True, eq=False)
class RailflowException(Exception):
    """Base class para exceções internas do railflow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, eq=False)
class ConfigurationError(RailflowException):
    """Step malformado ou referência de operação irresolúvel (erro de build)."""
