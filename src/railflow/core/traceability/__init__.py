# src/railflow/core/traceability/__init__.py
"""
Pacote de rastreabilidade do railflow.

API pública exposta:
    - FlowControlRecord → registro imutável de uma decisão de fluxo
    - Trace             → sequência ordenada de registros de uma invocação

Decisões arquiteturais:
    - Sub-traces de pipelines aninhados são inseridos de forma plana
    - Nenhum registro é reordenado ou removido após inserido
"""

from .trace import FlowControlRecord, Trace

__all__ = ["FlowControlRecord", "Trace"]
