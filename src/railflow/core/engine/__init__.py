# src/railflow/core/engine/__init__.py
"""
Engine do railflow.

Este pacote contém o executor railway-oriented: percorre Steps em ordem
de declaração, filtra pelo track ativo, avalia guards, determina sucesso,
insere sub-traces de pipelines aninhados e respeita halts por Step.

Limites explícitos:
    - Não constrói pipelines (ver `core.facade`)
    - Não contém lógica de negócio
"""

from .engine import Engine, PipelineHooks

__all__ = ["Engine", "PipelineHooks"]
