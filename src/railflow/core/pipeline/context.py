# src/railflow/core/pipeline/context.py
"""
Contexto de execução do pipeline.

O contexto é um mapeamento de chaves string para valores arbitrários.
Durante uma invocação o Engine é dono do contexto "vivo"; cada registro
de controle de fluxo é dono de uma cópia independente e somente leitura.

Política de cópia (por valor):
    - `deepcopy`, compartilhando o memo entre chaves (aliases preservados)
    - valores que recusam `deepcopy` (locks, arquivos, sockets, geradores,
      sessões) recebem `copy.copy`
    - valores que recusam as duas cópias são compartilhados por referência

Invariantes:
    - Valores copiáveis nunca são alcançados por mutações posteriores do
      contexto vivo (por Steps seguintes ou pelo chamador)
    - O merge de defaults é raso e não muta nenhum dos inputs

Limites explícitos:
    - O snapshot é somente leitura apenas no primeiro nível; containers
      aninhados continuam mutáveis. Use `thaw_context` (ou
      `FlowControlRecord.to_dict`) para obter uma cópia de trabalho
    - Não executa Steps
    - Não valida o conteúdo do contexto
"""

from __future__ import annotations

from copy import Error as CopyError
from copy import copy, deepcopy
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

_UNCOPYABLE = (TypeError, CopyError)


def _copy_value(value: Any, memo: Dict[int, Any]) -> Any:
    try:
        return deepcopy(value, memo)
    except _UNCOPYABLE:
        pass
    try:
        return copy(value)
    except _UNCOPYABLE:
        return value


def copy_context(context: Mapping[str, Any]) -> Dict[str, Any]:
    """Cópia mutável de um contexto (vivo ou snapshot), profunda por valor."""
    memo: Dict[int, Any] = {}
    return {key: _copy_value(value, memo) for key, value in context.items()}


def snapshot_context(context: Mapping[str, Any]) -> Mapping[str, Any]:
    """Congela o estado atual do contexto em um proxy somente leitura."""
    return MappingProxyType(copy_context(context))


def thaw_context(snapshot: Mapping[str, Any]) -> Dict[str, Any]:
    """Recria um contexto vivo, independente, a partir de um snapshot."""
    return copy_context(snapshot)


def merge_context(
    defaults: Optional[Mapping[str, Any]],
    context: Optional[Mapping[str, Any]],
) -> Dict[str, Any]:
    """Mescla defaults e contexto explícito; chaves explícitas vencem."""
    merged: Dict[str, Any] = dict(defaults or {})
    merged.update(context or {})
    return merged
