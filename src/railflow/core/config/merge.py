# src/railflow/core/config/merge.py
"""
Deep-merge de camadas de configuração (defaults ← local).

Política de merge:
    - dict → merge recursivo por chave
    - list → sobrescrita total
    - escalar → sobrescrita direta
    - `None` em qualquer lado significa "não definido" e nunca conflita
    - conflito de tipos → `ConfigTypeConflictError` com o caminho pontuado
      da chave (ex.: `pipeline.defaults.currency`)

Observação: este merge é usado apenas entre arquivos de configuração.
O merge de contexto feito pelo Pipeline é raso (ver `pipeline.context`).
"""

from copy import deepcopy
from typing import Any, Dict, Tuple

from .errors import ConfigTypeConflictError


def _dotted(path: Tuple[str, ...]) -> str:
    return ".".join(path) or "<root>"


def _merge_value(path: Tuple[str, ...], base: Any, override: Any) -> Any:
    if isinstance(base, dict) and isinstance(override, dict):
        merged = dict(base)
        for key, value in override.items():
            merged[key] = _merge_value(path + (str(key),), base.get(key), value)
        return merged

    if base is None or override is None or isinstance(override, list):
        return override if override is not None else base

    if type(base) is not type(override):
        raise ConfigTypeConflictError(
            f"Conflito de tipo em '{_dotted(path)}': "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    return override


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Mescla `override` sobre `base` e devolve uma nova estrutura independente.

    Nenhum dos inputs é mutado. Uma chave com valor `None` no override não
    apaga o valor da base.

    Raises:
        ConfigTypeConflictError: Se algum dos lados não for dict na raiz, ou
            se base e override divergirem de tipo em uma mesma chave.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    return deepcopy(_merge_value((), base, override))
