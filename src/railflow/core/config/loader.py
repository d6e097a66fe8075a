# src/railflow/core/config/loader.py
"""
Loader canônico de configuração do railflow.

Este módulo carrega, valida estruturalmente e resolve a configuração
efetiva usada para construir pipelines.

A configuração é resolvida a partir de camadas:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional)

Cada camada é validada isoladamente antes do merge, de modo que um erro
aponta o arquivo de origem.

Seções reconhecidas:
    pipeline:
      defaults: {}          # contexto default mesclado em cada invocação
      extra_args: {}        # kwargs extras passados a operações e guards
      initial_track: default
    engine:
      log_level: WARNING

Chaves desconhecidas são preservadas sem validação.

Invariantes:
    - O arquivo de defaults é obrigatório
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults

Limites explícitos:
    - Não constrói pipelines (ver `Pipeline.from_config`)
    - Não persiste configuração
"""

from pathlib import Path
from typing import Any, Callable, Dict, Optional
import json
import logging

import yaml  # PyYAML

from ..pipeline.types import DEFAULT_TRACK
from .merge import deep_merge
from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigSectionError,
    UnsupportedConfigFormatError,
)

_PARSERS: Dict[str, Callable[[str], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": lambda text: json.loads(text) if text.strip() else None,
}


def _read_layer(path: Path) -> Dict[str, Any]:
    """
    Lê uma camada de configuração do disco.

    Conteúdo vazio equivale a `{}`.

    Raises:
        UnsupportedConfigFormatError: Se a extensão não tiver parser.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise UnsupportedConfigFormatError(
            f"Formato não suportado: {path.suffix or '<sem extensão>'} ({path}); "
            f"use um de {sorted(_PARSERS)}"
        )

    data = parser(path.read_text(encoding="utf-8"))
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"{path}: config root deve ser dict, recebido: {type(data).__name__}"
        )
    return data


def _section(config: Dict[str, Any], name: str, source: str) -> Dict[str, Any]:
    value = config.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidConfigSectionError(
            f"{source}: seção '{name}' deve ser dict, recebido: {type(value).__name__}"
        )
    return value


def validate_config(config: Dict[str, Any], *, source: str = "<config>") -> Dict[str, Any]:
    """
    Valida as seções reconhecidas de uma configuração.

    `source` identifica a origem nas mensagens de erro. Retorna o próprio
    dicionário para permitir encadeamento.

    Raises:
        InvalidConfigSectionError: Se alguma seção reconhecida for inválida.
    """
    pipeline = _section(config, "pipeline", source)
    for key in ("defaults", "extra_args"):
        value = pipeline.get(key)
        if value is not None and not isinstance(value, dict):
            raise InvalidConfigSectionError(
                f"{source}: 'pipeline.{key}' deve ser dict, recebido: {type(value).__name__}"
            )

    track = pipeline.get("initial_track")
    if track is not None and (not isinstance(track, str) or not track.strip()):
        raise InvalidConfigSectionError(
            f"{source}: 'pipeline.initial_track' deve ser string não vazia"
        )

    level = _section(config, "engine", source).get("log_level")
    if level is not None and not (
        isinstance(level, str) and isinstance(logging.getLevelName(level.upper()), int)
    ):
        raise InvalidConfigSectionError(f"{source}: 'engine.log_level' inválido: {level!r}")

    return config


def pipeline_settings(config: Dict[str, Any]) -> Dict[str, Any]:
    """Extrai os argumentos de construção do Pipeline a partir da config."""
    pipeline = _section(validate_config(config), "pipeline", "<config>")
    return {
        "defaults": dict(pipeline.get("defaults") or {}),
        "extra_args": dict(pipeline.get("extra_args") or {}),
        "initial_track": pipeline.get("initial_track") or DEFAULT_TRACK,
    }


def load_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva.

    Política de resolução:
        - O arquivo de defaults é obrigatório
        - O arquivo local é opcional; se ausente no disco, é ignorado
        - Quando presente, o local tem prioridade via `deep_merge`

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        InvalidConfigSectionError: Se uma seção reconhecida for inválida.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """
    defaults_file = Path(defaults_path)
    if not defaults_file.exists():
        raise DefaultsNotFoundError(f"Arquivo de defaults não encontrado: {defaults_file}")

    effective = validate_config(_read_layer(defaults_file), source=str(defaults_file))

    if local_path is not None and Path(local_path).exists():
        local = validate_config(_read_layer(Path(local_path)), source=str(local_path))
        effective = deep_merge(effective, local)

    return effective
