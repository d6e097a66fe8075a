# src/railflow/core/config/log_level.py
"""Aplicação de `engine.log_level` ao logger raiz do railflow."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

ROOT_LOGGER = "railflow"
DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging(config: Optional[Dict[str, Any]] = None) -> int:
    """Define o nível do logger `railflow` e retorna o valor numérico aplicado.

    Nenhum handler é instalado; isso é responsabilidade da aplicação.
    """
    engine_cfg = (config or {}).get("engine", {}) or {}
    name = str(engine_cfg.get("log_level") or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")

    logging.getLogger(ROOT_LOGGER).setLevel(level)
    return level
