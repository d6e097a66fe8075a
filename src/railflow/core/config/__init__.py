# src/railflow/core/config/__init__.py
"""
Camada de configuração do railflow.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução da configuração final via deep-merge determinístico
    - Validação estrutural das seções `pipeline` e `engine`
    - Aplicação do nível de log configurado

Limites explícitos:
    - Não executa pipeline
    - Não interage com Engine ou Steps diretamente
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigSectionError,
    UnsupportedConfigFormatError,
)
from .loader import load_config, pipeline_settings, validate_config
from .log_level import configure_logging
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidConfigSectionError",
    "UnsupportedConfigFormatError",
    "configure_logging",
    "deep_merge",
    "load_config",
    "pipeline_settings",
    "validate_config",
]
