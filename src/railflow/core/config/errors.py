# src/railflow/core/config/errors.py
"""
Exceções canônicas da camada de configuração do railflow.

Este módulo define a hierarquia de exceções utilizadas durante o
carregamento, merge e validação estrutural de arquivos de configuração.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa falha de negócio de um Step

Limites explícitos:
    - Não executa pipeline
    - Não realiza fallback ou recovery
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do railflow.

    Todas as exceções levantadas durante carregamento, merge e validação
    estrutural de configuração herdam desta classe, permitindo captura
    genérica sem confundir com erros de construção de pipeline
    (`ConfigurationError`) ou com defeitos de operações.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Levantada quando o arquivo de configuração base (defaults) não existe.

    Limites explícitos:
        - Não tenta inferir ou criar defaults automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Levantada quando a extensão do arquivo não é suportada.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Levantada quando o conteúdo raiz do arquivo não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"engine": {"log_level": "INFO"}}
        - override: {"engine": "DEBUG"}
    """


class InvalidConfigSectionError(ConfigError):
    """
    Levantada quando uma seção reconhecida possui tipo ou valor inválido.

    Seções reconhecidas:
        - pipeline.defaults      → dict
        - pipeline.extra_args    → dict
        - pipeline.initial_track → string não vazia
        - engine.log_level       → nome de nível do módulo `logging`
    """
