# tests/conftest.py
"""
Fixtures compartilhados para testes do railflow.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações YAML mínimas (defaults + override local) como strings
- operações de exemplo determinísticas (par/ímpar)
- um registry pronto com o cenário canônico de dois tracks
- uma subclasse de Pipeline que grava os registros observados

Invariantes:
    - Nenhuma fixture realiza I/O (arquivos são escritos pelos testes em tmp_path)
    - Operações de exemplo não dependem de estado global

Limites explícitos:
    - Não substituir testes de integração (ver tests/e2e)
"""

import pytest


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def config_defaults_yaml() -> str:
    """
    YAML de configuração padrão semelhante ao uso real do projeto.

    Representa o conteúdo típico de um `railflow.defaults.yaml`, base
    sobre a qual a configuração local é aplicada via deep-merge.
    """
    return """\
engine:
  log_level: INFO
pipeline:
  initial_track: default
  defaults:
    currency: EUR
    retries: 0
  extra_args:
    region: eu
"""


@pytest.fixture
def config_local_yaml() -> str:
    """YAML de override local: muda o nível de log e um default de contexto."""
    return """\
engine:
  log_level: DEBUG
pipeline:
  defaults:
    currency: USD
"""


# =====================================================
# Pipeline fixtures
# =====================================================

@pytest.fixture
def even_odd_operations() -> dict:
    """
    Operações do cenário canônico de dois tracks.

    - check_even: sucesso quando `n` é par
    - record_fail: anota a falha no contexto
    - finalize: marca o contexto como concluído
    """

    def check_even(ctx):
        return ctx["n"] % 2 == 0

    def record_fail(ctx):
        ctx["failed"] = ctx["n"]
        return ctx["n"]

    def finalize(ctx):
        ctx["done"] = True
        return "ok"

    return {
        "check_even": check_even,
        "record_fail": record_fail,
        "finalize": finalize,
    }


@pytest.fixture
def even_odd_registry():
    """Registry S1(default) → S2(fail) → S3(default) com tags nomeadas."""
    from railflow.core.pipeline.registry import StepRegistry

    return (
        StepRegistry()
        .add_step("check_even")
        .add_failure_step("record_fail")
        .add_step("finalize")
    )


@pytest.fixture
def RecordingPipeline():
    """
    Fixture factory que fornece uma subclasse de Pipeline observável.

    A classe retornada grava, em `observed`, cada registro entregue ao
    hook `after_flow_control`, permitindo verificar a ordem e o número
    de notificações sem acoplar o teste ao Engine.
    """
    from railflow.core.facade import Pipeline

    class _RecordingPipeline(Pipeline):
        def __init__(self, **kwargs):
            self.observed = []
            super().__init__(**kwargs)

        def after_flow_control(self, record):
            self.observed.append(record)

    return _RecordingPipeline
