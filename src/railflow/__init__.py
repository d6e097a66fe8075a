# src/railflow/__init__.py
"""
railflow: pipelines railway-oriented com trace replayable.

Um pipeline é uma lista ordenada de Steps agrupados em tracks. O Engine
executa os Steps em ordem de declaração, apenas os do track ativo, e o
resultado de cada Step decide qual track fica ativo em seguida. Toda
invocação produz um `Trace` com as decisões de controle de fluxo.

Uso típico::

    from railflow import Pipeline, StepRegistry

    registry = (
        StepRegistry()
        .add_step(check_even)
        .add_failure_step(record_failure)
        .add_step(finalize)
    )
    trace = Pipeline(steps=registry.steps()).invoke({"n": 4})
"""

from .core.config import configure_logging, load_config
from .core.engine import Engine, PipelineHooks
from .core.exceptions import ConfigurationError, RailflowException
from .core.facade import Pipeline, build_pipeline
from .core.pipeline import (
    DEFAULT_TRACK,
    FAIL_TRACK,
    SKIPPED,
    Continue,
    Signal,
    SignalKind,
    Step,
    StepRegistry,
    halt,
)
from .core.traceability import FlowControlRecord, Trace

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Continue",
    "DEFAULT_TRACK",
    "Engine",
    "FAIL_TRACK",
    "FlowControlRecord",
    "Pipeline",
    "PipelineHooks",
    "RailflowException",
    "SKIPPED",
    "Signal",
    "SignalKind",
    "Step",
    "StepRegistry",
    "Trace",
    "build_pipeline",
    "configure_logging",
    "halt",
    "load_config",
]
