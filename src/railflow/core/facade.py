# src/railflow/core/facade.py
"""
Pipeline: fachada invocável do railflow.

Um `Pipeline` associa, em um único objeto invocável:
    - uma lista de Steps (explícita ou a do `registry` da classe)
    - um contexto default mesclado em toda invocação
    - `extra_args` repassados a operações e guards como kwargs
    - um pós-processador opcional do Trace final

Especialização:
    Subclasses declaram seus Steps com `Parent.registry.derive()...` e
    expõem operações nomeadas por `operations()`, uma tabela explícita
    resolvida uma única vez na construção. Hooks (`after_step`,
    `is_failure`, `after_flow_control`) podem ser sobrescritos.

Invariantes:
    - Tags desconhecidas falham na construção, nunca na invocação
    - A lista de Steps é um snapshot imutável tirado na construção
    - Defaults nunca são mutados por invocações

Limites explícitos:
    - Não carrega arquivos (ver `core.config`)
    - Não captura exceções de operações
"""

from __future__ import annotations

import logging
from collections.abc import Mapping as MappingABC
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Type

from .config.loader import pipeline_settings
from .engine.engine import Engine
from .exceptions import ConfigurationError
from .pipeline.context import merge_context
from .pipeline.registry import StepRegistry
from .pipeline.step import BoundStep, Operation, Step, resolve_steps
from .pipeline.types import DEFAULT_TRACK, Signal, halt
from .traceability.trace import FlowControlRecord, Trace

logger = logging.getLogger(__name__)

PostProcessor = Callable[[Trace], Any]


class Pipeline:
    """Pipeline railway-oriented invocável."""

    registry: Optional[StepRegistry] = None

    def __init__(
        self,
        *,
        steps: Optional[Iterable[Step]] = None,
        defaults: Optional[Mapping[str, Any]] = None,
        extra_args: Optional[Mapping[str, Any]] = None,
        post_processor: Optional[PostProcessor] = None,
        operations: Optional[Mapping[str, Operation]] = None,
        initial_track: str = DEFAULT_TRACK,
    ) -> None:
        if steps is None:
            steps = self.registry.steps() if self.registry is not None else ()

        if post_processor is not None and not callable(post_processor):
            raise ConfigurationError(
                message="post_processor must be callable",
                details={"type": type(post_processor).__name__},
            )

        if not isinstance(initial_track, str) or not initial_track.strip():
            raise ConfigurationError(
                message="initial_track must be a non-empty string",
                details={"initial_track": repr(initial_track)},
            )

        table: Dict[str, Operation] = dict(self.operations())
        table.update(operations or {})

        self._steps: Tuple[BoundStep, ...] = resolve_steps(tuple(steps), table)
        self._defaults: Dict[str, Any] = dict(defaults or {})
        self._extra_args: Dict[str, Any] = dict(extra_args or {})
        self._post_processor = post_processor
        self._initial_track = initial_track

    # ------------------------------------------------------------------
    # Construção alternativa
    # ------------------------------------------------------------------
    @classmethod
    def call(cls, context: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Any:
        """Constrói o pipeline e o invoca uma única vez."""
        return cls(**kwargs).invoke(context)

    @classmethod
    def from_config(cls, config: Mapping[str, Any], **kwargs: Any) -> "Pipeline":
        """Constrói a partir de uma config resolvida; kwargs explícitos vencem."""
        settings = pipeline_settings(dict(config))
        settings.update(kwargs)
        return cls(**settings)

    # ------------------------------------------------------------------
    # Pontos de extensão
    # ------------------------------------------------------------------
    def operations(self) -> Mapping[str, Operation]:
        """Tabela de operações nomeadas desta classe de pipeline."""
        return {}

    def after_step(self, output: Any) -> Any:
        return output

    def is_failure(self, output: Any) -> bool:
        return not output

    def after_flow_control(self, record: FlowControlRecord) -> None:
        return None

    def fail(self, output: Any = None) -> Signal:
        """Halt com veredito de falha; a operação deve retornar o sinal."""
        return halt(output, success=False)

    def pass_(self, output: Any = None) -> Signal:
        """Halt com veredito de sucesso; a operação deve retornar o sinal."""
        return halt(output, success=True)

    # ------------------------------------------------------------------
    # Invocação
    # ------------------------------------------------------------------
    @property
    def steps(self) -> Tuple[BoundStep, ...]:
        return self._steps

    @property
    def defaults(self) -> Dict[str, Any]:
        return dict(self._defaults)

    def invoke(self, context: Optional[Mapping[str, Any]] = None) -> Any:
        if context is not None and not isinstance(context, MappingABC):
            raise TypeError(f"context must be a mapping, received {type(context).__name__}")

        engine = Engine(steps=self._steps, hooks=self, extra_args=self._extra_args)
        trace = engine.run(merge_context(self._defaults, context), track=self._initial_track)
        logger.debug(
            "%s finished: %d records, success=%s, halted=%s",
            type(self).__name__,
            len(trace),
            trace.success,
            trace.halted,
        )

        if self._post_processor is not None:
            return self._post_processor(trace)
        return trace

    __call__ = invoke


def build_pipeline(
    steps: Optional[Iterable[Step]] = None,
    defaults: Optional[Mapping[str, Any]] = None,
    extra_args: Optional[Mapping[str, Any]] = None,
    post_processor: Optional[PostProcessor] = None,
    *,
    registry: Optional[StepRegistry] = None,
    operations: Optional[Mapping[str, Operation]] = None,
    initial_track: str = DEFAULT_TRACK,
    pipeline_cls: Type[Pipeline] = Pipeline,
) -> Pipeline:
    """
    Constrói um Pipeline invocável.

    Precedência de Steps: `steps` explícitos, depois `registry`, depois o
    registry declarado em `pipeline_cls`.

    Raises:
        ConfigurationError: Se algum Step for malformado ou irresolúvel.
    """
    if steps is None and registry is not None:
        steps = registry.steps()

    return pipeline_cls(
        steps=steps,
        defaults=defaults,
        extra_args=extra_args,
        post_processor=post_processor,
        operations=operations,
        initial_track=initial_track,
    )
