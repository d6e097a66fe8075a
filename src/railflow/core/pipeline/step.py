# src/railflow/core/pipeline/step.py
"""
Descritor canônico de Step do railflow.

Um Step é a menor unidade do pipeline: uma operação, o track ao qual
pertence, um guard e a flag `always_pass`.

Operações e guards podem ser:
    - um callable independente
    - uma tag string, resolvida uma única vez, na construção do pipeline,
      por uma tabela explícita de operações (`resolve_steps`)

Convenção de chamada:
    `fn(context, **arguments)`, onde `arguments` é o contexto mesclado
    com os `extra_args` do pipeline (estes vencem). Cada callable recebe
    apenas as keywords que sua assinatura aceita: `def op(ctx)` não
    recebe nenhuma, `def op(ctx, *, n, **_)` recebe todas. O nome do
    parâmetro posicional de contexto nunca é repassado como keyword.

Invariantes:
    - Um Step nunca é alterado após criado (frozen)
    - Tags desconhecidas são rejeitadas antes de qualquer invocação
    - Configuração malformada resulta em `ConfigurationError`

Limites explícitos:
    - Não decide sucesso nem troca de track
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple, Union

from ..exceptions import ConfigurationError
from .types import DEFAULT_TRACK

Operation = Callable[..., Any]
OperationRef = Union[str, Operation]
GuardRef = Union[bool, str, Operation]

_KEYWORD_KINDS = (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)
_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _is_tag(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def operation_label(ref: Any) -> str:
    if isinstance(ref, str):
        return ref
    return getattr(ref, "__name__", None) or repr(ref)


@dataclass(frozen=True)
class KeywordPolicy:
    """Keywords que um callable aceita, derivadas da sua assinatura."""

    names: FrozenSet[str] = frozenset()
    accepts_any: bool = False
    context_param: Optional[str] = None

    def select(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        if self.accepts_any:
            return {k: v for k, v in arguments.items() if k != self.context_param}
        return {k: v for k, v in arguments.items() if k in self.names}


def keyword_policy(fn: Operation) -> KeywordPolicy:
    try:
        params = list(inspect.signature(fn).parameters.values())
    except (TypeError, ValueError):
        # sem assinatura introspectável (alguns builtins): repassa tudo
        return KeywordPolicy(accepts_any=True)

    context_param = None
    if params and params[0].kind in _POSITIONAL_KINDS:
        context_param = params.pop(0).name

    return KeywordPolicy(
        names=frozenset(p.name for p in params if p.kind in _KEYWORD_KINDS),
        accepts_any=any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params),
        context_param=context_param,
    )


@dataclass(frozen=True)
class Step:
    """
    Descritor imutável de um estágio do pipeline.

    Campos:
        - operation: tag string ou callable
        - track: rótulo do track (default "default")
        - guard: bool literal, tag string ou callable (default True)
        - always_pass: força sucesso independentemente da saída
    """

    operation: OperationRef
    track: str = DEFAULT_TRACK
    guard: GuardRef = True
    always_pass: bool = False

    def __post_init__(self) -> None:
        if not (_is_tag(self.operation) or callable(self.operation)):
            raise ConfigurationError(
                message="Step operation must be a non-empty name or a callable",
                details={"operation": repr(self.operation)},
                hint="Pass a function or the tag of an operation registered on the pipeline.",
            )

        if not _is_tag(self.track):
            raise ConfigurationError(
                message="Step track must be a non-empty string",
                details={"operation": operation_label(self.operation), "track": repr(self.track)},
            )

        if not (isinstance(self.guard, bool) or _is_tag(self.guard) or callable(self.guard)):
            raise ConfigurationError(
                message="Step guard must be a bool, a name or a callable",
                details={"operation": operation_label(self.operation), "guard": repr(self.guard)},
            )

        if not isinstance(self.always_pass, bool):
            raise ConfigurationError(
                message="Step always_pass must be a bool",
                details={"operation": operation_label(self.operation), "always_pass": repr(self.always_pass)},
            )

    @property
    def label(self) -> str:
        return operation_label(self.operation)


@dataclass(frozen=True)
class BoundStep:
    """Step com operação e guard já resolvidos para callables."""

    step: Step
    call: Operation
    guard: Union[bool, Operation]
    call_keywords: KeywordPolicy = field(default_factory=lambda: KeywordPolicy(accepts_any=True))
    guard_keywords: KeywordPolicy = field(default_factory=lambda: KeywordPolicy(accepts_any=True))

    @property
    def operation(self) -> OperationRef:
        return self.step.operation

    @property
    def track(self) -> str:
        return self.step.track

    @property
    def always_pass(self) -> bool:
        return self.step.always_pass

    @property
    def label(self) -> str:
        return self.step.label

    def allows(self, context: Dict[str, Any], arguments: Mapping[str, Any]) -> bool:
        if isinstance(self.guard, bool):
            return self.guard
        return bool(self.guard(context, **self.guard_keywords.select(arguments)))

    def run(self, context: Dict[str, Any], arguments: Mapping[str, Any]) -> Any:
        return self.call(context, **self.call_keywords.select(arguments))


def _resolve(ref: OperationRef, operations: Mapping[str, Operation], *, role: str) -> Operation:
    if not isinstance(ref, str):
        return ref

    try:
        fn = operations[ref]
    except KeyError:
        raise ConfigurationError(
            message=f"Unknown {role} '{ref}'",
            details={"name": ref, "known": sorted(operations)},
            hint="Register the name in the pipeline's operation table.",
        ) from None

    if not callable(fn):
        raise ConfigurationError(
            message=f"Operation table entry '{ref}' is not callable",
            details={"name": ref, "type": type(fn).__name__},
        )
    return fn


def bind_step(step: Step, operations: Mapping[str, Operation]) -> BoundStep:
    """Resolve a operação e o guard de um Step usando a tabela fornecida."""
    if not isinstance(step, Step):
        raise ConfigurationError(
            message="Pipeline steps must be Step instances",
            details={"received": type(step).__name__},
        )

    guard = step.guard
    guard_keywords = KeywordPolicy()
    if not isinstance(guard, bool):
        guard = _resolve(guard, operations, role="guard")
        guard_keywords = keyword_policy(guard)

    call = _resolve(step.operation, operations, role="operation")
    return BoundStep(
        step=step,
        call=call,
        guard=guard,
        call_keywords=keyword_policy(call),
        guard_keywords=guard_keywords,
    )


def resolve_steps(
    steps: Iterable[Step],
    operations: Mapping[str, Operation],
) -> Tuple[BoundStep, ...]:
    """Resolve todos os Steps de uma vez, preservando a ordem declarada."""
    return tuple(bind_step(step, operations) for step in steps)
