# src/atlas_railway/core/engine/sequence.py
"""
Sequence: executor Railway-Oriented do Atlas Railway.

Uma Sequence é uma lista ordenada e imutável de Steps. `call` executa os
Steps em ordem, repassando o valor desembrulhado de cada Success como
input do próximo, e interrompe no primeiro Failure.

Regras de execução:
    - Os argumentos extras de cada Step vêm de `extra_args[nome]` (default: nenhum)
    - Cada valor de `extra_args` é lista ou tupla; `str`/`bytes` levantam `TypeError`
    - Cada resultado é publicado no Notifier antes da decisão de continuar
    - Failure → retorno imediato; nenhum Step posterior executa ou é publicado
    - Todos Success → retorna o último Success (Sequence vazia → Success(input))
    - Exceções não declaradas em `catch` propagam para fora de `call`

Derivação:
    - `insert_before`, `insert_after` e `remove` retornam NOVAS Sequences
    - Registros do Notifier são copiados por nome; `remove` descarta os
      registros do Step removido (um Step novo com o mesmo nome começa sem listeners)

Concorrência:
    - Nenhum estado por chamada é guardado na Sequence
    - `subscribe` é operação de configuração (sem locking interno)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence as SequenceT, Tuple

from atlas_railway.core.exceptions import DuplicateStepNameError, UnknownStepError
from atlas_railway.core.pipeline.context import CallContext
from atlas_railway.core.pipeline.step import Step, normalize_extra_args
from atlas_railway.core.result import Failure, Result, Success
from atlas_railway.core.traceability import manifest as _manifest

from .matcher import Matcher
from .notifier import ALL, Notifier, Target

ExtraArgs = Mapping[str, SequenceT[Any]]


def _validate_unique(steps: SequenceT[Step]) -> None:
    seen = set()
    for step in steps:
        if step.name in seen:
            raise DuplicateStepNameError(
                f"Duplicate step name: {step.name}",
                details={"step": step.name},
            )
        seen.add(step.name)


def _merge_args(preset: ExtraArgs, given: Optional[ExtraArgs]) -> Dict[str, SequenceT[Any]]:
    merged: Dict[str, SequenceT[Any]] = dict(preset)
    merged.update(given or {})
    return merged


class Sequence:
    """Sequência imutável de Steps com execução short-circuit."""

    __slots__ = ("_steps", "_index", "_notifier")

    def __init__(self, steps: SequenceT[Step] = (), *, notifier: Optional[Notifier] = None):
        steps = tuple(steps)
        for step in steps:
            if not isinstance(step, Step):
                raise TypeError(f"Sequence aceita apenas Step, recebido: {type(step).__name__}")
        _validate_unique(steps)
        self._steps: Tuple[Step, ...] = steps
        self._index: Dict[str, int] = {s.name: i for i, s in enumerate(steps)}
        self._notifier = notifier if notifier is not None else Notifier()

    # ------------------------------------------------------------------
    # Inspeção
    # ------------------------------------------------------------------
    @property
    def steps(self) -> Tuple[Step, ...]:
        return self._steps

    @property
    def step_names(self) -> List[str]:
        return [s.name for s in self._steps]

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    def get(self, name: str) -> Step:
        return self._steps[self._position(name)]

    def describe(self) -> List[Dict[str, Any]]:
        """Descrição estrutural serializável (usada no hash do Manifest)."""
        return [
            {
                "name": s.name,
                "kind": s.adapter.value,
                "with": s.identifier,
                "catch": [f"{k.__module__}.{k.__qualname__}" for k in s.catch],
            }
            for s in self._steps
        ]

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __repr__(self) -> str:
        inner = ", ".join(f"{s.adapter.value}({s.name})" for s in self._steps)
        return f"Sequence([{inner}])"

    def _position(self, name: str) -> int:
        if name not in self._index:
            raise UnknownStepError(
                f"Unknown step: {name}",
                details={"step": name, "known": self.step_names},
            )
        return self._index[name]

    # ------------------------------------------------------------------
    # Notificações
    # ------------------------------------------------------------------
    def subscribe(self, target: Target, listener: Any) -> "Sequence":
        """Registra `listener` para um Step (por nome) ou para `ALL`.

        Retorna a própria Sequence para permitir encadeamento na configuração.
        """
        if target is not ALL:
            self._position(target)
        self._notifier.subscribe(target, listener)
        return self

    def unsubscribe(self, target: Target, listener: Any) -> None:
        self._notifier.unsubscribe(target, listener)

    # ------------------------------------------------------------------
    # Derivação
    # ------------------------------------------------------------------
    def _derive(self, steps: SequenceT[Step]) -> "Sequence":
        return Sequence(steps, notifier=self._notifier.copy())

    def _insert_at(self, position: int, step: Step) -> "Sequence":
        if step.name in self._index:
            raise DuplicateStepNameError(
                f"Duplicate step name: {step.name}",
                details={"step": step.name},
            )
        steps = list(self._steps)
        steps.insert(position, step)
        return self._derive(steps)

    def insert_before(self, anchor: str, step: Step) -> "Sequence":
        return self._insert_at(self._position(anchor), step)

    def insert_after(self, anchor: str, step: Step) -> "Sequence":
        return self._insert_at(self._position(anchor) + 1, step)

    def remove(self, name: str) -> "Sequence":
        position = self._position(name)
        derived = self._derive(self._steps[:position] + self._steps[position + 1:])
        derived._notifier.discard(name)
        return derived

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------
    def _check_extra_args(self, extra_args: ExtraArgs) -> None:
        unknown = [name for name in extra_args if name not in self._index]
        if unknown:
            raise UnknownStepError(
                f"extra_args referencia steps desconhecidos: {unknown}",
                details={"unknown": unknown, "known": self.step_names},
            )
        for name, args in extra_args.items():
            normalize_extra_args(name, args)

    def call(self, value: Any, extra_args: Optional[ExtraArgs] = None, *, ctx: Optional[CallContext] = None) -> Result:
        extra_args = extra_args or {}
        self._check_extra_args(extra_args)

        result: Result = Success(value)
        for step in self._steps:
            if ctx is not None:
                _trace_started(ctx, step)

            result = step.invoke(extra_args.get(step.name, ()), value)

            if ctx is not None:
                _trace_finished(ctx, step, result)

            self._notifier.publish(step.name, result)

            if isinstance(result, Failure):
                return result
            value = result.value

        return result

    __call__ = call

    def with_step_args(self, **step_args: SequenceT[Any]) -> Callable[..., Result]:
        """Retorna uma chamada com argumentos extras pré-definidos por Step.

        Argumentos passados na chamada final têm precedência, por Step.
        """
        self._check_extra_args(step_args)
        preset = dict(step_args)

        def bound(value: Any, extra_args: Optional[ExtraArgs] = None, *, ctx: Optional[CallContext] = None) -> Result:
            return self.call(value, _merge_args(preset, extra_args), ctx=ctx)

        return bound

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------
    def matcher(self) -> Matcher:
        """Matcher vinculado a esta Sequence (valida nomes de Step em `failure`)."""
        return Matcher(step_names=self.step_names)

    def call_and_match(
        self,
        value: Any,
        matcher: Matcher,
        extra_args: Optional[ExtraArgs] = None,
        *,
        ctx: Optional[CallContext] = None,
    ) -> Any:
        return matcher.match(self.call(value, extra_args, ctx=ctx))


# ----------------------------------------------------------------------
# Rastreamento (CallContext + Manifest opcional)
# ----------------------------------------------------------------------
def _now() -> datetime:
    return datetime.now(timezone.utc)


def _trace_started(ctx: CallContext, step: Step) -> None:
    ctx.log(step=step.name, level="DEBUG", message="step.started", kind=step.adapter.value)
    if ctx.manifest is not None:
        _manifest.step_started(ctx.manifest, step=step.name, kind=step.adapter.value, ts=_now())


def _trace_finished(ctx: CallContext, step: Step, result: Result) -> None:
    if isinstance(result, Failure):
        ctx.log(
            step=step.name,
            level="WARNING",
            message="step.failed",
            error_class=result.error.__class__.__name__,
        )
        if ctx.manifest is not None:
            _manifest.step_failed(ctx.manifest, step=step.name, ts=_now(), failure=result)
        return

    ctx.log(step=step.name, level="INFO", message="step.succeeded")
    if ctx.manifest is not None:
        _manifest.step_succeeded(ctx.manifest, step=step.name, ts=_now())
