# src/atlas_railway/core/engine/matcher.py
"""
Matcher de resultado final.

Dado o `Result` final de uma chamada, o Matcher escolhe e executa no
máximo UM handler:

    - Success → o handler de sucesso (no máximo um registrado), com o valor
    - Failure → o primeiro handler de falha, em ordem de registro, cujo
      `step` é igual à origem do Failure; se nenhum casar por nome, o
      primeiro handler catch-all (`step=None`), com o erro

Decisões arquiteturais:
    - Handlers por nome têm precedência sobre catch-all, independentemente
      da ordem em que foram registrados entre si
    - Failure sem handler aplicável levanta `UnhandledFailureError`
    - Success sem handler não faz nada (retorna None)
    - Um Matcher criado por `Sequence.matcher()` valida nomes de Step no registro
    - Um `Matcher()` avulso não conhece a Sequence: aceita qualquer `step=`,
      e um nome digitado errado cai no catch-all. Prefira `Sequence.matcher()`

Limites explícitos:
    - Não trata exceções não declaradas (essas nunca chegam ao Matcher)
    - Não executa a Sequence
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from atlas_railway.core.exceptions import (
    MatcherConfigurationError,
    UnhandledFailureError,
    UnknownStepError,
)
from atlas_railway.core.result import Failure, Result, Success

Action = Callable[[Any], Any]


@dataclass(frozen=True)
class Handler:
    kind: str  # "success" | "failure"
    step: Optional[str]
    action: Action


class Matcher:
    """Registro ordenado de handlers de sucesso/falha."""

    def __init__(self, *, step_names: Optional[Iterable[str]] = None):
        self._handlers: List[Handler] = []
        self._step_names = None if step_names is None else frozenset(step_names)

    @property
    def handlers(self) -> List[Handler]:
        return list(self._handlers)

    def success(self, action: Action) -> Action:
        if any(h.kind == "success" for h in self._handlers):
            raise MatcherConfigurationError("Matcher aceita no máximo um handler de sucesso")
        self._handlers.append(Handler("success", None, action))
        return action

    def failure(self, action: Optional[Action] = None, *, step: Optional[str] = None) -> Any:
        """Registra handler de falha; usável direto ou como decorator.

            m.failure(handle, step="validate")

            @m.failure(step="validate")
            def handle(error): ...
        """
        if step is not None and self._step_names is not None and step not in self._step_names:
            raise UnknownStepError(
                f"Matcher: unknown step {step}",
                details={"step": step, "known": sorted(self._step_names)},
            )

        def register(fn: Action) -> Action:
            self._handlers.append(Handler("failure", step, fn))
            return fn

        if action is None:
            return register
        return register(action)

    def _select_failure(self, failure: Failure) -> Optional[Handler]:
        failure_handlers = [h for h in self._handlers if h.kind == "failure"]
        for handler in failure_handlers:
            if handler.step is not None and handler.step == failure.step:
                return handler
        for handler in failure_handlers:
            if handler.step is None:
                return handler
        return None

    def match(self, result: Result) -> Any:
        if isinstance(result, Success):
            for handler in self._handlers:
                if handler.kind == "success":
                    return handler.action(result.value)
            return None

        if isinstance(result, Failure):
            handler = self._select_failure(result)
            if handler is None:
                raise UnhandledFailureError(
                    f"Nenhum handler para falha do step {result.step!r}",
                    failure=result,
                )
            return handler.action(result.error)

        raise TypeError(f"match espera Success/Failure, recebido: {type(result).__name__}")

    __call__ = match


def match(result: Result, *, success: Optional[Action] = None, failure: Optional[Action] = None, **by_step: Action) -> Any:
    """Atalho funcional: `match(r, success=..., failure=..., validate=...)`.

    Handlers nomeados por keyword casam pelo nome do Step de origem; `failure`
    é o catch-all.

    Limites:
        - Nomes de Step não são validados (mesmo comportamento de `Matcher()`
          avulso); use `Sequence.matcher()` para validação no registro
        - Steps chamados `success`, `failure` ou `result` não podem ser
          roteados por keyword; registre-os com `Matcher.failure(..., step=...)`
    """
    m = Matcher()
    if success is not None:
        m.success(success)
    for step_name, action in by_step.items():
        m.failure(action, step=step_name)
    if failure is not None:
        m.failure(failure)
    return m.match(result)
