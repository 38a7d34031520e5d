# src/atlas_railway/core/result.py
"""
Tipo canônico de resultado do Atlas Railway.

Este módulo define o `Result`, a união de duas variantes que trafega por
toda a Sequence:

    - Success(value)        → trilho de sucesso
    - Failure(error, step)  → trilho de falha, com o Step de origem

Princípios fundamentais:
    - Falhas de domínio são valores, não exceções
    - Variantes são imutáveis (frozen) e comparáveis por valor
    - A verificação de variante é feita por `isinstance`

Invariantes:
    - Um Result é exatamente uma das duas variantes
    - `Failure.step` identifica o Step que produziu a falha
      (preenchido pelos adapters; `None` apenas antes de sair de um Step)

Limites explícitos:
    - Não executa Steps
    - Não decide short-circuit (responsabilidade da Sequence)
    - Não define tipos de erro de aplicação

Este módulo existe para dar ao pipeline um canal explícito e tipado
para falhas esperadas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

from .exceptions import UnwrapFailureError

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Resultado bem-sucedido de um Step (ou da Sequence inteira)."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def value_or(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """
    Falha de domínio produzida por um Step.

    Campos:
        - error: o erro de domínio (valor livre ou exceção capturada)
        - step: nome do Step de origem, usado pelo Matcher para
          roteamento direcionado de falhas

    Decisões arquiteturais:
        - Operações `DIRECT` podem construir `Failure(error)` sem `step`;
          o adapter preenche a origem ao sair do Step
        - A falha nunca é levantada como exceção pelo core

    Limites explícitos:
        - Não carrega stack trace nem contexto de execução
    """

    error: E
    step: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> Any:
        raise UnwrapFailureError(
            f"unwrap() chamado em Failure (step={self.step!r}): {self.error!r}",
            failure=self,
        )

    def value_or(self, default: Any) -> Any:
        return default


Result = Union[Success[T], Failure[E]]


def is_result(obj: Any) -> bool:
    return isinstance(obj, (Success, Failure))
