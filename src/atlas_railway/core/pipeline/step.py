# src/atlas_railway/core/pipeline/step.py
"""
Step canônico do Atlas Railway.

Um Step é a menor unidade executável de uma Sequence: associa um nome,
um adapter (`StepAdapter`), uma operação já resolvida e, para TRY/TEE,
o conjunto de tipos de erro recuperáveis (`catch`).

Responsabilidades de um Step:
    - montar os argumentos da chamada (`*extra_args, input`)
    - executar a operação sob a política do seu adapter
    - devolver um `Result` com a origem preenchida em caso de falha

Princípios fundamentais:
    - Steps são imutáveis após a construção
    - A operação é resolvida UMA vez, na construção da Sequence
    - O Step mantém apenas uma referência à operação; quem a possui é o resolver

Invariantes:
    - `name` é uma string não vazia
    - `catch` só é aceito para TRY e TEE
    - TRY declara ao menos um tipo de erro em `catch`
    - Todo tipo em `catch` é subclasse de `BaseException`

Limites explícitos:
    - Não conhece a Sequence nem outros Steps
    - Não publica notificações
    - Não decide short-circuit

Este módulo existe para isolar a semântica de um único passo
da orquestração da Sequence.
"""

from __future__ import annotations

from collections import abc
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Tuple

from atlas_railway.core.exceptions import InvalidStepError
from atlas_railway.core.result import Result

from .adapters import adapt
from .types import CatchKinds, Operation, StepAdapter


def normalize_catch(catch: Any) -> CatchKinds:
    """Normaliza `catch` para uma tupla de classes de exceção."""
    if catch is None:
        return ()
    if isinstance(catch, type):
        catch = (catch,)
    kinds = tuple(catch)
    for kind in kinds:
        if not (isinstance(kind, type) and issubclass(kind, BaseException)):
            raise InvalidStepError(
                f"catch deve conter apenas classes de exceção, recebido: {kind!r}",
                details={"received": repr(kind)},
            )
    return kinds


def normalize_extra_args(step_name: str, extra_args: Any) -> Tuple[Any, ...]:
    """Normaliza os argumentos extras de um Step para tupla.

    Aceita apenas sequências ordenadas (list, tuple); `str` e `bytes` são
    rejeitados para não serem espalhados caractere a caractere.
    """
    if extra_args is None:
        return ()
    if isinstance(extra_args, (str, bytes, bytearray)) or not isinstance(extra_args, abc.Sequence):
        raise TypeError(
            f"extra_args do step '{step_name}' deve ser lista ou tupla, "
            f"recebido: {type(extra_args).__name__}"
        )
    return tuple(extra_args)


@dataclass(frozen=True)
class Step:
    """
    Step imutável de uma Sequence.

    Campos:
        - name: nome único do Step dentro da Sequence
        - adapter: política de adaptação do retorno (`StepAdapter`)
        - operation: operação resolvida (referência não proprietária)
        - catch: tipos de erro convertidos em `Failure` (TRY/TEE)
        - identifier: chave usada no resolver (default: `name`)

    Decisões arquiteturais:
        - `catch` é normalizado para tupla na construção
        - Validações estruturais levantam `InvalidStepError`
        - A igualdade compara também a operação (por identidade)
    """

    name: str
    adapter: StepAdapter
    operation: Operation
    catch: CatchKinds = ()
    identifier: Optional[str] = field(default=None)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidStepError("step.name deve ser uma string não vazia")

        try:
            adapter = StepAdapter.from_kind(self.adapter)
        except ValueError as exc:
            raise InvalidStepError(str(exc), details={"step": self.name}) from exc
        object.__setattr__(self, "adapter", adapter)

        if not callable(self.operation):
            raise InvalidStepError(
                f"Operação do Step '{self.name}' não é chamável",
                details={"step": self.name, "received": type(self.operation).__name__},
            )

        catch = normalize_catch(self.catch)
        if catch and not adapter.accepts_catch:
            raise InvalidStepError(
                f"Step '{self.name}' ({adapter.value}) não aceita catch",
                details={"step": self.name, "adapter": adapter.value},
                hint="Use 'try' ou 'tee' para declarar erros recuperáveis.",
            )
        if adapter is StepAdapter.TRY and not catch:
            raise InvalidStepError(
                f"Step '{self.name}' (try) exige ao menos um tipo de erro em catch",
                details={"step": self.name},
            )
        object.__setattr__(self, "catch", catch)

        if self.identifier is None:
            object.__setattr__(self, "identifier", self.name)

    def invoke(self, extra_args: Sequence[Any], value: Any) -> Result:
        """Executa a operação com `(*extra_args, value)` sob o adapter do Step."""
        return adapt(
            self.adapter,
            step_name=self.name,
            operation=self.operation,
            catch=self.catch,
            extra_args=normalize_extra_args(self.name, extra_args),
            value=value,
        )
