# src/atlas_railway/core/pipeline/adapters.py
"""
Semântica de execução dos adapters de Step.

Este módulo implementa, com uma função explícita por variante, a
conversão do retorno de uma operação em `Result`:

    | Adapter | Sucesso                    | Falha                                   |
    |---------|----------------------------|-----------------------------------------|
    | DIRECT  | Result repassado           | Result repassado (origem = este Step)   |
    | MAP     | Success(retorno)           | nunca falha no nível do adapter         |
    | TRY     | Success(retorno)           | erro em `catch` → Failure(erro)         |
    | TEE     | Success(input original)    | erro em `catch` → Failure(erro)         |

Decisões arquiteturais:
    - O despacho é um encadeamento fechado terminado em `assert_never`,
      de modo que um adapter novo sem handler é apontado pelo type checker
    - TRY/TEE são a ÚNICA fronteira onde exceções são interceptadas
    - Exceções fora de `catch` propagam sem encapsulamento
    - Argumentos extras precedem o input: `operation(*extra_args, input)`

Invariantes:
    - Todo `Failure` que sai deste módulo tem `step` igual ao nome do Step
    - Nenhum estado é mantido entre chamadas

Limites explícitos:
    - Não publica notificações
    - Não decide short-circuit
    - Não registra eventos de log
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Sequence, assert_never

from atlas_railway.core.exceptions import InvalidStepOutputError
from atlas_railway.core.result import Failure, Result, Success

from .types import CatchKinds, Operation, StepAdapter


def _with_origin(result: Result, step_name: str) -> Result:
    if isinstance(result, Failure) and result.step != step_name:
        return replace(result, step=step_name)
    return result


def adapt_direct(step_name: str, operation: Operation, catch: CatchKinds, extra_args: Sequence[Any], value: Any) -> Result:
    out = operation(*extra_args, value)
    if not isinstance(out, (Success, Failure)):
        raise InvalidStepOutputError(
            f"Step '{step_name}' (adapter 'step') deve retornar Success/Failure, "
            f"recebido: {type(out).__name__}"
        )
    return _with_origin(out, step_name)


def adapt_map(step_name: str, operation: Operation, catch: CatchKinds, extra_args: Sequence[Any], value: Any) -> Result:
    return Success(operation(*extra_args, value))


def adapt_try(step_name: str, operation: Operation, catch: CatchKinds, extra_args: Sequence[Any], value: Any) -> Result:
    try:
        out = operation(*extra_args, value)
    except catch as exc:
        return Failure(exc, step_name)
    return Success(out)


def adapt_tee(step_name: str, operation: Operation, catch: CatchKinds, extra_args: Sequence[Any], value: Any) -> Result:
    # `except ()` não captura nada: sem `catch`, qualquer erro propaga
    try:
        operation(*extra_args, value)
    except catch as exc:
        return Failure(exc, step_name)
    return Success(value)


def adapt(
    adapter: StepAdapter,
    *,
    step_name: str,
    operation: Operation,
    catch: CatchKinds,
    extra_args: Sequence[Any],
    value: Any,
) -> Result:
    """Executa `operation` sob a política de `adapter` e retorna o `Result`."""
    if adapter is StepAdapter.DIRECT:
        return adapt_direct(step_name, operation, catch, extra_args, value)
    elif adapter is StepAdapter.MAP:
        return adapt_map(step_name, operation, catch, extra_args, value)
    elif adapter is StepAdapter.TRY:
        return adapt_try(step_name, operation, catch, extra_args, value)
    elif adapter is StepAdapter.TEE:
        return adapt_tee(step_name, operation, catch, extra_args, value)
    else:
        assert_never(adapter)
