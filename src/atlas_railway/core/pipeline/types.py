# src/atlas_railway/core/pipeline/types.py
"""
Tipos canônicos do pipeline do Atlas Railway.

Este módulo define o enum `StepAdapter`, a política fechada que converte
o retorno (ou a exceção) de uma operação em um `Result`.

Variantes definidas:
    - DIRECT → a operação já retorna um Result
    - MAP    → a operação retorna um valor qualquer, embrulhado em Success
    - TRY    → a operação pode levantar; erros declarados viram Failure
    - TEE    → a operação é executada por efeito colateral; o input segue

Princípios fundamentais:
    - O conjunto de variantes é fechado (exatamente quatro)
    - O valor textual de cada variante é o `kind` da superfície de construção
    - Nenhuma lógica de execução vive neste módulo

Invariantes:
    - Enums possuem valores textuais canônicos e estáveis
    - Adapters não possuem estado mutável

Limites explícitos:
    - Não executa operações (ver `adapters`)
    - Não resolve operações
    - Não decide short-circuit

Este módulo existe para garantir consistência e clareza semântica
na construção de Steps.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Tuple, Type

Operation = Callable[..., Any]
CatchKinds = Tuple[Type[BaseException], ...]


class StepAdapter(str, Enum):
    """
    Política de adaptação do retorno de uma operação em `Result`.

    Os valores são strings para facilitar:
        - construção declarativa (config YAML/JSON)
        - persistência em Manifest
        - inspeção e relatórios

    Decisões arquiteturais:
        - `DIRECT` usa o valor "step" (o kind padrão da superfície de construção)
        - Apenas `TRY` e `TEE` aceitam `catch`
        - `TRY` exige ao menos um tipo de erro em `catch`

    Invariantes:
        - Todo Step possui exatamente um adapter
        - O conjunto de variantes é fechado
    """
    DIRECT = "step"
    MAP = "map"
    TRY = "try"
    TEE = "tee"

    @property
    def accepts_catch(self) -> bool:
        return self in (StepAdapter.TRY, StepAdapter.TEE)

    @classmethod
    def from_kind(cls, kind: str) -> "StepAdapter":
        """Resolve o adapter a partir do `kind` textual (case-insensitive)."""
        if isinstance(kind, StepAdapter):
            return kind
        normalized = str(kind).strip().lower()
        for adapter in cls:
            if adapter.value == normalized:
                return adapter
        raise ValueError(
            f"Kind de Step desconhecido: {kind!r} "
            f"(esperado um de {[a.value for a in cls]})"
        )
