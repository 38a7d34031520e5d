# src/atlas_railway/core/pipeline/__init__.py
"""
# Pipeline Core — Atlas Railway

Este pacote define os **contratos canônicos** de um Step e a superfície
de construção de Sequences.

## Componentes

- **types**
  - `StepAdapter`: política fechada DIRECT / MAP / TRY / TEE

- **adapters**
  - uma função de execução por variante de `StepAdapter`

- **step**
  - `Step`: nome + adapter + operação resolvida + `catch`

- **registry**
  - `Resolver` (Protocol), `OperationRegistry`, `as_resolver`

- **builder**
  - `SequenceBuilder`, `build_sequence`, `build_sequence_from_config`

- **context**
  - `CallContext`: log estruturado e Manifest opcional de uma chamada

## Princípios Fundamentais

- Steps **não conhecem** a Sequence
- Operações são resolvidas **uma vez**, na construção
- Exceções só são interceptadas na fronteira TRY/TEE

## Limites Explícitos

- Não executa Sequences (ver `core.engine`)
- Não contém lógica de domínio
"""

from .builder import SequenceBuilder, StepSpec, build_sequence, build_sequence_from_config
from .context import CallContext
from .registry import OperationRegistry, Resolver, as_resolver
from .step import Step
from .types import StepAdapter

__all__ = [
    "CallContext",
    "OperationRegistry",
    "Resolver",
    "SequenceBuilder",
    "Step",
    "StepAdapter",
    "StepSpec",
    "as_resolver",
    "build_sequence",
    "build_sequence_from_config",
]
