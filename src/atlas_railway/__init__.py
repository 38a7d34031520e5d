# src/atlas_railway/__init__.py
"""
Atlas Railway — composição de Steps orientada a trilhos (Railway-Oriented Programming).

Uma Sequence é uma lista fixa e ordenada de operações nomeadas. Cada
operação é envolvida por um adapter que normaliza seu retorno em
`Success` ou `Failure`; a execução segue em ordem e muda para o trilho
de falha no primeiro `Failure`.

Princípios centrais:
    - Falhas esperadas são valores (`Failure`), com o Step de origem
    - Apenas erros declarados em `catch` entram no trilho de falha
    - Erros de configuração abortam a construção, nunca a chamada
    - Sequences são imutáveis; variantes são derivadas, não mutadas

Uso típico:

    registry = OperationRegistry()
    registry.add("process", process)
    registry.add("validate", validate)
    registry.add("persist", persist)

    seq = (
        SequenceBuilder()
        .map("process")
        .try_("validate", catch=ValidationFailure)
        .tee("persist")
        .build(registry)
    )

    result = seq.call({"name": "Jane", "email": "jane@doe.com"})

Limites explícitos:
    - Não é um motor de workflow (sem ramificação, paralelismo ou retry)
    - Não executa I/O por conta própria
"""

from .core.engine import ALL, Matcher, Notifier, Sequence, StepListener, match
from .core.exceptions import (
    DuplicateOperationError,
    DuplicateStepNameError,
    InvalidStepError,
    InvalidStepOutputError,
    MatcherConfigurationError,
    RailwayConfigurationError,
    ResolutionError,
    UnhandledFailureError,
    UnknownStepError,
    UnwrapFailureError,
)
from .core.pipeline import (
    CallContext,
    OperationRegistry,
    Resolver,
    SequenceBuilder,
    Step,
    StepAdapter,
    build_sequence,
    build_sequence_from_config,
)
from .core.result import Failure, Result, Success

__version__ = "0.1.0"

__all__ = [
    "ALL",
    "CallContext",
    "DuplicateOperationError",
    "DuplicateStepNameError",
    "Failure",
    "InvalidStepError",
    "InvalidStepOutputError",
    "Matcher",
    "MatcherConfigurationError",
    "Notifier",
    "OperationRegistry",
    "RailwayConfigurationError",
    "ResolutionError",
    "Resolver",
    "Result",
    "Sequence",
    "SequenceBuilder",
    "Step",
    "StepAdapter",
    "StepListener",
    "Success",
    "UnhandledFailureError",
    "UnknownStepError",
    "UnwrapFailureError",
    "build_sequence",
    "build_sequence_from_config",
    "match",
    "__version__",
]
