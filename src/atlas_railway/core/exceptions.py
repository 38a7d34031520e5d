"""
Atlas Railway — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do Atlas Railway.

Existem duas categorias disjuntas de erro fatal:
- Erros de configuração/resolução: detectados na construção da Sequence
  (nome duplicado, Step desconhecido, operação não resolvida). Abortam a
  construção; nunca viram `Failure`.
- Erros de programação na execução: um Step `DIRECT` que não retorna
  `Result`, ou um `Failure` desembrulhado/sem handler.

Regras:
- Falhas de domínio NÃO são exceções deste módulo: elas trafegam como
  `Failure` pelo trilho de falha.
- Exceções levantadas por operações e não declaradas em `catch`
  propagam sem encapsulamento; este módulo não as representa.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class RailwayConfigurationError(ValueError):
    """Base para erros estruturais detectados em tempo de construção.

    Importante:
    - Sempre fatal: a construção é abortada
    - `details` carrega apenas dados estruturados (serializáveis)
    """

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        self.hint = hint

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Estrutura da Sequence
# ---------------------------------------------------------------------------

class DuplicateStepNameError(RailwayConfigurationError):
    """Dois Steps com o mesmo nome na mesma Sequence (construção ou insert)."""


class UnknownStepError(RailwayConfigurationError):
    """Nome de Step referenciado (insert/remove/subscribe/match/args) não existe."""


class InvalidStepError(RailwayConfigurationError):
    """Step mal formado (nome vazio, adapter inválido, `catch` incoerente)."""


# ---------------------------------------------------------------------------
# Resolução de operações
# ---------------------------------------------------------------------------

class ResolutionError(RailwayConfigurationError):
    """Identificador de operação ausente no resolver, ou não chamável."""


class DuplicateOperationError(RailwayConfigurationError):
    """Identificador de operação registrado duas vezes no OperationRegistry."""


# ---------------------------------------------------------------------------
# Matcher
# ---------------------------------------------------------------------------

class MatcherConfigurationError(RailwayConfigurationError):
    """Registro inválido no Matcher (ex.: segundo handler de sucesso)."""


# ---------------------------------------------------------------------------
# Execução (erros de programação, não de domínio)
# ---------------------------------------------------------------------------

class InvalidStepOutputError(TypeError):
    """Step `DIRECT` retornou algo que não é `Success`/`Failure`."""


class UnhandledFailureError(Exception):
    """Nenhum handler do Matcher aceitou o `Failure` recebido."""

    def __init__(self, message: str, *, failure: Any):
        super().__init__(message)
        self.failure = failure


class UnwrapFailureError(Exception):
    """`unwrap()` chamado sobre um `Failure`."""

    def __init__(self, message: str, *, failure: Any):
        super().__init__(message)
        self.failure = failure
