"""
Atlas Railway — Canonical Error Payloads (v1)

Este módulo define a representação serializável de erros do Atlas Railway,
usada pela camada de rastreabilidade (Manifest) e por consumidores que
precisam persistir ou exibir falhas.

Erros persistidos devem ser:

- explícitos
- serializáveis
- rastreáveis até o Step de origem

Nenhuma decisão implícita é permitida: o payload descreve a falha,
não decide o que fazer com ela.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .exceptions import RailwayConfigurationError
from .result import Failure


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RailwayErrorPayload:
    """
    Payload canônico de erro do Atlas Railway.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Trilho de falha (domínio)
STEP_FAILURE = "STEP_FAILURE"

# Construção / configuração
SEQUENCE_CONFIGURATION_ERROR = "SEQUENCE_CONFIGURATION_ERROR"


def _describe(error: Any) -> str:
    if isinstance(error, BaseException):
        return str(error) or error.__class__.__name__
    return str(error)


def failure_payload(
    failure: Failure,
    *,
    hint: str = "Trate a falha via Matcher (failure por step) ou corrija a entrada da chamada.",
) -> RailwayErrorPayload:
    """Converte um `Failure` em payload serializável.

    O erro original não é serializado: apenas sua classe e representação
    textual, para que o payload seja sempre seguro para JSON.
    """
    error = failure.error
    return RailwayErrorPayload(
        type=STEP_FAILURE,
        message=_describe(error),
        details={
            "step": failure.step,
            "error_class": error.__class__.__name__,
        },
        hint=hint,
    )


def configuration_error_payload(exc: RailwayConfigurationError) -> RailwayErrorPayload:
    details = dict(exc.details)
    details.setdefault("exception_class", exc.__class__.__name__)
    return RailwayErrorPayload(
        type=SEQUENCE_CONFIGURATION_ERROR,
        message=exc.message,
        details=details,
        hint=exc.hint or "Revise a definição da Sequence antes de reexecutar.",
    )
