# src/atlas_railway/core/pipeline/context.py
"""
Contexto de uma chamada da Sequence.

Este módulo define o `CallContext`, estrutura opcional passada a
`Sequence.call(..., ctx=...)` para observar uma chamada específica:

    - identidade da chamada (call_id, created_at)
    - configuração resolvida usada na construção (somente leitura)
    - log estruturado de eventos por Step
    - warnings não fatais agrupados por Step
    - Manifest opcional para rastreabilidade forense

Princípios fundamentais:
    - Isolamento por chamada (cada chamada possui seu próprio contexto)
    - A Sequence nunca guarda o contexto entre chamadas
    - Eventos são estruturados, nunca texto livre

Invariantes:
    - Eventos de log sempre incluem `call_id` e `step`
    - Warnings são agrupados por nome de Step
    - A ordem de `events` reflete a ordem real de execução

Limites explícitos:
    - Não executa Steps
    - Não altera o fluxo da chamada (log não influencia short-circuit)
    - Não persiste dados automaticamente

Este módulo existe para dar observabilidade a uma chamada
sem introduzir estado compartilhado na Sequence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import uuid


@dataclass
class CallContext:
    """
    Contexto de observação de uma única chamada da Sequence.

    Decisões arquiteturais:
        - `call_id` e `created_at` são gerados quando omitidos
        - `manifest` é opcional; quando presente, a Sequence registra nele
          início, sucesso e falha de cada Step
        - O contexto não deve ser compartilhado entre chamadas concorrentes
    """
    call_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    config: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)
    manifest: Optional[Any] = None

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, step: Optional[str], level: str, message: str, **extra: Any) -> None:
        event = {
            "call_id": self.call_id,
            "step": step,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step: str, message: str) -> None:
        self.warnings.setdefault(step, []).append(message)

    def events_for(self, step: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("step") == step]
