# src/atlas_railway/core/traceability/__init__.py
"""
Pacote de rastreabilidade do Atlas Railway — Manifest de chamada.

API pública exposta:
    - CallManifest          → estrutura canônica do Manifest
    - create_manifest       → criação explícita do Manifest
    - sequence_fingerprint  → hash estrutural de uma Sequence
    - add_event             → registro explícito no Event Log
    - step_started          → marca início de um Step
    - step_succeeded        → registra Success de um Step
    - step_failed           → registra Failure de um Step
    - save_manifest         → persistência em JSON
    - load_manifest         → restauração determinística

Decisões arquiteturais:
    - Nenhum evento é emitido implicitamente
    - A Sequence só escreve no Manifest quando recebe um `CallContext`
      com `manifest` definido
"""

from .manifest import (
    CallManifest,
    add_event,
    create_manifest,
    load_manifest,
    save_manifest,
    sequence_fingerprint,
    step_failed,
    step_started,
    step_succeeded,
)

__all__ = [
    "CallManifest",
    "add_event",
    "create_manifest",
    "load_manifest",
    "save_manifest",
    "sequence_fingerprint",
    "step_failed",
    "step_started",
    "step_succeeded",
]
