# src/atlas_railway/core/traceability/manifest.py
"""
Manifest de chamada — rastreabilidade forense de uma execução da Sequence.

O Manifest consolida, de forma determinística e auditável:
    - metadados da chamada (call_id, started_at, versão)
    - identidade estrutural da Sequence (`sequence_hash`)
    - estado incremental dos Steps executados
    - Event Log ordenado de eventos explícitos

Princípios fundamentais:
    - Nenhum evento é emitido implicitamente
    - Toda mutação ocorre por chamadas explícitas da API
    - A ordem do Event Log reflete a ordem real de execução
    - O Manifest é serializável e reconstruível (round-trip)

Decisões arquiteturais:
    - UTC é o timezone canônico para todos os timestamps
    - O formato de persistência é JSON determinístico
    - Falhas são registradas via `failure_payload` (nunca o objeto de erro cru)
    - Steps não executados (após short-circuit) não aparecem em `steps`

Limites explícitos:
    - Não executa a Sequence
    - Não decide short-circuit
    - Não realiza migração de versões de schema
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from atlas_railway.core.config.hashing import compute_config_hash
from atlas_railway.core.errors import failure_payload
from atlas_railway.core.result import Failure


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """Timestamps naive são assumidos como UTC; os demais são convertidos."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _iso(dt: datetime) -> str:
    return _ensure_tzaware_utc(dt).isoformat()


def _ms_between(start: datetime, end: datetime) -> int:
    s = _ensure_tzaware_utc(start)
    e = _ensure_tzaware_utc(end)
    return max(0, int((e - s).total_seconds() * 1000))


@dataclass
class CallManifest:
    """
    Registro forense de uma chamada da Sequence.

    Campos principais:
        - call: metadados da chamada (call_id, started_at, railway_version)
        - inputs: identidade estrutural da Sequence (`sequence_hash`)
        - steps: estado de cada Step executado, indexado por nome
        - events: Event Log ordenado

    Invariantes:
        - `steps` é sempre um dicionário indexado por nome de Step
        - `events` é sempre uma lista ordenada
        - A estrutura completa é serializável em JSON
    """
    call: Dict[str, Any]
    inputs: Dict[str, Any]
    steps: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "call": dict(self.call),
            "inputs": dict(self.inputs),
            "steps": {k: dict(v) for k, v in self.steps.items()},
            "events": [dict(e) for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CallManifest":
        return cls(
            call=dict(data.get("call", {})),
            inputs=dict(data.get("inputs", {})),
            steps={k: dict(v) for k, v in (data.get("steps", {}) or {}).items()},
            events=[dict(e) for e in (data.get("events", []) or [])],
        )


def sequence_fingerprint(sequence: Any) -> str:
    """Hash SHA-256 da descrição estrutural da Sequence (nomes, kinds, with, catch)."""
    return compute_config_hash({"steps": sequence.describe()})


def create_manifest(
    *,
    call_id: str,
    started_at: datetime,
    railway_version: str,
    sequence_hash: str,
) -> CallManifest:
    """
    Cria o Manifest inicial de uma chamada.

    ⚠️ Importante: esta função **não emite eventos implicitamente**.
    O Event Log inicia vazio e só é preenchido por chamadas explícitas
    a `add_event`, `step_started`, `step_succeeded` ou `step_failed`.

    Args:
        call_id (str): Identificador único da chamada.
        started_at (datetime): Timestamp de início da chamada.
        railway_version (str): Versão do Atlas Railway utilizada.
        sequence_hash (str): Hash estrutural da Sequence executada.

    Returns:
        CallManifest: Manifest inicializado, com `steps` e `events` vazios.
    """
    return CallManifest(
        call={
            "call_id": call_id,
            "started_at": _iso(started_at),
            "railway_version": railway_version,
        },
        inputs={"sequence_hash": sequence_hash},
        steps={},
        events=[],
    )


def add_event(
    manifest: CallManifest,
    *,
    event_type: str,
    ts: datetime,
    step: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Adiciona um evento explícito ao Event Log.

    Eventos não são reordenados por timestamp nem deduplicados: cada
    chamada adiciona exatamente um registro, na ordem de chamada.
    """
    ev: Dict[str, Any] = {"event_type": event_type, "timestamp": _iso(ts)}
    if step is not None:
        ev["step"] = step
    if payload is not None:
        ev["payload"] = payload
    manifest.events.append(ev)


def step_started(manifest: CallManifest, *, step: str, kind: str, ts: datetime) -> None:
    manifest.steps.setdefault(step, {})
    manifest.steps[step].update(
        {
            "step": step,
            "kind": kind,
            "status": "running",
            "started_at": _iso(ts),
        }
    )
    add_event(manifest, event_type="step_started", ts=ts, step=step, payload={"kind": kind})


def _close_step(manifest: CallManifest, *, step: str, ts: datetime, status: str) -> Dict[str, Any]:
    s = manifest.steps.setdefault(step, {"step": step})
    started_iso = s.get("started_at")
    started_dt = datetime.fromisoformat(started_iso) if started_iso else ts
    s.update(
        {
            "status": status,
            "finished_at": _iso(ts),
            "duration_ms": _ms_between(started_dt, ts),
        }
    )
    return s


def step_succeeded(manifest: CallManifest, *, step: str, ts: datetime) -> None:
    s = _close_step(manifest, step=step, ts=ts, status="success")
    add_event(
        manifest,
        event_type="step_succeeded",
        ts=ts,
        step=step,
        payload={"duration_ms": s["duration_ms"]},
    )


def step_failed(manifest: CallManifest, *, step: str, ts: datetime, failure: Failure) -> None:
    """
    Registra a falha de domínio de um Step.

    O erro é persistido como payload serializável (`failure_payload`),
    nunca como o objeto original.
    """
    s = _close_step(manifest, step=step, ts=ts, status="failed")
    error = failure_payload(failure).to_dict()
    s["error"] = error
    add_event(
        manifest,
        event_type="step_failed",
        ts=ts,
        step=step,
        payload={"duration_ms": s["duration_ms"], "error": error},
    )


def save_manifest(manifest: CallManifest, path: Path) -> None:
    """Persiste o Manifest em JSON determinístico (chaves ordenadas, UTF-8)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(manifest.to_dict(), ensure_ascii=False, indent=2, sort_keys=True), encoding="utf-8")


def load_manifest(path: Path) -> CallManifest:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return CallManifest.from_dict(data)
