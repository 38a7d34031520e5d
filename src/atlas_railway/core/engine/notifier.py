# src/atlas_railway/core/engine/notifier.py
"""
Notifier interno do Atlas Railway.

Dispatcher síncrono mínimo: após cada Step executado, a Sequence publica
o resultado, e o Notifier chama os listeners registrados para aquele Step
(ou para todos os Steps, via `ALL`).

Contrato de listener (duck typing):
    - `on_step_succeeded(value)` → chamado com o valor desembrulhado de Success
    - `on_step_failed(error)`    → chamado com o erro desembrulhado de Failure
    Hooks ausentes são simplesmente ignorados.

Decisões arquiteturais:
    - Ordem de despacho: listeners do Step (ordem de registro), depois `ALL`
    - A publicação é síncrona e ocorre ANTES da decisão de short-circuit
    - Exceções levantadas por listeners propagam (a chamada é abortada)
    - O Notifier guarda referências aos listeners, sem assumir seu ciclo de vida

Limites explícitos:
    - Não é um event bus genérico (sem filas, threads ou transporte)
    - Não valida nomes de Step (responsabilidade da Sequence)
    - Não possui locking: `subscribe` é operação de configuração
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Union, runtime_checkable

from atlas_railway.core.result import Failure, Result, Success


class _AllSteps:
    """Marcador de registro para todos os Steps."""

    _instance: Optional["_AllSteps"] = None

    def __new__(cls) -> "_AllSteps":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ALL"

    def __reduce__(self) -> str:
        return "ALL"


ALL = _AllSteps()

Target = Union[str, _AllSteps]

SUCCESS_HOOK = "on_step_succeeded"
FAILURE_HOOK = "on_step_failed"


@runtime_checkable
class StepListener(Protocol):
    """Listener completo (ambos os hooks). Listeners parciais também são aceitos."""

    def on_step_succeeded(self, value: Any) -> None:
        ...

    def on_step_failed(self, error: Any) -> None:
        ...


class Notifier:
    """Tabela de registros `nome do Step | ALL` → listeners, com despacho síncrono."""

    def __init__(self, registrations: Optional[Dict[Target, List[Any]]] = None):
        self._registrations: Dict[Target, List[Any]] = {
            target: list(listeners) for target, listeners in (registrations or {}).items()
        }

    def subscribe(self, target: Target, listener: Any) -> None:
        self._registrations.setdefault(target, []).append(listener)

    def unsubscribe(self, target: Target, listener: Any) -> None:
        listeners = self._registrations.get(target, [])
        for i, registered in enumerate(listeners):
            if registered is listener:
                del listeners[i]
                return
        raise ValueError(f"Listener não registrado em {target!r}")

    def listeners_for(self, step_name: str) -> List[Any]:
        return list(self._registrations.get(step_name, [])) + list(self._registrations.get(ALL, []))

    def publish(self, step_name: str, result: Result) -> None:
        if isinstance(result, Success):
            hook_name, payload = SUCCESS_HOOK, result.value
        elif isinstance(result, Failure):
            hook_name, payload = FAILURE_HOOK, result.error
        else:
            raise TypeError(f"publish espera Success/Failure, recebido: {type(result).__name__}")

        for listener in self.listeners_for(step_name):
            hook = getattr(listener, hook_name, None)
            if hook is not None:
                hook(payload)

    def copy(self) -> "Notifier":
        """Cópia rasa da tabela: mesmos listeners, listas independentes."""
        return Notifier(self._registrations)

    def discard(self, target: Target) -> None:
        """Remove todos os registros de `target` (ausente: nada a fazer)."""
        self._registrations.pop(target, None)

    def targets(self) -> List[Target]:
        return [t for t, listeners in self._registrations.items() if listeners]
