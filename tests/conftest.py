"""
Fixtures compartilhados para testes do Atlas Railway.

Este módulo define fixtures reutilizáveis que fornecem:
- registry de operações do cenário de cadastro de usuário
- store externo (lista) para observar efeitos colaterais do Step `tee`
- listener gravador para testes do Notifier
- contexto de chamada determinístico (CallContext)
- YAMLs de configuração semelhantes ao uso real

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture executa uma Sequence
    - Nenhuma fixture realiza I/O

Limites explícitos:
    - Não substituir testes de integração (ver tests/e2e)
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# Operações e registry
# =====================================================

@pytest.fixture
def user_store() -> list:
    """Store externo do Step `persist` (lista mutável, fora do core)."""
    return []


@pytest.fixture
def user_registry(user_store):
    """
    Fixture que fornece um OperationRegistry com as operações do cenário de usuário.

    Operações registradas:
        - process  → normaliza o dict de entrada
        - validate → levanta ValidationFailure para e-mail inválido
        - persist  → anexa o valor ao `user_store`
        - ValidationFailure → registrado para uso em `catch` declarado via config

    Returns:
        OperationRegistry: Registry pronto para construir Sequences.
    """
    from atlas_railway.core.pipeline.registry import OperationRegistry
    from tests.fixtures.operations.users import ValidationFailure, make_persist, process, validate

    registry = OperationRegistry()
    registry.add("process", process)
    registry.add("validate", validate)
    registry.add("persist", make_persist(user_store))
    registry.add("ValidationFailure", ValidationFailure)
    return registry


@pytest.fixture
def user_sequence(user_registry):
    """Sequence canônica: map(process) -> try(validate) -> tee(persist)."""
    from atlas_railway.core.pipeline.builder import SequenceBuilder
    from tests.fixtures.operations.users import ValidationFailure

    return (
        SequenceBuilder()
        .map("process")
        .try_("validate", catch=ValidationFailure)
        .tee("persist")
        .build(user_registry)
    )


# =====================================================
# Notifier
# =====================================================

@pytest.fixture
def RecordingListener():
    """
    Fixture factory que fornece uma classe de listener gravador.

    Cada instância grava `(tag, "success"|"failure", payload)` em uma lista
    compartilhada, permitindo verificar ordem de despacho entre listeners.

    Returns:
        type: Classe `_RecordingListener(log, tag)`.
    """

    class _RecordingListener:
        def __init__(self, log=None, tag="listener"):
            self.log = log if log is not None else []
            self.tag = tag

        def on_step_succeeded(self, value):
            self.log.append((self.tag, "success", value))

        def on_step_failed(self, error):
            self.log.append((self.tag, "failure", error))

    return _RecordingListener


# =====================================================
# Contexto de chamada
# =====================================================

@pytest.fixture
def dummy_ctx():
    """CallContext com `call_id` e `created_at` fixos."""
    from atlas_railway.core.pipeline.context import CallContext

    return CallContext(
        call_id="call-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        config={},
        meta={"source": "pytest"},
    )


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de defaults semelhante ao uso real: a Sequence de cadastro completa.

    Returns:
        str: Conteúdo YAML de `config.defaults.yaml`.
    """
    return """\
sequence:
  steps:
    - kind: map
      name: process
    - kind: try
      name: validate
      catch: [ValidationFailure]
    - kind: tee
      name: persist
steps:
  persist:
    enabled: true
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML local que desabilita o Step `persist` (override)."""
    return """\
steps:
  persist:
    enabled: false
"""
