"""
E2E: cadastro de usuário com Sequence Railway-Oriented.

Valida o core de ponta a ponta:
- config YAML versionada (tests/fixtures/config/users_sequence.yaml)
- registry de operações de domínio
- map(process) -> try(validate) -> tee(persist)
- Notifier, Matcher e Manifest na mesma chamada

Requisitos:
- pytest -q (sem serviços externos; o store é uma lista)
"""

from __future__ import annotations

from pathlib import Path

import pytest

from atlas_railway import ALL, CallContext, Failure, Success, __version__
from atlas_railway.core.config.hashing import compute_config_hash
from atlas_railway.core.config.loader import load_config
from atlas_railway.core.pipeline.builder import build_sequence_from_config
from atlas_railway.core.traceability.manifest import (
    create_manifest,
    load_manifest,
    save_manifest,
    sequence_fingerprint,
)

CONFIG_PATH = Path(__file__).parents[1] / "fixtures" / "config" / "users_sequence.yaml"


@pytest.fixture
def configured_sequence(user_registry):
    config = load_config(defaults_path=str(CONFIG_PATH))
    return build_sequence_from_config(config, user_registry)


def test_valid_user_is_persisted(configured_sequence, user_store) -> None:
    result = configured_sequence.call({"name": "Jane", "email": "jane@doe.com"})

    assert result == Success({"name": "Jane", "email": "jane@doe.com"})
    assert user_store == [{"name": "Jane", "email": "jane@doe.com"}]


def test_invalid_email_fails_at_validate(configured_sequence, user_store) -> None:
    from tests.fixtures.operations.users import ValidationFailure

    result = configured_sequence.call({"name": "Jane", "email": "jane.example.com"})

    assert isinstance(result, Failure)
    assert isinstance(result.error, ValidationFailure)
    assert result.step == "validate"
    assert user_store == []


def test_full_call_with_listeners_matcher_and_manifest(
    configured_sequence, user_store, RecordingListener, tmp_path: Path
) -> None:
    log = []
    configured_sequence.subscribe("validate", RecordingListener(log, "validate"))
    configured_sequence.subscribe(ALL, RecordingListener(log, "all"))

    matcher = configured_sequence.matcher()
    matcher.success(lambda user: f"created {user['email']}")
    matcher.failure(lambda error: "invalid email", step="validate")
    matcher.failure(lambda error: "unexpected")

    manifest = create_manifest(
        call_id="e2e-users",
        started_at=CallContext().created_at,
        railway_version=__version__,
        sequence_hash=sequence_fingerprint(configured_sequence),
    )
    ctx = CallContext(call_id="e2e-users", manifest=manifest)

    ok = configured_sequence.call_and_match({"name": "Jane", "email": "jane@doe.com"}, matcher, ctx=ctx)
    assert ok == "created jane@doe.com"
    assert [(tag, kind) for tag, kind, _ in log] == [
        ("all", "success"),
        ("validate", "success"),
        ("all", "success"),
        ("all", "success"),
    ]

    bad = configured_sequence.call_and_match({"name": "Joe", "email": "@"}, matcher)
    assert bad == "invalid email"
    assert len(user_store) == 1

    path = tmp_path / "manifest.json"
    save_manifest(manifest, path)
    loaded = load_manifest(path)
    assert set(loaded.steps) == {"process", "validate", "persist"}
    assert all(s["status"] == "success" for s in loaded.steps.values())
    assert loaded.inputs["sequence_hash"] == compute_config_hash({"steps": configured_sequence.describe()})
    assert {e["call_id"] for e in ctx.events} == {"e2e-users"}
