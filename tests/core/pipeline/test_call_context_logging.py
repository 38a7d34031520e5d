# tests/core/pipeline/test_call_context_logging.py
"""
Testes do log estruturado do CallContext.

Invariantes verificadas:
    - Eventos sempre incluem `call_id` e `step`
    - A ordem dos eventos reflete a ordem real de execução
    - Steps não executados (após short-circuit) não geram eventos
    - Warnings são agrupados por Step
"""

from atlas_railway.core.pipeline.context import CallContext


def test_log_event_shape(dummy_ctx):
    dummy_ctx.log(step="process", level="INFO", message="hello", extra_key=1)
    event = dummy_ctx.events[-1]
    assert event["call_id"] == "call-test-001"
    assert event["step"] == "process"
    assert event["level"] == "INFO"
    assert event["message"] == "hello"
    assert event["extra_key"] == 1
    assert "timestamp" in event


def test_warnings_are_grouped_by_step(dummy_ctx):
    dummy_ctx.add_warning(step="validate", message="a")
    dummy_ctx.add_warning(step="validate", message="b")
    assert dummy_ctx.warnings == {"validate": ["a", "b"]}


def test_default_identity_is_generated():
    a, b = CallContext(), CallContext()
    assert a.call_id != b.call_id
    assert a.created_at.tzinfo is not None


def test_sequence_call_logs_each_step_in_order(user_sequence, dummy_ctx):
    user_sequence.call({"name": "Jane", "email": "jane@example.com"}, ctx=dummy_ctx)

    messages = [(e["step"], e["message"]) for e in dummy_ctx.events]
    assert messages == [
        ("process", "step.started"),
        ("process", "step.succeeded"),
        ("validate", "step.started"),
        ("validate", "step.succeeded"),
        ("persist", "step.started"),
        ("persist", "step.succeeded"),
    ]
    assert dummy_ctx.events[0]["kind"] == "map"


def test_sequence_call_logs_failure_and_stops(user_sequence, dummy_ctx):
    user_sequence.call({"name": "Jane", "email": "invalid"}, ctx=dummy_ctx)

    failed = [e for e in dummy_ctx.events if e["message"] == "step.failed"]
    assert len(failed) == 1
    assert failed[0]["step"] == "validate"
    assert failed[0]["level"] == "WARNING"
    assert failed[0]["error_class"] == "ValidationFailure"
    assert dummy_ctx.events_for("persist") == []
