# tests/core/result/test_result_variants.py
"""
Testes das variantes de Result (Success / Failure).

Os testes asseguram que:
- as variantes são imutáveis e comparáveis por valor
- `unwrap` devolve o valor em Success e levanta em Failure
- `value_or` devolve o default apenas em Failure

Limites explícitos:
    - Não valida adapters nem execução de Sequence
"""

import dataclasses

import pytest

from atlas_railway.core.exceptions import UnwrapFailureError
from atlas_railway.core.result import Failure, Success, is_result


def test_success_exposes_value_and_flags():
    r = Success(42)
    assert r.value == 42
    assert r.is_success is True
    assert r.is_failure is False
    assert r.unwrap() == 42
    assert r.value_or(0) == 42


def test_failure_carries_origin_step():
    err = ValueError("bad")
    r = Failure(err, "validate")
    assert r.error is err
    assert r.step == "validate"
    assert r.is_failure is True
    assert r.value_or("default") == "default"


def test_failure_unwrap_raises_with_failure_attached():
    r = Failure("boom", "persist")
    with pytest.raises(UnwrapFailureError) as exc_info:
        r.unwrap()
    assert exc_info.value.failure is r


def test_variants_are_frozen_and_compare_by_value():
    assert Success(1) == Success(1)
    assert Failure("e", "a") == Failure("e", "a")
    assert Failure("e", "a") != Failure("e", "b")
    with pytest.raises(dataclasses.FrozenInstanceError):
        Success(1).value = 2  # type: ignore[misc]


def test_is_result():
    assert is_result(Success(None))
    assert is_result(Failure(None))
    assert not is_result(None)
    assert not is_result({"value": 1})
