# src/atlas_railway/core/config/merge.py
"""
Deep-merge de configuração (defaults + overrides locais).

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (ex.: `sequence.steps` é substituída inteira)
    - escalar → sobrescrita direta
    - `None` no override → sobrescreve (permite anular um valor explicitamente)
    - conflito de tipos → `ConfigTypeConflictError`

Invariantes:
    - Nenhum input é mutado
    - A mesma entrada sempre produz a mesma saída
    - Conflitos estruturais interrompem o merge, sem resultado parcial

Limites explícitos:
    - Não carrega arquivos
    - Não interpreta a definição da Sequence
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, List

from .errors import ConfigTypeConflictError


def _merge_into(result: Dict[str, Any], override: Dict[str, Any], path: List[str]) -> None:
    for key, incoming in override.items():
        here = path + [str(key)]
        if key not in result or incoming is None or result[key] is None:
            result[key] = deepcopy(incoming)
            continue

        current = result[key]

        if isinstance(current, dict) and isinstance(incoming, dict):
            _merge_into(current, incoming, here)
            continue

        # bool é subclasse de int: a comparação de tipo é exata
        if type(current) is not type(incoming):
            raise ConfigTypeConflictError(
                f"Conflito de tipo em '{'.'.join(here)}': "
                f"{type(current).__name__} vs {type(incoming).__name__}",
                details={"key": ".".join(here)},
            )

        result[key] = deepcopy(incoming)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` com `override`, retornando um NOVO dicionário.

    Raises:
        ConfigTypeConflictError: Se algum dos lados não for dict no nível raiz,
            ou se uma mesma chave tiver tipos incompatíveis.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)
    _merge_into(result, override, [])
    return result
