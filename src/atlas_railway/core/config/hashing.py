# src/atlas_railway/core/config/hashing.py
"""
Hashing canônico de estruturas de configuração.

O hash representa a **identidade estrutural** de uma configuração ou da
descrição de uma Sequence, e é usado no Manifest de chamada
(`inputs.sequence_hash`).

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256 (64 caracteres hexadecimais)

Limites explícitos:
    - Não carrega nem resolve configuração
    - Não persiste o hash
"""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera o hash SHA-256 determinístico de `config`.

    Estruturas equivalentes (mesmo conteúdo, ordem de chaves diferente)
    produzem o mesmo hash.

    Raises:
        TypeError: Se `config` não for um dicionário, ou contiver valores
            não serializáveis em JSON.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
