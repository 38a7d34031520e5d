# src/atlas_railway/core/config/__init__.py
"""
Camada de configuração do Atlas Railway.

Este pacote carrega, mescla e identifica (hash) configurações usadas
para declarar Sequences de forma textual (YAML/JSON).

A configuração no Atlas Railway é:
    - declarativa
    - determinística
    - opcional: Sequences também podem ser construídas em código

Componentes:
    - loader  → leitura de YAML/JSON e resolução defaults + local
    - merge   → política de deep-merge
    - hashing → identidade estrutural (SHA-256)
    - errors  → hierarquia de `ConfigError`
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSequenceConfigError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config, load_config_text
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidSequenceConfigError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "load_config",
    "load_config_text",
]
