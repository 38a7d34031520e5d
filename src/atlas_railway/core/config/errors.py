# src/atlas_railway/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Atlas Railway.

As exceções aqui definidas representam **violações estruturais** de
arquivos de configuração (carregamento, merge e leitura da definição
declarativa de uma Sequence), e não falhas de domínio.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa uma falha de Step

Limites explícitos:
    - Não executa Sequences
    - Não realiza fallback ou recovery
"""

from atlas_railway.core.exceptions import RailwayConfigurationError


class ConfigError(RailwayConfigurationError):
    """
    Exceção base para erros de configuração do Atlas Railway.

    Herda de `RailwayConfigurationError`: um erro de configuração é
    sempre fatal e detectado antes de qualquer chamada.
    """


class DefaultsNotFoundError(ConfigError):
    """
    O arquivo de configuração base (defaults) não existe.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório
        - Não há inferência nem criação automática de defaults
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz da configuração não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"steps": {"persist": {"enabled": true}}}
        - override: {"steps": "persist"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidSequenceConfigError(ConfigError):
    """
    A seção `sequence` da configuração não descreve uma Sequence válida.

    Exemplos:
        - `sequence.steps` ausente ou não é lista
        - item sem `name` ou com `kind` desconhecido
        - entrada de `catch` que não resolve para uma classe de exceção
    """
