# tests/core/config/test_loader.py
"""
Testes do carregador de configuração (load_config).

Este módulo valida o comportamento do loader responsável por:
- carregar arquivos de configuração padrão (defaults)
- carregar arquivos de configuração local (override)
- validar estrutura mínima da configuração
- rejeitar formatos e estados inválidos

Decisões arquiteturais:
    - A configuração é declarativa e baseada em arquivos
    - Defaults representam a base canônica da Sequence declarada
    - Configuração local atua apenas como override explícito
    - Erros estruturais são tratados como falhas fatais

Invariantes:
    - A configuração final é sempre um dicionário
    - Nenhuma configuração parcial é retornada em caso de erro

Limites explícitos:
    - Não valida hashing de configuração
    - Não constrói a Sequence (ver test_build_from_config.py)
"""

import pytest
from pathlib import Path

try:
    from atlas_railway.core.config.loader import load_config, load_config_text
    from atlas_railway.core.config.errors import (
        DefaultsNotFoundError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_config = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o loader de configuração e suas exceções tipadas estejam disponíveis.

    Decisões arquiteturais:
        - Falha antecipada e explícita quando contratos do loader estão ausentes
        - Mensagem de erro descreve exatamente os módulos esperados

    Limites explícitos:
        - Não valida comportamento do `load_config`
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/atlas_railway/core/config/loader.py (load_config)\n"
            "- src/atlas_railway/core/config/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_missing_defaults_raises(tmp_path: Path):
    """
    Verifica que a ausência do arquivo defaults é tratada como erro fatal.

    Invariantes:
        - A exceção utilizada é específica (`DefaultsNotFoundError`)
        - Nenhuma configuração parcial é retornada
    """
    _require_imports()
    missing = tmp_path / "defaults.yaml"
    with pytest.raises(DefaultsNotFoundError):
        load_config(defaults_path=str(missing), local_path=None)


def test_missing_local_is_ok(tmp_path: Path, project_like_config_defaults_yaml):
    """A ausência do arquivo local não é erro: defaults permanecem como fonte única."""
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(tmp_path / "local.yaml"))
    assert out["steps"]["persist"]["enabled"] is True
    assert [s["name"] for s in out["sequence"]["steps"]] == ["process", "validate", "persist"]


def test_load_defaults_only(tmp_path: Path, project_like_config_defaults_yaml):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=None)
    assert out["sequence"]["steps"][1] == {"kind": "try", "name": "validate", "catch": ["ValidationFailure"]}


def test_load_defaults_and_local(tmp_path: Path, project_like_config_defaults_yaml, project_like_config_local_yaml):
    """
    Verifica o carregamento e merge correto de configuração defaults + local.

    Invariantes:
        - Overrides locais têm precedência sobre defaults
        - Chaves não sobrescritas permanecem inalteradas
    """
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    local = tmp_path / "local.yaml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")
    local.write_text(project_like_config_local_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(local))
    assert out["steps"]["persist"]["enabled"] is False
    assert len(out["sequence"]["steps"]) == 3


def test_json_defaults_are_supported(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.json"
    defaults.write_text('{"sequence": {"steps": [{"kind": "map", "name": "process"}]}}', encoding="utf-8")

    out = load_config(defaults_path=str(defaults))
    assert out["sequence"]["steps"][0]["name"] == "process"


def test_empty_file_is_empty_dict(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("", encoding="utf-8")
    assert load_config(defaults_path=str(defaults)) == {}


def test_unsupported_format_raises(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.toml"
    defaults.write_text("a = 1", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_config(defaults_path=str(defaults))


def test_root_must_be_dict(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_config(defaults_path=str(defaults))


def test_load_config_text_yaml_and_json():
    _require_imports()
    assert load_config_text("a: 1\n") == {"a": 1}
    assert load_config_text('{"a": 1}', fmt="json") == {"a": 1}
    assert load_config_text("") == {}
    with pytest.raises(InvalidConfigRootTypeError):
        load_config_text("42")
