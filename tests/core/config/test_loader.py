# tests/core/config/test_loader.py
"""
Testes do loader de configuração do NodeFlow.

Este módulo valida:
- leitura dos defaults (empacotados ou explícitos)
- aplicação opcional de overrides locais via deep-merge
- rejeição de formatos não suportados e raízes não-dict
- leitura de documentos JSON (reutilizada pelo loader de pipelines)

Decisões arquiteturais:
    - Defaults são obrigatórios; override local ausente é ignorado
    - O resultado é sempre um `dict` puro

Limites explícitos:
    - Não valida semântica de domínio da configuração
"""

from pathlib import Path

import pytest

try:
    from nodeflow.core.config.loader import DEFAULTS_PATH, load_config, read_document
    from nodeflow.core.config.errors import (
        ConfigFileNotFoundError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_config = None
    read_document = None
    DEFAULTS_PATH = None
    ConfigFileNotFoundError = None
    InvalidConfigRootTypeError = None
    UnsupportedConfigFormatError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o loader de configuração e suas exceções tipadas estejam disponíveis.

    Limites explícitos:
        - Não valida comportamento do loader
        - Não tenta fallback nem implementação alternativa
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing config loader. Implement:\n"
            "- src/nodeflow/core/config/loader.py (load_config, read_document)\n"
            "- src/nodeflow/core/config/errors.py\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_packaged_defaults_are_loaded():
    """
    Verifica que, sem argumentos, o loader devolve os defaults empacotados.

    Invariantes:
        - `defaults.yaml` acompanha o pacote
        - As chaves lidas pelo engine estão presentes com seus valores padrão
    """
    _require_imports()
    assert Path(DEFAULTS_PATH).exists()
    cfg = load_config()
    assert cfg["engine"]["dry_run"] is False
    assert cfg["engine"]["output"] == "terminal"
    assert cfg["join"]["strategy"] == "hash"
    assert cfg["keys"]["separator"] == "|"
    assert cfg["typecast"]["strict"] is False


def test_missing_defaults_raises(tmp_path: Path):
    _require_imports()
    with pytest.raises(ConfigFileNotFoundError):
        load_config(defaults_path=tmp_path / "defaults.yaml")


def test_missing_local_is_ok(tmp_path: Path, project_like_config_defaults_yaml):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")

    cfg = load_config(defaults_path=defaults, local_path=tmp_path / "local.yaml")
    assert cfg["join"]["strategy"] == "hash"


def test_load_defaults_and_local(tmp_path: Path, project_like_config_defaults_yaml, project_like_config_local_yaml):
    """
    Verifica a aplicação de overrides locais sobre os defaults.

    Invariantes:
        - Chaves do override prevalecem
        - Chaves não sobrescritas são preservadas
    """
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    local = tmp_path / "local.yaml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")
    local.write_text(project_like_config_local_yaml, encoding="utf-8")

    cfg = load_config(defaults_path=defaults, local_path=local)
    assert cfg["engine"] == {"dry_run": False, "output": "all"}
    assert cfg["join"]["strategy"] == "nested_loop"
    assert cfg["keys"]["separator"] == "|"


def test_unsupported_format_raises(tmp_path: Path):
    _require_imports()
    bad = tmp_path / "defaults.toml"
    bad.write_text("engine = 1\n", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_config(defaults_path=bad)


def test_non_dict_root_raises(tmp_path: Path):
    _require_imports()
    bad = tmp_path / "defaults.yaml"
    bad.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_config(defaults_path=bad)


def test_read_document_json_and_empty_yaml(tmp_path: Path):
    _require_imports()
    doc = tmp_path / "pipeline.json"
    doc.write_text('{"id": "p1", "nodes": []}', encoding="utf-8")
    assert read_document(doc) == {"id": "p1", "nodes": []}

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert read_document(empty) == {}
