"""
Loader de configuração do NodeFlow.

A configuração efetiva do engine é resolvida a partir de:
    - um arquivo de defaults (obrigatório; por padrão o `defaults.yaml` empacotado)
    - um arquivo local de overrides (opcional)

O leitor de documentos (`read_document`) também é reutilizado para
carregar definições de pipeline a partir de YAML/JSON.

Invariantes:
    - O resultado é sempre um `dict` puro
    - Overrides nunca mutam os defaults
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json

import yaml  # PyYAML

from .errors import (
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge


DEFAULTS_PATH = Path(__file__).with_name("defaults.yaml")


def read_document(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Lê um documento YAML ou JSON e valida que a raiz é um dicionário.

    Arquivos vazios são interpretados como `{}`.

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigFileNotFoundError(f"File not found: {path}")

    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as f:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise UnsupportedConfigFormatError(f"Unsupported format: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(f"Document root must be a dict, got {type(data).__name__}")

    return data


def load_config(
    *,
    defaults_path: Optional[Union[str, Path]] = None,
    local_path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva do engine.

    Política de resolução:
        - `defaults_path` ausente → defaults empacotados com o NodeFlow
        - `local_path` ausente ou inexistente → nenhum override
        - quando presente, o local tem prioridade (deep-merge)

    Args:
        defaults_path: Caminho para o arquivo de defaults.
        local_path: Caminho opcional para overrides locais.

    Returns:
        Dict[str, Any]: Configuração final resolvida.

    Raises:
        ConfigFileNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """
    effective = read_document(defaults_path if defaults_path is not None else DEFAULTS_PATH)

    if local_path is not None and Path(local_path).exists():
        effective = deep_merge(effective, read_document(local_path))

    return effective
