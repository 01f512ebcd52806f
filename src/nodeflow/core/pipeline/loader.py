# src/nodeflow/core/pipeline/loader.py
"""Carregamento de definições de pipeline a partir de arquivos YAML/JSON."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from nodeflow.core.config.loader import read_document

from .types import Pipeline


def load_pipeline(path: Union[str, Path]) -> Pipeline:
    """Lê o documento em `path` e o converte em `Pipeline`.

    Quando o documento não declara `id`, o nome do arquivo (sem extensão) é usado.
    """
    path = Path(path)
    data = read_document(path)
    if not data.get("id"):
        data = {**data, "id": path.stem}
    return Pipeline.from_dict(data)
