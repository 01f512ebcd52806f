# src/nodeflow/core/config/__init__.py
"""
Camada de configuração do NodeFlow.

Este pacote carrega, mescla e identifica a configuração do engine
(políticas de execução, estratégia de join, separador de chaves
compostas, rigor do typecast).

A configuração é:
    - declarativa (YAML ou JSON)
    - determinística (mesma entrada, mesma configuração final)
    - identificável por hash canônico, registrado em cada ExecutionResult

Limites explícitos:
    - Não contém definições de pipeline (ver core.pipeline.loader)
    - Não valida semântica de nós ou operadores
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import DEFAULTS_PATH, load_config, read_document
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "ConfigFileNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "DEFAULTS_PATH",
    "compute_config_hash",
    "deep_merge",
    "load_config",
    "read_document",
]
