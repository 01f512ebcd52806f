"""
Hash canônico de configuração do NodeFlow.

O hash identifica a configuração efetiva usada em uma run e é copiado
para `ExecutionResult.config_hash`, permitindo comparar execuções.

Política (v1):
    - JSON canônico (chaves ordenadas, separadores compactos, UTF-8)
    - SHA-256, hexadecimal de 64 caracteres
"""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """Retorna o SHA-256 da serialização canônica de `config`.

    Raises:
        TypeError: Se `config` não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(f"config must be a dict to be hashed, got {type(config).__name__}")

    canonical = json.dumps(config, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
