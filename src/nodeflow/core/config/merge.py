"""
Deep-merge de configuração do NodeFlow.

Política (v1):
    - dict + dict       → merge recursivo por chave
    - list              → substituição integral
    - escalar           → substituição direta
    - conflito de tipos → ConfigTypeConflictError

O merge é puramente funcional: nem `base` nem `override` são mutados.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any], *, _path: str = "") -> Dict[str, Any]:
    """
    Combina `override` sobre `base`, devolvendo um novo dicionário.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults empacotados).
        override (Dict[str, Any]): Overrides explícitos (ex.: config local).

    Returns:
        Dict[str, Any]: Configuração resultante.

    Raises:
        ConfigTypeConflictError: Se uma chave mudar de tipo entre base e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"deep_merge expects dicts at '{_path or '<root>'}', got "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    merged: Dict[str, Any] = deepcopy(base)

    for key, new_value in override.items():
        where = f"{_path}.{key}" if _path else str(key)

        if key not in merged or merged[key] is None or new_value is None:
            merged[key] = deepcopy(new_value)
            continue

        old_value = merged[key]

        if isinstance(old_value, dict) and isinstance(new_value, dict):
            merged[key] = deep_merge(old_value, new_value, _path=where)
        elif isinstance(old_value, list) and isinstance(new_value, list):
            merged[key] = deepcopy(new_value)
        elif type(old_value) is not type(new_value):
            raise ConfigTypeConflictError(
                f"Type conflict at '{where}': {type(old_value).__name__} vs {type(new_value).__name__}"
            )
        else:
            merged[key] = deepcopy(new_value)

    return merged
