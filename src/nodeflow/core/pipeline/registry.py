# src/nodeflow/core/pipeline/registry.py
"""
Registro de operadores de transformação.

O `TransformRegistry` associa cada `transformType` a uma função
`(rows, options) -> rows`. O dispatcher consulta o registro para nós
`transform`; um tipo não registrado é tratado como no-op explícito
(o dataset passa inalterado), nunca como erro.

Invariantes:
    - Cada nome é registrado no máximo uma vez
    - A ordem de registro é preservada (`names()`)

Limites explícitos:
    - Não executa operadores
    - Não conhece o executor nem o contexto da run
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from nodeflow.core.exceptions import DuplicateOperatorError

from .types import Row

TransformFn = Callable[[List[Row], Mapping[str, Any]], List[Row]]


@dataclass
class TransformRegistry:
    """Registro nome → operador de transformação."""

    _operators: Dict[str, TransformFn] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def register(self, name: str, fn: TransformFn) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("transform name must be a non-empty string")
        if name in self._operators:
            raise DuplicateOperatorError(
                message=f"Duplicate transform operator: {name}",
                details={"transform_type": name},
            )
        self._operators[name] = fn
        self._order.append(name)

    def get(self, name: Optional[str]) -> Optional[TransformFn]:
        if name is None:
            return None
        return self._operators.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._operators

    def names(self) -> List[str]:
        return list(self._order)


def default_registry() -> TransformRegistry:
    """Registro com os oito operadores embutidos."""
    from nodeflow.operators import transform as ops

    registry = TransformRegistry()
    for name, fn in ops.BUILTIN_TRANSFORMS.items():
        registry.register(name, fn)
    return registry
