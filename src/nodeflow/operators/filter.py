"""Avaliador de predicados de filtro.

Config do nó `filter`:

    conditions: [{field, operator, value}, ...]
    logic: and | or        (default: and)

Operadores suportados: eq, neq, gt, gte, lt, lte, contains, startsWith,
endsWith, isNull, isNotNull, in, notIn.

Regras:
  - contains / startsWith / endsWith convertem o valor da linha para string
  - in / notIn exigem `value` lista; caso contrário a condição é falsa
  - operador desconhecido é permissivo: avalia como verdadeiro
  - a linha é mantida pela redução and/or dos resultados
    (lista vazia: `and` mantém tudo, `or` descarta tudo)
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple

from .coercion import (
    loose_greater,
    loose_greater_equal,
    loose_less,
    loose_less_equal,
    strict_equals,
    to_js_string,
)

Row = Dict[str, Any]


def _member(value: Any, candidates: Any) -> bool:
    return any(strict_equals(value, c) for c in candidates)


_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "eq": strict_equals,
    "neq": lambda v, c: not strict_equals(v, c),
    "gt": loose_greater,
    "gte": loose_greater_equal,
    "lt": loose_less,
    "lte": loose_less_equal,
    "contains": lambda v, c: to_js_string(c) in to_js_string(v),
    "startsWith": lambda v, c: to_js_string(v).startswith(to_js_string(c)),
    "endsWith": lambda v, c: to_js_string(v).endswith(to_js_string(c)),
    "isNull": lambda v, c: v is None,
    "isNotNull": lambda v, c: v is not None,
    "in": lambda v, c: isinstance(c, (list, tuple)) and _member(v, c),
    "notIn": lambda v, c: isinstance(c, (list, tuple)) and not _member(v, c),
}

SUPPORTED_OPERATORS: Tuple[str, ...] = tuple(_OPERATORS)


def evaluate_condition(row: Mapping[str, Any], condition: Mapping[str, Any]) -> bool:
    op = _OPERATORS.get(condition.get("operator"))
    if op is None:
        return True
    return bool(op(row.get(condition.get("field")), condition.get("value")))


def matches(row: Mapping[str, Any], conditions: Sequence[Mapping[str, Any]], logic: str = "and") -> bool:
    results = (evaluate_condition(row, c) for c in conditions)
    if logic == "and":
        return all(results)
    return any(results)


def filter_rows(rows: List[Row], conditions: Sequence[Mapping[str, Any]], logic: str = "and") -> List[Row]:
    """Retorna as linhas que satisfazem o predicado (mesmos objetos, sem cópia)."""
    return [row for row in rows if matches(row, conditions, logic)]
