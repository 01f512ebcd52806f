"""Aggregation Engine: agrupa linhas e reduz cada grupo.

Contrato: `aggregate_rows(rows, group_by, aggregations)` onde cada
agregação é `{field, function, outputField}`.

  - `group_by` vazio: a entrada inteira é um grupo implícito; a saída é
    uma única linha só com os campos de agregação
  - caso contrário, linhas são agrupadas pela chave composta dos valores
    de `group_by` (unidos pelo separador); cada linha de saída traz os
    valores de agrupamento (tomados da primeira linha do grupo) e um
    campo por `outputField`
  - grupos saem na ordem de primeira ocorrência da chave

Funções: count, sum, avg, min, max, first, last, countDistinct.
Exceto `count`, todas descartam valores None antes do cálculo.
Função desconhecida resulta em None.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Sequence

import numpy as np

from .coercion import identity_key, to_number
from .transform import composite_key

Row = Dict[str, Any]


def _sum(values: List[Any]) -> Any:
    total: Any = 0
    for v in values:
        total = total + to_number(v)
    return total


def _avg(values: List[Any]) -> Any:
    if not values:
        return 0
    return _sum(values) / len(values)


def _min(values: List[Any]) -> Any:
    if not values:
        return float("inf")
    return np.min(np.array([to_number(v) for v in values], dtype=float)).item()


def _max(values: List[Any]) -> Any:
    if not values:
        return float("-inf")
    return np.max(np.array([to_number(v) for v in values], dtype=float)).item()


def _count_distinct(values: List[Any]) -> int:
    return len({identity_key(v) for v in values})


_FUNCTIONS: Dict[str, Callable[[List[Any]], Any]] = {
    "sum": _sum,
    "avg": _avg,
    "min": _min,
    "max": _max,
    "first": lambda values: values[0] if values else None,
    "last": lambda values: values[-1] if values else None,
    "countDistinct": _count_distinct,
}

SUPPORTED_FUNCTIONS = ("count",) + tuple(_FUNCTIONS)


def compute_aggregation(rows: Sequence[Mapping[str, Any]], aggregation: Mapping[str, Any]) -> Any:
    function = aggregation.get("function")
    if function == "count":
        return len(rows)
    fn = _FUNCTIONS.get(function)
    if fn is None:
        return None
    field = aggregation.get("field")
    values = [row.get(field) for row in rows if row.get(field) is not None]
    return fn(values)


def aggregate_rows(
    rows: List[Row],
    group_by: Sequence[str],
    aggregations: Sequence[Mapping[str, Any]],
    *,
    separator: str = "|",
) -> List[Row]:
    if not group_by:
        return [{a["outputField"]: compute_aggregation(rows, a) for a in aggregations}]

    groups: Dict[str, List[Row]] = {}
    for row in rows:
        groups.setdefault(composite_key(row, list(group_by), separator), []).append(row)

    out: List[Row] = []
    for members in groups.values():
        head = members[0]
        result: Row = {f: head.get(f) for f in group_by}
        for a in aggregations:
            result[a["outputField"]] = compute_aggregation(members, a)
        out.append(result)
    return out
