"""Operadores de transformação de linhas (nós `transform`).

Cada operador tem a forma `(rows, config) -> rows`, é puro (sem estado
entre chamadas) e nunca muta as linhas de entrada: toda linha de saída
é um novo `dict`.

Operadores e config esperada (chaves camelCase, como no produto):

  map          mappings: [{target, source?, expression?}]
  rename       renames: [{from, to}]
  select       fields: [str]
  derive       derivations: [{field, expression}]
  sort         sortBy: [{field, direction: asc|desc}]
  deduplicate  keys: [str], separator? (default "|")
  flatten      field: str, prefix? (default "")
  typecast     casts: [{field, type: string|number|boolean|date}], strict? (default False)

Um `transformType` desconhecido não chega aqui: o dispatcher o trata
como no-op explícito.
"""

from __future__ import annotations

from datetime import datetime
from functools import cmp_to_key
from typing import Any, Callable, Dict, List, Mapping

import pandas as pd

from nodeflow.core.exceptions import TypeCastError

from .coercion import (
    is_nan,
    js_truthy,
    key_part,
    loose_greater,
    loose_less,
    py_scalar,
    to_js_string,
    to_number,
)
from .expression import evaluate_expression

Row = Dict[str, Any]


def apply_map(rows: List[Row], config: Mapping[str, Any]) -> List[Row]:
    mappings = config.get("mappings") or []
    out: List[Row] = []
    for row in rows:
        new_row: Row = {}
        for m in mappings:
            if m.get("expression"):
                new_row[m["target"]] = evaluate_expression(row, m["expression"])
            else:
                new_row[m["target"]] = row.get(m.get("source"))
        out.append(new_row)
    return out


def apply_rename(rows: List[Row], config: Mapping[str, Any]) -> List[Row]:
    renames = config.get("renames") or []
    out: List[Row] = []
    for row in rows:
        new_row = dict(row)
        for r in renames:
            src, dst = r.get("from"), r.get("to")
            if src in new_row:
                new_row[dst] = new_row.pop(src)
        out.append(new_row)
    return out


def apply_select(rows: List[Row], config: Mapping[str, Any]) -> List[Row]:
    fields = config.get("fields") or []
    return [{f: row[f] for f in fields if f in row} for row in rows]


def apply_derive(rows: List[Row], config: Mapping[str, Any]) -> List[Row]:
    derivations = config.get("derivations") or []
    out: List[Row] = []
    for row in rows:
        new_row = dict(row)
        for d in derivations:
            # expressões enxergam a linha original, não os campos já derivados
            new_row[d["field"]] = evaluate_expression(row, d.get("expression"))
        out.append(new_row)
    return out


def _sort_comparator(sort_by: List[Mapping[str, Any]]) -> Callable[[Row, Row], int]:
    def compare(a: Row, b: Row) -> int:
        for spec in sort_by:
            field = spec.get("field")
            av, bv = a.get(field), b.get(field)
            c = -1 if loose_less(av, bv) else 1 if loose_greater(av, bv) else 0
            if c != 0:
                return -c if spec.get("direction") == "desc" else c
        return 0

    return compare


def apply_sort(rows: List[Row], config: Mapping[str, Any]) -> List[Row]:
    sort_by = list(config.get("sortBy") or [])
    # sorted() é estável: empates em todas as chaves preservam a ordem de entrada
    return [dict(r) for r in sorted(rows, key=cmp_to_key(_sort_comparator(sort_by)))]


def composite_key(row: Mapping[str, Any], fields: List[str], separator: str = "|") -> str:
    return separator.join(key_part(row.get(f)) for f in fields)


def apply_deduplicate(rows: List[Row], config: Mapping[str, Any]) -> List[Row]:
    keys = list(config.get("keys") or [])
    separator = config.get("separator", "|")
    seen = set()
    out: List[Row] = []
    for row in rows:
        k = composite_key(row, keys, separator)
        if k in seen:
            continue
        seen.add(k)
        out.append(dict(row))
    return out


def apply_flatten(rows: List[Row], config: Mapping[str, Any]) -> List[Row]:
    field = config.get("field")
    target = f"{config.get('prefix') or ''}{field}"
    out: List[Row] = []
    for row in rows:
        nested = row.get(field)
        if isinstance(nested, list):
            out.extend({**row, target: item} for item in nested)
        else:
            out.append(dict(row))
    return out


def _cast_date(value: Any) -> Any:
    value = py_scalar(value)
    if value is None or isinstance(value, bool):
        return pd.NaT
    if isinstance(value, (int, float)):
        if is_nan(value):
            return pd.NaT
        # números são epoch em milissegundos
        return pd.to_datetime(value, unit="ms", errors="coerce", utc=True)
    if isinstance(value, (str, datetime)):
        return pd.to_datetime(value, errors="coerce", utc=True)
    return pd.NaT


def cast_value(value: Any, target_type: str, *, strict: bool = False) -> Any:
    """Converte `value` para `target_type`.

    No modo permissivo (padrão), coerções inválidas resultam em NaN
    (number) ou NaT (date). No modo estrito, levantam TypeCastError.
    Tipos-alvo desconhecidos devolvem o valor inalterado.
    """
    if target_type == "string":
        return to_js_string(value)
    if target_type == "number":
        result = to_number(value)
        if strict and is_nan(result):
            raise TypeCastError(
                message=f"Cannot cast {value!r} to number",
                details={"value": to_js_string(value), "type": "number"},
            )
        return result
    if target_type == "boolean":
        return js_truthy(value)
    if target_type == "date":
        result = _cast_date(value)
        if strict and result is pd.NaT:
            raise TypeCastError(
                message=f"Cannot cast {value!r} to date",
                details={"value": to_js_string(value), "type": "date"},
            )
        return result
    return value


def apply_typecast(rows: List[Row], config: Mapping[str, Any]) -> List[Row]:
    casts = config.get("casts") or []
    strict = bool(config.get("strict", False))
    out: List[Row] = []
    for row in rows:
        new_row = dict(row)
        for c in casts:
            field = c.get("field")
            new_row[field] = cast_value(new_row.get(field), c.get("type"), strict=strict)
        out.append(new_row)
    return out


BUILTIN_TRANSFORMS: Dict[str, Callable[[List[Row], Mapping[str, Any]], List[Row]]] = {
    "map": apply_map,
    "rename": apply_rename,
    "select": apply_select,
    "derive": apply_derive,
    "sort": apply_sort,
    "deduplicate": apply_deduplicate,
    "flatten": apply_flatten,
    "typecast": apply_typecast,
}
