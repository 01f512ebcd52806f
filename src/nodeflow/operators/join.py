"""Join Engine: combina dois datasets nomeados por igualdade de chave.

Contrato: `join_rows(left, right, left_key, right_key, join_type)`.

  inner  pares left × right com left[left_key] === right[right_key];
         linha resultante = left mesclado com right (right sobrescreve)
  left   toda linha left com todos os seus matches (right sobrescreve);
         linha left sem match sai como está
  right  simétrico: left sobrescreve right no match; right sem match sai como está
  full   resultado do left join + linhas right que não casaram com nenhuma left

Igualdade é estrita (`strict_equals`), sem coerção de tipos entre os lados.
Campos ausentes valem None, e None casa com None.

Estratégias (config `join.strategy`):
  - nested_loop: O(|left| × |right|), referência direta da semântica
  - hash (padrão): indexa um dos lados por `identity_key`; preserva
    multiplicidade, ordem de saída e direção de sobrescrita do nested_loop

Um `join_type` desconhecido produz dataset vazio.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, Hashable, List, Optional

from .coercion import identity_key, is_nan, strict_equals

Row = Dict[str, Any]

JOIN_TYPES = ("inner", "left", "right", "full")
STRATEGIES = ("hash", "nested_loop")


# -----------------------------
# Localização de matches
# -----------------------------

class _NestedLoopIndex:
    def __init__(self, rows: List[Row], key: Optional[str]):
        self.rows = rows
        self.key = key

    def matches(self, value: Any) -> List[int]:
        return [i for i, r in enumerate(self.rows) if strict_equals(r.get(self.key), value)]


class _HashIndex:
    def __init__(self, rows: List[Row], key: Optional[str]):
        self._buckets: Dict[Hashable, List[int]] = defaultdict(list)
        for i, r in enumerate(rows):
            v = r.get(key)
            if is_nan(v):
                continue
            self._buckets[identity_key(v)].append(i)

    def matches(self, value: Any) -> List[int]:
        if is_nan(value):
            return []
        return self._buckets.get(identity_key(value), [])


def _index(rows: List[Row], key: Optional[str], strategy: str):
    if strategy == "nested_loop":
        return _NestedLoopIndex(rows, key)
    return _HashIndex(rows, key)


# -----------------------------
# Join
# -----------------------------

def join_rows(
    left: List[Row],
    right: List[Row],
    left_key: Optional[str],
    right_key: Optional[str],
    join_type: str = "inner",
    *,
    strategy: str = "hash",
) -> List[Row]:
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown join strategy: {strategy!r} (expected one of {STRATEGIES})")

    result: List[Row] = []

    if join_type in ("inner", "left", "full"):
        right_index = _index(right, right_key, strategy)
        matched_right = set()
        for lrow in left:
            hits = right_index.matches(lrow.get(left_key))
            for i in hits:
                result.append({**lrow, **right[i]})
                matched_right.add(i)
            if not hits and join_type != "inner":
                result.append(dict(lrow))
        if join_type == "full":
            result.extend(dict(r) for i, r in enumerate(right) if i not in matched_right)
        return result

    if join_type == "right":
        left_index = _index(left, left_key, strategy)
        for rrow in right:
            hits = left_index.matches(rrow.get(right_key))
            for i in hits:
                result.append({**rrow, **left[i]})
            if not hits:
                result.append(dict(rrow))
        return result

    return result
