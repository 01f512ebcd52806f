"""Coerções de valores compatíveis com as definições legadas do produto.

As definições de pipeline e os fixtures de teste foram produzidos por um
runtime JavaScript; operadores reproduzem aqui a mesma semântica "loose"
de conversão e comparação, de forma total (nunca levantam exceção).

Convenções (v1):
  - `to_number`: bool → 0/1, número inalterado, None → NaN,
    string em branco → 0, string numérica → número, demais → NaN
  - `to_js_string`: None → "null", bool → "true"/"false",
    float integral sem ".0", lista unida por vírgula, dict → "[object Object]"
  - `js_truthy`: "", 0, NaN, None e False são falsos; todo o resto verdadeiro
  - `strict_equals`: bool nunca é igual a número; NaN nunca é igual a nada
  - `loose_less` / `loose_greater`: strings comparam lexicograficamente,
    None nunca compara, demais casos comparam via `to_number`
"""

from __future__ import annotations

import math
from datetime import datetime
from numbers import Number
from typing import Any, Hashable, Tuple

import numpy as np
import pandas as pd

NAN = float("nan")


def _is_number(v: Any) -> bool:
    return isinstance(v, Number) and not isinstance(v, bool)


def py_scalar(v: Any) -> Any:
    # numpy → escalar Python
    if isinstance(v, np.generic):
        return v.item()
    return v


def is_nan(v: Any) -> bool:
    return isinstance(v, float) and math.isnan(v)


def to_number(value: Any) -> Any:
    value = py_scalar(value)
    if isinstance(value, bool):
        return int(value)
    if _is_number(value):
        return value
    if value is None or value is pd.NaT:
        return NAN
    if isinstance(value, datetime):
        # Date → epoch em milissegundos
        return value.timestamp() * 1000
    if isinstance(value, str):
        s = value.strip()
        if s == "":
            return 0
        parsed = pd.to_numeric(s, errors="coerce")
        parsed = py_scalar(parsed)
        if isinstance(parsed, float) and math.isnan(parsed):
            return NAN
        return parsed
    if isinstance(value, list):
        # [] → 0, [x] → Number(x), demais → NaN
        if not value:
            return 0
        if len(value) == 1:
            return to_number(to_js_string(value[0]))
        return NAN
    return NAN


def _format_number(v: Any) -> str:
    if isinstance(v, float):
        if math.isnan(v):
            return "NaN"
        if math.isinf(v):
            return "Infinity" if v > 0 else "-Infinity"
        if v.is_integer() and abs(v) < 1e21:
            return str(int(v))
    return str(v)


def to_js_string(value: Any) -> str:
    value = py_scalar(value)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if _is_number(value):
        return _format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join("" if v is None else to_js_string(v) for v in value)
    if value is pd.NaT:
        return "Invalid Date"
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def js_truthy(value: Any) -> bool:
    value = py_scalar(value)
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if _is_number(value):
        return not (value == 0 or is_nan(value))
    return True


def strict_equals(a: Any, b: Any) -> bool:
    a = py_scalar(a)
    b = py_scalar(b)
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    if _is_number(a) != _is_number(b):
        return False
    if isinstance(a, (dict, list)) or isinstance(b, (dict, list)):
        return a is b
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        return False


def _ordered_pair(a: Any, b: Any) -> Tuple[Any, Any] | None:
    a = py_scalar(a)
    b = py_scalar(b)
    if a is None or b is None:
        return None
    if isinstance(a, str) and isinstance(b, str):
        return a, b
    x, y = to_number(a), to_number(b)
    if is_nan(x) or is_nan(y):
        return None
    return x, y


def loose_less(a: Any, b: Any) -> bool:
    pair = _ordered_pair(a, b)
    return pair is not None and pair[0] < pair[1]


def loose_greater(a: Any, b: Any) -> bool:
    pair = _ordered_pair(a, b)
    return pair is not None and pair[0] > pair[1]


def loose_less_equal(a: Any, b: Any) -> bool:
    pair = _ordered_pair(a, b)
    return pair is not None and pair[0] <= pair[1]


def loose_greater_equal(a: Any, b: Any) -> bool:
    pair = _ordered_pair(a, b)
    return pair is not None and pair[0] >= pair[1]


def key_part(value: Any) -> str:
    """Representação de um valor dentro de uma chave composta (None → "")."""
    if value is None:
        return ""
    return to_js_string(value)


def identity_key(value: Any) -> Hashable:
    """Chave hashable com a mesma noção de igualdade de `strict_equals`.

    Usada por hash-join e `countDistinct`. Valores não hashable
    (dict/list) só colidem consigo mesmos; todos os NaN compartilham a
    mesma chave (o hash-join descarta chaves NaN antes da busca).
    """
    value = py_scalar(value)
    if isinstance(value, bool):
        return ("bool", value)
    if is_nan(value):
        return ("nan",)
    if _is_number(value):
        return ("num", value)
    if isinstance(value, (dict, list)):
        return ("ref", id(value))
    try:
        hash(value)
    except TypeError:
        return ("ref", id(value))
    return ("val", value)
