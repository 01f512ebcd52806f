"""Avaliador de expressões por linha usado por `map` e `derive`.

Gramática (v1), tentada nesta ordem; apenas uma regra se aplica:

  1. `$campo`                   → referência direta ao valor do campo
  2. `$campo <op> operando`     → aritmética com op ∈ {+, -, *, /};
                                  operando é `$outro` ou literal numérico;
                                  ambos os lados passam por `to_number`;
                                  divisão por zero resulta em 0
  3. `concat(a, b, ...)`        → concatenação; `$campo` é substituído,
                                  literais têm aspas removidas
  4. qualquer outra coisa       → a própria expressão, como literal

Uma expressão iniciada por `$` que não casa com as regras 1 e 2 (ex.:
`$first name`) é lida como referência ao texto após o `$`, como no
comportamento legado.

O avaliador é total: nunca levanta exceção para expressões malformadas.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from .coercion import NAN, is_nan, key_part, to_number

_FIELD_REF = re.compile(r"^\$(\w+)$")
_ARITHMETIC = re.compile(r"^\$(\w+)\s*([+\-*/])\s*(.+)$")
_CONCAT = re.compile(r"^concat\((.+)\)$")
_QUOTES = re.compile(r"['\"]")


def _operand(row: Mapping[str, Any], token: str) -> Any:
    token = token.strip()
    if token.startswith("$"):
        return to_number(row.get(token[1:]))
    return to_number(token)


def _arithmetic(left: Any, op: str, right: Any) -> Any:
    if is_nan(left) or is_nan(right):
        return NAN
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    # op == "/"
    if right == 0:
        return 0
    return left / right


def evaluate_expression(row: Mapping[str, Any], expression: Any) -> Any:
    """Avalia `expression` sobre `row`, sem mutar a linha."""
    if not isinstance(expression, str):
        return expression

    expr = expression.strip()

    m = _FIELD_REF.match(expr)
    if m:
        return row.get(m.group(1))

    m = _ARITHMETIC.match(expr)
    if m:
        field, op, operand = m.groups()
        return _arithmetic(to_number(row.get(field)), op, _operand(row, operand))

    if expr.startswith("$"):
        return row.get(expr[1:])

    m = _CONCAT.match(expr)
    if m:
        parts = []
        for raw in m.group(1).split(","):
            token = raw.strip()
            if token.startswith("$"):
                parts.append(key_part(row.get(token[1:])))
            else:
                parts.append(_QUOTES.sub("", token))
        return "".join(parts)

    return expression
