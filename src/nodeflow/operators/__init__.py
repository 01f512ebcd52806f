"""
Operadores relacionais e de transformação do NodeFlow.

Módulos:
    - coercion   → conversões e comparações compatíveis com o produto legado
    - expression → mini-linguagem de expressões por linha (map / derive)
    - filter     → predicados de filtro (nós `filter`)
    - transform  → operadores de transformação (nós `transform`)
    - join       → Join Engine (inner / left / right / full)
    - aggregate  → Aggregation Engine (group-by + funções de agregação)

Todos os operadores são puros e não mutam as linhas de entrada.
"""

from .aggregate import aggregate_rows, compute_aggregation
from .expression import evaluate_expression
from .filter import evaluate_condition, filter_rows
from .join import join_rows
from .transform import BUILTIN_TRANSFORMS

__all__ = [
    "BUILTIN_TRANSFORMS",
    "aggregate_rows",
    "compute_aggregation",
    "evaluate_condition",
    "evaluate_expression",
    "filter_rows",
    "join_rows",
]
