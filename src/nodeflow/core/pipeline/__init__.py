# src/nodeflow/core/pipeline/__init__.py
"""
# Pipeline Core — NodeFlow

Este pacote define os **contratos canônicos** de um pipeline: um DAG
explícito de nós tipados ligados por arestas dirigidas.

## Componentes

- **types**: `NodeType`, `Node`, `Edge`, `Pipeline`, `ExecutionStats`, `ExecutionResult`
- **node_config**: forma tipada do `config` de cada tipo de nó
- **context**: `ExecutionContext`, estado exclusivo de uma run
- **validation**: `validate_pipeline`, checagens estruturais
- **registry**: `TransformRegistry`, operadores de transformação por nome
- **loader**: `load_pipeline`, leitura de definições YAML/JSON

## Limites Explícitos

- Não planeja nem executa o pipeline (ver core.engine)
- Não realiza I/O de dados (ver core.connectors)
"""

from .context import ExecutionContext
from .loader import load_pipeline
from .node_config import parse_node_config
from .registry import TransformRegistry, default_registry
from .types import Edge, ExecutionResult, ExecutionStats, Node, NodeType, Pipeline, Row
from .validation import validate_pipeline

__all__ = [
    "Edge",
    "ExecutionContext",
    "ExecutionResult",
    "ExecutionStats",
    "Node",
    "NodeType",
    "Pipeline",
    "Row",
    "TransformRegistry",
    "default_registry",
    "load_pipeline",
    "parse_node_config",
    "validate_pipeline",
]
