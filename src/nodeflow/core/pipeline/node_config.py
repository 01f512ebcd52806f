# src/nodeflow/core/pipeline/node_config.py
"""
Configuração tipada por tipo de nó.

O `config` de um nó chega como bag de opções (camelCase, como emitido
pelo produto). Este módulo converte o bag em uma variante explícita por
`NodeType`, de forma que o dispatcher trate cada caso exaustivamente:

    source      → SourceConfig(connector_type, options)
    destination → DestinationConfig(connector_type, options)
    transform   → TransformConfig(transform_type, options)
    filter      → FilterConfig(conditions, logic)
    join        → JoinConfig(join_type, left_key, right_key)
    aggregate   → AggregateConfig(group_by, aggregations)

Decisões:
    - `connectorType` e `transformType` são separados das demais opções,
      que seguem intactas para o Connector Port / operador
    - Valores ausentes recebem os defaults do produto (logic="and", joinType="inner")
    - Nenhuma validação semântica de operador acontece aqui; operadores
      desconhecidos são tratados pelos próprios avaliadores
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .types import Node, NodeType


def _split(config: Mapping[str, Any], key: str) -> Tuple[Optional[str], Dict[str, Any]]:
    options = dict(config)
    tag = options.pop(key, None)
    return tag, options


@dataclass(frozen=True)
class SourceConfig:
    connector_type: Optional[str]
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DestinationConfig:
    connector_type: Optional[str]
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TransformConfig:
    transform_type: Optional[str]
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FilterConfig:
    conditions: List[Dict[str, Any]] = field(default_factory=list)
    logic: str = "and"


@dataclass(frozen=True)
class JoinConfig:
    join_type: str = "inner"
    left_key: Optional[str] = None
    right_key: Optional[str] = None


@dataclass(frozen=True)
class AggregateConfig:
    group_by: List[str] = field(default_factory=list)
    aggregations: List[Dict[str, Any]] = field(default_factory=list)


NodeConfig = Union[
    SourceConfig,
    DestinationConfig,
    TransformConfig,
    FilterConfig,
    JoinConfig,
    AggregateConfig,
]


def parse_node_config(node: Node) -> NodeConfig:
    """Converte `node.config` na variante correspondente a `node.type`."""
    cfg = node.config or {}

    if node.type is NodeType.SOURCE:
        connector_type, options = _split(cfg, "connectorType")
        return SourceConfig(connector_type=connector_type, options=options)

    if node.type is NodeType.DESTINATION:
        connector_type, options = _split(cfg, "connectorType")
        return DestinationConfig(connector_type=connector_type, options=options)

    if node.type is NodeType.TRANSFORM:
        transform_type, options = _split(cfg, "transformType")
        return TransformConfig(transform_type=transform_type, options=options)

    if node.type is NodeType.FILTER:
        return FilterConfig(
            conditions=list(cfg.get("conditions") or []),
            logic=cfg.get("logic") or "and",
        )

    if node.type is NodeType.JOIN:
        return JoinConfig(
            join_type=cfg.get("joinType") or "inner",
            left_key=cfg.get("leftKey"),
            right_key=cfg.get("rightKey"),
        )

    if node.type is NodeType.AGGREGATE:
        return AggregateConfig(
            group_by=list(cfg.get("groupBy") or []),
            aggregations=list(cfg.get("aggregations") or []),
        )

    raise ValueError(f"Unhandled node type: {node.type!r}")
