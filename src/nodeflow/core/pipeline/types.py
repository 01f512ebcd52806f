# src/nodeflow/core/pipeline/types.py
"""
Tipos canônicos do pipeline do NodeFlow.

Este módulo define as estruturas imutáveis que descrevem um pipeline
(nós e arestas) e o resultado produzido por uma execução.

Componentes principais:
    - NodeType        → enum dos tipos de nó (source, transform, ...)
    - Node / Edge     → elementos do DAG
    - Pipeline        → definição completa, imutável durante a run
    - ExecutionStats  → contadores e timestamps de uma run
    - ExecutionResult → resultado final, produzido uma única vez por run

Princípios fundamentais:
    - Definições de pipeline são somente-leitura para o engine
    - Linhas (`Row`) são mapas abertos, sem schema imposto
    - Tipos são serializáveis (`to_dict`)

Limites explícitos:
    - Não executa nós
    - Não valida estrutura do grafo (ver validation / planner)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from nodeflow.core.exceptions import InvalidPipelineError

Row = Dict[str, Any]


def _as_id(value: Any) -> str:
    return "" if value is None else str(value)


class NodeType(str, Enum):
    """
    Tipos de nó suportados pelo engine.

    Os valores são strings para facilitar serialização e leitura das
    definições em JSON/YAML emitidas pelo produto.
    """

    SOURCE = "source"
    TRANSFORM = "transform"
    FILTER = "filter"
    JOIN = "join"
    AGGREGATE = "aggregate"
    DESTINATION = "destination"


@dataclass(frozen=True)
class Node:
    """Passo de processamento do pipeline.

    `config` é o bag de opções cujo formato depende de `type`; a forma
    tipada é obtida via `node_config.parse_node_config`.
    """

    id: str
    type: NodeType
    config: Mapping[str, Any] = field(default_factory=dict)
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Node":
        if not isinstance(data, Mapping):
            raise InvalidPipelineError(
                message=f"Invalid pipeline: node entry must be a mapping, got {type(data).__name__}",
                details={"entry": repr(data)},
            )
        raw_config = data.get("config")
        if raw_config is not None and not isinstance(raw_config, Mapping):
            raise InvalidPipelineError(
                message=f"Invalid pipeline: config of node '{data.get('id')}' must be a mapping",
                details={"node_id": data.get("id"), "config_type": type(raw_config).__name__},
            )
        raw_type = data.get("type")
        try:
            node_type = NodeType(raw_type)
        except ValueError:
            raise InvalidPipelineError(
                message=f"Invalid pipeline: unknown node type '{raw_type}' for node '{data.get('id')}'",
                details={"node_id": data.get("id"), "node_type": raw_type},
            ) from None
        return cls(
            id=_as_id(data.get("id")),
            type=node_type,
            config=dict(raw_config or {}),
            name=data.get("name"),
        )


@dataclass(frozen=True)
class Edge:
    """Aresta dirigida `source → target` entre dois nós."""

    source: str
    target: str
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Edge":
        if not isinstance(data, Mapping):
            raise InvalidPipelineError(
                message=f"Invalid pipeline: edge entry must be a mapping, got {type(data).__name__}",
                details={"entry": repr(data)},
            )
        return cls(source=_as_id(data.get("source")), target=_as_id(data.get("target")), id=data.get("id"))


@dataclass(frozen=True)
class Pipeline:
    """
    Definição completa de um pipeline.

    Invariantes esperados (verificados por `validate_pipeline` e pelo planner):
        - `Node.id` é único
        - toda aresta referencia nós existentes
        - nós e arestas formam um DAG
    """

    id: str
    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Pipeline":
        """Constrói um Pipeline a partir do documento JSON/YAML do produto.

        Chaves extras (name, position, sourceHandle, ...) são ignoradas.
        """
        if not isinstance(data, Mapping):
            raise InvalidPipelineError(
                message=f"Invalid pipeline: definition must be a mapping, got {type(data).__name__}",
            )
        for key in ("nodes", "edges"):
            entries = data.get(key)
            if entries is not None and not isinstance(entries, (list, tuple)):
                raise InvalidPipelineError(
                    message=f"Invalid pipeline: '{key}' must be a list, got {type(entries).__name__}",
                    details={"key": key},
                )
        return cls(
            id=_as_id(data.get("id")),
            nodes=tuple(Node.from_dict(n) for n in (data.get("nodes") or [])),
            edges=tuple(Edge.from_dict(e) for e in (data.get("edges") or [])),
        )

    def node(self, node_id: str) -> Node:
        for n in self.nodes:
            if n.id == node_id:
                return n
        raise KeyError(node_id)

    def incoming(self, node_id: str) -> List[Edge]:
        """Arestas que chegam em `node_id`, na ordem de declaração."""
        return [e for e in self.edges if e.target == node_id]

    def outgoing(self, node_id: str) -> List[Edge]:
        return [e for e in self.edges if e.source == node_id]


@dataclass
class ExecutionStats:
    """Contadores agregados de uma run.

    `rows_processed` soma a saída de todos os nós, inclusive destinos,
    cujas linhas também entram em `rows_output`.
    """

    start_time: datetime
    rows_processed: int = 0
    rows_filtered: int = 0
    rows_output: int = 0
    end_time: Optional[datetime] = None

    @property
    def duration_ms(self) -> Optional[int]:
        if self.end_time is None:
            return None
        return max(0, int((self.end_time - self.start_time).total_seconds() * 1000))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows_processed": self.rows_processed,
            "rows_filtered": self.rows_filtered,
            "rows_output": self.rows_output,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "duration_ms": self.duration_ms,
        }


@dataclass(frozen=True)
class ExecutionResult:
    """
    Resultado imutável de uma execução de pipeline.

    Campos:
        - success: True somente se nenhum erro foi registrado
        - stats: contadores e timestamps da run
        - errors: mensagens de erro (append-only durante a run)
        - output_data: datasets terminais concatenados; None em caso de falha
        - run_id / pipeline_id / config_hash: identidade da execução
        - node_order: ordem topológica efetivamente usada
        - error: payload estruturado do erro fatal (ErrorPayload.to_dict())
        - warnings: fallbacks não fatais por nó
        - events: log estruturado da run
    """

    success: bool
    stats: ExecutionStats
    errors: List[str] = field(default_factory=list)
    output_data: Optional[List[Row]] = None
    run_id: Optional[str] = None
    pipeline_id: Optional[str] = None
    config_hash: Optional[str] = None
    node_order: List[str] = field(default_factory=list)
    error: Optional[Dict[str, Any]] = None
    warnings: Dict[str, List[str]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    def output_frame(self):
        """Retorna `output_data` como `pandas.DataFrame` (vazio em caso de falha)."""
        import pandas as pd  # type: ignore

        return pd.DataFrame(self.output_data or [])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "run_id": self.run_id,
            "pipeline_id": self.pipeline_id,
            "config_hash": self.config_hash,
            "stats": self.stats.to_dict(),
            "errors": list(self.errors),
            "error": dict(self.error) if self.error is not None else None,
            "node_order": list(self.node_order),
            "output_data": [dict(r) for r in self.output_data] if self.output_data is not None else None,
            "warnings": {k: list(v) for k, v in self.warnings.items()},
            "events": [dict(e) for e in self.events],
        }
