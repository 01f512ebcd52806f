# src/nodeflow/core/engine/dispatcher.py
"""
Dispatcher de nós.

Encaminha cada nó, na ordem do planner, para o operador/engine
correspondente ao seu tipo e materializa a saída no ExecutionContext.

Por tipo de nó:
    - source      → Connector Port (fetch_data; get_sample_data em dry-run)
    - transform   → TransformRegistry por `transformType`; desconhecido = no-op
    - filter      → predicados; atualiza `rows_filtered`
    - join        → Join Engine com os datasets das duas primeiras arestas
                    de entrada; menos de duas arestas = dataset vazio
    - aggregate   → Aggregation Engine
    - destination → Connector Port (write_data; nada em dry-run); a saída
                    é a própria entrada; atualiza `rows_output`

Após qualquer nó, `rows_processed` soma o tamanho da saída (destinos
contam em `rows_processed` e em `rows_output`).

Entrada de um nó: concatenação dos datasets dos nós de origem das
arestas de entrada, na ordem das arestas.

Falhas:
    - Exceções do Connector Port viram ConnectorError
    - Demais exceções de operadores viram NodeExecutionError (a mensagem
      original é preservada; a classe vai em `details.exc_type`)
    - Exceções do NodeFlow propagam sem encapsulamento

Limites explícitos:
    - Não ordena nós
    - Não decide a política de falha: tudo propaga para o executor
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from nodeflow.core.connectors.port import ConnectorPort
from nodeflow.core.exceptions import ConnectorError, NodeExecutionError, NodeflowException
from nodeflow.core.pipeline.context import ExecutionContext
from nodeflow.core.pipeline.node_config import (
    AggregateConfig,
    DestinationConfig,
    FilterConfig,
    JoinConfig,
    SourceConfig,
    TransformConfig,
    parse_node_config,
)
from nodeflow.core.pipeline.registry import TransformRegistry, default_registry
from nodeflow.core.pipeline.types import Node, NodeType, Pipeline, Row
from nodeflow.operators.aggregate import aggregate_rows
from nodeflow.operators.filter import filter_rows
from nodeflow.operators.join import JOIN_TYPES, join_rows


def _section(ctx: ExecutionContext, name: str) -> Dict[str, Any]:
    section = (ctx.config or {}).get(name) or {}
    return section if isinstance(section, dict) else {}


class NodeDispatcher:
    """Executa um nó por vez sobre o ExecutionContext da run."""

    def __init__(self, *, connector: ConnectorPort, registry: Optional[TransformRegistry] = None):
        self.connector = connector
        self.registry = registry if registry is not None else default_registry()

    # ------------------------------------------------------------------
    # Entrada / saída
    # ------------------------------------------------------------------
    def gather_input(self, pipeline: Pipeline, node: Node, ctx: ExecutionContext) -> List[Row]:
        rows: List[Row] = []
        for edge in pipeline.incoming(node.id):
            if ctx.has_output(edge.source):
                rows.extend(ctx.get_output(edge.source))
        return rows

    def dispatch(self, pipeline: Pipeline, node: Node, ctx: ExecutionContext) -> List[Row]:
        input_rows = self.gather_input(pipeline, node, ctx)
        ctx.log(
            node_id=node.id,
            level="debug",
            message="node started",
            node_type=node.type.value,
            rows_in=len(input_rows),
        )

        handlers: Dict[NodeType, Callable[..., List[Row]]] = {
            NodeType.SOURCE: self._run_source,
            NodeType.TRANSFORM: self._run_transform,
            NodeType.FILTER: self._run_filter,
            NodeType.JOIN: self._run_join,
            NodeType.AGGREGATE: self._run_aggregate,
            NodeType.DESTINATION: self._run_destination,
        }
        try:
            output = handlers[node.type](
                pipeline=pipeline,
                node=node,
                cfg=parse_node_config(node),
                rows=input_rows,
                ctx=ctx,
            )
        except NodeflowException:
            raise
        except Exception as exc:
            raise NodeExecutionError(
                message=str(exc) or exc.__class__.__name__,
                details={
                    "node_id": node.id,
                    "node_type": node.type.value,
                    "exc_type": exc.__class__.__name__,
                },
            ) from exc

        ctx.set_output(node.id, output)
        ctx.record_processed(len(output))
        ctx.log(
            node_id=node.id,
            level="info",
            message="node finished",
            node_type=node.type.value,
            rows_in=len(input_rows),
            rows_out=len(output),
        )
        return output

    # ------------------------------------------------------------------
    # Connector Port
    # ------------------------------------------------------------------
    def _call_connector(self, method: str, node: Node, *args: Any) -> Any:
        try:
            return getattr(self.connector, method)(*args)
        except NodeflowException:
            raise
        except Exception as exc:
            raise ConnectorError(
                message=str(exc) or f"{method} failed",
                details={
                    "node_id": node.id,
                    "connector_type": args[0] if args else None,
                    "exception_class": exc.__class__.__name__,
                },
            ) from exc

    def _run_source(self, *, node: Node, cfg: SourceConfig, ctx: ExecutionContext, **_: Any) -> List[Row]:
        if ctx.dry_run:
            rows = self._call_connector("get_sample_data", node, cfg.connector_type, cfg.options)
        else:
            rows = self._call_connector("fetch_data", node, cfg.connector_type, cfg.options)
        return list(rows or [])

    def _run_destination(
        self, *, node: Node, cfg: DestinationConfig, rows: List[Row], ctx: ExecutionContext, **_: Any
    ) -> List[Row]:
        if ctx.dry_run:
            ctx.log(
                node_id=node.id,
                level="info",
                message=f"[DRY RUN] Would write {len(rows)} rows to {cfg.connector_type}",
            )
        else:
            self._call_connector("write_data", node, cfg.connector_type, cfg.options, rows)
        ctx.record_output(len(rows))
        return rows

    # ------------------------------------------------------------------
    # Operadores
    # ------------------------------------------------------------------
    def _transform_options(self, transform_type: str, options: Mapping[str, Any], ctx: ExecutionContext) -> Dict[str, Any]:
        merged = dict(options)
        if transform_type == "deduplicate":
            merged.setdefault("separator", _section(ctx, "keys").get("separator", "|"))
        elif transform_type == "typecast":
            merged.setdefault("strict", bool(_section(ctx, "typecast").get("strict", False)))
        return merged

    def _run_transform(
        self, *, node: Node, cfg: TransformConfig, rows: List[Row], ctx: ExecutionContext, **_: Any
    ) -> List[Row]:
        fn = self.registry.get(cfg.transform_type)
        if fn is None:
            ctx.add_warning(
                node_id=node.id,
                message=f"unknown transform type '{cfg.transform_type}'; data passed through unchanged",
            )
            return rows
        return fn(rows, self._transform_options(cfg.transform_type, cfg.options, ctx))

    def _run_filter(self, *, cfg: FilterConfig, rows: List[Row], ctx: ExecutionContext, **_: Any) -> List[Row]:
        kept = filter_rows(rows, cfg.conditions, cfg.logic)
        ctx.record_filtered(len(rows) - len(kept))
        return kept

    def _run_join(
        self, *, pipeline: Pipeline, node: Node, cfg: JoinConfig, ctx: ExecutionContext, **_: Any
    ) -> List[Row]:
        incoming = pipeline.incoming(node.id)
        if len(incoming) < 2:
            ctx.add_warning(
                node_id=node.id,
                message=f"join requires two inputs, got {len(incoming)}; output is empty",
            )
            return []
        if cfg.join_type not in JOIN_TYPES:
            ctx.add_warning(node_id=node.id, message=f"unknown join type '{cfg.join_type}'; output is empty")
            return []

        left = ctx.get_output(incoming[0].source) if ctx.has_output(incoming[0].source) else []
        right = ctx.get_output(incoming[1].source) if ctx.has_output(incoming[1].source) else []
        return join_rows(
            left,
            right,
            cfg.left_key,
            cfg.right_key,
            cfg.join_type,
            strategy=_section(ctx, "join").get("strategy", "hash"),
        )

    def _run_aggregate(self, *, cfg: AggregateConfig, rows: List[Row], ctx: ExecutionContext, **_: Any) -> List[Row]:
        return aggregate_rows(
            rows,
            cfg.group_by,
            cfg.aggregations,
            separator=_section(ctx, "keys").get("separator", "|"),
        )
