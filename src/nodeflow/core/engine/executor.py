# src/nodeflow/core/engine/executor.py
"""
Executor de pipelines do NodeFlow.

Ponto de entrada único do engine: recebe a definição do pipeline, uma
flag de dry-run e o Connector Port, e produz um `ExecutionResult`.

Fluxo de uma run:
    1. Resolve a configuração efetiva (defaults + overrides) e o hash
    2. Cria um ExecutionContext exclusivo da run
    3. Valida a estrutura e calcula a ordem topológica
       (pipeline inválido/cíclico → falha antes de qualquer nó executar)
    4. Executa os nós sequencialmente, na ordem do planner
    5. Consolida `output_data` a partir dos datasets terminais

Política de falhas:
    - Qualquer exceção em um nó é fatal: a mensagem original é registrada
      em `errors`, a run para imediatamente e `output_data` é None
    - Nós posteriores não executam; não há retry nem execução parcial
    - Falhas fora do escopo de um nó (planejamento, montagem da saída)
      viram ENGINE_EXECUTION_ERROR; `execute()` não propaga exceções
    - Warnings (fallbacks não fatais) não afetam `success`

Dry-run:
    - sources usam `get_sample_data`; destinos não gravam nada
    - todos os demais operadores executam normalmente

Limites explícitos:
    - Execução síncrona e sequencial; sem cancelamento nem timeout
    - Não persiste resultados
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Mapping, Optional, Union

from nodeflow.core.config import compute_config_hash, deep_merge, load_config
from nodeflow.core.connectors.port import ConnectorPort
from nodeflow.core.errors import (
    ErrorPayload,
    connector_error,
    engine_execution_error,
    node_execution_error,
    pipeline_cycle,
    pipeline_invalid,
)
from nodeflow.core.exceptions import (
    ConnectorError,
    CycleDetectedError,
    InvalidPipelineError,
    NodeExecutionError,
)
from nodeflow.core.pipeline.context import ExecutionContext
from nodeflow.core.pipeline.registry import TransformRegistry
from nodeflow.core.pipeline.types import ExecutionResult, Node, Pipeline, Row
from nodeflow.core.pipeline.validation import validate_pipeline

from .dispatcher import NodeDispatcher
from .planner import order_nodes


class PipelineExecutor:
    """Engine canônico do NodeFlow (validação + planner + dispatcher)."""

    def __init__(
        self,
        *,
        connector: ConnectorPort,
        config: Optional[Mapping[str, Any]] = None,
        registry: Optional[TransformRegistry] = None,
    ):
        self.config: Dict[str, Any] = deep_merge(load_config(), dict(config or {}))
        self.config_hash: str = compute_config_hash(self.config)
        self.dispatcher = NodeDispatcher(connector=connector, registry=registry)

    def _engine_cfg(self) -> Dict[str, Any]:
        return self.config.get("engine") or {}

    # ------------------------------------------------------------------
    # Exceção -> ErrorPayload
    # ------------------------------------------------------------------
    def _structural_error(self, exc: InvalidPipelineError) -> ErrorPayload:
        if isinstance(exc, CycleDetectedError):
            return pipeline_cycle(message=str(exc), details=dict(exc.details))
        return pipeline_invalid(message=str(exc), details=dict(exc.details))

    def _node_error(self, node: Node, exc: Exception) -> ErrorPayload:
        if isinstance(exc, ConnectorError):
            return connector_error(
                message=str(exc),
                node_id=node.id,
                node_type=node.type.value,
                connector_type=node.config.get("connectorType"),
            )
        exc_type = exc.__class__.__name__
        if isinstance(exc, NodeExecutionError):
            exc_type = exc.details.get("exc_type", exc_type)
        return node_execution_error(
            message=str(exc) or exc.__class__.__name__,
            node_id=node.id,
            node_type=node.type.value,
            exc_type=exc_type,
        )

    def _engine_failure(self, ctx: ExecutionContext, exc: Exception) -> ExecutionResult:
        payload = engine_execution_error(
            message=str(exc) or exc.__class__.__name__,
            exc_type=exc.__class__.__name__,
        )
        ctx.add_error(payload.message)
        ctx.log(
            node_id=None,
            level="error",
            message=payload.message,
            error_type=payload.type,
            exc_type=exc.__class__.__name__,
        )
        return ctx.build_result(output_data=None, error=payload.to_dict())

    # ------------------------------------------------------------------
    # Saída
    # ------------------------------------------------------------------
    def _collect_output(self, pipeline: Pipeline, ctx: ExecutionContext) -> List[Row]:
        include_all = self._engine_cfg().get("output", "terminal") == "all"
        datasets = ctx.outputs()
        rows: List[Row] = []
        for node_id in ctx.node_order:
            if node_id not in datasets:
                continue
            if include_all or not pipeline.outgoing(node_id):
                rows.extend(datasets[node_id])
        return rows

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------
    def execute(
        self,
        pipeline: Union[Pipeline, Mapping[str, Any]],
        *,
        dry_run: Optional[bool] = None,
    ) -> ExecutionResult:
        if dry_run is None:
            dry_run = bool(self._engine_cfg().get("dry_run", False))

        if isinstance(pipeline, Pipeline):
            raw_id = pipeline.id
        elif isinstance(pipeline, Mapping):
            raw_id = pipeline.get("id")
        else:
            raw_id = None
        ctx = ExecutionContext(
            run_id=str(uuid.uuid4()),
            pipeline_id="" if raw_id is None else str(raw_id),
            config=self.config,
            dry_run=dry_run,
            config_hash=self.config_hash,
        )
        ctx.log(node_id=None, level="info", message="run started", dry_run=dry_run)

        try:
            if not isinstance(pipeline, Pipeline):
                pipeline = Pipeline.from_dict(pipeline)
            validate_pipeline(
                pipeline,
                require_endpoints=bool(self._engine_cfg().get("require_endpoints", False)),
            )
            ctx.node_order = order_nodes(pipeline.nodes, pipeline.edges)
        except InvalidPipelineError as exc:
            ctx.add_error(str(exc))
            ctx.log(node_id=None, level="error", message=str(exc))
            return ctx.build_result(output_data=None, error=self._structural_error(exc).to_dict())
        except Exception as exc:
            return self._engine_failure(ctx, exc)

        ctx.log(
            node_id=None,
            level="info",
            message="execution plan ready",
            pipeline_id=pipeline.id,
            node_count=len(ctx.node_order),
        )

        for node_id in ctx.node_order:
            node = pipeline.node(node_id)
            try:
                self.dispatcher.dispatch(pipeline, node, ctx)
            except Exception as exc:
                payload = self._node_error(node, exc)
                ctx.add_error(payload.message)
                ctx.log(
                    node_id=node.id,
                    level="error",
                    message=payload.message,
                    error_type=payload.type,
                    exc_type=exc.__class__.__name__,
                )
                return ctx.build_result(output_data=None, error=payload.to_dict())

        try:
            output_data = self._collect_output(pipeline, ctx)
        except Exception as exc:
            return self._engine_failure(ctx, exc)

        ctx.log(
            node_id=None,
            level="info",
            message="run finished",
            rows_processed=ctx.stats.rows_processed,
            rows_output=ctx.stats.rows_output,
        )
        return ctx.build_result(output_data=output_data)


def execute_pipeline(
    pipeline: Union[Pipeline, Mapping[str, Any]],
    *,
    connector: ConnectorPort,
    dry_run: bool = False,
    config: Optional[Mapping[str, Any]] = None,
) -> ExecutionResult:
    """Atalho: cria um PipelineExecutor e executa `pipeline` uma única vez."""
    return PipelineExecutor(connector=connector, config=config).execute(pipeline, dry_run=dry_run)
