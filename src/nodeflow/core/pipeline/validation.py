# src/nodeflow/core/pipeline/validation.py
"""
Validação estrutural de definições de pipeline.

Executada pelo executor antes do planejamento, garante que:
    - o pipeline possui ao menos um nó
    - cada `Node.id` é não vazio e único
    - toda aresta referencia nós existentes
    - (opcional) existe ao menos um nó `source` e um `destination`

A detecção de ciclos pertence ao planner (`order_nodes`), que falha
antes de qualquer nó executar.

Limites explícitos:
    - Não valida o conteúdo de `config` dos nós
    - Não executa nem ordena nós
"""

from __future__ import annotations

from typing import Set

from nodeflow.core.exceptions import DuplicateNodeIdError, InvalidPipelineError, UnknownNodeError

from .types import NodeType, Pipeline


def validate_pipeline(pipeline: Pipeline, *, require_endpoints: bool = False) -> None:
    """
    Valida a estrutura de `pipeline`, levantando na primeira violação.

    Args:
        pipeline (Pipeline): Definição a validar.
        require_endpoints (bool): Exige ao menos um nó source e um destination.

    Raises:
        InvalidPipelineError: Pipeline vazio ou sem endpoints exigidos.
        DuplicateNodeIdError: `Node.id` vazio ou repetido.
        UnknownNodeError: Aresta referenciando nó inexistente.
    """
    if not pipeline.nodes:
        raise InvalidPipelineError(
            message="Invalid pipeline: pipeline must have at least one node",
            details={"pipeline_id": pipeline.id},
        )

    seen: Set[str] = set()
    for node in pipeline.nodes:
        if not isinstance(node.id, str) or not node.id.strip():
            raise DuplicateNodeIdError(
                message="Invalid pipeline: node id must be a non-empty string",
                details={"pipeline_id": pipeline.id},
            )
        if node.id in seen:
            raise DuplicateNodeIdError(
                message=f"Invalid pipeline: duplicate node id '{node.id}'",
                details={"pipeline_id": pipeline.id, "node_id": node.id},
            )
        seen.add(node.id)

    for edge in pipeline.edges:
        for end, node_id in (("source", edge.source), ("target", edge.target)):
            if node_id not in seen:
                raise UnknownNodeError(
                    message=f"Invalid pipeline: edge references unknown {end} node '{node_id}'",
                    details={"pipeline_id": pipeline.id, "edge_id": edge.id, "node_id": node_id},
                )

    if require_endpoints:
        types = {n.type for n in pipeline.nodes}
        if NodeType.SOURCE not in types:
            raise InvalidPipelineError(
                message="Invalid pipeline: pipeline must have at least one source node",
                details={"pipeline_id": pipeline.id},
            )
        if NodeType.DESTINATION not in types:
            raise InvalidPipelineError(
                message="Invalid pipeline: pipeline must have at least one destination node",
                details={"pipeline_id": pipeline.id},
            )
