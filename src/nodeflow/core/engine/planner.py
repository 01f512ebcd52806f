# src/nodeflow/core/engine/planner.py
"""
Planejador de execução do pipeline (DAG Orderer).

Este módulo produz a ordem topológica de execução dos nós a partir das
arestas declaradas, rejeitando grafos inválidos antes que qualquer nó
execute.

O planner opera exclusivamente em nível estrutural:
    - identificadores de nós
    - arestas (source → target)
    - formação de ciclos

Decisões arquiteturais:
    - Algoritmo de Kahn com fila FIFO
    - Desempate determinístico: nós prontos ao mesmo tempo saem na ordem
      em que entraram na fila; as raízes entram na ordem de declaração
      dos nós e os sucessores na ordem de declaração das arestas
    - Arestas repetidas contam uma vez por ocorrência (grau de entrada
      e lista de sucessores são simétricos)
    - Ciclo é erro de configuração fatal: nunca se devolve ordem truncada

Invariantes:
    - Cada nó aparece exatamente uma vez
    - Para toda aresta (s, t), s aparece antes de t
    - A mesma definição produz sempre a mesma ordem

Limites explícitos:
    - Não executa nós
    - Não interage com ExecutionContext
    - Não valida o conteúdo de `config`
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Iterable, List

from nodeflow.core.exceptions import CycleDetectedError, UnknownNodeError
from nodeflow.core.pipeline.types import Edge, Node


def order_nodes(nodes: Iterable[Node], edges: Iterable[Edge]) -> List[str]:
    """
    Calcula a ordem topológica de execução dos nós.

    Args:
        nodes (Iterable[Node]): Nós do pipeline, na ordem de declaração.
        edges (Iterable[Edge]): Arestas do pipeline, na ordem de declaração.

    Returns:
        List[str]: `Node.id` em ordem de execução.

    Raises:
        UnknownNodeError: Se uma aresta referenciar nó inexistente.
        CycleDetectedError: Se as arestas formarem um ciclo.
    """
    node_ids: List[str] = []
    in_degree: Dict[str, int] = {}
    successors: Dict[str, List[str]] = {}
    for n in nodes:
        if n.id not in in_degree:
            node_ids.append(n.id)
        in_degree[n.id] = 0
        successors[n.id] = []

    for e in edges:
        for node_id in (e.source, e.target):
            if node_id not in in_degree:
                raise UnknownNodeError(
                    message=f"Invalid pipeline: edge references unknown node '{node_id}'",
                    details={"edge_id": e.id, "node_id": node_id},
                )
        successors[e.source].append(e.target)
        in_degree[e.target] += 1

    ready: Deque[str] = deque(nid for nid in node_ids if in_degree[nid] == 0)
    order: List[str] = []

    while ready:
        nid = ready.popleft()
        order.append(nid)
        for child in successors[nid]:
            in_degree[child] -= 1
            if in_degree[child] == 0:
                ready.append(child)

    if len(order) < len(node_ids):
        blocked = [nid for nid in node_ids if in_degree[nid] > 0]
        raise CycleDetectedError(
            message=f"Invalid pipeline: cycle detected among nodes {blocked}",
            details={"nodes": blocked},
        )

    return order
