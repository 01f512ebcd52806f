# src/nodeflow/core/engine/__init__.py
"""
Engine do NodeFlow.

Este pacote contém a implementação responsável por **planejar** e
**executar** pipelines de dados definidos como DAGs de nós.

Componentes principais:
    - planner    → ordenação topológica determinística e detecção de ciclos
    - dispatcher → encaminhamento de cada nó ao operador do seu tipo
    - executor   → ciclo de vida da run, política de falhas e resultado final

Princípios fundamentais:
    - Planejamento e execução são responsabilidades separadas
    - A ordem de execução é determinística para a mesma definição
    - Qualquer falha de nó é fatal e explícita; fallbacks geram warnings

Invariantes:
    - Um nó só executa após todos os seus predecessores
    - Cada nó executa no máximo uma vez por run
    - Um pipeline cíclico nunca executa nenhum nó

Limites explícitos:
    - Não conhece drivers de conectores (ver core.connectors)
    - Não persiste resultados
"""

from .dispatcher import NodeDispatcher
from .executor import PipelineExecutor, execute_pipeline
from .planner import order_nodes

__all__ = ["NodeDispatcher", "PipelineExecutor", "execute_pipeline", "order_nodes"]
