# src/nodeflow/__init__.py
"""
NodeFlow — engine de execução de pipelines de dados em DAG.

Um pipeline é um grafo dirigido acíclico de nós tipados (source,
transform, filter, join, aggregate, destination). O engine ordena os
nós topologicamente, executa cada um sobre datasets em memória (listas
de linhas) e devolve um `ExecutionResult` com estatísticas, erros e o
dataset de saída.

Arquitetura em alto nível:
    - core.config     → carregamento, merge e hashing de configuração
    - core.pipeline   → definição do pipeline e contexto de execução
    - core.engine     → planner, dispatcher e executor
    - core.connectors → Connector Port (única dependência externa)
    - operators       → operadores relacionais e de transformação

Uso típico:

    from nodeflow import InMemoryConnector, execute_pipeline

    result = execute_pipeline(definition, connector=InMemoryConnector(), dry_run=True)
"""

from .core.connectors import ConnectorPort, InMemoryConnector
from .core.engine import PipelineExecutor, execute_pipeline
from .core.pipeline import ExecutionResult, Pipeline, load_pipeline

__all__ = [
    "ConnectorPort",
    "ExecutionResult",
    "InMemoryConnector",
    "Pipeline",
    "PipelineExecutor",
    "execute_pipeline",
    "load_pipeline",
]

__version__ = "0.1.0"
