# tests/conftest.py
"""
Fixtures compartilhados para testes do NodeFlow.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas (YAML como string)
- contexto de execução controlado (ExecutionContext)
- Connector Port em memória com datasets conhecidos
- definições de pipeline no formato emitido pelo produto

O objetivo destas fixtures é permitir testes do core e dos operadores
sem depender de:
- drivers reais de bancos, APIs ou arquivos
- variáveis de ambiente
- estado global entre testes

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Definições de pipeline são dicionários puros (como JSON do produto)
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture executa pipeline
    - Nenhuma fixture realiza I/O
    - Cada teste recebe instâncias novas (sem compartilhamento)

Limites explícitos:
    - Não substituir testes de integração (ver tests/e2e)
    - Não conter lógica condicional complexa
"""

import pytest


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de configuração padrão (defaults) semelhante ao empacotado.

    Usado por:
        - Testes do loader de config
        - Testes de deep-merge (defaults + local)
        - Testes de hashing de config resolvida

    Returns:
        str: Conteúdo YAML representando configuração padrão (defaults).
    """
    return """\
engine:
  dry_run: false
  output: terminal
join:
  strategy: hash
keys:
  separator: "|"
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML de overrides locais (apenas as chaves que mudam)."""
    return """\
engine:
  output: all
join:
  strategy: nested_loop
"""


# =====================================================
# Pipeline fixtures
# =====================================================

@pytest.fixture
def dummy_ctx():
    """
    ExecutionContext determinístico para testes de contexto e dispatcher.

    Decisões arquiteturais:
        - `run_id` fixo para asserções sobre eventos
        - Config vazia: defaults do engine não são necessários aqui

    Returns:
        ExecutionContext: Contexto isolado, ainda não consumido.
    """
    from nodeflow.core.pipeline.context import ExecutionContext

    return ExecutionContext(run_id="run-test-001", pipeline_id="pipe-test")


@pytest.fixture
def customers_rows() -> list:
    return [
        {"id": 1, "name": "Ana", "country": "BR", "score": 80},
        {"id": 2, "name": "Bruno", "country": "PT", "score": 45},
        {"id": 3, "name": "Carla", "country": "BR", "score": 92},
    ]


@pytest.fixture
def orders_rows() -> list:
    return [
        {"order_id": 10, "customer_id": 1, "amount": 100},
        {"order_id": 11, "customer_id": 1, "amount": 50},
        {"order_id": 12, "customer_id": 3, "amount": 70},
    ]


@pytest.fixture
def memory_connector(customers_rows, orders_rows):
    """
    InMemoryConnector com dois datasets de leitura e um sink.

    - `customers` → customers_rows
    - `orders`    → orders_rows
    - `warehouse` → sink de escrita

    Returns:
        InMemoryConnector: Conector novo a cada teste.
    """
    from nodeflow.core.connectors.memory import InMemoryConnector

    connector = InMemoryConnector()
    connector.register("customers", customers_rows)
    connector.register("orders", orders_rows)
    connector.register_sink("warehouse")
    return connector


@pytest.fixture
def linear_pipeline() -> dict:
    """
    Pipeline linear source → filter → transform(sort) → destination.

    Returns:
        dict: Definição no formato JSON do produto.
    """
    return {
        "id": "linear",
        "nodes": [
            {"id": "src", "type": "source", "config": {"connectorType": "customers"}},
            {
                "id": "only_br",
                "type": "filter",
                "config": {"conditions": [{"field": "country", "operator": "eq", "value": "BR"}]},
            },
            {
                "id": "by_score",
                "type": "transform",
                "config": {"transformType": "sort", "sortBy": [{"field": "score", "direction": "desc"}]},
            },
            {"id": "dst", "type": "destination", "config": {"connectorType": "warehouse"}},
        ],
        "edges": [
            {"id": "e1", "source": "src", "target": "only_br"},
            {"id": "e2", "source": "only_br", "target": "by_score"},
            {"id": "e3", "source": "by_score", "target": "dst"},
        ],
    }


@pytest.fixture
def join_pipeline() -> dict:
    """Pipeline com dois sources unidos por `join` e agregados por cliente."""
    return {
        "id": "join-agg",
        "nodes": [
            {"id": "customers", "type": "source", "config": {"connectorType": "customers"}},
            {"id": "orders", "type": "source", "config": {"connectorType": "orders"}},
            {
                "id": "joined",
                "type": "join",
                "config": {"joinType": "inner", "leftKey": "id", "rightKey": "customer_id"},
            },
            {
                "id": "totals",
                "type": "aggregate",
                "config": {
                    "groupBy": ["name"],
                    "aggregations": [
                        {"field": "amount", "function": "sum", "outputField": "total"},
                        {"field": "order_id", "function": "count", "outputField": "orders"},
                    ],
                },
            },
            {"id": "dst", "type": "destination", "config": {"connectorType": "warehouse"}},
        ],
        "edges": [
            {"id": "e1", "source": "customers", "target": "joined"},
            {"id": "e2", "source": "orders", "target": "joined"},
            {"id": "e3", "source": "joined", "target": "totals"},
            {"id": "e4", "source": "totals", "target": "dst"},
        ],
    }
