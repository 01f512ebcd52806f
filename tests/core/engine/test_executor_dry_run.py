# tests/core/engine/test_executor_dry_run.py
"""
Testes do modo dry-run do executor.

Em dry-run:
- sources leem `get_sample_data` (nunca `fetch_data`)
- destinos não gravam nada, apenas registram a intenção no log
- todos os demais operadores executam normalmente
- estatísticas de saída continuam sendo contabilizadas
"""

import pytest

try:
    from nodeflow.core.connectors.memory import DEFAULT_SAMPLE_ROWS
    from nodeflow.core.engine.executor import PipelineExecutor, execute_pipeline
except Exception as e:
    PipelineExecutor = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"""Missing executor. Implement:
- src/nodeflow/core/engine/executor.py (PipelineExecutor)
Import error: {_IMPORT_ERR}
""")


def test_dry_run_never_touches_real_io(memory_connector, linear_pipeline):
    """
    Verifica o isolamento de I/O em dry-run.

    Invariantes:
        - Apenas `get_sample_data` é chamado no conector
        - Nada é gravado; o log registra "[DRY RUN] Would write N rows to X"
        - `rows_output` conta as linhas que seriam gravadas
    """
    _require_imports()
    memory_connector.register_sample(
        "customers",
        [
            {"id": 7, "name": "Zé", "country": "BR", "score": 10},
            {"id": 8, "name": "Lia", "country": "AR", "score": 99},
        ],
    )
    result = execute_pipeline(linear_pipeline, connector=memory_connector, dry_run=True)

    assert result.success is True
    assert memory_connector.calls == [("get_sample_data", "customers")]
    assert memory_connector.written == []
    assert result.output_data == [{"id": 7, "name": "Zé", "country": "BR", "score": 10}]
    assert result.stats.rows_output == 1
    assert any(e["message"] == "[DRY RUN] Would write 1 rows to warehouse" for e in result.events)


def test_dry_run_uses_default_samples(memory_connector):
    _require_imports()
    pipeline = {
        "id": "p",
        "nodes": [
            {"id": "src", "type": "source", "config": {"connectorType": "unregistered"}},
            {"id": "dst", "type": "destination", "config": {"connectorType": "warehouse"}},
        ],
        "edges": [{"source": "src", "target": "dst"}],
    }
    result = execute_pipeline(pipeline, connector=memory_connector, dry_run=True)

    assert result.success is True
    assert result.output_data == [dict(r) for r in DEFAULT_SAMPLE_ROWS]


def test_dry_run_default_comes_from_config(memory_connector, linear_pipeline):
    _require_imports()
    executor = PipelineExecutor(connector=memory_connector, config={"engine": {"dry_run": True}})

    executor.execute(linear_pipeline)
    assert memory_connector.written == []

    executor.execute(linear_pipeline, dry_run=False)
    assert len(memory_connector.rows_written("warehouse")) == 2
