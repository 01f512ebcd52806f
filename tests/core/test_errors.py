# tests/core/test_errors.py
"""
Testes do catálogo canônico de erros e das exceções tipadas.

Os testes asseguram que:
- payloads são serializáveis e carregam tipo estável
- exceções expõem a mensagem curta via `str()`
- a hierarquia de erros estruturais é respeitada
"""

import json

from nodeflow.core.errors import (
    CONNECTOR_ERROR,
    ENGINE_EXECUTION_ERROR,
    NODE_EXECUTION_ERROR,
    PIPELINE_CYCLE,
    PIPELINE_INVALID,
    connector_error,
    engine_execution_error,
    node_execution_error,
    pipeline_cycle,
    pipeline_invalid,
)
from nodeflow.core.exceptions import (
    CycleDetectedError,
    DuplicateNodeIdError,
    InvalidPipelineError,
    NodeflowException,
    UnknownNodeError,
)


def test_payloads_are_serializable_with_stable_types():
    payloads = [
        pipeline_invalid(message="m", details={"pipeline_id": "p"}),
        pipeline_cycle(message="m", details={"nodes": ["a", "b"]}),
        connector_error(message="m", node_id="n", node_type="source", connector_type="pg"),
        node_execution_error(message="m", node_id="n", node_type="filter", exc_type="KeyError"),
        engine_execution_error(message="m", exc_type="RuntimeError"),
    ]
    assert [p.type for p in payloads] == [
        PIPELINE_INVALID,
        PIPELINE_CYCLE,
        CONNECTOR_ERROR,
        NODE_EXECUTION_ERROR,
        ENGINE_EXECUTION_ERROR,
    ]
    for p in payloads:
        data = p.to_dict()
        assert set(data) == {"type", "message", "details", "hint"}
        assert data["hint"]
        json.dumps(data)


def test_exception_str_is_message():
    exc = UnknownNodeError(message="Invalid pipeline: edge references unknown node 'x'", details={"node_id": "x"})
    assert str(exc) == "Invalid pipeline: edge references unknown node 'x'"
    assert exc.details == {"node_id": "x"}
    assert exc.hint is None


def test_structural_hierarchy():
    for cls in (CycleDetectedError, UnknownNodeError, DuplicateNodeIdError):
        assert issubclass(cls, InvalidPipelineError)
        assert issubclass(cls, NodeflowException)
    assert issubclass(NodeflowException, Exception)
