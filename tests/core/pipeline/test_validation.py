# tests/core/pipeline/test_validation.py
"""Testes da validação estrutural de pipelines (validate_pipeline)."""

import pytest

from nodeflow.core.exceptions import DuplicateNodeIdError, InvalidPipelineError, UnknownNodeError
from nodeflow.core.pipeline.types import Edge, Node, NodeType, Pipeline
from nodeflow.core.pipeline.validation import validate_pipeline


def _pipeline(nodes, edges=()):
    return Pipeline(id="p", nodes=nodes, edges=edges)


def test_valid_pipeline_passes():
    p = _pipeline(
        [Node("s", NodeType.SOURCE), Node("d", NodeType.DESTINATION)],
        [Edge("s", "d")],
    )
    validate_pipeline(p)
    validate_pipeline(p, require_endpoints=True)


def test_empty_pipeline_is_invalid():
    with pytest.raises(InvalidPipelineError):
        validate_pipeline(_pipeline([]))


def test_duplicate_and_blank_ids_are_invalid():
    with pytest.raises(DuplicateNodeIdError):
        validate_pipeline(_pipeline([Node("a", NodeType.SOURCE), Node("a", NodeType.FILTER)]))
    with pytest.raises(DuplicateNodeIdError):
        validate_pipeline(_pipeline([Node(" ", NodeType.SOURCE)]))


def test_edge_to_unknown_node_is_invalid():
    with pytest.raises(UnknownNodeError) as exc_info:
        validate_pipeline(_pipeline([Node("a", NodeType.SOURCE)], [Edge("ghost", "a", id="e9")]))
    assert exc_info.value.details["edge_id"] == "e9"


def test_require_endpoints():
    only_source = _pipeline([Node("s", NodeType.SOURCE)])
    validate_pipeline(only_source)
    with pytest.raises(InvalidPipelineError):
        validate_pipeline(only_source, require_endpoints=True)
