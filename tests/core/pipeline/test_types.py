# tests/core/pipeline/test_types.py
"""Testes dos tipos do pipeline: parsing de definições e config tipada por nó."""

import pytest

from nodeflow.core.exceptions import InvalidPipelineError
from nodeflow.core.pipeline.node_config import (
    AggregateConfig,
    FilterConfig,
    JoinConfig,
    SourceConfig,
    TransformConfig,
    parse_node_config,
)
from nodeflow.core.pipeline.types import Node, NodeType, Pipeline


def test_pipeline_from_dict_ignores_ui_keys(join_pipeline):
    doc = dict(join_pipeline)
    doc["nodes"] = [dict(n, position={"x": 0, "y": 0}) for n in doc["nodes"]]
    p = Pipeline.from_dict(doc)

    assert p.id == "join-agg"
    assert [n.id for n in p.nodes] == ["customers", "orders", "joined", "totals", "dst"]
    assert p.node("joined").type is NodeType.JOIN
    assert [e.source for e in p.incoming("joined")] == ["customers", "orders"]
    assert [e.target for e in p.outgoing("joined")] == ["totals"]
    with pytest.raises(KeyError):
        p.node("ghost")


def test_unknown_node_type_is_invalid():
    with pytest.raises(InvalidPipelineError) as exc_info:
        Node.from_dict({"id": "x", "type": "teleport"})
    assert exc_info.value.details == {"node_id": "x", "node_type": "teleport"}


def test_non_mapping_definition_is_invalid():
    with pytest.raises(InvalidPipelineError):
        Pipeline.from_dict(["not", "a", "pipeline"])


def test_missing_ids_become_empty_strings():
    node = Node.from_dict({"type": "source"})
    assert node.id == ""
    assert Node.from_dict({"id": None, "type": "source"}).id == ""


def test_parse_node_config_variants():
    src = parse_node_config(Node.from_dict({"id": "s", "type": "source", "config": {"connectorType": "pg", "table": "t"}}))
    assert src == SourceConfig(connector_type="pg", options={"table": "t"})

    tr = parse_node_config(Node.from_dict({"id": "t", "type": "transform", "config": {"transformType": "select", "fields": ["a"]}}))
    assert tr == TransformConfig(transform_type="select", options={"fields": ["a"]})

    assert parse_node_config(Node.from_dict({"id": "f", "type": "filter"})) == FilterConfig(conditions=[], logic="and")
    assert parse_node_config(Node.from_dict({"id": "j", "type": "join", "config": {"leftKey": "a", "rightKey": "b"}})) == JoinConfig(
        join_type="inner", left_key="a", right_key="b"
    )
    assert parse_node_config(Node.from_dict({"id": "g", "type": "aggregate"})) == AggregateConfig()


@pytest.mark.parametrize(
    "doc",
    [
        {"id": "p", "nodes": ["not-a-node"], "edges": []},
        {"id": "p", "nodes": [{"id": "a", "type": "source"}], "edges": ["a->b"]},
        {"id": "p", "nodes": [{"id": "a", "type": "source", "config": ["x"]}], "edges": []},
        {"id": "p", "nodes": {"a": {"type": "source"}}, "edges": []},
        {"id": "p", "nodes": [], "edges": "a->b"},
    ],
    ids=["node-entry", "edge-entry", "node-config", "nodes-mapping", "edges-string"],
)
def test_malformed_entries_are_invalid(doc):
    with pytest.raises(InvalidPipelineError) as exc_info:
        Pipeline.from_dict(doc)
    assert str(exc_info.value).startswith("Invalid pipeline")


def test_null_pipeline_id_becomes_empty_string():
    assert Pipeline.from_dict({"id": None, "nodes": [], "edges": []}).id == ""
