# tests/core/pipeline/test_registry.py
"""Testes do TransformRegistry (unicidade de nomes e operadores embutidos)."""

import pytest

from nodeflow.core.exceptions import DuplicateOperatorError
from nodeflow.core.pipeline.registry import TransformRegistry, default_registry


def test_default_registry_has_builtin_operators():
    registry = default_registry()
    assert registry.names() == [
        "map",
        "rename",
        "select",
        "derive",
        "sort",
        "deduplicate",
        "flatten",
        "typecast",
    ]
    assert "sort" in registry
    assert registry.get("pivot") is None
    assert registry.get(None) is None


def test_duplicate_name_is_rejected():
    registry = TransformRegistry()
    registry.register("noop", lambda rows, options: rows)
    with pytest.raises(DuplicateOperatorError):
        registry.register("noop", lambda rows, options: rows)


def test_blank_name_is_rejected():
    with pytest.raises(ValueError):
        TransformRegistry().register("  ", lambda rows, options: rows)


def test_registries_are_independent():
    a = default_registry()
    a_names = a.names()
    a.register("extra", lambda rows, options: rows)
    assert "extra" not in default_registry()
    assert a.names() == a_names + ["extra"]
