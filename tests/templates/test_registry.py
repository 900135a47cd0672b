"""Tests for the template registry."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from luming.dsl.ast import EntityExpr
from luming.templates.registry import TemplateDefinition, TemplateRegistry


def test_ensure_creates_once() -> None:
    """A name is registered on first sight and reused afterwards."""
    registry = TemplateRegistry()
    first = registry.ensure("tab", line=3)
    again = registry.ensure("tab", line=7)

    assert first is again
    assert first.first_defined_line == 3
    assert len(registry) == 1


def test_order_is_first_seen() -> None:
    """Iteration follows the order in which names were first seen."""
    registry = TemplateRegistry()
    for name in ["main", "tabs", "tab", "main", "content"]:
        registry.ensure(name, line=1)

    assert registry.order == ["main", "tabs", "tab", "content"]
    assert [template.name for template in registry] == registry.order
    assert list(registry.as_dict()) == registry.order


def test_get_and_contains() -> None:
    """Lookups do not create templates."""
    registry = TemplateRegistry()
    registry.ensure("header", line=1)

    assert "header" in registry
    assert "footer" not in registry
    assert registry.get("footer") is None
    assert len(registry) == 1


def test_as_dict_is_a_copy() -> None:
    """The mapping returned by as_dict does not alias the registry."""
    registry = TemplateRegistry()
    registry.ensure("a", line=1)
    mapping = registry.as_dict()
    mapping.pop("a")

    assert "a" in registry


def test_definition_defaults() -> None:
    """A fresh definition has no styles, children, or content."""
    template = TemplateDefinition(name="card", first_defined_line=2)

    assert template.styles == {}
    assert template.default_children == []
    assert template.content_expression is None


def test_definition_is_mutable() -> None:
    """Templates are updated in place while a document is processed."""
    template = TemplateDefinition(name="card", first_defined_line=1)
    template.styles["background-color"] = "red"
    template.content_expression = EntityExpr(name="title")

    assert template.styles == {"background-color": "red"}
    assert template.content_expression == EntityExpr(name="title")


def test_definition_validates_line() -> None:
    """Line numbers are one-based."""
    with pytest.raises(ValidationError):
        TemplateDefinition(name="card", first_defined_line=0)
