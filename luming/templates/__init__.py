"""Templates: the document-scoped registry and the expansion engine."""

from __future__ import annotations

from luming.templates.expansion import (
    MAX_EXPANSION_DEPTH,
    Expansion,
    TemplateExpander,
    infer_root_names,
)
from luming.templates.registry import TemplateDefinition, TemplateRegistry
from luming.templates.runtime import (
    RuntimeEntity,
    RuntimeGroup,
    RuntimeLayout,
    RuntimeNode,
    iter_layout_nodes,
    layout_entities,
)

__all__ = [
    # Registry
    "TemplateDefinition",
    "TemplateRegistry",
    # Runtime tree
    "RuntimeNode",
    "RuntimeEntity",
    "RuntimeGroup",
    "RuntimeLayout",
    "layout_entities",
    "iter_layout_nodes",
    # Expansion
    "Expansion",
    "TemplateExpander",
    "infer_root_names",
    "MAX_EXPANSION_DEPTH",
]
