"""Runtime tree produced by template expansion.

One ``RuntimeNode`` exists per template instantiation, so a template used
three times yields three nodes with distinct ids. Layout nodes mirror the
shape of the expanded expression: entities wrap a runtime node, groups keep
their direction and children.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from luming.dsl.ast import LayoutDirection


class RuntimeNode(BaseModel):
    """An instantiated template.

    Attributes
    ----------
    id : str
        ``<template>_<sequence>``, unique within a compilation.
    template_name : str
        Name of the instantiated template.
    content : RuntimeLayout | None
        Expanded content, or None for leaves and terminal nodes.
    styles : dict[str, str]
        Copy of the template's styles at expansion time.
    terminated : bool
        Whether expansion stopped here (self-reference or unknown template).
    """

    id: str
    template_name: str
    content: RuntimeLayout | None = None
    styles: dict[str, str] = Field(default_factory=dict)
    terminated: bool = False

    def iter_nodes(self) -> Iterator[RuntimeNode]:
        """Yield this node and every node below it, depth first."""
        yield self
        if self.content is not None:
            yield from iter_layout_nodes(self.content)


class RuntimeEntity(BaseModel):
    """Layout leaf wrapping one runtime node."""

    kind: Literal["entity"] = "entity"
    node: RuntimeNode


class RuntimeGroup(BaseModel):
    """Row or column of runtime layout nodes."""

    kind: Literal["group"] = "group"
    direction: LayoutDirection
    children: list[RuntimeLayout]


RuntimeLayout = Annotated[
    Union[RuntimeEntity, RuntimeGroup], Field(discriminator="kind")
]

RuntimeNode.model_rebuild()
RuntimeEntity.model_rebuild()
RuntimeGroup.model_rebuild()


def layout_entities(layout: RuntimeLayout) -> list[RuntimeNode]:
    """Return the runtime nodes at the entity leaves of a layout.

    Nodes nested inside another node's content are not included.
    """
    if isinstance(layout, RuntimeEntity):
        return [layout.node]
    if isinstance(layout, RuntimeGroup):
        nodes: list[RuntimeNode] = []
        for child in layout.children:
            nodes.extend(layout_entities(child))
        return nodes
    raise TypeError(f"unknown layout node: {type(layout).__name__}")


def iter_layout_nodes(layout: RuntimeLayout) -> Iterator[RuntimeNode]:
    """Yield every runtime node reachable from a layout, depth first."""
    for node in layout_entities(layout):
        yield from node.iter_nodes()
