"""Token and expression node models for the layout notation.

Expressions form a closed, ``kind``-discriminated union of three variants:

- ``EntityExpr``: a bare reference to a named entity (``tab``)
- ``GroupExpr``: an ordered row (``+``) or column (``/``) composition
- ``ContainerExpr``: an entity with explicit inline content (``card[a + b]``)

Groups are normalised on construction: a group never directly contains a
group of the same direction, so ``a + b + c`` and ``a + (b + c)`` produce the
same three-child row.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

NAME_PATTERN = r"^[A-Za-z][A-Za-z0-9_]*$"


class TokenKind(str, Enum):
    """Kinds of tokens produced by the tokenizer."""

    NAME = "name"
    PLUS = "plus"
    SLASH = "slash"
    LBRACKET = "lbracket"
    RBRACKET = "rbracket"
    LPAREN = "lparen"
    RPAREN = "rparen"


class LayoutDirection(str, Enum):
    """Direction of a group.

    Attributes
    ----------
    ROW : str
        Children laid out horizontally, joined with ``+``.
    COLUMN : str
        Children laid out vertically, joined with ``/``.
    """

    ROW = "row"
    COLUMN = "column"


class Token(BaseModel):
    """A single token of a structural line.

    Attributes
    ----------
    kind : TokenKind
        Token kind.
    text : str
        Source text of the token.
    offset : int
        Zero-based offset of the token within the tokenized text.
    """

    model_config = ConfigDict(frozen=True)

    kind: TokenKind
    text: str
    offset: int = Field(..., ge=0)


class ExpressionNode(BaseModel):
    """Base class for all expression nodes."""

    model_config = ConfigDict(frozen=True)


class EntityExpr(ExpressionNode):
    """A bare entity reference.

    Examples
    --------
    >>> EntityExpr(name="tab").name
    'tab'
    """

    kind: Literal["entity"] = "entity"
    name: str = Field(..., pattern=NAME_PATTERN)


class GroupExpr(ExpressionNode):
    """An ordered composition of expressions in one direction.

    Examples
    --------
    >>> inner = GroupExpr(
    ...     direction="row", children=[EntityExpr(name="b"), EntityExpr(name="c")]
    ... )
    >>> group = GroupExpr(direction="row", children=[EntityExpr(name="a"), inner])
    >>> [child.name for child in group.children]
    ['a', 'b', 'c']
    """

    kind: Literal["group"] = "group"
    direction: LayoutDirection
    children: list[Expression]

    @field_validator("children")
    @classmethod
    def flatten_same_direction(
        cls, v: list[Expression], info: ValidationInfo
    ) -> list[Expression]:
        """Splice children of same-direction sub-groups into this group.

        Parameters
        ----------
        v : list[Expression]
            Validated children.
        info : ValidationInfo
            Validation info carrying the already validated direction.

        Returns
        -------
        list[Expression]
            Children with no directly nested group of the same direction.
        """
        direction = info.data.get("direction")
        if direction is None:
            return v
        flattened: list[Expression] = []
        for child in v:
            if isinstance(child, GroupExpr) and child.direction == direction:
                flattened.extend(child.children)
            else:
                flattened.append(child)
        return flattened


class ContainerExpr(ExpressionNode):
    """An entity occurrence with explicit inline content.

    Examples
    --------
    >>> node = ContainerExpr(name="card", content=EntityExpr(name="title"))
    >>> node.content.name
    'title'
    """

    kind: Literal["container"] = "container"
    name: str = Field(..., pattern=NAME_PATTERN)
    content: Expression


Expression = Annotated[
    Union[EntityExpr, GroupExpr, ContainerExpr], Field(discriminator="kind")
]

GroupExpr.model_rebuild()
ContainerExpr.model_rebuild()


def collapse_group(
    direction: LayoutDirection, nodes: list[Expression]
) -> Expression:
    """Combine nodes into a group, or return a lone node unchanged.

    Parameters
    ----------
    direction : LayoutDirection
        Direction of the resulting group.
    nodes : list[Expression]
        Non-empty list of nodes to combine.

    Returns
    -------
    Expression
        ``nodes[0]`` when there is a single node, otherwise a flattened
        ``GroupExpr``.

    Raises
    ------
    ValueError
        If ``nodes`` is empty.
    """
    if not nodes:
        raise ValueError("cannot build a group from no nodes")
    if len(nodes) == 1:
        return nodes[0]
    return GroupExpr(direction=direction, children=nodes)


def top_level_entities(expression: Expression) -> list[str]:
    """Return the names of entities not nested inside any container.

    Parameters
    ----------
    expression : Expression
        Expression to inspect.

    Returns
    -------
    list[str]
        Entity and container names in left-to-right order, duplicates kept.
    """
    if isinstance(expression, (EntityExpr, ContainerExpr)):
        return [expression.name]
    if isinstance(expression, GroupExpr):
        names: list[str] = []
        for child in expression.children:
            names.extend(top_level_entities(child))
        return names
    raise TypeError(f"unknown expression node: {type(expression).__name__}")


def referenced_names(expression: Expression) -> list[str]:
    """Return every entity name in an expression, in first-seen order.

    Container names come before the names inside their content.
    """
    seen: dict[str, None] = {}
    _collect_names(expression, seen)
    return list(seen)


def _collect_names(expression: Expression, seen: dict[str, None]) -> None:
    if isinstance(expression, EntityExpr):
        seen.setdefault(expression.name, None)
    elif isinstance(expression, ContainerExpr):
        seen.setdefault(expression.name, None)
        _collect_names(expression.content, seen)
    elif isinstance(expression, GroupExpr):
        for child in expression.children:
            _collect_names(child, seen)
    else:
        raise TypeError(f"unknown expression node: {type(expression).__name__}")
