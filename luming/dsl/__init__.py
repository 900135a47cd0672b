"""Layout notation: tokens, expression nodes, and the expression parser.

The notation composes named entities into rows and columns:

- ``a + b``: row
- ``a / b``: column (binds looser than ``+``)
- ``a[b c]``: entity ``a`` with inline content; adjacent terms inside
  brackets join as a row
- ``(a / b) + c``: parentheses group without leaving a node

Examples
--------
>>> from luming.dsl import parse_expression
>>> node = parse_expression("header / nav + body")
>>> node.direction.value
'column'
"""

from __future__ import annotations

from luming.dsl.ast import (
    ContainerExpr,
    EntityExpr,
    Expression,
    ExpressionNode,
    GroupExpr,
    LayoutDirection,
    Token,
    TokenKind,
    collapse_group,
    referenced_names,
    top_level_entities,
)
from luming.dsl.errors import DSLError, LexError, ParseError
from luming.dsl.parser import MAX_NESTING_DEPTH, parse_expression, tokenize

__all__ = [
    # Tokens
    "Token",
    "TokenKind",
    # Expression nodes
    "ExpressionNode",
    "Expression",
    "EntityExpr",
    "GroupExpr",
    "ContainerExpr",
    "LayoutDirection",
    "collapse_group",
    "top_level_entities",
    "referenced_names",
    # Errors
    "DSLError",
    "LexError",
    "ParseError",
    # Parser
    "tokenize",
    "parse_expression",
    "MAX_NESTING_DEPTH",
]
