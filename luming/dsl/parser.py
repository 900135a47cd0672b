"""Tokenizer and expression parser for the layout notation.

This module compiles the grammar in ``grammar.lark`` into a Lark LALR parser
and converts its parse trees into expression nodes. Lark errors are
translated into ``LexError`` and ``ParseError`` with offsets into the parsed
text.
"""

from __future__ import annotations

from pathlib import Path

from lark import Lark, Token as LarkToken, Transformer
from lark.exceptions import (
    UnexpectedCharacters,
    UnexpectedEOF,
    UnexpectedInput,
    UnexpectedToken,
    VisitError,
)

from luming.dsl import ast
from luming.dsl.errors import LexError, ParseError

# Load grammar from file
_GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"
_GRAMMAR = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
    _GRAMMAR,
    start=["start", "content"],
    parser="lalr",
    lexer="basic",
    propagate_positions=True,
)

# Bracket and parenthesis nesting accepted by parse_expression
MAX_NESTING_DEPTH = 32

_TOKEN_KINDS = {
    "NAME": ast.TokenKind.NAME,
    "_PLUS": ast.TokenKind.PLUS,
    "_SLASH": ast.TokenKind.SLASH,
    "LSQB": ast.TokenKind.LBRACKET,
    "_RSQB": ast.TokenKind.RBRACKET,
    "_LPAR": ast.TokenKind.LPAREN,
    "_RPAR": ast.TokenKind.RPAREN,
}


class ExpressionBuilder(Transformer):  # type: ignore[type-arg]
    """Transformer that converts Lark parse trees to expression nodes."""

    def start(self, items: list[ast.Expression]) -> ast.Expression:
        """Unwrap the single top-level expression."""
        return items[0]

    content = start

    def column(self, items: list[ast.Expression]) -> ast.Expression:
        """Join rows into a column group."""
        return ast.collapse_group(ast.LayoutDirection.COLUMN, items)

    content_column = column

    def row(self, items: list[ast.Expression]) -> ast.Expression:
        """Join terms into a row group."""
        return ast.collapse_group(ast.LayoutDirection.ROW, items)

    content_row = row

    def entity(self, items: list[LarkToken]) -> ast.EntityExpr:
        """Transform a name into an entity reference."""
        return ast.EntityExpr(name=str(items[0]))

    def paren(self, items: list[ast.Expression]) -> ast.Expression:
        # Parentheses only group; they leave no node of their own.
        return items[0]

    def body(
        self, items: list[LarkToken | ast.Expression]
    ) -> tuple[int, ast.Expression]:
        """Pair bracket content with the offset of its opening bracket."""
        bracket, content = items
        assert isinstance(bracket, LarkToken)
        return bracket.start_pos, content  # type: ignore[return-value]

    def term(
        self, items: list[ast.Expression | tuple[int, ast.Expression]]
    ) -> ast.Expression:
        """Apply bracket suffixes to a primary.

        Raises
        ------
        ParseError
            If a suffix is applied to anything but a bare entity.
        """
        node, *bodies = items
        for offset, content in bodies:  # type: ignore[misc]
            if not isinstance(node, ast.EntityExpr):
                raise ParseError(
                    "only an entity may take inline content", column=offset + 1
                )
            node = ast.ContainerExpr(name=node.name, content=content)
        return node  # type: ignore[return-value]

    content_term = term


def tokenize(line: str) -> list[ast.Token]:
    """Split a structural line into tokens.

    Parameters
    ----------
    line : str
        Text to tokenize. Whitespace separates tokens and produces none.

    Returns
    -------
    list[ast.Token]
        Tokens in source order.

    Raises
    ------
    LexError
        If the line contains a character that is not whitespace, part of a
        name, or one of ``+ / [ ] ( )``.

    Examples
    --------
    >>> [token.kind.value for token in tokenize("a + b[c]")]
    ['name', 'plus', 'name', 'lbracket', 'name', 'rbracket']
    """
    try:
        return [
            ast.Token(
                kind=_TOKEN_KINDS[token.type], text=str(token), offset=token.start_pos
            )
            for token in _PARSER.lex(line)
        ]
    except UnexpectedCharacters as e:
        raise LexError(e.char, e.pos_in_stream, text=line) from e


def parse_expression(text: str, allow_implicit: bool = False) -> ast.Expression:
    """Parse a layout expression.

    Parameters
    ----------
    text : str
        Expression text, e.g. ``"header / (nav + body[title text])"``.
    allow_implicit : bool
        Whether adjacent terms join as a row without ``+`` at the outermost
        level. Bracket content always allows it; structural lines do not.

    Returns
    -------
    ast.Expression
        Root of the parsed expression.

    Raises
    ------
    LexError
        If the text contains an invalid character.
    ParseError
        If the tokens do not form a single valid expression, or brackets
        and parentheses nest deeper than ``MAX_NESTING_DEPTH``.

    Examples
    --------
    >>> node = parse_expression("a + b + c")
    >>> node.direction.value, len(node.children)
    ('row', 3)
    >>> parse_expression("card[title body]").content.direction.value
    'row'
    """
    _check_nesting(tokenize(text), text)
    start = "content" if allow_implicit else "start"

    try:
        tree = _PARSER.parse(text, start=start)
    except UnexpectedToken as e:
        raise _translate_unexpected_token(e, text, start) from e
    except UnexpectedEOF as e:
        raise ParseError(
            "unexpected end of input", column=len(text) + 1, text=text
        ) from e
    except UnexpectedInput as e:
        raise ParseError(
            f"unexpected input at offset {e.pos_in_stream}", text=text
        ) from e

    try:
        result = ExpressionBuilder().transform(tree)
    except VisitError as e:
        # Unwrap VisitError to preserve the original exception type
        if isinstance(e.orig_exc, ParseError):
            raise ParseError(
                e.orig_exc.message, column=e.orig_exc.column, text=text
            ) from None
        raise
    return result  # type: ignore[no-any-return]


def _check_nesting(tokens: list[ast.Token], text: str) -> None:
    depth = 0
    for token in tokens:
        if token.kind in (ast.TokenKind.LBRACKET, ast.TokenKind.LPAREN):
            depth += 1
            if depth > MAX_NESTING_DEPTH:
                raise ParseError(
                    f"expression nested too deeply (limit {MAX_NESTING_DEPTH})",
                    column=token.offset + 1,
                    text=text,
                )
        elif token.kind in (ast.TokenKind.RBRACKET, ast.TokenKind.RPAREN):
            depth -= 1


def _translate_unexpected_token(
    error: UnexpectedToken, text: str, start: str
) -> ParseError:
    token = error.token
    if token.type == "$END":
        return ParseError("unexpected end of input", column=len(text) + 1, text=text)

    offset = token.start_pos
    if offset is not None and _is_complete(text[:offset], start):
        message = f"trailing input {str(token)!r} at offset {offset}"
    else:
        message = f"unexpected token {str(token)!r} at offset {offset}"
    column = offset + 1 if offset is not None else None
    return ParseError(message, column=column, text=text)


def _is_complete(prefix: str, start: str) -> bool:
    if not prefix.strip():
        return False
    try:
        _PARSER.parse(prefix, start=start)
    except UnexpectedInput:
        return False
    return True
