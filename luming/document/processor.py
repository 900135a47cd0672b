"""Statement processor: turns source lines into statements and templates.

Each non-empty, trimmed line is handled in this order:

1. A whole-line style statement ``name: token; token``.
2. Otherwise a structural line. Inline style anchors (``name: tokens``
   running up to the next ``/ + [ ] ( )``) are applied to the registry and
   removed, keeping the entity name. The remainder is parsed as an
   expression; every name in it is registered, and every container sets its
   entity's content.

Lexing and parsing failures become error diagnostics for the line; they
never stop the remaining lines from being processed.
"""

from __future__ import annotations

import logging
import re

from pydantic import BaseModel

from luming.diagnostics import Diagnostic, DiagnosticLevel
from luming.document.models import (
    ParsedDocument,
    Statement,
    StructureStatement,
    StyleStatement,
)
from luming.dsl.ast import (
    ContainerExpr,
    EntityExpr,
    Expression,
    GroupExpr,
    referenced_names,
    top_level_entities,
)
from luming.dsl.errors import DSLError
from luming.dsl.parser import parse_expression
from luming.styles.resolver import StyleResolver, resolve_style_token
from luming.templates.registry import TemplateDefinition, TemplateRegistry

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_STYLE_LINE_RE = re.compile(r"^([A-Za-z][A-Za-z0-9_]*)\s*:\s*(.*)$")
_INLINE_ANCHOR_RE = re.compile(r"(?<![A-Za-z0-9_])([A-Za-z][A-Za-z0-9_]*)\s*:")
_STRUCTURAL_DELIMITERS = frozenset("/+[]()")


class InlineStyle(BaseModel):
    """Style tokens attached to an entity inside a structural line."""

    entity: str
    tokens: list[str]


def split_style_body(body: str) -> list[str]:
    """Split a style body on ``;`` into trimmed, non-empty tokens.

    Examples
    --------
    >>> split_style_body(" bg blue; ; rd 8 ")
    ['bg blue', 'rd 8']
    """
    return [token.strip() for token in body.split(";") if token.strip()]


def extract_inline_styles(line: str) -> tuple[str, list[InlineStyle]]:
    """Separate inline style anchors from the structure of a line.

    Parameters
    ----------
    line : str
        A trimmed structural line.

    Returns
    -------
    tuple[str, list[InlineStyle]]
        The trimmed structural remainder and the extracted styles in source
        order. Anchors with an empty body are dropped.

    Examples
    --------
    >>> remainder, styles = extract_inline_styles("x + a: bg red / b")
    >>> remainder
    'x + a/ b'
    >>> styles[0].entity, styles[0].tokens
    ('a', ['bg red'])
    """
    parts: list[str] = []
    styles: list[InlineStyle] = []
    index = 0

    while True:
        match = _INLINE_ANCHOR_RE.search(line, index)
        if match is None:
            parts.append(line[index:])
            break

        # keep everything up to the colon, entity name included
        parts.append(line[index : match.end() - 1])

        end = match.end()
        while end < len(line) and line[end] not in _STRUCTURAL_DELIMITERS:
            end += 1

        tokens = split_style_body(line[match.end() : end])
        if tokens:
            styles.append(InlineStyle(entity=match.group(1), tokens=tokens))
        index = end

    return "".join(parts).strip(), styles


class StatementProcessor:
    """Processes a source text into a ``ParsedDocument``.

    A processor owns the template registry and the diagnostics list of one
    compilation and must not be reused for another source.

    Parameters
    ----------
    style_resolver : StyleResolver | None
        Callable mapping a style token to a ``ResolvedStyle`` or None.
        Defaults to ``resolve_style_token``.

    Examples
    --------
    >>> document = StatementProcessor().process("tab: bg blue\\ntab + tab")
    >>> document.template_order
    ['tab']
    >>> [statement.kind for statement in document.statements]
    ['style', 'structure']
    """

    def __init__(self, style_resolver: StyleResolver | None = None) -> None:
        self.style_resolver = style_resolver or resolve_style_token
        self.registry = TemplateRegistry()
        self.diagnostics: list[Diagnostic] = []
        self.statements: list[Statement] = []

    def process(self, source: str) -> ParsedDocument:
        """Process every line of ``source``.

        Parameters
        ----------
        source : str
            Layout source text.

        Returns
        -------
        ParsedDocument
            Statements, templates, and diagnostics of the source.
        """
        for index, raw_line in enumerate(_LINE_SPLIT_RE.split(source)):
            line = raw_line.strip()
            if not line:
                continue
            statement = self.process_line(line, index + 1)
            if statement is not None:
                self.statements.append(statement)

        logger.debug(
            "Processed %d statement(s), %d template(s), %d diagnostic(s)",
            len(self.statements),
            len(self.registry),
            len(self.diagnostics),
        )
        return ParsedDocument(
            source=source,
            statements=self.statements,
            templates=self.registry.as_dict(),
            template_order=self.registry.order,
            diagnostics=self.diagnostics,
        )

    def process_line(self, line: str, line_number: int) -> Statement | None:
        """Process one trimmed, non-empty line.

        Returns
        -------
        Statement | None
            The statement to record, or None if the line yields none.
        """
        style = self._process_style_line(line, line_number)
        if style is not None:
            return style
        return self._process_structure_line(line, line_number)

    def apply_styles(
        self, template: TemplateDefinition, tokens: list[str], line_number: int
    ) -> None:
        """Resolve style tokens into a template's style map.

        Unsupported tokens produce a warning and are otherwise ignored.
        """
        for token in tokens:
            resolved = self.style_resolver(token)
            if resolved is None:
                self._warn(f"unsupported style token: {token}", line_number)
                continue
            template.styles[resolved.key] = resolved.value

    def _process_style_line(self, line: str, line_number: int) -> StyleStatement | None:
        match = _STYLE_LINE_RE.match(line)
        if match is None:
            return None

        entity = match.group(1)
        tokens = split_style_body(match.group(2))
        template = self.registry.ensure(entity, line_number)
        self.apply_styles(template, tokens, line_number)
        return StyleStatement(line=line_number, raw=line, entity=entity, tokens=tokens)

    def _process_structure_line(
        self, line: str, line_number: int
    ) -> StructureStatement | None:
        remainder, inline_styles = extract_inline_styles(line)

        for inline in inline_styles:
            template = self.registry.ensure(inline.entity, line_number)
            self.apply_styles(template, inline.tokens, line_number)

        if not remainder:
            return None

        try:
            expression = parse_expression(remainder)
        except DSLError as e:
            logger.debug("Line %d rejected: %s", line_number, e)
            self.diagnostics.append(
                Diagnostic(
                    level=DiagnosticLevel.ERROR,
                    message=getattr(e, "message", str(e)),
                    line=line_number,
                    column=getattr(e, "column", None),
                )
            )
            return None

        self._register_expression(expression, line_number)
        for name in referenced_names(expression):
            self.registry.ensure(name, line_number)

        return StructureStatement(
            line=line_number,
            raw=line,
            top_level_entities=top_level_entities(expression),
            expression=expression,
        )

    def _register_expression(self, expression: Expression, line_number: int) -> None:
        if isinstance(expression, EntityExpr):
            self.registry.ensure(expression.name, line_number)
        elif isinstance(expression, ContainerExpr):
            template = self.registry.ensure(expression.name, line_number)
            template.content_expression = expression.content
            template.default_children = top_level_entities(expression.content)
            self._register_expression(expression.content, line_number)
        elif isinstance(expression, GroupExpr):
            for child in expression.children:
                self._register_expression(child, line_number)
        else:
            raise TypeError(f"unknown expression node: {type(expression).__name__}")

    def _warn(self, message: str, line_number: int) -> None:
        self.diagnostics.append(
            Diagnostic(level=DiagnosticLevel.WARNING, message=message, line=line_number)
        )


def parse_document(
    source: str, style_resolver: StyleResolver | None = None
) -> ParsedDocument:
    """Process a layout source text with a fresh processor.

    Parameters
    ----------
    source : str
        Layout source text.
    style_resolver : StyleResolver | None
        Optional replacement for the default style dictionary.

    Returns
    -------
    ParsedDocument
        The parsed document.
    """
    return StatementProcessor(style_resolver=style_resolver).process(source)
