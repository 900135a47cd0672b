"""Parsed documents: statements, diagnostics, and the statement processor."""

from __future__ import annotations

from luming.document.models import (
    Diagnostic,
    DiagnosticLevel,
    ParsedDocument,
    Statement,
    StructureStatement,
    StyleStatement,
)
from luming.document.processor import (
    InlineStyle,
    StatementProcessor,
    extract_inline_styles,
    parse_document,
    split_style_body,
)

__all__ = [
    # Models
    "Diagnostic",
    "DiagnosticLevel",
    "ParsedDocument",
    "Statement",
    "StructureStatement",
    "StyleStatement",
    # Processing
    "InlineStyle",
    "StatementProcessor",
    "extract_inline_styles",
    "parse_document",
    "split_style_body",
]
