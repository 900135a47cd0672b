"""Compilation entry point.

``compile`` runs the statement processor over a source text and expands the
resulting document into runtime scenes. Every call owns its registry,
diagnostics, and sequence counter, so independent calls never share state.
"""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import BaseModel, Field

from luming.diagnostics import Diagnostic
from luming.document.models import ParsedDocument
from luming.document.processor import parse_document
from luming.styles.resolver import StyleResolver
from luming.templates.expansion import TemplateExpander
from luming.templates.runtime import RuntimeLayout, RuntimeNode

logger = logging.getLogger(__name__)

CompileMode = Literal["preview", "generate"]


class CompileOptions(BaseModel):
    """Options for a compilation.

    Attributes
    ----------
    mode : CompileMode
        Tag forwarded to renderers; does not change parsing or expansion.
    root_names : list[str]
        Explicit root templates, used when the source has no structural
        lines. A non-empty list always takes priority over inference.

    Examples
    --------
    >>> CompileOptions().mode
    'preview'
    """

    mode: CompileMode = Field(default="preview", description="Renderer selection tag")
    root_names: list[str] = Field(
        default_factory=list, description="Explicit root template names"
    )


class CompileResult(BaseModel):
    """Everything a compilation produces.

    Attributes
    ----------
    mode : CompileMode
        The mode from the options.
    document : ParsedDocument
        Parsed statements, templates, and parse-time diagnostics.
    roots : list[RuntimeNode]
        Top-level runtime nodes.
    scenes : list[RuntimeLayout]
        Expanded scenes.
    diagnostics : list[Diagnostic]
        Parse-time diagnostics followed by expansion diagnostics.
    """

    mode: CompileMode
    document: ParsedDocument
    roots: list[RuntimeNode] = Field(default_factory=list)
    scenes: list[RuntimeLayout] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)


def compile(
    source: str,
    options: CompileOptions | None = None,
    style_resolver: StyleResolver | None = None,
) -> CompileResult:
    """Compile layout source into a runtime tree.

    Parameters
    ----------
    source : str
        Layout source text.
    options : CompileOptions | None
        Compilation options; defaults to ``CompileOptions()``.
    style_resolver : StyleResolver | None
        Replacement for the default style dictionary.

    Returns
    -------
    CompileResult
        Never raises for invalid layout source; problems are reported as
        diagnostics and terminal nodes.

    Examples
    --------
    >>> result = compile("tab: bg blue; rd 8\\ntab + tab")
    >>> [root.id for root in result.roots]
    ['tab_1', 'tab_2']
    >>> result.roots[0].styles
    {'background-color': 'blue', 'border-radius': '8px'}
    """
    options = options or CompileOptions()
    document = parse_document(source, style_resolver=style_resolver)

    expander = TemplateExpander(document.templates)
    expansion = expander.expand_document(document, root_names=options.root_names)

    diagnostics = [*document.diagnostics, *expansion.diagnostics]
    logger.debug(
        "Compiled %d line(s) in %s mode: %d scene(s), %d diagnostic(s)",
        len(document.statements),
        options.mode,
        len(expansion.scenes),
        len(diagnostics),
    )
    return CompileResult(
        mode=options.mode,
        document=document,
        roots=expansion.roots,
        scenes=expansion.scenes,
        diagnostics=diagnostics,
    )
