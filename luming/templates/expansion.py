"""Template expansion engine.

Expansion turns a parsed document into a runtime tree. Templates may refer
to themselves through their content (``a[a]``, or ``a[b]`` with ``b[a]``);
the expander cuts such cycles with an ancestor check so the result is always
a finite tree:

- A reference reached through template content whose name is already on the
  current path becomes a terminal node (styles copied, no content).
- A container occurrence supplies concrete content, so its own instantiation
  is not checked and does not extend the path. Its content is expanded like
  template content and is checked.

Sequence numbers are allocated in expansion order and shared by every scene
and root of one compilation.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from luming.diagnostics import Diagnostic, DiagnosticLevel
from luming.dsl.ast import (
    ContainerExpr,
    EntityExpr,
    Expression,
    GroupExpr,
    referenced_names,
)
from luming.templates.runtime import (
    RuntimeEntity,
    RuntimeGroup,
    RuntimeLayout,
    RuntimeNode,
    layout_entities,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from luming.document.models import ParsedDocument
    from luming.templates.registry import TemplateDefinition

logger = logging.getLogger(__name__)

_EMPTY_PATH: frozenset[str] = frozenset()

# Layout levels below a scene or root before expansion stops with an error
MAX_EXPANSION_DEPTH = 64


class Expansion(BaseModel):
    """Roots and scenes of an expanded document.

    Attributes
    ----------
    roots : list[RuntimeNode]
        Top-level runtime nodes, in traversal order.
    scenes : list[RuntimeLayout]
        One layout per structural statement, or one per root entity when the
        document has no structural statements.
    diagnostics : list[Diagnostic]
        Diagnostics emitted during expansion.
    """

    roots: list[RuntimeNode] = Field(default_factory=list)
    scenes: list[RuntimeLayout] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)


def infer_root_names(
    document: ParsedDocument, requested: Sequence[str] | None = None
) -> list[str]:
    """Choose the templates to instantiate when a document has no scenes.

    Parameters
    ----------
    document : ParsedDocument
        The parsed document.
    requested : Sequence[str] | None
        Explicit root names. When non-empty they are used verbatim.

    Returns
    -------
    list[str]
        ``requested`` if non-empty; else the templates not referenced from
        any template's content, in first-seen order; else every template in
        first-seen order.
    """
    if requested:
        return list(requested)

    contained: set[str] = set()
    for name in document.template_order:
        template = document.templates[name]
        if template.content_expression is not None:
            contained.update(referenced_names(template.content_expression))

    roots = [name for name in document.template_order if name not in contained]
    if roots:
        return roots
    return list(document.template_order)


class TemplateExpander:
    """Expands expressions against a document's templates.

    An expander holds the sequence counter and diagnostics of a single
    compilation; create a new one for every compilation.

    Parameters
    ----------
    templates : dict[str, TemplateDefinition]
        Templates keyed by name.

    Examples
    --------
    >>> from luming.document import parse_document
    >>> document = parse_document("a: bg red\\na[a]")
    >>> expander = TemplateExpander(document.templates)
    >>> root = expander.expand_entity("a", from_template=True)
    >>> root.terminated, root.content.node.terminated
    (False, True)
    """

    def __init__(self, templates: dict[str, TemplateDefinition]) -> None:
        self.templates = templates
        self.diagnostics: list[Diagnostic] = []
        self._sequence = itertools.count(1)
        self._depth = 0

    def expand_document(
        self, document: ParsedDocument, root_names: Sequence[str] | None = None
    ) -> Expansion:
        """Expand a whole document.

        Parameters
        ----------
        document : ParsedDocument
            Document whose templates this expander was built from.
        root_names : Sequence[str] | None
            Explicit roots, used only when the document has no structural
            statements.

        Returns
        -------
        Expansion
            Roots, scenes, and expansion diagnostics.
        """
        structures = document.structure_statements
        if structures:
            scenes = [
                self.expand_layout(statement.expression, from_template=False)
                for statement in structures
            ]
            roots = [node for scene in scenes for node in layout_entities(scene)]
            logger.debug(
                "Expanded %d scene(s) into %d root(s)", len(scenes), len(roots)
            )
        else:
            names = infer_root_names(document, root_names)
            roots = [self.expand_entity(name, from_template=True) for name in names]
            scenes = [RuntimeEntity(node=root) for root in roots]
            logger.debug("Expanded %d root template(s): %s", len(roots), names)

        return Expansion(roots=roots, scenes=scenes, diagnostics=self.diagnostics)

    def expand_entity(
        self,
        name: str,
        path: frozenset[str] = _EMPTY_PATH,
        explicit_content: Expression | None = None,
        from_template: bool = False,
    ) -> RuntimeNode:
        """Instantiate a template.

        Parameters
        ----------
        name : str
            Template name.
        path : frozenset[str]
            Names of the templates being expanded above this one.
        explicit_content : Expression | None
            Inline content replacing the template's own content.
        from_template : bool
            Whether the reference was reached through template content, which
            makes it subject to the ancestor check.

        Returns
        -------
        RuntimeNode
            The instantiated node; terminal for unknown templates, for
            self-references, and for content below ``MAX_EXPANSION_DEPTH``.
        """
        node_id = f"{name}_{next(self._sequence)}"
        template = self.templates.get(name)

        if template is None:
            self.diagnostics.append(
                Diagnostic(
                    level=DiagnosticLevel.ERROR, message=f"unknown template: {name}"
                )
            )
            return RuntimeNode(id=node_id, template_name=name, terminated=True)

        if from_template and name in path:
            logger.debug("Cut self-reference to %r at %s", name, node_id)
            return RuntimeNode(
                id=node_id,
                template_name=name,
                styles=dict(template.styles),
                terminated=True,
            )

        next_path = path | {name} if from_template else path
        content_expression = (
            explicit_content
            if explicit_content is not None
            else template.content_expression
        )
        if content_expression is not None and self._depth >= MAX_EXPANSION_DEPTH:
            self.diagnostics.append(
                Diagnostic(
                    level=DiagnosticLevel.ERROR,
                    message=f"template nesting exceeds {MAX_EXPANSION_DEPTH} levels "
                    f"at {name}",
                )
            )
            return RuntimeNode(
                id=node_id,
                template_name=name,
                styles=dict(template.styles),
                terminated=True,
            )

        content = None
        if content_expression is not None:
            content = self.expand_layout(
                content_expression, next_path, from_template=True
            )

        return RuntimeNode(
            id=node_id,
            template_name=name,
            content=content,
            styles=dict(template.styles),
        )

    def expand_layout(
        self,
        expression: Expression,
        path: frozenset[str] = _EMPTY_PATH,
        from_template: bool = False,
    ) -> RuntimeLayout:
        """Expand an expression into a runtime layout.

        Entities instantiate their template, containers instantiate their
        entity with the container's content, and groups expand each child.
        """
        self._depth += 1
        try:
            return self._expand_layout(expression, path, from_template)
        finally:
            self._depth -= 1

    def _expand_layout(
        self, expression: Expression, path: frozenset[str], from_template: bool
    ) -> RuntimeLayout:
        if isinstance(expression, EntityExpr):
            node = self.expand_entity(expression.name, path, None, from_template)
            return RuntimeEntity(node=node)
        if isinstance(expression, ContainerExpr):
            node = self.expand_entity(expression.name, path, expression.content, False)
            return RuntimeEntity(node=node)
        if isinstance(expression, GroupExpr):
            return RuntimeGroup(
                direction=expression.direction,
                children=[
                    self.expand_layout(child, path, from_template)
                    for child in expression.children
                ],
            )
        raise TypeError(f"unknown expression node: {type(expression).__name__}")
