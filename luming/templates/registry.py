"""Document-scoped registry of named templates.

A template is created the first time its name is seen anywhere in a
document (style line, structural reference, or container target) and is
reused afterwards. The registry remembers that first-seen order so that
downstream consumers iterate templates deterministically.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from pydantic import BaseModel, Field

from luming.dsl.ast import NAME_PATTERN, Expression

logger = logging.getLogger(__name__)


class TemplateDefinition(BaseModel):
    """The definition registered for an entity name.

    Attributes
    ----------
    name : str
        Entity name (unique within a document).
    first_defined_line : int
        One-based line on which the name was first seen.
    default_children : list[str]
        Top-level entity names of the content expression.
    styles : dict[str, str]
        Resolved styles; later declarations of a key overwrite earlier ones.
    content_expression : Expression | None
        Content from the most recent container occurrence, if any.

    Examples
    --------
    >>> template = TemplateDefinition(name="tab", first_defined_line=1)
    >>> template.styles
    {}
    >>> template.content_expression is None
    True
    """

    name: str = Field(..., pattern=NAME_PATTERN)
    first_defined_line: int = Field(..., ge=1)
    default_children: list[str] = Field(default_factory=list)
    styles: dict[str, str] = Field(default_factory=dict)
    content_expression: Expression | None = None


class TemplateRegistry:
    """Mutable table of templates for a single compilation.

    Examples
    --------
    >>> registry = TemplateRegistry()
    >>> registry.ensure("b", line=1) is registry.ensure("b", line=4)
    True
    >>> registry.ensure("a", line=2).first_defined_line
    2
    >>> registry.order
    ['b', 'a']
    """

    def __init__(self) -> None:
        self._templates: dict[str, TemplateDefinition] = {}

    def ensure(self, name: str, line: int) -> TemplateDefinition:
        """Return the template for ``name``, creating it if needed.

        Parameters
        ----------
        name : str
            Entity name.
        line : int
            Line on which the name is being seen.

        Returns
        -------
        TemplateDefinition
            The existing or newly created template.
        """
        template = self._templates.get(name)
        if template is None:
            template = TemplateDefinition(name=name, first_defined_line=line)
            self._templates[name] = template
            logger.debug("Registered template %r (line %d)", name, line)
        return template

    def get(self, name: str) -> TemplateDefinition | None:
        """Return the template for ``name`` if registered."""
        return self._templates.get(name)

    @property
    def order(self) -> list[str]:
        """Template names in first-seen order."""
        return list(self._templates)

    def as_dict(self) -> dict[str, TemplateDefinition]:
        """Return a name-to-template mapping in first-seen order."""
        return dict(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __iter__(self) -> Iterator[TemplateDefinition]:
        return iter(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)
