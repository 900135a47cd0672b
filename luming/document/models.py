"""Statement and parsed-document models."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from luming.diagnostics import Diagnostic, DiagnosticLevel
from luming.dsl.ast import Expression
from luming.templates.registry import TemplateDefinition


class StructureStatement(BaseModel):
    """A structural line and its parsed expression.

    Attributes
    ----------
    line : int
        One-based source line.
    raw : str
        Trimmed source text of the line, inline styles included.
    top_level_entities : list[str]
        Names of the entities not nested inside a container.
    expression : Expression
        Parsed expression.
    """

    kind: Literal["structure"] = "structure"
    line: int = Field(..., ge=1)
    raw: str
    top_level_entities: list[str]
    expression: Expression


class StyleStatement(BaseModel):
    """A ``name: token; token`` style line.

    Attributes
    ----------
    line : int
        One-based source line.
    raw : str
        Trimmed source text of the line.
    entity : str
        Name of the styled entity.
    tokens : list[str]
        Raw style tokens, resolved or not.
    """

    kind: Literal["style"] = "style"
    line: int = Field(..., ge=1)
    raw: str
    entity: str
    tokens: list[str]


Statement = Annotated[
    Union[StructureStatement, StyleStatement], Field(discriminator="kind")
]


class ParsedDocument(BaseModel):
    """Result of processing a whole source text.

    Attributes
    ----------
    source : str
        Original source text.
    statements : list[Statement]
        Recorded statements in source order.
    templates : dict[str, TemplateDefinition]
        Templates keyed by entity name.
    template_order : list[str]
        Template names in first-seen order.
    diagnostics : list[Diagnostic]
        Diagnostics emitted while processing, in emission order.
    """

    source: str
    statements: list[Statement] = Field(default_factory=list)
    templates: dict[str, TemplateDefinition] = Field(default_factory=dict)
    template_order: list[str] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def structure_statements(self) -> list[StructureStatement]:
        """Structural statements in source order."""
        return [s for s in self.statements if isinstance(s, StructureStatement)]

    @property
    def style_statements(self) -> list[StyleStatement]:
        """Style statements in source order."""
        return [s for s in self.statements if isinstance(s, StyleStatement)]
