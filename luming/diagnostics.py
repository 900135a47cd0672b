"""Diagnostics shared by every stage of a compilation."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class DiagnosticLevel(str, Enum):
    """Severity of a diagnostic."""

    WARNING = "warning"
    ERROR = "error"


class Diagnostic(BaseModel):
    """A warning or error produced during compilation.

    Diagnostics are appended in emission order and never deduplicated.

    Attributes
    ----------
    level : DiagnosticLevel
        Severity.
    message : str
        Human-readable description.
    line : int | None
        One-based source line, when the problem belongs to a line.
    column : int | None
        One-based column within the structural text, when known.

    Examples
    --------
    >>> str(Diagnostic(level="warning", message="unsupported style token: x", line=3))
    '[warning] line 3: unsupported style token: x'
    """

    level: DiagnosticLevel
    message: str
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        location = f"line {self.line}: " if self.line is not None else ""
        return f"[{self.level.value}] {location}{self.message}"


def has_errors(diagnostics: list[Diagnostic]) -> bool:
    """Return whether any diagnostic is an error."""
    return any(d.level == DiagnosticLevel.ERROR for d in diagnostics)
