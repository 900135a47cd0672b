"""Exception classes for the layout notation."""

from __future__ import annotations


class DSLError(Exception):
    """Base class for all layout notation errors."""


class LexError(DSLError):
    """Raised when a line contains a character outside the notation.

    Parameters
    ----------
    char : str
        The offending character.
    offset : int
        Zero-based offset of the character within the tokenized text.
    text : str | None
        The text being tokenized.
    """

    def __init__(self, char: str, offset: int, text: str | None = None) -> None:
        self.char = char
        self.offset = offset
        self.column = offset + 1
        self.text = text
        self.message = f"invalid character {char!r} at offset {offset}"
        super().__init__(self.message)


class ParseError(DSLError):
    """Raised when a token sequence is not a valid layout expression.

    Parameters
    ----------
    message : str
        Description of the failure.
    line : int | None
        Line number of the failure, if known.
    column : int | None
        One-based column of the failure, if known.
    text : str | None
        The source text being parsed.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        text: str | None = None,
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        self.text = text
        super().__init__(self._format())

    def _format(self) -> str:
        parts = [self.message]
        if self.line is not None:
            parts.append(f" at line {self.line}")
            if self.column is not None:
                parts.append(f", column {self.column}")
        elif self.column is not None:
            parts.append(f" at column {self.column}")
        if self.text is not None:
            parts.append(f"\n  {self.text}")
        return "".join(parts)
