"""Default shorthand dictionary for style tokens.

A style token is one ``;``-separated piece of a style body, such as
``bg blue`` or ``rd 8``. A resolver maps a token to a CSS-like key/value
pair, or returns ``None`` when it does not understand the token.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

_NUMBER_RE = re.compile(r"^\d+(?:\.\d+)?$")
_PERCENT_RE = re.compile(r"^\d+(?:\.\d+)?%$")
_CSS_LIKE_RE = re.compile(r"^([a-zA-Z-]+)\s+(.+)$")

CLASS_SHORTHANDS = frozenset({"tab", "card", "label"})


class ResolvedStyle(BaseModel):
    """A resolved style declaration.

    Attributes
    ----------
    key : str
        Style property, e.g. ``"background-color"``.
    value : str
        Property value, e.g. ``"blue"``.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    value: str


StyleResolver = Callable[[str], ResolvedStyle | None]


def _ensure_px(value: str) -> str:
    if _NUMBER_RE.match(value):
        return f"{value}px"
    return value


def resolve_style_token(token: str) -> ResolvedStyle | None:
    """Resolve a shorthand style token.

    Parameters
    ----------
    token : str
        A single style token.

    Returns
    -------
    ResolvedStyle | None
        The resolved declaration, or None if the token is not supported.

    Examples
    --------
    >>> resolve_style_token("bg blue")
    ResolvedStyle(key='background-color', value='blue')
    >>> resolve_style_token("rd 8").value
    '8px'
    >>> resolve_style_token("70").value
    '70%'
    >>> resolve_style_token("???") is None
    True
    """
    trimmed = token.strip()
    if not trimmed:
        return None

    head, *rest_parts = trimmed.split()
    rest = " ".join(rest_parts)

    if head == "bg" and rest:
        return ResolvedStyle(key="background-color", value=rest)
    if head == "rd" and rest:
        return ResolvedStyle(key="border-radius", value=_ensure_px(rest))
    if head in CLASS_SHORTHANDS:
        return ResolvedStyle(key="class", value=head)
    if _NUMBER_RE.match(trimmed):
        return ResolvedStyle(key="width", value=f"{trimmed}%")
    if _PERCENT_RE.match(trimmed):
        return ResolvedStyle(key="width", value=trimmed)

    match = _CSS_LIKE_RE.match(trimmed)
    if match:
        return ResolvedStyle(key=match.group(1), value=match.group(2))
    return None
