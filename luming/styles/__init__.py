"""Style token resolution."""

from __future__ import annotations

from luming.styles.resolver import (
    CLASS_SHORTHANDS,
    ResolvedStyle,
    StyleResolver,
    resolve_style_token,
)

__all__ = [
    "CLASS_SHORTHANDS",
    "ResolvedStyle",
    "StyleResolver",
    "resolve_style_token",
]
