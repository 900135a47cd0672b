"""Renderers that consume a compilation read-only."""

from __future__ import annotations

from luming.renderers.generators import (
    GENERATORS,
    ComponentGenerator,
    Framework,
    GeneratedFile,
    HtmlGenerator,
    ReactGenerator,
    VueGenerator,
    generate_files,
    get_generator,
    to_pascal_name,
)
from luming.renderers.preview import (
    PreviewRenderer,
    render_preview_html,
    style_to_inline,
)

__all__ = [
    # Preview
    "PreviewRenderer",
    "render_preview_html",
    "style_to_inline",
    # Component generators
    "ComponentGenerator",
    "HtmlGenerator",
    "VueGenerator",
    "ReactGenerator",
    "GENERATORS",
    "Framework",
    "GeneratedFile",
    "generate_files",
    "get_generator",
    "to_pascal_name",
]
