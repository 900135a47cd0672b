"""HTML preview of compiled scenes.

Each scene becomes a ``<section>``; every runtime node is a labelled box
whose default box styles are overlaid by the node's own styles, and groups
are flex containers in their direction.
"""

from __future__ import annotations

from html import escape

from luming.compiler import CompileResult
from luming.dsl.ast import LayoutDirection
from luming.templates.runtime import (
    RuntimeEntity,
    RuntimeGroup,
    RuntimeLayout,
    RuntimeNode,
)

DEFAULT_BOX_STYLES: dict[str, str] = {
    "border": "1px solid #94a3b8",
    "padding": "8px",
    "margin": "6px",
    "border-radius": "8px",
    "background-color": "#ffffff",
}

_PAGE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{title}</title>
    <style>
      body {{ font-family: sans-serif; margin: 16px; background: #f8fafc; }}
      .luming-label {{ font-size: 12px; color: #334155; font-weight: 600; }}
      .luming-scene {{ margin-bottom: 12px; }}
      .luming-diags {{ background: #fff7ed; border: 1px solid #fdba74; padding: 10px; }}
      .luming-diags h2 {{ margin: 0 0 8px; font-size: 14px; }}
      .luming-diags ul {{ margin: 0; padding-left: 18px; }}
    </style>
  </head>
  <body>
    {scenes}
    {diagnostics}
  </body>
</html>
"""


def style_to_inline(styles: dict[str, str]) -> str:
    """Format a style map as an inline ``style`` attribute value.

    Examples
    --------
    >>> style_to_inline({"width": "70%", "border-radius": "8px"})
    'width: 70%; border-radius: 8px;'
    """
    return " ".join(f"{key}: {value};" for key, value in styles.items())


class PreviewRenderer:
    """Renders a ``CompileResult`` as a standalone HTML page.

    Parameters
    ----------
    title : str
        Page title.
    box_styles : dict[str, str] | None
        Default styles for every node box; node styles override them.
    """

    def __init__(
        self, title: str = "Luming Preview", box_styles: dict[str, str] | None = None
    ) -> None:
        self.title = title
        self.box_styles = dict(DEFAULT_BOX_STYLES if box_styles is None else box_styles)

    def render(self, result: CompileResult) -> str:
        """Render the scenes and diagnostics of a compilation.

        Parameters
        ----------
        result : CompileResult
            Compilation to render; it is not modified.

        Returns
        -------
        str
            Complete HTML document.
        """
        scenes = "\n".join(
            f'<section class="luming-scene" data-scene="{index}">'
            f"{self.render_layout(scene, 0)}</section>"
            for index, scene in enumerate(result.scenes, start=1)
        )
        items = "".join(
            f"<li>[{d.level.value}] {escape(d.message)}</li>"
            for d in result.diagnostics
        )
        diagnostics = (
            f'<aside class="luming-diags"><h2>Diagnostics</h2><ul>{items}</ul></aside>'
            if items
            else ""
        )
        return _PAGE.format(
            title=escape(self.title),
            scenes=scenes or "<p>No structure scene parsed.</p>",
            diagnostics=diagnostics,
        )

    def render_layout(self, layout: RuntimeLayout, level: int) -> str:
        """Render a layout node at the given nesting level."""
        if isinstance(layout, RuntimeEntity):
            return self.render_node(layout.node, level)
        if isinstance(layout, RuntimeGroup):
            direction = "row" if layout.direction == LayoutDirection.ROW else "column"
            children = "".join(
                self.render_layout(child, level) for child in layout.children
            )
            return (
                '<div class="luming-group" style="display:flex; '
                f'flex-direction:{direction}; align-items:stretch; gap:6px;">'
                f"{children}</div>"
            )
        raise TypeError(f"unknown layout node: {type(layout).__name__}")

    def render_node(self, node: RuntimeNode, level: int) -> str:
        """Render one runtime node as a labelled box."""
        styles = {**self.box_styles, **node.styles}
        suffix = " (Terminus)" if node.terminated else ""
        label = f'<div class="luming-label">{escape(node.template_name)}{suffix}</div>'
        content = ""
        if node.content is not None:
            content = self.render_layout(node.content, level + 1)
        return (
            f'<div class="luming-node level-{level}" '
            f'style="{escape(style_to_inline(styles))}">{label}{content}</div>'
        )


def render_preview_html(result: CompileResult) -> str:
    """Render a compilation with the default ``PreviewRenderer``."""
    return PreviewRenderer().render(result)
