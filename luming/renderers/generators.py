"""Per-component source generators.

Every template of a compiled document becomes one component file whose
body is the template's content expression. Generators are selected by
framework name:

- ``html``: ``<name>.html`` with a scoped ``<style>`` block
- ``vue``: ``<Name>.vue`` single-file component
- ``react``: ``<Name>.tsx`` function component
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Literal

from pydantic import BaseModel

from luming.compiler import CompileResult
from luming.dsl.ast import (
    ContainerExpr,
    EntityExpr,
    Expression,
    GroupExpr,
    LayoutDirection,
    referenced_names,
)

logger = logging.getLogger(__name__)

Framework = Literal["html", "vue", "react"]


class GeneratedFile(BaseModel):
    """A generated source file.

    Attributes
    ----------
    file_path : str
        Path relative to the output directory.
    content : str
        File contents.
    """

    file_path: str
    content: str


def to_pascal_name(name: str) -> str:
    """Capitalize the first letter of an entity name.

    Examples
    --------
    >>> to_pascal_name("navBar")
    'NavBar'
    """
    return name[:1].upper() + name[1:]


def css_block(selector: str, styles: dict[str, str]) -> str:
    """Format a CSS rule with one declaration per line."""
    declarations = "\n".join(f"  {key}: {value};" for key, value in styles.items())
    return f"{selector} {{\n{declarations}\n}}"


class ComponentGenerator(ABC):
    """Base class for component generators.

    Subclasses choose the file name and wrap the rendered body. The body of
    a component is its template's content expression: entities become
    self-closing component tags, containers wrap their content, and groups
    become flex ``div`` elements.
    """

    indent = "      "

    @abstractmethod
    def file_name(self, name: str) -> str:
        """Return the output path for the component ``name``."""
        ...

    @abstractmethod
    def render_component(
        self, name: str, expression: Expression | None, styles: dict[str, str]
    ) -> str:
        """Return the source of the component ``name``.

        Parameters
        ----------
        name : str
            Template name.
        expression : Expression | None
            The template's content expression.
        styles : dict[str, str]
            The template's styles.

        Returns
        -------
        str
            Component source text.
        """
        ...

    def generate(
        self, name: str, expression: Expression | None, styles: dict[str, str]
    ) -> GeneratedFile:
        """Generate the file for one template."""
        return GeneratedFile(
            file_path=self.file_name(name),
            content=self.render_component(name, expression, styles),
        )

    def tag_name(self, name: str) -> str:
        """Return the tag used for an entity reference."""
        return name

    def group_style(self, direction: LayoutDirection) -> str:
        """Return the style attribute of a group ``div``."""
        return f'style="display:flex; flex-direction:{direction.value}; gap:8px;"'

    def render_expression(self, expression: Expression | None) -> str:
        """Render an expression as markup."""
        if expression is None:
            return ""
        if isinstance(expression, EntityExpr):
            return f"<{self.tag_name(expression.name)} />"
        if isinstance(expression, ContainerExpr):
            tag = self.tag_name(expression.name)
            return f"<{tag}>{self.render_expression(expression.content)}</{tag}>"
        if isinstance(expression, GroupExpr):
            body = f"\n{self.indent}".join(
                self.render_expression(child) for child in expression.children
            )
            return (
                f"<div {self.group_style(expression.direction)}>\n"
                f"{self.indent}{body}\n    </div>"
            )
        raise TypeError(f"unknown expression node: {type(expression).__name__}")

    def component_refs(self, name: str, expression: Expression | None) -> list[str]:
        """Return the other components a component uses, in first-use order."""
        if expression is None:
            return []
        return [ref for ref in referenced_names(expression) if ref != name]


class HtmlGenerator(ComponentGenerator):
    """Generates plain HTML fragments with a scoped style block."""

    def file_name(self, name: str) -> str:
        return f"{name}.html"

    def render_component(
        self, name: str, expression: Expression | None, styles: dict[str, str]
    ) -> str:
        return (
            f'<section class="{name}">\n'
            f"  {self.render_expression(expression)}\n"
            "</section>\n\n"
            "<style>\n"
            f"{css_block('.' + name, styles)}\n"
            "</style>\n"
        )


class VueGenerator(ComponentGenerator):
    """Generates Vue single-file components using ``<script setup>``."""

    def file_name(self, name: str) -> str:
        return f"{to_pascal_name(name)}.vue"

    def tag_name(self, name: str) -> str:
        return to_pascal_name(name)

    def render_component(
        self, name: str, expression: Expression | None, styles: dict[str, str]
    ) -> str:
        imports = "\n".join(
            f"import {to_pascal_name(ref)} from './{to_pascal_name(ref)}.vue';"
            for ref in self.component_refs(name, expression)
        )
        return (
            '<script setup lang="ts">\n'
            f"{imports}\n"
            "</script>\n\n"
            "<template>\n"
            f'  <section class="{name}">\n'
            f"    {self.render_expression(expression)}\n"
            "  </section>\n"
            "</template>\n\n"
            "<style scoped>\n"
            f"{css_block('.' + name, styles)}\n"
            "</style>\n"
        )


class ReactGenerator(ComponentGenerator):
    """Generates React function components in TSX."""

    def file_name(self, name: str) -> str:
        return f"{to_pascal_name(name)}.tsx"

    def tag_name(self, name: str) -> str:
        return to_pascal_name(name)

    def group_style(self, direction: LayoutDirection) -> str:
        return (
            f'style={{{{ display: "flex", flexDirection: "{direction.value}", '
            'gap: "8px" }}'
        )

    def render_component(
        self, name: str, expression: Expression | None, styles: dict[str, str]
    ) -> str:
        imports = "".join(
            f"import {{ {to_pascal_name(ref)} }} from './{to_pascal_name(ref)}';\n"
            for ref in self.component_refs(name, expression)
        )
        style_object = ",\n".join(
            f'    "{_camel_case(key)}": "{value}"' for key, value in styles.items()
        )
        return (
            "import React from 'react';\n"
            f"{imports}\n"
            f"export function {to_pascal_name(name)}() {{\n"
            "  return (\n"
            "    <section style={{\n"
            f"{style_object}\n"
            "    }}>\n"
            f"      {self.render_expression(expression)}\n"
            "    </section>\n"
            "  );\n"
            "}\n"
        )


def _camel_case(key: str) -> str:
    head, *rest = key.split("-")
    return head + "".join(part.capitalize() for part in rest)


GENERATORS: dict[str, type[ComponentGenerator]] = {
    "html": HtmlGenerator,
    "vue": VueGenerator,
    "react": ReactGenerator,
}


def get_generator(framework: str) -> ComponentGenerator:
    """Return a generator instance for ``framework``.

    Raises
    ------
    ValueError
        If the framework is not one of ``html``, ``vue``, ``react``.
    """
    try:
        return GENERATORS[framework]()
    except KeyError:
        raise ValueError(
            f"unknown framework {framework!r}; expected one of {', '.join(GENERATORS)}"
        ) from None


def generate_files(
    result: CompileResult, framework: str = "html"
) -> list[GeneratedFile]:
    """Generate one component file per template, in first-seen order.

    Parameters
    ----------
    result : CompileResult
        Compilation whose templates are generated; it is not modified.
    framework : str
        ``html``, ``vue``, or ``react``.

    Returns
    -------
    list[GeneratedFile]
        Generated files.

    Examples
    --------
    >>> from luming import compile
    >>> files = generate_files(compile("main[a + b]"), "vue")
    >>> [f.file_path for f in files]
    ['Main.vue', 'A.vue', 'B.vue']
    """
    generator = get_generator(framework)
    document = result.document
    files = []
    for name in document.template_order:
        template = document.templates[name]
        files.append(
            generator.generate(name, template.content_expression, template.styles)
        )
    logger.debug("Generated %d %s file(s)", len(files), framework)
    return files
