"""luming - compile a compact layout notation into styled UI placeholders.

Structure lines compose named entities into rows (``+``) and columns
(``/``), with inline content in brackets; style lines attach shorthand
styles to entities. The compiled runtime tree feeds an HTML preview and
per-component generators for HTML, Vue, and React.
"""

from __future__ import annotations

from luming.compiler import CompileOptions, CompileResult, compile

__version__ = "0.1.0"

__all__ = ["CompileOptions", "CompileResult", "compile", "__version__"]
