"""CLI entry point for luming package.

Allows running via: python -m luming
"""

from __future__ import annotations

from luming.cli.main import cli

if __name__ == "__main__":
    cli()
