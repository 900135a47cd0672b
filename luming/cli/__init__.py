"""Command-line interface.

Provides commands for previewing, generating, and checking layout files.
"""

from __future__ import annotations

from luming.cli.main import cli

__all__ = ["cli"]
