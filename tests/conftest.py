"""Root pytest configuration for luming tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

SAMPLE_SOURCE = """\
main: bg #fda; 70
tabs: card
main[tabs[tab + tab] / content]
tab: bg blue; rd 8
"""


@pytest.fixture
def sample_source() -> str:
    """Return a small layout document with styles and nested content.

    Returns
    -------
    str
        Layout source with two style lines before and one after the
        structure line.
    """
    return SAMPLE_SOURCE


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def layout_file(tmp_path: Path, sample_source: str) -> Path:
    """Write the sample layout document to a temporary file."""
    path = tmp_path / "page.luming"
    path.write_text(sample_source, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_luming_logger() -> Iterator[None]:
    """Drop handlers the CLI attaches to the package logger."""
    yield
    logger = logging.getLogger("luming")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
