"""Configuration models for the luming package."""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from luming.compiler import CompileOptions


class OutputConfig(BaseModel):
    """Where and how the CLI writes its output.

    Parameters
    ----------
    preview_path : str
        Default path of the preview HTML page.
    generate_dir : str
        Default directory for generated components.
    framework : str
        Default component framework.

    Examples
    --------
    >>> OutputConfig().framework
    'html'
    """

    preview_path: str = Field(
        default="luming.preview.html", description="Preview HTML output path"
    )
    generate_dir: str = Field(
        default="generated", description="Generated components directory"
    )
    framework: Literal["html", "vue", "react"] = Field(
        default="html", description="Component framework"
    )


class LoggingConfig(BaseModel):
    """Logging configuration.

    Parameters
    ----------
    level : str
        Level name for the ``luming`` logger.
    format : str
        Log record format.
    """

    level: str = Field(default="WARNING", description="Logging level")
    format: str = Field(
        default="%(asctime)s %(name)s %(levelname)s %(message)s",
        description="Log record format",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and validate the level name.

        Raises
        ------
        ValueError
            If the name is not a standard logging level.
        """
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown logging level: {v}")
        return level


class LumingConfig(BaseModel):
    """Top-level configuration.

    Examples
    --------
    >>> config = LumingConfig()
    >>> config.compile.mode, config.output.generate_dir, config.logging.level
    ('preview', 'generated', 'WARNING')
    """

    compile: CompileOptions = Field(default_factory=CompileOptions)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
