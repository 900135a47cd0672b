"""Configuration system for luming.

Provides configuration models, YAML loading, and logging setup.
"""

from __future__ import annotations

from luming.config.config import LoggingConfig, LumingConfig, OutputConfig
from luming.config.loader import (
    ConfigError,
    configure_logging,
    load_config,
    load_yaml_file,
    merge_configs,
)

__all__ = [
    # Models
    "LumingConfig",
    "OutputConfig",
    "LoggingConfig",
    # Loading
    "ConfigError",
    "load_config",
    "load_yaml_file",
    "merge_configs",
    # Logging
    "configure_logging",
]
