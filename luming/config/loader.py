"""Loading configuration from YAML files and applying logging settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from luming.config.config import LoggingConfig, LumingConfig


class ConfigError(ValueError):
    """Raised when a configuration file cannot be loaded."""


def load_yaml_file(path: Path | str) -> dict[str, Any]:
    """Read a YAML mapping from ``path``.

    Parameters
    ----------
    path : Path | str
        YAML file.

    Returns
    -------
    dict[str, Any]
        The mapping; an empty file yields an empty mapping.

    Raises
    ------
    ConfigError
        If the file does not exist, is not valid YAML, or is not a mapping.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file must contain a mapping: {path}")
    return data


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into ``base`` recursively, returning a new dict.

    Examples
    --------
    >>> merge_configs({"output": {"framework": "vue", "generate_dir": "g"}},
    ...               {"output": {"framework": "react"}})
    {'output': {'framework': 'react', 'generate_dir': 'g'}}
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Path | str | None = None, **overrides: Any) -> LumingConfig:
    """Build a configuration from defaults, an optional file, and overrides.

    Parameters
    ----------
    path : Path | str | None
        Optional YAML file.
    **overrides : Any
        Section mappings applied on top of the file, e.g.
        ``output={"framework": "vue"}``.

    Returns
    -------
    LumingConfig
        Validated configuration.

    Raises
    ------
    ConfigError
        If the file cannot be read or the values are invalid.
    """
    data: dict[str, Any] = {} if path is None else load_yaml_file(path)
    data = merge_configs(data, overrides)
    try:
        return LumingConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration: {e}") from e


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Apply a logging configuration to the ``luming`` logger.

    Returns
    -------
    logging.Logger
        The configured ``luming`` logger.
    """
    logger = logging.getLogger("luming")
    logger.setLevel(config.level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setFormatter(logging.Formatter(config.format))
    return logger
