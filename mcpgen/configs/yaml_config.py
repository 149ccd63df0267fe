"""
mcp-generator Project Configuration

Loading and defaults for the optional <project>/.mcpgen.yaml file.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from mcpgen.configs.constants import (
    DEFAULT_DIALECTS,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_SOURCE_EXTENSIONS,
    PROJECT_CONFIG_FILE,
    SUPPORTED_SOURCE_EXTENSIONS,
)
from mcpgen.configs.logging import env_debug_enabled
from mcpgen.exceptions import ConfigurationError


@dataclass
class GeneratorConfig:
    """Effective configuration for one generator run."""

    output: str = DEFAULT_OUTPUT_FILE
    summary: bool = True
    source_extensions: tuple[str, ...] = DEFAULT_SOURCE_EXTENSIONS
    ignore_patterns: set[str] = field(default_factory=set)
    dialects: tuple[str, ...] = DEFAULT_DIALECTS
    debug: bool = False


def get_config_path(root_path: str) -> Path:
    """Get the path to the project's .mcpgen.yaml."""
    return Path(root_path) / PROJECT_CONFIG_FILE


def load_yaml_config(root_path: str) -> dict:
    """
    Load the raw project configuration.

    Args:
        root_path: Project root directory

    Returns:
        Configuration dictionary (empty if file doesn't exist)

    Raises:
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    config_path = get_config_path(root_path)
    if not config_path.exists():
        return {}

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping")
    return data


def _as_tuple(value: Any, key: str) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise ConfigurationError(f"'{key}' must be a string or a list of strings")


def build_config(data: dict) -> GeneratorConfig:
    """
    Merge a raw configuration mapping over the defaults.

    Args:
        data: Mapping loaded from .mcpgen.yaml

    Returns:
        GeneratorConfig with validated values
    """
    config = GeneratorConfig()

    if "output" in data:
        config.output = str(data["output"])
    if "summary" in data:
        config.summary = bool(data["summary"])
    if "debug" in data:
        config.debug = bool(data["debug"])

    if "source_extensions" in data:
        extensions = tuple(
            ext if ext.startswith(".") else f".{ext}"
            for ext in _as_tuple(data["source_extensions"], "source_extensions")
        )
        unsupported = [ext for ext in extensions if ext not in SUPPORTED_SOURCE_EXTENSIONS]
        if unsupported:
            raise ConfigurationError(
                "Unsupported source extensions",
                {"extensions": unsupported, "supported": list(SUPPORTED_SOURCE_EXTENSIONS)},
            )
        config.source_extensions = extensions

    if "ignore_patterns" in data and data["ignore_patterns"]:
        config.ignore_patterns = set(_as_tuple(data["ignore_patterns"], "ignore_patterns"))

    if "dialects" in data:
        dialects = tuple(d.lower() for d in _as_tuple(data["dialects"], "dialects"))
        unknown = [d for d in dialects if d not in DEFAULT_DIALECTS]
        if unknown or not dialects:
            raise ConfigurationError(
                "Unknown SQL dialects",
                {"dialects": unknown, "supported": list(DEFAULT_DIALECTS)},
            )
        config.dialects = dialects

    return config


def load_project_config(root_path: str, debug: Optional[bool] = None) -> GeneratorConfig:
    """
    Load the effective configuration for a project.

    Precedence: explicit argument, then MCPGEN_DEBUG, then .mcpgen.yaml.

    Args:
        root_path: Project root directory
        debug: Explicit debug override (e.g. from the --debug flag)

    Returns:
        GeneratorConfig
    """
    config = build_config(load_yaml_config(root_path))
    if env_debug_enabled():
        config.debug = True
    if debug is not None:
        config.debug = debug
    return config
