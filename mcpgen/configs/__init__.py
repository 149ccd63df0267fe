"""
mcp-generator Configuration Module

Re-exports commonly used functions for cleaner imports across the codebase.
"""

# Logging (most commonly used)
from mcpgen.configs.logging import get_logger, setup_logging

# Constants
from mcpgen.configs.constants import (
    DEFAULT_DIALECTS,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_SOURCE_EXTENSIONS,
    MAX_FILE_SIZE,
    MCP_VERSION,
    PROJECT_CONFIG_FILE,
    SOURCE_EXCLUDE_PATTERNS,
    SQL_EXCLUDE_DIRS,
    SQL_EXTENSIONS,
    SUMMARY_FILE,
    SUPPORTED_SOURCE_EXTENSIONS,
)

# Ignore patterns
from mcpgen.configs.ignore_patterns import DEFAULT_IGNORE_PATTERNS, load_ignore_patterns

# YAML config
from mcpgen.configs.yaml_config import (
    GeneratorConfig,
    build_config,
    load_project_config,
    load_yaml_config,
)

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Constants
    "DEFAULT_DIALECTS",
    "DEFAULT_OUTPUT_FILE",
    "DEFAULT_SOURCE_EXTENSIONS",
    "MAX_FILE_SIZE",
    "MCP_VERSION",
    "PROJECT_CONFIG_FILE",
    "SOURCE_EXCLUDE_PATTERNS",
    "SQL_EXCLUDE_DIRS",
    "SQL_EXTENSIONS",
    "SUMMARY_FILE",
    "SUPPORTED_SOURCE_EXTENSIONS",
    # Ignore patterns
    "DEFAULT_IGNORE_PATTERNS",
    "load_ignore_patterns",
    # YAML config
    "GeneratorConfig",
    "build_config",
    "load_project_config",
    "load_yaml_config",
]
