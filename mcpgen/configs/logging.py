"""
mcp-generator Logging Configuration

All loggers live under the "mcpgen" namespace. Two environment variables
control the defaults:
- MCPGEN_DEBUG: debug level when set to true/1/yes
- MCPGEN_LOG_FILE: also write log records to this file
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "mcpgen"
LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def env_debug_enabled() -> bool:
    """True when MCPGEN_DEBUG asks for debug output."""
    return os.environ.get("MCPGEN_DEBUG", "").lower() in ("true", "1", "yes")


def setup_logging(
    debug: Optional[bool] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    (Re)configure the mcpgen logger.

    Existing handlers are replaced, so calling this twice is safe.

    Args:
        debug: Debug level; falls back to MCPGEN_DEBUG
        log_file: Extra file destination; falls back to MCPGEN_LOG_FILE

    Returns:
        The mcpgen root logger
    """
    debug = env_debug_enabled() if debug is None else debug
    log_file = log_file or os.environ.get("MCPGEN_LOG_FILE") or None
    level = logging.DEBUG if debug else logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        root.addHandler(handler)

    if log_file:
        root.debug(f"Logging to file: {log_file}")
    return root


def get_logger(component: str) -> logging.Logger:
    """
    Logger for one component, e.g. get_logger("schema.scanner").

    Returns:
        The "mcpgen.<component>" logger
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")
