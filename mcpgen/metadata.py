"""
Project Metadata

Reads package.json for the project name, version and description, and
detects well-known frameworks from its dependencies.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mcpgen.configs import get_logger

logger = get_logger("metadata")

PACKAGE_FILE = "package.json"
UNKNOWN_VERSION = "unknown"

# Framework label -> dependency names that indicate it. Order is output order.
FRAMEWORK_DEPENDENCIES = (
    ("React", ("react",)),
    ("Vue", ("vue",)),
    ("Angular", ("angular", "@angular/core")),
    ("Express", ("express",)),
    ("NestJS", ("nestjs", "@nestjs/core")),
    ("Next.js", ("next",)),
)


@dataclass
class ProjectMetadata:
    """Project identity as declared in package.json."""

    name: str
    version: str = UNKNOWN_VERSION
    description: str = ""
    dependencies: dict[str, str] = field(default_factory=dict)
    scripts: dict[str, str] = field(default_factory=dict)
    frameworks: list[str] = field(default_factory=list)


def detect_frameworks(dependencies: dict[str, Any]) -> list[str]:
    """Return framework labels whose packages appear in dependencies."""
    return [
        label
        for label, packages in FRAMEWORK_DEPENDENCIES
        if any(package in dependencies for package in packages)
    ]


def _mapping(value: Any) -> dict:
    return dict(value) if isinstance(value, dict) else {}


def read_project_metadata(root_path: str) -> ProjectMetadata:
    """
    Read metadata for the project rooted at root_path.

    A missing or unreadable package.json is logged and the directory name
    is used as the project name.

    Args:
        root_path: Project root directory

    Returns:
        ProjectMetadata
    """
    root = Path(root_path).resolve()
    metadata = ProjectMetadata(name=root.name)
    package_path = root / PACKAGE_FILE

    if not package_path.exists():
        logger.warning(f"No {PACKAGE_FILE} found in {root}")
        return metadata

    try:
        package = json.loads(package_path.read_text(encoding="utf-8"))
        if not isinstance(package, dict):
            raise ValueError("top-level value is not an object")
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read {PACKAGE_FILE}: {e}")
        return metadata

    metadata.name = package.get("name") or metadata.name
    metadata.version = package.get("version") or metadata.version
    metadata.description = package.get("description") or ""
    metadata.dependencies = {
        **_mapping(package.get("dependencies")),
        **_mapping(package.get("devDependencies")),
    }
    metadata.scripts = _mapping(package.get("scripts"))
    metadata.frameworks = detect_frameworks(metadata.dependencies)

    logger.debug(f"Read {PACKAGE_FILE} for project: {metadata.name}")
    logger.info(f"Detected frameworks: {', '.join(metadata.frameworks) or 'none'}")
    return metadata
