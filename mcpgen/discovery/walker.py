"""
Project Walker

File system traversal that finds the source and SQL files a run scans.
"""

import fnmatch
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Generator, Optional

from mcpgen.configs import (
    DEFAULT_SOURCE_EXTENSIONS,
    MAX_FILE_SIZE,
    SOURCE_EXCLUDE_PATTERNS,
    SQL_EXCLUDE_DIRS,
    SQL_EXTENSIONS,
    get_logger,
    load_ignore_patterns,
)

logger = get_logger("discovery")


def walk_project(
    root_path: str,
    extensions: Iterable[str],
    ignore_patterns: Optional[set[str]] = None,
    exclude_dirs: Optional[set[str]] = None,
    exclude_files: Iterable[str] = (),
) -> Generator[Path, None, None]:
    """
    Walk a project yielding files to scan.

    Args:
        root_path: Root directory to walk
        extensions: Extensions to include (e.g., {'.ts', '.tsx'})
        ignore_patterns: Additional patterns to ignore (merged with defaults + .mcpgenignore)
        exclude_dirs: Directory names pruned at any depth
        exclude_files: File-name patterns to skip

    Yields:
        Path objects for each matching file, in walk order
    """
    ignore = load_ignore_patterns(root_path, ignore_patterns)
    if exclude_dirs:
        ignore = ignore | exclude_dirs
    extensions = {ext.lower() for ext in extensions}
    exclude_files = tuple(exclude_files)

    root = Path(root_path).resolve()

    for dirpath, dirnames, filenames in os.walk(root):
        # Filter out ignored directories (in-place modification)
        dirnames[:] = sorted(
            d
            for d in dirnames
            if d not in ignore
            and not d.startswith(".")
            and not any(fnmatch.fnmatch(d, p) for p in ignore)
        )

        for filename in sorted(filenames):
            file_path = Path(dirpath) / filename

            # Skip hidden files
            if filename.startswith("."):
                continue

            if file_path.suffix.lower() not in extensions:
                continue

            if any(fnmatch.fnmatch(filename, p) for p in exclude_files):
                continue

            rel_path = file_path.relative_to(root).as_posix()
            if any(fnmatch.fnmatch(filename, p) or fnmatch.fnmatch(rel_path, p) for p in ignore):
                continue

            # Check file size
            try:
                if file_path.stat().st_size > MAX_FILE_SIZE:
                    logger.debug(f"Skipping large file: {rel_path}")
                    continue
            except OSError:
                continue

            yield file_path


def discover_source_files(
    root_path: str,
    extensions: Iterable[str] = DEFAULT_SOURCE_EXTENSIONS,
    ignore_patterns: Optional[set[str]] = None,
) -> list[Path]:
    """
    Find source files to scan for tools.

    Test files, spec files and declaration files are excluded.

    Returns:
        Sorted list of absolute paths
    """
    files = sorted(
        walk_project(
            root_path,
            extensions,
            ignore_patterns=ignore_patterns,
            exclude_files=SOURCE_EXCLUDE_PATTERNS,
        )
    )
    logger.debug(f"Found {len(files)} source files under {root_path}")
    return files


def discover_sql_files(
    root_path: str,
    ignore_patterns: Optional[set[str]] = None,
) -> list[Path]:
    """
    Find SQL files to scan for resources.

    Files under a migrations/ directory are excluded.

    Returns:
        Sorted list of absolute paths
    """
    files = sorted(
        walk_project(
            root_path,
            SQL_EXTENSIONS,
            ignore_patterns=ignore_patterns,
            exclude_dirs=SQL_EXCLUDE_DIRS,
        )
    )
    logger.debug(f"Found {len(files)} SQL files under {root_path}")
    return files
