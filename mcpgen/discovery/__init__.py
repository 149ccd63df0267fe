"""
File Discovery

Finds the source and SQL files a generator run scans.
"""

from mcpgen.discovery.walker import discover_source_files, discover_sql_files, walk_project

__all__ = [
    "discover_source_files",
    "discover_sql_files",
    "walk_project",
]
