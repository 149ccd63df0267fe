"""
mcp-generator Ignore Patterns

Default directory patterns skipped during file discovery, plus project
patterns loaded from an optional .mcpgenignore file (.gitignore-style lines).
"""

from pathlib import Path

# --- Default Ignore Patterns ---

DEFAULT_IGNORE_PATTERNS = {
    # Version control
    ".git",
    ".svn",
    ".hg",
    # Dependencies
    "node_modules",
    "bower_components",
    "vendor",
    ".venv",
    "venv",
    "__pycache__",
    # Build outputs
    "dist",
    "build",
    "out",
    ".next",
    ".nuxt",
    "coverage",
    # IDE
    ".idea",
    ".vscode",
    # Misc
    ".cache",
    ".turbo",
}

IGNORE_FILE_NAME = ".mcpgenignore"


def _load_ignore_file(path: Path) -> set[str]:
    """Load patterns from an ignore file (like .gitignore format)."""
    if not path.exists():
        return set()
    patterns = set()
    for line in path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            patterns.add(line.rstrip("/"))
    return patterns


def load_ignore_patterns(root_path: str, extra_patterns: set[str] | None = None) -> set[str]:
    """Merge default, configured, and project ignore patterns.

    Args:
        root_path: Root path of the project being scanned
        extra_patterns: Patterns from the project config file

    Returns:
        Set of ignore patterns to use for filtering
    """
    patterns = set(DEFAULT_IGNORE_PATTERNS)
    if extra_patterns:
        patterns.update(extra_patterns)
    patterns.update(_load_ignore_file(Path(root_path) / IGNORE_FILE_NAME))
    return patterns
