"""
Symbol Filter

Decides whether a discovered symbol may become a tool. Every rule is
independent; any match rejects the symbol.
"""

import re
from typing import Optional

PRIVATE_PREFIXES = ("_", "#")

# (pattern, reason) checked against the symbol name
EXCLUDED_NAME_RULES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"^(test|spec|mock|stub)", re.IGNORECASE), "test helper"),
    (re.compile(r"^(helper|util|internal|private)", re.IGNORECASE), "internal utility"),
    (re.compile(r"^(constructor|init)", re.IGNORECASE), "constructor-like"),
)

# Capitalized names in component files are UI components
COMPONENT_PATH_MARKER = "component"
_CAPITALIZED_RE = re.compile(r"^[A-Z]")


def rejection_reason(name: str, file_path: str) -> Optional[str]:
    """
    Explain why a symbol is not eligible.

    Args:
        name: Symbol name
        file_path: Path of the declaring file

    Returns:
        Short reason string, or None if the symbol is eligible
    """
    if name.startswith(PRIVATE_PREFIXES):
        return "private"
    for pattern, reason in EXCLUDED_NAME_RULES:
        if pattern.match(name):
            return reason
    if _CAPITALIZED_RE.match(name) and COMPONENT_PATH_MARKER in file_path:
        return "UI component"
    return None


def is_eligible(name: str, file_path: str) -> bool:
    """Check if a symbol may be extracted as a tool."""
    return rejection_reason(name, file_path) is None
