"""
Name Classifier

Derives a human-readable description and a category tag for a function from
its name and file path. Both policies are ordered (pattern, result) tables
evaluated top to bottom; the first match wins.
"""

import re
from collections.abc import Iterable
from typing import Optional, Union

_FETCH = re.compile(r"^(get|fetch|find|retrieve|load|query)", re.IGNORECASE)
_CREATE = re.compile(r"^(create|add|insert|post)", re.IGNORECASE)
_UPDATE = re.compile(r"^(update|edit|modify|patch|put)", re.IGNORECASE)
_DELETE = re.compile(r"^(delete|remove|destroy)", re.IGNORECASE)
_LIST = re.compile(r"^(list|getAll)", re.IGNORECASE)
_SEARCH = re.compile(r"^(search|filter)", re.IGNORECASE)
_VALIDATE = re.compile(r"^(validate|check|verify)", re.IGNORECASE)
_AUTH = re.compile(r"^(auth|login|logout|register)", re.IGNORECASE)

# Trailing lookup qualifier: UserById -> User
_LOOKUP_QUALIFIER_RE = re.compile(r"By[A-Z0-9_]\w*$")

# (pattern, template, template when an id-like parameter exists)
DESCRIPTION_RULES: tuple[tuple[re.Pattern, str, Optional[str]], ...] = (
    (_FETCH, "Fetch {subject} data", "Fetch a specific {subject} by ID"),
    (_CREATE, "Create a new {subject} record", None),
    (_UPDATE, "Update an existing {subject} record", None),
    (_DELETE, "Delete a {subject} record", None),
    (_LIST, "List all {subject} records", None),
    (_SEARCH, "Search and filter {subject} records", None),
    (_VALIDATE, "Validate {subject} data", None),
)

CATEGORY_PATH_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("/api/", "/routes/"), "api"),
    (("/utils/", "/helpers/"), "utility"),
    (("/services/",), "service"),
    (("/models/",), "model"),
    (("/controllers/",), "controller"),
    (("/middleware/",), "middleware"),
)

CATEGORY_NAME_RULES: tuple[tuple[re.Pattern, str], ...] = (
    (_FETCH, "data-access"),
    (_CREATE, "data-creation"),
    (_UPDATE, "data-modification"),
    (_DELETE, "data-deletion"),
    (_VALIDATE, "validation"),
    (_AUTH, "authentication"),
)

DEFAULT_CATEGORY = "general"

CATEGORIES = tuple(
    [category for _, category in CATEGORY_PATH_RULES]
    + [category for _, category in CATEGORY_NAME_RULES]
    + [DEFAULT_CATEGORY]
)


def _subject(pattern: re.Pattern, name: str) -> str:
    remainder = pattern.sub("", name, count=1)
    without_lookup = _LOOKUP_QUALIFIER_RE.sub("", remainder)
    return (without_lookup or remainder).lower()


def describe_function(
    name: str,
    parameters: Union[int, Iterable[str], None] = None,
    has_id_parameter: Optional[bool] = None,
) -> str:
    """
    Build a description sentence from a function name.

    Args:
        name: Function name, e.g. "getUserById"
        parameters: Parameter names (a mapping works too) or a parameter count
        has_id_parameter: Whether an id-like parameter exists; derived from
                          the parameter names when not given

    Returns:
        Description such as "Fetch a specific user by ID"
    """
    if isinstance(parameters, int):
        count = parameters
        names: list[str] = []
    else:
        names = list(parameters or [])
        count = len(names)
    if has_id_parameter is None:
        has_id_parameter = any("id" in param.lower() for param in names)

    for pattern, template, id_template in DESCRIPTION_RULES:
        if pattern.match(name):
            chosen = id_template if (id_template and has_id_parameter) else template
            sentence = chosen.format(subject=_subject(pattern, name))
            return " ".join(sentence.split())

    if count > 0:
        return f"Function: {name} ({count} parameters)"
    return f"Function: {name}"


def categorize(name: str, file_path: str) -> str:
    """
    Assign a category to a function.

    File path rules always take precedence over name rules.

    Args:
        name: Function name
        file_path: Path of the declaring file (relative to the project root)

    Returns:
        Category tag, e.g. "service" or "data-access"
    """
    path = file_path.replace("\\", "/")
    for markers, category in CATEGORY_PATH_RULES:
        if any(marker in path for marker in markers):
            return category

    for pattern, category in CATEGORY_NAME_RULES:
        if pattern.match(name):
            return category

    return DEFAULT_CATEGORY
