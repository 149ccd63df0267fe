"""
JSDoc Reader

Parses /** ... */ documentation comments into a primary description and
tagged sections (@param, @returns, @example, ...).
"""

import re
from typing import Optional

from mcpgen.ast.models import DocComment

# Tag names are lowercase words; "@Injectable()" inside an example is code.
_TAG_RE = re.compile(r"^@([a-z]\w*)(?:\s+(.*))?$")


def is_doc_comment(text: str) -> bool:
    """True for /** ... */ blocks (but not the empty /**/)."""
    return text.startswith("/**") and text.endswith("*/") and len(text) > 4


def _strip_comment_line(line: str) -> str:
    stripped = line.strip()
    if stripped.startswith("*"):
        stripped = stripped[1:]
        if stripped.startswith(" "):
            stripped = stripped[1:]
    return stripped.rstrip()


def parse_jsdoc(text: str) -> Optional[DocComment]:
    """
    Parse a JSDoc comment.

    Args:
        text: Raw comment text including the /** and */ delimiters

    Returns:
        DocComment, or None if the text is not a documentation comment
    """
    text = text.strip()
    if not is_doc_comment(text):
        return None

    body = text[3:-2]
    description_lines: list[str] = []
    tags: dict[str, list[str]] = {}
    current_tag: Optional[str] = None
    current_lines: list[str] = []

    def _flush() -> None:
        if current_tag is not None:
            tags.setdefault(current_tag, []).append("\n".join(current_lines).strip())

    for raw_line in body.splitlines():
        line = _strip_comment_line(raw_line)
        match = _TAG_RE.match(line.strip())
        if match:
            _flush()
            current_tag = match.group(1)
            current_lines = [match.group(2)] if match.group(2) else []
        elif current_tag is not None:
            current_lines.append(line)
        else:
            description_lines.append(line)
    _flush()

    examples = [example for example in tags.get("example", []) if example]

    return DocComment(
        description="\n".join(description_lines).strip(),
        examples=examples,
        tags=tags,
    )
