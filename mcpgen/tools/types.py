"""
Type Normalizer

Converts raw TypeScript type text into a portable TypeDescriptor. This is
pattern matching on the rendered text, not type checking.
"""

import re
from typing import Optional

from mcpgen.models import TypeDescriptor

# import("./models").User -> User
_QUALIFIER_RE = re.compile(r"import\([^)]*\)\.")

_LITERAL = r"(?:\"[^\"]+\"|'[^']+')"
_STRING_UNION_RE = re.compile(rf"^\|?\s*{_LITERAL}(?:\s*\|\s*{_LITERAL})*$")
_LITERAL_VALUE_RE = re.compile(r"\"([^\"]+)\"|'([^']+)'")

_GENERIC_ARRAY_RE = re.compile(r"^(?:Readonly)?Array<(.+)>$", re.DOTALL)
_PROMISE_RE = re.compile(r"^Promise<(.*)>$", re.DOTALL)

PRIMITIVE_TYPES = {
    "string": "string",
    "number": "number",
    "boolean": "boolean",
    "Date": "string",
    "any": "any",
    "unknown": "any",
    "object": "object",
    "void": "null",
    "undefined": "null",
    "null": "null",
}


def clean_type_text(type_text: str) -> str:
    """Strip import("...") qualifiers and surrounding whitespace."""
    return _QUALIFIER_RE.sub("", type_text).strip()


def normalize_type(type_text: Optional[str]) -> TypeDescriptor:
    """
    Normalize a type expression.

    Rules are tried in order and the first match wins: string-literal
    union, array, Promise, inline object, primitive, passthrough.

    Args:
        type_text: Type expression as written in the source, or None

    Returns:
        TypeDescriptor
    """
    if not type_text:
        return TypeDescriptor(kind="any")

    text = clean_type_text(type_text)
    if not text:
        return TypeDescriptor(kind="any")

    if _STRING_UNION_RE.match(text):
        values = tuple(double or single for double, single in _LITERAL_VALUE_RE.findall(text))
        return TypeDescriptor(
            kind="string",
            description=f"One of: {', '.join(values)}",
            enum_values=values,
        )

    element = _array_element(text)
    if element is not None:
        return TypeDescriptor(kind="array", description=f"Array of {element}")

    promise = _PROMISE_RE.match(text)
    if promise:
        inner = promise.group(1).strip() or "any"
        return TypeDescriptor(kind="promise", description=f"Promise resolving to {inner}")

    if "{" in text and "}" in text:
        return TypeDescriptor(kind="object", description="Complex object type")

    mapped = PRIMITIVE_TYPES.get(text)
    if mapped is not None:
        return TypeDescriptor(kind=mapped, description=text if mapped != text else None)

    return TypeDescriptor(kind=text)


def _array_element(text: str) -> Optional[str]:
    """Element type text for T[] or Array<T>, else None."""
    if text.endswith("[]"):
        element = text[:-2].strip()
        if element.startswith("readonly "):
            element = element[len("readonly "):].strip()
        return element or "any"
    match = _GENERIC_ARRAY_RE.match(text)
    if match:
        return match.group(1).strip()
    return None
