"""
Data Models for Symbol Extraction

Structured representations of the function-like symbols found in a source
file, before they are normalized into tool descriptors.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class SymbolKind(str, Enum):
    """Which source construct a callable symbol came from."""

    DECLARATION = "declaration"  # function foo() {}
    BINDING = "binding"  # const foo = () => {}
    METHOD = "method"  # class Foo { bar() {} }


@dataclass
class ParameterInfo:
    """Represents a function parameter."""

    name: str
    type_annotation: Optional[str] = None
    default_value: Optional[str] = None
    is_optional: bool = False
    is_rest: bool = False


@dataclass
class DocComment:
    """Parsed leading documentation comment."""

    description: str = ""
    examples: list[str] = field(default_factory=list)
    tags: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class FunctionSymbol:
    """
    A callable discovered in a source file.

    Declarations, bindings and methods share this one shape so the scanner
    never looks at the concrete syntax node.
    """

    kind: SymbolKind
    name: Optional[str]
    parameters: list[ParameterInfo] = field(default_factory=list)
    return_type: Optional[str] = None
    is_async: bool = False
    is_exported: bool = False
    doc: Optional[DocComment] = None
    class_name: Optional[str] = None  # Enclosing class for methods
    line: int = 0

    @property
    def qualified_name(self) -> str:
        if self.class_name:
            return f"{self.class_name}.{self.name}"
        return self.name or "[anonymous]"


@dataclass
class FileSymbols:
    """All callable symbols found in one file, in discovery order."""

    file_path: str
    language: str
    declarations: list[FunctionSymbol] = field(default_factory=list)
    bindings: list[FunctionSymbol] = field(default_factory=list)
    methods: list[FunctionSymbol] = field(default_factory=list)
    has_errors: bool = False

    def candidates(self) -> list[FunctionSymbol]:
        """Declarations, then bindings, then methods."""
        return [*self.declarations, *self.bindings, *self.methods]
