"""
Descriptor Models

Normalized records produced by the extraction pipeline: tool descriptors for
exported callables and resource descriptors for SQL tables. Each model's
to_dict() returns the camelCase shape written into the manifest.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class TypeDescriptor:
    """Normalized result of type-text analysis."""

    kind: str
    description: Optional[str] = None
    enum_values: Optional[tuple[str, ...]] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind}
        if self.description is not None:
            data["description"] = self.description
        if self.enum_values is not None:
            data["enumValues"] = list(self.enum_values)
        return data


@dataclass(frozen=True)
class ParameterSchema:
    """Schema for one tool parameter."""

    type: str
    required: bool = True
    description: Optional[str] = None
    enum: Optional[tuple[str, ...]] = None

    @classmethod
    def from_type(cls, type_info: TypeDescriptor, required: bool) -> "ParameterSchema":
        return cls(
            type=type_info.kind,
            required=required,
            description=type_info.description,
            enum=type_info.enum_values,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "required": self.required}
        if self.description is not None:
            data["description"] = self.description
        if self.enum is not None:
            data["enum"] = list(self.enum)
        return data


@dataclass
class ToolDescriptor:
    """One extracted callable."""

    name: str
    description: str
    parameters: dict[str, ParameterSchema] = field(default_factory=dict)
    return_type: str = "any"
    category: str = "general"
    source_file: str = ""
    examples: list[str] = field(default_factory=list)

    @property
    def key(self) -> tuple[str, str]:
        """Deduplication key: (source file, name)."""
        return (self.source_file, self.name)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "parameters": {name: p.to_dict() for name, p in self.parameters.items()},
            "returnType": self.return_type,
            "category": self.category,
            "sourceFile": self.source_file,
        }
        if self.examples:
            data["examples"] = list(self.examples)
        return data


@dataclass(frozen=True)
class ColumnSchema:
    """Schema for one table column."""

    type: str
    nullable: bool = True
    primary_key: bool = False
    auto_increment: bool = False
    default_value: Any = None
    length: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "nullable": self.nullable,
            "primaryKey": self.primary_key,
            "autoIncrement": self.auto_increment,
        }
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        if self.length is not None:
            data["length"] = self.length
        return data


@dataclass(frozen=True)
class ForeignKey:
    """A column reference to another table."""

    column: str
    references_table: Optional[str] = None
    references_column: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "column": self.column,
            "referencesTable": self.references_table,
            "referencesColumn": self.references_column,
        }


@dataclass
class ResourceDescriptor:
    """One extracted table."""

    name: str
    columns: dict[str, ColumnSchema] = field(default_factory=dict)
    indexes: list[str] = field(default_factory=list)
    foreign_keys: list[ForeignKey] = field(default_factory=list)
    source_file: str = ""
    dialect: str = ""
    last_modified: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "columns": {name: c.to_dict() for name, c in self.columns.items()},
            "indexes": list(self.indexes),
            "foreignKeys": [fk.to_dict() for fk in self.foreign_keys],
            "sourceFile": self.source_file,
            "dialect": self.dialect,
            "lastModified": self.last_modified.isoformat() if self.last_modified else None,
        }
