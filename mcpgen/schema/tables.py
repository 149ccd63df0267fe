"""
Table Extraction

Walks parsed SQL statements (sqlglot expressions) and collects table
definitions: columns, indexes and foreign keys. Handles CREATE TABLE and
standalone CREATE INDEX; other statements are ignored.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from sqlglot import exp

from mcpgen.models import ColumnSchema, ForeignKey
from mcpgen.schema.dialects import ParsedSchema

SERIAL_TYPES = {
    exp.DataType.Type.SERIAL,
    exp.DataType.Type.BIGSERIAL,
    exp.DataType.Type.SMALLSERIAL,
}

AUTO_INCREMENT_CONSTRAINTS = (
    exp.AutoIncrementColumnConstraint,
    exp.GeneratedAsIdentityColumnConstraint,
)


@dataclass
class TableDefinition:
    """A table as declared in one SQL file."""

    name: str
    columns: dict[str, ColumnSchema] = field(default_factory=dict)
    indexes: list[str] = field(default_factory=list)
    foreign_keys: list[ForeignKey] = field(default_factory=list)


def index_name(table: str, columns: list[str], name: Optional[str] = None) -> str:
    """Declared index name, or {table}_{columns}_idx when the grammar omits one."""
    if name:
        return name
    return f"{table}_{'_'.join(columns)}_idx"


def _column_name(node: exp.Expression) -> str:
    if isinstance(node, exp.Ordered):
        node = node.this
    return node.name


def _column_names(nodes: Optional[list[exp.Expression]]) -> list[str]:
    return [name for name in (_column_name(node) for node in nodes or []) if name]


def _reference_target(reference: exp.Reference) -> tuple[Optional[str], list[str]]:
    """Return (table, columns) referenced by a REFERENCES clause."""
    target = reference.this
    if isinstance(target, exp.Schema):
        table = target.this.name if target.this is not None else None
        return table or None, _column_names(target.expressions)
    if isinstance(target, exp.Table):
        return target.name or None, []
    return None, []


def _foreign_keys(columns: list[str], reference: Optional[exp.Reference]) -> list[ForeignKey]:
    if reference is None:
        return [ForeignKey(column=column) for column in columns]
    table, ref_columns = _reference_target(reference)
    keys = []
    for position, column in enumerate(columns):
        ref_column = ref_columns[position] if position < len(ref_columns) else None
        keys.append(ForeignKey(column=column, references_table=table, references_column=ref_column))
    return keys


def _type_name(data_type: Optional[exp.Expression], dialect: str) -> str:
    if not isinstance(data_type, exp.DataType):
        return data_type.sql(dialect=dialect).lower() if data_type is not None else "unknown"
    if data_type.this == exp.DataType.Type.USERDEFINED:
        kind = data_type.args.get("kind")
        return str(kind).lower() if kind else data_type.sql(dialect=dialect).lower()
    return data_type.this.value.lower()


def _type_length(data_type: Optional[exp.Expression]) -> Optional[int]:
    if not isinstance(data_type, exp.DataType) or not data_type.expressions:
        return None
    param = data_type.expressions[0]
    if isinstance(param, exp.DataTypeParam):
        param = param.this
    if isinstance(param, exp.Literal) and not param.is_string:
        try:
            return int(param.this)
        except ValueError:
            return None
    return None


def literal_value(node: Optional[exp.Expression], dialect: str) -> Any:
    """Convert a DEFAULT expression to a Python value where it is a literal."""
    if node is None or isinstance(node, exp.Null):
        return None
    if isinstance(node, exp.Paren):
        return literal_value(node.this, dialect)
    if isinstance(node, exp.Boolean):
        return node.this
    if isinstance(node, exp.Neg) and isinstance(node.this, exp.Literal):
        value = literal_value(node.this, dialect)
        return -value if isinstance(value, (int, float)) else node.sql(dialect=dialect)
    if isinstance(node, exp.Literal):
        if node.is_string:
            return node.this
        for cast in (int, float):
            try:
                return cast(node.this)
            except ValueError:
                continue
        return node.this
    return node.sql(dialect=dialect)


def _build_column(
    column_def: exp.ColumnDef, dialect: str
) -> tuple[ColumnSchema, list[ForeignKey]]:
    """Build a ColumnSchema (and inline REFERENCES) from a column definition."""
    data_type = column_def.args.get("kind")
    not_null = False
    primary_key = False
    auto_increment = (
        isinstance(data_type, exp.DataType) and data_type.this in SERIAL_TYPES
    )
    default_value = None
    foreign_keys: list[ForeignKey] = []

    for constraint in column_def.args.get("constraints") or []:
        kind = constraint.args.get("kind")
        if isinstance(kind, exp.NotNullColumnConstraint):
            not_null = not kind.args.get("allow_null")
        elif isinstance(kind, exp.PrimaryKeyColumnConstraint):
            primary_key = True
        elif isinstance(kind, AUTO_INCREMENT_CONSTRAINTS):
            auto_increment = True
        elif isinstance(kind, exp.DefaultColumnConstraint):
            default_value = literal_value(kind.this, dialect)
        elif isinstance(kind, exp.Reference):
            foreign_keys.extend(_foreign_keys([column_def.name], kind))

    column = ColumnSchema(
        type=_type_name(data_type, dialect),
        nullable=not not_null,
        primary_key=primary_key,
        auto_increment=auto_increment,
        default_value=default_value,
        length=_type_length(data_type),
    )
    return column, foreign_keys


def _apply_table_constraint(
    table: TableDefinition,
    node: exp.Expression,
    primary_keys: list[str],
    name: Optional[str] = None,
) -> None:
    if isinstance(node, exp.PrimaryKey):
        primary_keys.extend(_column_names(node.expressions))
    elif isinstance(node, exp.ForeignKey):
        table.foreign_keys.extend(
            _foreign_keys(_column_names(node.expressions), node.args.get("reference"))
        )
    elif isinstance(node, exp.IndexColumnConstraint):
        columns = _column_names(node.expressions)
        declared = node.this.name if isinstance(node.this, exp.Expression) else node.this
        table.indexes.append(index_name(table.name, columns, name or declared))
    elif isinstance(node, exp.UniqueColumnConstraint) and isinstance(node.this, exp.Schema):
        # UNIQUE [KEY name] (cols) at table level
        key = node.this
        declared = key.this.name if isinstance(key.this, exp.Expression) else None
        table.indexes.append(index_name(table.name, _column_names(key.expressions), name or declared))


def build_table(create: exp.Create, dialect: str) -> Optional[TableDefinition]:
    """
    Build a TableDefinition from a CREATE TABLE statement.

    Args:
        create: Parsed CREATE statement of kind TABLE
        dialect: sqlglot dialect used to render non-literal values

    Returns:
        TableDefinition, or None if the table has no name
    """
    schema = create.this
    if isinstance(schema, exp.Schema):
        table_expr = schema.this
        elements = schema.expressions
    else:
        table_expr = schema
        elements = []

    name = table_expr.name if isinstance(table_expr, exp.Expression) else ""
    if not name:
        return None

    table = TableDefinition(name=name)
    primary_keys: list[str] = []

    for element in elements:
        if isinstance(element, exp.ColumnDef):
            if not element.name:
                continue
            column, foreign_keys = _build_column(element, dialect)
            table.columns[element.name] = column
            table.foreign_keys.extend(foreign_keys)
        elif isinstance(element, exp.Constraint):
            for node in element.expressions:
                _apply_table_constraint(table, node, primary_keys, name=element.name or None)
        else:
            _apply_table_constraint(table, element, primary_keys)

    for column_name in primary_keys:
        if column_name in table.columns:
            table.columns[column_name] = replace(table.columns[column_name], primary_key=True)

    return table


def _index_target(create: exp.Create) -> Optional[tuple[str, str]]:
    """Return (table name, index name) for a CREATE INDEX statement."""
    index = create.this
    if not isinstance(index, exp.Index):
        return None
    table = index.args.get("table")
    if not isinstance(table, exp.Table) or not table.name:
        return None

    params = index.args.get("params")
    columns = params.args.get("columns") if params is not None else index.args.get("columns")
    declared = index.this.name if isinstance(index.this, exp.Expression) else None
    return table.name, index_name(table.name, _column_names(columns), declared)


def extract_tables(parsed: ParsedSchema) -> list[TableDefinition]:
    """
    Collect every table defined in a parsed file.

    A table created twice keeps its first position and its last definition.
    CREATE INDEX statements attach to tables defined in the same file.

    Args:
        parsed: Result of a successful dialect parse

    Returns:
        TableDefinitions in declaration order
    """
    tables: dict[str, TableDefinition] = {}
    pending_indexes: list[tuple[str, str]] = []

    for statement in parsed.statements:
        if not isinstance(statement, exp.Create):
            continue
        kind = str(statement.args.get("kind") or "").upper()
        if kind == "TABLE":
            table = build_table(statement, parsed.sqlglot_dialect)
            if table is not None:
                tables[table.name.lower()] = table
        elif kind == "INDEX":
            target = _index_target(statement)
            if target is not None:
                pending_indexes.append(target)

    for table_name, name in pending_indexes:
        table = tables.get(table_name.lower())
        if table is not None:
            table.indexes.append(name)

    return list(tables.values())
