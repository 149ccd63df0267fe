"""
SQL Dialect Strategies

One parsing strategy per supported SQL grammar, all behind the same
try_parse() interface. The scanner tries them in order and keeps the first
that succeeds.
"""

import logging
import re
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field

import sqlglot
from sqlglot import exp
from sqlglot.errors import ErrorLevel

from mcpgen.configs import DEFAULT_DIALECTS
from mcpgen.exceptions import ConfigurationError, DialectParseError

# Generator dialect name -> sqlglot dialect name
SQLGLOT_DIALECTS = {
    "mysql": "mysql",
    "postgresql": "postgres",
    "sqlite": "sqlite",
    "mssql": "tsql",
}

# sqlglot degrades statements it cannot parse into an opaque exp.Command.
# For table and index DDL that means the grammar did not understand it.
_SCHEMA_COMMAND_RE = re.compile(
    r"^CREATE\s+"
    r"(?:(?:OR\s+REPLACE|TEMP|TEMPORARY|GLOBAL|LOCAL|UNLOGGED|VIRTUAL|UNIQUE"
    r"|CLUSTERED|NONCLUSTERED|FULLTEXT|SPATIAL)\s+)*"
    r"(?:TABLE|INDEX)\b",
    re.IGNORECASE,
)


@contextmanager
def quiet_sqlglot() -> Iterator[None]:
    """Hold sqlglot's own warnings back while a dialect is being tried."""
    sqlglot_logger = logging.getLogger("sqlglot")
    previous = sqlglot_logger.level
    sqlglot_logger.setLevel(logging.ERROR)
    try:
        yield
    finally:
        sqlglot_logger.setLevel(previous)


def command_text(statement: exp.Command) -> str:
    """Source text of a statement sqlglot kept as an unparsed Command."""
    rest = statement.args.get("expression")
    if isinstance(rest, exp.Expression):
        rest = rest.sql()
    return " ".join(f"{statement.this} {rest or ''}".split())


def is_unparsed_schema_statement(statement: exp.Expression) -> bool:
    """True when a CREATE TABLE / CREATE INDEX fell back to a raw Command."""
    return isinstance(statement, exp.Command) and bool(
        _SCHEMA_COMMAND_RE.match(command_text(statement))
    )


@dataclass
class ParsedSchema:
    """Statements from a successful parse, tagged with the dialect that produced them."""

    dialect: str
    sqlglot_dialect: str
    statements: list[exp.Expression] = field(default_factory=list)


@dataclass(frozen=True)
class DialectStrategy:
    """Parses SQL text with one sqlglot dialect."""

    name: str
    sqlglot_dialect: str

    def try_parse(self, text: str) -> ParsedSchema:
        """
        Parse SQL text under this dialect.

        A CREATE TABLE or CREATE INDEX that the grammar could only keep as a
        raw command counts as a rejection.

        Args:
            text: Raw SQL file content

        Returns:
            ParsedSchema with every non-empty statement

        Raises:
            DialectParseError: If the text is not valid under this dialect
        """
        try:
            with quiet_sqlglot():
                statements = sqlglot.parse(
                    text,
                    read=self.sqlglot_dialect,
                    error_level=ErrorLevel.IMMEDIATE,
                )
        except Exception as e:
            first_line = str(e).splitlines()[0] if str(e) else type(e).__name__
            raise DialectParseError(first_line, self.name) from e

        statements = [statement for statement in statements if statement is not None]
        for statement in statements:
            if is_unparsed_schema_statement(statement):
                raise DialectParseError(
                    f"Unsupported syntax: {command_text(statement)[:80]}",
                    self.name,
                )

        return ParsedSchema(
            dialect=self.name,
            sqlglot_dialect=self.sqlglot_dialect,
            statements=statements,
        )


def build_strategies(dialects: Sequence[str] = DEFAULT_DIALECTS) -> list[DialectStrategy]:
    """
    Build strategies in the given precedence order.

    Args:
        dialects: Dialect names, highest precedence first

    Returns:
        List of DialectStrategy

    Raises:
        ConfigurationError: If a dialect is unknown or the list is empty
    """
    if not dialects:
        raise ConfigurationError("At least one SQL dialect is required")

    strategies = []
    for name in dialects:
        sqlglot_dialect = SQLGLOT_DIALECTS.get(name)
        if sqlglot_dialect is None:
            raise ConfigurationError(
                f"Unknown SQL dialect: {name}",
                {"supported": list(SQLGLOT_DIALECTS)},
            )
        strategies.append(DialectStrategy(name=name, sqlglot_dialect=sqlglot_dialect))
    return strategies
