"""
Schema Extraction

Converts SQL DDL into MCP resource descriptors:
1. dialects - one sqlglot-backed parsing strategy per SQL grammar
2. tables   - CREATE TABLE / CREATE INDEX to TableDefinition
3. scanner  - per-file dialect fallback and descriptor assembly
"""

from mcpgen.schema.dialects import SQLGLOT_DIALECTS, DialectStrategy, ParsedSchema, build_strategies
from mcpgen.schema.scanner import SchemaScanner
from mcpgen.schema.tables import TableDefinition, extract_tables

__all__ = [
    "SQLGLOT_DIALECTS",
    "DialectStrategy",
    "ParsedSchema",
    "build_strategies",
    "SchemaScanner",
    "TableDefinition",
    "extract_tables",
]
