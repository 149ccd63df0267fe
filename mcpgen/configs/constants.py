"""
mcp-generator Constants

Static configuration values that rarely change: file extensions,
dialect precedence, and manifest naming.
"""

# --- Source Files ---

# Extensions scanned for tools by default (TypeScript only)
DEFAULT_SOURCE_EXTENSIONS = (".ts", ".tsx")

# Every extension the tree-sitter parser can handle
SUPPORTED_SOURCE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs")

# File-name patterns never scanned for tools
SOURCE_EXCLUDE_PATTERNS = (
    "*.test.*",
    "*.spec.*",
    "*.d.ts",
)

# --- SQL Files ---

SQL_EXTENSIONS = (".sql",)

# Directory names never scanned for schemas
SQL_EXCLUDE_DIRS = {"migrations"}

# --- SQL Dialects ---
# Order matters: the first dialect that parses a file wins.

DEFAULT_DIALECTS = ("mysql", "postgresql", "sqlite", "mssql")

# --- Size Limits ---

MAX_FILE_SIZE = 2 * 1024 * 1024  # 2MB

# --- Manifest ---

MCP_VERSION = "0.1.0"
DEFAULT_OUTPUT_FILE = "mcp.generated.json"
SUMMARY_FILE = "mcp.summary.md"
PROJECT_CONFIG_FILE = ".mcpgen.yaml"
