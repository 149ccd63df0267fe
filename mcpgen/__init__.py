"""
mcp-generator - Model Context Protocol manifests from a codebase.

Extracts exported functions as MCP tools (tree-sitter) and SQL tables as
MCP resources (sqlglot), then assembles them into a manifest.
"""

__version__ = "1.0.9"
