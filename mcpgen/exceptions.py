"""
mcp-generator Exception Hierarchy

Centralized exception classes for structured error handling across the codebase.
All generator-specific exceptions inherit from McpGenError.

Usage:
    from mcpgen.exceptions import McpGenError, SchemaParseError

    try:
        scanner.scan_file(path)
    except SchemaParseError as e:
        logger.warning(f"Skipping SQL file: {e}")
"""


class McpGenError(Exception):
    """Base exception for all mcp-generator errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(McpGenError):
    """Error in generator configuration."""

    pass


# =============================================================================
# Scan Errors
# =============================================================================


class ScanError(McpGenError):
    """Base class for per-file extraction errors."""

    def __init__(self, message: str, file_path: str | None = None):
        details = {"file": file_path} if file_path else {}
        super().__init__(message, details)
        self.file_path = file_path


class SourceParseError(ScanError):
    """Source file could not be read or parsed."""

    pass


class SchemaParseError(ScanError):
    """SQL file could not be parsed with any supported dialect."""

    pass


class DialectParseError(McpGenError):
    """SQL text is not valid under one specific dialect."""

    def __init__(self, message: str, dialect: str):
        super().__init__(message, {"dialect": dialect})
        self.dialect = dialect


# =============================================================================
# Manifest Errors
# =============================================================================


class ManifestError(McpGenError):
    """Manifest could not be assembled or written."""

    pass
