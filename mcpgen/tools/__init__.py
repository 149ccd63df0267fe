"""
Tool Extraction

Normalizes exported callables into MCP tool descriptors:
1. types    - type text to portable TypeDescriptor
2. naming   - description and category from names and paths
3. filters  - symbol eligibility rules
4. scanner  - per-file extraction with deduplication
"""

from mcpgen.tools.filters import is_eligible, rejection_reason
from mcpgen.tools.naming import CATEGORIES, categorize, describe_function
from mcpgen.tools.scanner import SourceScanner, relative_path
from mcpgen.tools.types import PRIMITIVE_TYPES, normalize_type

__all__ = [
    # Types
    "PRIMITIVE_TYPES",
    "normalize_type",
    # Naming
    "CATEGORIES",
    "categorize",
    "describe_function",
    # Filters
    "is_eligible",
    "rejection_reason",
    # Scanner
    "SourceScanner",
    "relative_path",
]
