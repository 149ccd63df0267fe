"""
Language-Specific Extractors

Each extractor implements the LanguageExtractor interface for a family of languages.
"""

from mcpgen.ast.extractors.base import LanguageExtractor, get_extractor, register_extractor

# Import extractors to trigger registration
from mcpgen.ast.extractors.typescript import TypeScriptExtractor

__all__ = [
    "LanguageExtractor",
    "get_extractor",
    "register_extractor",
    "TypeScriptExtractor",
]
