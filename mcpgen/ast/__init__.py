"""
AST-Based Symbol Discovery

Tree-sitter based discovery of callable symbols (function declarations,
function-valued bindings, class methods) and their documentation comments.
"""

from mcpgen.ast.models import (
    DocComment,
    FileSymbols,
    FunctionSymbol,
    ParameterInfo,
    SymbolKind,
)
from mcpgen.ast.parser import ASTParser, EXTENSION_TO_LANGUAGE
from mcpgen.ast.jsdoc import parse_jsdoc

__all__ = [
    # Models
    "DocComment",
    "FileSymbols",
    "FunctionSymbol",
    "ParameterInfo",
    "SymbolKind",
    # Parser
    "ASTParser",
    "EXTENSION_TO_LANGUAGE",
    # Documentation
    "parse_jsdoc",
]
