"""
Tree-sitter Parser Wrapper

Maps file extensions onto the two TypeScript grammars and hands out one
cached tree-sitter Parser per grammar.
"""

from pathlib import Path
from typing import Callable, Optional

import tree_sitter_typescript
from tree_sitter import Language, Parser, Tree

from mcpgen.configs import get_logger
from mcpgen.exceptions import SourceParseError

logger = get_logger("ast.parser")

# Grammar name -> capsule getter from tree-sitter-typescript
GRAMMARS: dict[str, Callable[[], object]] = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

# JavaScript is a subset of TypeScript, so it shares the grammars.
# JSX needs the TSX grammar.
EXTENSION_TO_LANGUAGE = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".js": "typescript",
    ".mjs": "typescript",
    ".cjs": "typescript",
    ".tsx": "tsx",
    ".jsx": "tsx",
}


class ASTParser:
    """
    Tree-sitter parser for TypeScript-family sources.

    Grammars load on first use. A tree-sitter Parser is not thread-safe,
    so every scanner creates its own ASTParser.
    """

    def __init__(self):
        self._cache: dict[str, Parser] = {}

    def parser_for(self, language: str) -> Parser:
        """
        Return the cached Parser for a grammar, loading it if needed.

        Raises:
            SourceParseError: If no grammar exists for the language
        """
        cached = self._cache.get(language)
        if cached is not None:
            return cached

        grammar = GRAMMARS.get(language)
        if grammar is None:
            raise SourceParseError(f"No grammar available for {language}")

        logger.debug(f"Loading tree-sitter grammar: {language}")
        parser = Parser(Language(grammar()))
        self._cache[language] = parser
        return parser

    def detect_language(self, file_path: str) -> Optional[str]:
        """Grammar name for a file, or None when the extension is not handled."""
        return EXTENSION_TO_LANGUAGE.get(Path(file_path).suffix.lower())

    def is_supported(self, file_path: str) -> bool:
        return self.detect_language(file_path) is not None

    def parse(self, source: bytes, language: str) -> Tree:
        """
        Parse source bytes with the given grammar.

        tree-sitter recovers from syntax errors, so any input yields a tree;
        check ``tree.root_node.has_error`` for damage.

        Args:
            source: UTF-8 encoded source text
            language: Grammar name ("typescript" or "tsx")

        Returns:
            Parsed tree

        Raises:
            SourceParseError: If the language is unsupported
        """
        return self.parser_for(language).parse(source)

    def parse_file(self, file_path: Path) -> tuple[Tree, bytes, str]:
        """
        Read and parse one source file.

        Returns:
            (tree, source bytes, grammar name)

        Raises:
            SourceParseError: If the extension is unsupported or the file unreadable
        """
        language = self.detect_language(str(file_path))
        if language is None:
            raise SourceParseError("Unsupported file type", str(file_path))

        try:
            source = Path(file_path).read_bytes()
        except OSError as e:
            raise SourceParseError(f"Failed to read file: {e}", str(file_path)) from e

        return self.parse(source, language), source, language
