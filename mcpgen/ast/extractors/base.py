"""
Symbol Extractor Interface

Common interface and tree helpers for the per-language symbol extractors,
plus the registry the scanner looks extractors up in.
"""

from abc import ABC, abstractmethod
from typing import Optional

from tree_sitter import Node, Tree

from mcpgen.ast.jsdoc import parse_jsdoc
from mcpgen.ast.models import DocComment, FileSymbols, FunctionSymbol


class LanguageExtractor(ABC):
    """
    Abstract base class for language-specific symbol extractors.

    Each extractor turns a parsed tree into FunctionSymbol records for the
    three callable shapes: declarations, bindings and methods.
    """

    @property
    @abstractmethod
    def languages(self) -> tuple[str, ...]:
        """Return the parser language names handled (e.g., 'typescript', 'tsx')."""
        pass

    @abstractmethod
    def extract_declarations(self, tree: Tree, source: bytes) -> list[FunctionSymbol]:
        """
        Extract top-level function declarations.

        Args:
            tree: Parsed AST tree
            source: Original source bytes

        Returns:
            List of FunctionSymbol objects (kind DECLARATION)
        """
        pass

    @abstractmethod
    def extract_bindings(self, tree: Tree, source: bytes) -> list[FunctionSymbol]:
        """
        Extract top-level variables initialized with a function value.

        Args:
            tree: Parsed AST tree
            source: Original source bytes

        Returns:
            List of FunctionSymbol objects (kind BINDING)
        """
        pass

    @abstractmethod
    def extract_methods(self, tree: Tree, source: bytes) -> list[FunctionSymbol]:
        """
        Extract non-private methods of top-level classes.

        Args:
            tree: Parsed AST tree
            source: Original source bytes

        Returns:
            List of FunctionSymbol objects (kind METHOD)
        """
        pass

    def extract_all(self, tree: Tree, source: bytes, file_path: str) -> FileSymbols:
        """
        Extract every callable symbol from a file.

        Symbols keep source order within each of the three groups.

        Args:
            tree: Parsed AST tree
            source: Original source bytes
            file_path: Path to the file

        Returns:
            FileSymbols in discovery order
        """
        return FileSymbols(
            file_path=file_path,
            language=self.languages[0],
            declarations=self.extract_declarations(tree, source),
            bindings=self.extract_bindings(tree, source),
            methods=self.extract_methods(tree, source),
            has_errors=tree.root_node.has_error,
        )

    # Tree helpers shared by extractors

    def get_node_text(self, node: Node, source: bytes) -> str:
        """Extract the text content of an AST node."""
        return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def find_children(self, node: Node, type_name: str) -> list[Node]:
        """Find all direct children of a specific type."""
        return [child for child in node.children if child.type == type_name]

    def find_child(self, node: Node, type_name: str) -> Optional[Node]:
        """Find the first direct child of a specific type."""
        for child in node.children:
            if child.type == type_name:
                return child
        return None

    def has_token(self, node: Node, token: str) -> bool:
        """Check for a direct keyword child such as 'async' or 'export'."""
        return any(child.type == token for child in node.children)

    def leading_doc_comment(self, node: Node, source: bytes) -> Optional[DocComment]:
        """
        Find the documentation comment directly preceding a node.

        Decorators between the comment and the node are skipped.

        Args:
            node: Declaration or statement node
            source: Original source bytes

        Returns:
            Parsed DocComment or None
        """
        sibling = node.prev_named_sibling
        while sibling is not None and sibling.type == "decorator":
            sibling = sibling.prev_named_sibling
        if sibling is None or sibling.type != "comment":
            return None
        return parse_jsdoc(self.get_node_text(sibling, source))


# Language name -> extractor
_extractors: dict[str, LanguageExtractor] = {}


def register_extractor(extractor: LanguageExtractor) -> None:
    """Register an extractor for each language it handles."""
    for language in extractor.languages:
        _extractors[language] = extractor


def get_extractor(language: str) -> Optional[LanguageExtractor]:
    """
    Get the extractor for a language.

    Args:
        language: Language name (typescript, tsx)

    Returns:
        LanguageExtractor or None if unsupported
    """
    return _extractors.get(language)
