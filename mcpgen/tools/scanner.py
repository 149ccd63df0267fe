"""
Source Scanner

Turns exported functions, function-valued bindings and public methods of
exported classes into ToolDescriptors.

Failure handling:
- A file that cannot be read or parsed is logged and contributes nothing.
- A symbol whose extraction fails is dropped whole; the rest of its file
  is still scanned.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Union

from mcpgen.ast.extractors import get_extractor
from mcpgen.ast.models import FunctionSymbol
from mcpgen.ast.parser import ASTParser
from mcpgen.configs import get_logger
from mcpgen.exceptions import SourceParseError
from mcpgen.models import ParameterSchema, ToolDescriptor
from mcpgen.tools.filters import rejection_reason
from mcpgen.tools.naming import categorize, describe_function
from mcpgen.tools.types import normalize_type

logger = get_logger("tools.scanner")

PathLike = Union[str, Path]


def relative_path(file_path: PathLike, project_root: Path) -> str:
    """Path relative to the project root with POSIX separators."""
    path = Path(file_path)
    if path.is_absolute():
        for candidate in (path, path.resolve()):
            try:
                return candidate.relative_to(project_root).as_posix()
            except ValueError:
                continue
    return path.as_posix()


class SourceScanner:
    """
    Extracts tool descriptors from source files.

    One instance owns one tree-sitter parser and may run one scan at a time.
    The duplicate-suppression set lives only for the duration of scan().
    """

    def __init__(self, project_root: PathLike = "."):
        self.project_root = Path(project_root).resolve()
        self._parser = ASTParser()

    def scan(self, files: Iterable[PathLike]) -> list[ToolDescriptor]:
        """
        Scan files in order and return their tool descriptors.

        Args:
            files: Source files, absolute or relative to the project root

        Returns:
            Descriptors in discovery order, unique by (source file, name)
        """
        seen: set[tuple[str, str]] = set()
        tools: list[ToolDescriptor] = []
        files_failed = 0

        for file_path in files:
            try:
                file_tools = self.scan_file(file_path, seen)
            except Exception as e:
                files_failed += 1
                logger.warning(f"Failed to process {file_path}: {e}")
                continue
            seen.update(tool.key for tool in file_tools)
            tools.extend(file_tools)

        logger.info(f"Extracted {len(tools)} tools ({files_failed} files failed)")
        return tools

    def scan_file(
        self,
        file_path: PathLike,
        seen: Optional[set[tuple[str, str]]] = None,
    ) -> list[ToolDescriptor]:
        """
        Extract tool descriptors from one file.

        Args:
            file_path: Source file path
            seen: Keys already emitted in this run; not modified

        Returns:
            Descriptors for eligible, exported, not-yet-seen symbols

        Raises:
            SourceParseError: If the file cannot be read or parsed
        """
        seen = seen if seen is not None else set()
        rel_path = relative_path(file_path, self.project_root)
        absolute = Path(file_path)
        if not absolute.is_absolute():
            absolute = self.project_root / absolute

        logger.debug(f"Processing file: {rel_path}")
        tree, source, language = self._parser.parse_file(absolute)
        extractor = get_extractor(language)
        if extractor is None:
            raise SourceParseError(f"No extractor for {language}", rel_path)

        symbols = extractor.extract_all(tree, source, rel_path)
        if symbols.has_errors:
            logger.debug(f"{rel_path} has syntax errors; extracting from recovered tree")

        tools: list[ToolDescriptor] = []
        claimed: set[tuple[str, str]] = set()

        for symbol in symbols.candidates():
            if not symbol.name:
                logger.debug(f"  - Skipping anonymous {symbol.kind.value} at line {symbol.line}")
                continue

            reason = rejection_reason(symbol.name, rel_path)
            if reason:
                logger.debug(f"  - Skipping {symbol.qualified_name} ({reason})")
                continue

            if not symbol.is_exported:
                logger.debug(f"  - Skipping {symbol.qualified_name} (not exported)")
                continue

            key = (rel_path, symbol.name)
            if key in seen or key in claimed:
                logger.debug(f"  - Skipping duplicate {symbol.qualified_name}")
                continue

            try:
                tool = self.build_descriptor(symbol, rel_path)
            except Exception as e:
                logger.warning(f"  - Error processing {symbol.qualified_name} in {rel_path}: {e}")
                continue

            claimed.add(key)
            tools.append(tool)

        logger.debug(f"  - {len(tools)} tools from {rel_path}")
        return tools

    def build_descriptor(self, symbol: FunctionSymbol, rel_path: str) -> ToolDescriptor:
        """
        Normalize one symbol into a ToolDescriptor.

        Args:
            symbol: Eligible, exported symbol
            rel_path: Declaring file relative to the project root

        Returns:
            Complete ToolDescriptor
        """
        parameters: dict[str, ParameterSchema] = {}
        for param in symbol.parameters:
            type_info = normalize_type(param.type_annotation)
            parameters[param.name] = ParameterSchema.from_type(
                type_info, required=not param.is_optional
            )

        description = describe_function(symbol.name, parameters)
        examples: list[str] = []
        if symbol.doc is not None:
            if symbol.doc.description:
                description = symbol.doc.description
            examples = list(symbol.doc.examples)

        return_text = symbol.return_type
        if return_text is None and symbol.is_async:
            return_text = "Promise<any>"

        return ToolDescriptor(
            name=symbol.name,
            description=description,
            parameters=parameters,
            return_type=normalize_type(return_text).kind,
            category=categorize(symbol.name, rel_path),
            source_file=rel_path,
            examples=examples,
        )
