"""
Schema Scanner

Turns CREATE TABLE statements in SQL files into ResourceDescriptors. Each
file is tried against the configured dialects in precedence order and the
first dialect that parses the whole file wins.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Union

from mcpgen.configs import DEFAULT_DIALECTS, get_logger
from mcpgen.exceptions import DialectParseError, SchemaParseError
from mcpgen.models import ResourceDescriptor
from mcpgen.schema.dialects import ParsedSchema, build_strategies
from mcpgen.schema.tables import extract_tables
from mcpgen.tools.scanner import relative_path

logger = get_logger("schema.scanner")

PathLike = Union[str, Path]


class SchemaScanner:
    """Extracts resource descriptors from SQL files."""

    def __init__(
        self,
        project_root: PathLike = ".",
        dialects: Sequence[str] = DEFAULT_DIALECTS,
    ):
        self.project_root = Path(project_root).resolve()
        self.strategies = build_strategies(dialects)

    def scan(self, files: Iterable[PathLike]) -> list[ResourceDescriptor]:
        """
        Scan SQL files in order and return their resource descriptors.

        A file no dialect accepts is logged once and contributes nothing.

        Args:
            files: SQL files, absolute or relative to the project root

        Returns:
            Descriptors in file order, tables in declaration order
        """
        resources: list[ResourceDescriptor] = []
        files_failed = 0

        for file_path in files:
            try:
                resources.extend(self.scan_file(file_path))
            except SchemaParseError as e:
                files_failed += 1
                logger.warning(f"Could not parse SQL file {e.file_path}: {e.message}")
            except Exception as e:
                files_failed += 1
                logger.warning(f"Failed to process {file_path}: {e}")

        logger.info(f"Extracted {len(resources)} resources ({files_failed} files failed)")
        return resources

    def scan_file(self, file_path: PathLike) -> list[ResourceDescriptor]:
        """
        Extract resource descriptors from one SQL file.

        Args:
            file_path: SQL file path

        Returns:
            One descriptor per named table; empty for blank files

        Raises:
            SchemaParseError: If no dialect can parse the file
            OSError: If the file cannot be read
        """
        rel_path = relative_path(file_path, self.project_root)
        absolute = Path(file_path)
        if not absolute.is_absolute():
            absolute = self.project_root / absolute

        logger.debug(f"Processing SQL file: {rel_path}")
        text = absolute.read_text(encoding="utf-8", errors="replace")
        if not text.strip():
            logger.debug(f"  - {rel_path} is empty, skipping")
            return []

        parsed = self.parse_with_fallback(text, rel_path)
        modified = datetime.fromtimestamp(absolute.stat().st_mtime, tz=timezone.utc)

        resources = [
            ResourceDescriptor(
                name=table.name,
                columns=dict(table.columns),
                indexes=list(table.indexes),
                foreign_keys=list(table.foreign_keys),
                source_file=rel_path,
                dialect=parsed.dialect,
                last_modified=modified,
            )
            for table in extract_tables(parsed)
        ]
        logger.debug(f"  - {len(resources)} tables from {rel_path} ({parsed.dialect})")
        return resources

    def parse_with_fallback(self, text: str, rel_path: str = "") -> ParsedSchema:
        """
        Try each dialect in order and return the first successful parse.

        Raises:
            SchemaParseError: If every dialect rejects the text
        """
        for strategy in self.strategies:
            try:
                return strategy.try_parse(text)
            except DialectParseError as e:
                logger.debug(f"  - {strategy.name} rejected {rel_path}: {e.message}")

        tried = ", ".join(strategy.name for strategy in self.strategies)
        raise SchemaParseError(f"no dialect matched (tried {tried})", rel_path)
