"""
mcp-generator Command Line

Usage:
    mcp-generator [generate] [-o FILE] [--no-summary] [--root DIR] [--debug]
    mcp-generator info [--root DIR] [--debug]

Running without a subcommand behaves like generate.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

from mcpgen import __version__
from mcpgen.configs import (
    SUMMARY_FILE,
    GeneratorConfig,
    get_logger,
    load_project_config,
    setup_logging,
)
from mcpgen.discovery import discover_source_files, discover_sql_files
from mcpgen.exceptions import McpGenError
from mcpgen.manifest import build_manifest, write_manifest, write_summary
from mcpgen.metadata import read_project_metadata
from mcpgen.pipeline import run_pipeline

logger = get_logger("cli")

BANNER_WIDTH = 50


def analyze_project(root: Path, config: GeneratorConfig) -> dict[str, Any]:
    """
    Discover, scan and assemble the manifest for one project.

    Args:
        root: Project root directory
        config: Effective configuration

    Returns:
        Manifest mapping
    """
    logger.info(f"Analyzing project at {root}")
    source_files = discover_source_files(
        str(root), config.source_extensions, ignore_patterns=config.ignore_patterns
    )
    sql_files = discover_sql_files(str(root), ignore_patterns=config.ignore_patterns)

    result = run_pipeline(root, source_files, sql_files, dialects=config.dialects)
    metadata = read_project_metadata(str(root))

    return build_manifest(
        result,
        metadata,
        files_processed={"typescript": len(source_files), "sql": len(sql_files)},
    )


def _log_generation_summary(manifest: dict[str, Any]) -> None:
    info = manifest["info"]
    stats = manifest["statistics"]
    logger.info("=" * BANNER_WIDTH)
    logger.info("GENERATION SUMMARY")
    logger.info(f"Project: {info['name']}")
    logger.info(f"Tools: {stats['totalTools']}")
    logger.info(f"Resources: {stats['totalResources']}")
    logger.info(f"Frameworks: {', '.join(info['frameworks']) or 'None detected'}")
    logger.info("=" * BANNER_WIDTH)


def cmd_generate(root: Path, config: GeneratorConfig, output: Optional[str], summary: Optional[bool]) -> int:
    """Write the manifest (and summary) for the project."""
    manifest = analyze_project(root, config)

    output_path = Path(output or config.output)
    if not output_path.is_absolute():
        output_path = root / output_path
    write_manifest(manifest, output_path)

    if config.summary if summary is None else summary:
        write_summary(manifest, output_path.parent / SUMMARY_FILE)

    stats = manifest["statistics"]
    logger.info(f"Extracted {stats['totalTools']} tools and {stats['totalResources']} resources")
    _log_generation_summary(manifest)
    return 0


def cmd_info(root: Path, config: GeneratorConfig) -> int:
    """Print project information without writing files."""
    manifest = analyze_project(root, config)
    info = manifest["info"]
    stats = manifest["statistics"]
    files = stats["filesProcessed"]

    print("=" * BANNER_WIDTH)
    print("PROJECT ANALYSIS")
    print("=" * BANNER_WIDTH)
    print(f"Project: {info['name']}")
    print(f"Version: {info['version']}")
    print(f"Description: {info['description']}")
    print(f"Frameworks: {', '.join(info['frameworks']) or 'None detected'}")
    print(f"Tools Found: {stats['totalTools']}")
    print(f"Resources Found: {stats['totalResources']}")
    print(f"Files Processed: {files['typescript']} TS, {files['sql']} SQL")
    print("=" * BANNER_WIDTH)
    return 0


def _add_common_options(parser: argparse.ArgumentParser, suppress: bool = False) -> None:
    # Subcommand parsers suppress defaults so they don't overwrite top-level values
    parser.add_argument(
        "--root",
        default=argparse.SUPPRESS if suppress else ".",
        help="Project root directory (default: current directory)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=argparse.SUPPRESS if suppress else False,
        help="Enable debug logging",
    )


def _add_generate_options(parser: argparse.ArgumentParser, suppress: bool = False) -> None:
    parser.add_argument(
        "-o",
        "--output",
        default=argparse.SUPPRESS if suppress else None,
        help="Output file name (default: mcp.generated.json)",
    )
    parser.add_argument(
        "--no-summary",
        dest="summary",
        action="store_false",
        default=argparse.SUPPRESS if suppress else None,
        help="Skip generating the summary file",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mcp-generator",
        description="Generate MCP manifests from your TypeScript/JavaScript codebase",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _add_common_options(parser)
    _add_generate_options(parser)

    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser("generate", help="Generate MCP manifest for the project")
    _add_common_options(generate, suppress=True)
    _add_generate_options(generate, suppress=True)

    info = subparsers.add_parser("info", help="Show project information without generating files")
    _add_common_options(info, suppress=True)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the mcp-generator command."""
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.debug or None)

    root = Path(args.root).resolve()
    try:
        if not root.is_dir():
            raise McpGenError(f"Project root is not a directory: {root}")
        config = load_project_config(str(root), debug=args.debug or None)
        if config.debug:
            setup_logging(debug=True)

        if args.command == "info":
            return cmd_info(root, config)
        return cmd_generate(root, config, args.output, args.summary)
    except (McpGenError, OSError) as e:
        logger.error(f"Error generating MCP manifest: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
