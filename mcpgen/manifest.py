"""
Manifest Assembly

Wraps pipeline output into the MCP manifest envelope and renders the
human-readable Markdown summary written next to it.
"""

import json
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from mcpgen.configs import MCP_VERSION, get_logger
from mcpgen.exceptions import ManifestError
from mcpgen.metadata import ProjectMetadata
from mcpgen.models import ResourceDescriptor, ToolDescriptor
from mcpgen.pipeline import PipelineResult

logger = get_logger("manifest")

RESOURCE_MIME_TYPE = "application/json"

MANIFEST_DESCRIPTION = (
    "The tools were auto-extracted from exported functions in TypeScript source "
    "files, including APIs, utilities, and business logic. Resources were parsed "
    "from .sql files and represent real database tables. Function names follow "
    "conventions like get, create, update, and delete. Use these tools to build "
    "features, compose workflows, or query structured project data."
)


def _iso(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def tool_entry(tool: ToolDescriptor) -> dict[str, Any]:
    """Manifest entry for one tool."""
    properties = {name: param.to_dict() for name, param in tool.parameters.items()}
    entry: dict[str, Any] = {
        "name": tool.name,
        "description": tool.description,
        "inputSchema": {
            "type": "object",
            "properties": properties,
            "required": [name for name, param in tool.parameters.items() if param.required],
        },
        "returnType": tool.return_type,
        "category": tool.category,
        "file": tool.source_file,
    }
    if tool.examples:
        entry["examples"] = list(tool.examples)
    return entry


def resource_entry(resource: ResourceDescriptor) -> dict[str, Any]:
    """Manifest entry for one table."""
    return {
        "uri": f"sql://{resource.name}",
        "name": resource.name,
        "description": f"Database table: {resource.name}",
        "mimeType": RESOURCE_MIME_TYPE,
        "metadata": {
            "type": "sql_table",
            "columns": {name: column.to_dict() for name, column in resource.columns.items()},
            "indexes": list(resource.indexes),
            "foreignKeys": [fk.to_dict() for fk in resource.foreign_keys],
            "file": resource.source_file,
            "dialect": resource.dialect,
            "estimatedRows": "unknown",
            "lastModified": _iso(resource.last_modified) if resource.last_modified else None,
        },
    }


def build_manifest(
    result: PipelineResult,
    metadata: ProjectMetadata,
    files_processed: Optional[dict[str, int]] = None,
    generated_at: Optional[datetime] = None,
) -> dict[str, Any]:
    """
    Assemble the manifest document.

    Args:
        result: Tools and resources from the pipeline
        metadata: Project metadata from package.json
        files_processed: Counts per file kind ("typescript", "sql")
        generated_at: Generation time (default: now)

    Returns:
        JSON-serializable manifest mapping
    """
    generated_at = generated_at or datetime.now(timezone.utc)
    files_processed = files_processed or {}
    categories = Counter(tool.category or "general" for tool in result.tools)

    return {
        "mcpVersion": MCP_VERSION,
        "info": {
            "name": metadata.name,
            "version": metadata.version,
            "description": metadata.description
            or f"Auto-generated MCP manifest for {metadata.name}",
            "frameworks": list(metadata.frameworks),
            "generatedAt": _iso(generated_at),
        },
        "tools": [tool_entry(tool) for tool in result.tools],
        "resources": [resource_entry(resource) for resource in result.resources],
        "prompts": [],
        "statistics": {
            "totalTools": len(result.tools),
            "totalResources": len(result.resources),
            "toolsByCategory": dict(categories),
            "filesProcessed": {
                "typescript": files_processed.get("typescript", 0),
                "sql": files_processed.get("sql", 0),
            },
        },
        "description": MANIFEST_DESCRIPTION,
    }


def render_summary(manifest: dict[str, Any], generated_at: Optional[datetime] = None) -> str:
    """
    Render the Markdown summary of a manifest.

    Args:
        manifest: Manifest from build_manifest()
        generated_at: Timestamp shown in the header (default: now)

    Returns:
        Markdown text
    """
    info = manifest["info"]
    stats = manifest["statistics"]
    generated_at = generated_at or datetime.now(timezone.utc)

    category_lines = [
        f"- **{category}**: {count} tools"
        for category, count in stats["toolsByCategory"].items()
    ]
    resource_lines = [
        f"- **{resource['name']}** ({len(resource['metadata']['columns'])} columns)"
        for resource in manifest["resources"]
    ]

    lines = [
        "# MCP Manifest Summary",
        "",
        f"Generated: {_iso(generated_at)}",
        f"Project: {info['name']} v{info['version']}",
        "",
        "## Statistics",
        f"- **Tools**: {stats['totalTools']}",
        f"- **Resources**: {stats['totalResources']}",
        f"- **Categories**: {len(stats['toolsByCategory'])}",
        "",
        "## Tools by Category",
        *category_lines,
        "",
        "## Resources",
        *resource_lines,
        "",
        "## Files Processed",
        f"- TypeScript files: {stats['filesProcessed']['typescript']}",
        f"- SQL files: {stats['filesProcessed']['sql']}",
        "",
    ]
    return "\n".join(lines)


def write_manifest(manifest: dict[str, Any], output_path: Path) -> Path:
    """
    Write the manifest as indented JSON.

    Raises:
        ManifestError: If the file cannot be written
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError) as e:
        raise ManifestError(f"Could not write manifest to {output_path}: {e}") from e
    logger.info(f"MCP manifest written to {output_path}")
    return output_path


def write_summary(manifest: dict[str, Any], output_path: Path) -> Path:
    """
    Write the Markdown summary.

    Raises:
        ManifestError: If the file cannot be written
    """
    try:
        output_path.write_text(render_summary(manifest), encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Could not write summary to {output_path}: {e}") from e
    logger.info(f"Summary written to {output_path}")
    return output_path
