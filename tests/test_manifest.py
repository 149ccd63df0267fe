"""
Tests for Manifest Assembly and Summary Rendering
"""

import json
from datetime import datetime, timezone

import pytest

from mcpgen.exceptions import ManifestError
from mcpgen.manifest import build_manifest, render_summary, write_manifest
from mcpgen.metadata import ProjectMetadata
from mcpgen.models import ColumnSchema, ParameterSchema, ResourceDescriptor, ToolDescriptor
from mcpgen.pipeline import PipelineResult

GENERATED_AT = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def result() -> PipelineResult:
    tools = [
        ToolDescriptor(
            name="getUser",
            description="Fetch a specific user by ID",
            parameters={
                "id": ParameterSchema(type="string"),
                "verbose": ParameterSchema(type="boolean", required=False),
            },
            return_type="promise",
            category="service",
            source_file="src/services/user.ts",
            examples=['getUser("1")'],
        ),
        ToolDescriptor(name="ping", description="Function: ping", source_file="src/ping.ts"),
    ]
    resources = [
        ResourceDescriptor(
            name="users",
            columns={"id": ColumnSchema(type="int", nullable=False, primary_key=True)},
            source_file="db/schema.sql",
            dialect="mysql",
            last_modified=GENERATED_AT,
        )
    ]
    return PipelineResult(tools=tools, resources=resources)


@pytest.fixture
def metadata() -> ProjectMetadata:
    return ProjectMetadata(name="shop", version="1.2.3", frameworks=["Express"])


class TestBuildManifest:
    """Test the manifest envelope."""

    def test_envelope(self, result, metadata):
        manifest = build_manifest(result, metadata, {"typescript": 3, "sql": 1}, GENERATED_AT)
        assert manifest["mcpVersion"] == "0.1.0"
        assert manifest["prompts"] == []
        assert manifest["info"] == {
            "name": "shop",
            "version": "1.2.3",
            "description": "Auto-generated MCP manifest for shop",
            "frameworks": ["Express"],
            "generatedAt": "2024-05-01T12:30:00.000Z",
        }
        assert manifest["description"]

    def test_tool_entries(self, result, metadata):
        tool = build_manifest(result, metadata)["tools"][0]
        assert tool["inputSchema"] == {
            "type": "object",
            "properties": {
                "id": {"type": "string", "required": True},
                "verbose": {"type": "boolean", "required": False},
            },
            "required": ["id"],
        }
        assert tool["file"] == "src/services/user.ts"
        assert tool["examples"] == ['getUser("1")']

    def test_examples_omitted_when_empty(self, result, metadata):
        assert "examples" not in build_manifest(result, metadata)["tools"][1]

    def test_resource_entries(self, result, metadata):
        resource = build_manifest(result, metadata)["resources"][0]
        assert resource["uri"] == "sql://users"
        assert resource["description"] == "Database table: users"
        assert resource["mimeType"] == "application/json"
        assert resource["metadata"]["type"] == "sql_table"
        assert resource["metadata"]["dialect"] == "mysql"
        assert resource["metadata"]["file"] == "db/schema.sql"
        assert resource["metadata"]["columns"]["id"]["primaryKey"]
        assert resource["metadata"]["lastModified"] == "2024-05-01T12:30:00.000Z"

    def test_statistics(self, result, metadata):
        stats = build_manifest(result, metadata, {"typescript": 3, "sql": 1})["statistics"]
        assert stats == {
            "totalTools": 2,
            "totalResources": 1,
            "toolsByCategory": {"service": 1, "general": 1},
            "filesProcessed": {"typescript": 3, "sql": 1},
        }

    def test_description_from_metadata(self, result):
        metadata = ProjectMetadata(name="shop", description="Shop backend")
        assert build_manifest(result, metadata)["info"]["description"] == "Shop backend"

    def test_json_serializable(self, result, metadata):
        json.dumps(build_manifest(result, metadata))


class TestRenderSummary:
    """Test Markdown summary rendering."""

    def test_summary(self, result, metadata):
        manifest = build_manifest(result, metadata, {"typescript": 3, "sql": 1})
        summary = render_summary(manifest, GENERATED_AT)

        assert summary.startswith("# MCP Manifest Summary\n")
        assert "Generated: 2024-05-01T12:30:00.000Z" in summary
        assert "Project: shop v1.2.3" in summary
        assert "- **Tools**: 2" in summary
        assert "- **Categories**: 2" in summary
        assert "- **service**: 1 tools" in summary
        assert "- **users** (1 columns)" in summary
        assert "- TypeScript files: 3" in summary
        assert "- SQL files: 1" in summary


class TestWriteManifest:
    """Test writing manifest files."""

    def test_write(self, temp_dir, result, metadata):
        path = write_manifest(build_manifest(result, metadata), temp_dir / "out" / "mcp.json")
        assert json.loads(path.read_text())["mcpVersion"] == "0.1.0"

    def test_write_failure(self, temp_dir, result, metadata):
        blocker = temp_dir / "file"
        blocker.write_text("")
        with pytest.raises(ManifestError):
            write_manifest(build_manifest(result, metadata), blocker / "mcp.json")
