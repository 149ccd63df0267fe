"""
Pipeline Orchestrator

Runs the source scanner and the schema scanner as two independent tasks
and joins their results. A scanner that fails outright contributes an empty
list; the other scanner's output is unaffected.
"""

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from mcpgen.configs import DEFAULT_DIALECTS, get_logger
from mcpgen.models import ResourceDescriptor, ToolDescriptor
from mcpgen.schema import SchemaScanner
from mcpgen.tools import SourceScanner

logger = get_logger("pipeline")

PathLike = Union[str, Path]


@dataclass
class PipelineResult:
    """Descriptors produced by one pipeline run."""

    tools: list[ToolDescriptor] = field(default_factory=list)
    resources: list[ResourceDescriptor] = field(default_factory=list)


def _scan_tools(project_root: PathLike, files: list[PathLike]) -> list[ToolDescriptor]:
    return SourceScanner(project_root).scan(files)


def _scan_resources(
    project_root: PathLike, files: list[PathLike], dialects: Sequence[str]
) -> list[ResourceDescriptor]:
    return SchemaScanner(project_root, dialects).scan(files)


def _guarded(name: str, task: Callable[[], list]) -> list:
    """Run a scanner task, degrading any escaped exception to an empty list."""
    try:
        return task()
    except Exception as e:
        logger.error(f"{name} scanner failed: {e}", exc_info=True)
        return []


def run_pipeline(
    project_root: PathLike,
    tool_files: Iterable[PathLike],
    sql_files: Iterable[PathLike],
    dialects: Sequence[str] = DEFAULT_DIALECTS,
    concurrent: bool = True,
) -> PipelineResult:
    """
    Scan source and SQL files and collect their descriptors.

    Args:
        project_root: Root that descriptor paths are made relative to
        tool_files: Source files for the source scanner
        sql_files: SQL files for the schema scanner
        dialects: SQL dialect precedence order
        concurrent: Run both scanners in a two-worker pool (default: True)

    Returns:
        PipelineResult with tools and resources
    """
    tool_files = list(tool_files)
    sql_files = list(sql_files)

    def tools_task() -> list[ToolDescriptor]:
        return _guarded("Source", lambda: _scan_tools(project_root, tool_files))

    def resources_task() -> list[ResourceDescriptor]:
        return _guarded("Schema", lambda: _scan_resources(project_root, sql_files, dialects))

    logger.debug(
        f"Running pipeline: {len(tool_files)} source files, {len(sql_files)} SQL files"
    )

    if concurrent:
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="mcpgen-scan") as executor:
            tools_future = executor.submit(tools_task)
            resources_future = executor.submit(resources_task)
            tools = tools_future.result()
            resources = resources_future.result()
    else:
        tools = tools_task()
        resources = resources_task()

    logger.info(f"Pipeline complete: {len(tools)} tools, {len(resources)} resources")
    return PipelineResult(tools=tools, resources=resources)
