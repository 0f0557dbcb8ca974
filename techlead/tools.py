"""Tool catalog and dispatch shared by the MCP and HTTP transports."""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .detection import DETECTORS, DetectorFn
from .logging import get_logger
from .project_info import get_project_name, project_info, text_content

logger = get_logger("tools")

ContentBlocks = List[Dict[str, str]]

TOOL_DEFINITIONS: List[Dict[str, Any]] = [
    {
        "name": "hello_world",
        "description": "A simple test tool to verify MCP server is working",
        "inputSchema": {
            "type": "object",
            "properties": {
                "name": {
                    "type": "string",
                    "description": "Name to greet",
                },
            },
            "required": [],
        },
    },
    {
        "name": "project_info",
        "description": "Get basic information about the current frontend project",
        "inputSchema": {"type": "object", "properties": {}, "required": []},
    },
]


class UnknownToolError(LookupError):
    """Raised when a host calls a tool that is not in the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


def hello_world(arguments: Mapping[str, Any], project_path: Path) -> ContentBlocks:
    name = arguments.get("name") or "World"
    project_name = get_project_name(project_path)
    return [
        text_content(
            f"Hello, {name}! I am your frontend Tech Lead MCP 🚀\n\n"
            f"Currently analyzing project: {project_name}"
        )
    ]


def dispatch(
    name: str,
    arguments: Optional[Mapping[str, Any]],
    project_path: Path,
    detectors: Sequence[Tuple[str, DetectorFn]] = DETECTORS,
) -> ContentBlocks:
    """Route a tool call to its implementation."""
    arguments = arguments or {}
    if name == "hello_world":
        return hello_world(arguments, project_path)
    if name == "project_info":
        return project_info(project_path, detectors)
    raise UnknownToolError(name)


def call_tool(
    name: str,
    arguments: Optional[Mapping[str, Any]],
    project_path: Path,
    detectors: Sequence[Tuple[str, DetectorFn]] = DETECTORS,
) -> ContentBlocks:
    """Dispatch a tool call, turning any failure into an error text block."""
    start = time.perf_counter()
    logger.info("Tool call %s args=%s", name, _summarise(arguments))
    try:
        result = dispatch(name, arguments, project_path, detectors)
    except Exception as exc:
        logger.error("Tool %s failed: %s", name, exc)
        return [text_content(f"Error executing {name}: {exc}")]
    logger.debug("Tool %s finished in %.1f ms", name, (time.perf_counter() - start) * 1000)
    return result


def _summarise(arguments: Optional[Mapping[str, Any]], max_len: int = 200) -> str:
    try:
        raw = json.dumps(dict(arguments or {}), default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        raw = repr(arguments)
    return raw if len(raw) <= max_len else raw[:max_len] + "..."


__all__ = [
    "TOOL_DEFINITIONS",
    "UnknownToolError",
    "call_tool",
    "dispatch",
    "hello_world",
]
