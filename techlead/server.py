"""MCP server wiring: list_tools, call_tool and the stdio entry point."""

from __future__ import annotations

import asyncio
import signal
from pathlib import Path
from typing import Any, List

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .config import TechLeadConfig
from .logging import get_logger
from .tools import TOOL_DEFINITIONS, call_tool

logger = get_logger("server")


def tool_catalog() -> List[Tool]:
    return [Tool(**definition) for definition in TOOL_DEFINITIONS]


def handle_call(
    config: TechLeadConfig, project_path: Path, name: str, arguments: dict[str, Any] | None
) -> List[TextContent]:
    blocks = call_tool(name, arguments, project_path, config.selected_detectors())
    return [TextContent(**block) for block in blocks]


def create_server(project_path: Path, config: TechLeadConfig) -> Server:
    """Build an MCP server exposing the tool catalog for ``project_path``."""
    server = Server(config.server.name, version=config.server.version)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """Declare all available tools."""
        tools = tool_catalog()
        logger.debug("Returning %d tools: %s", len(tools), ", ".join(t.name for t in tools))
        return tools

    @server.call_tool()
    async def _call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool invocations against the detected project."""
        return handle_call(config, project_path, name, arguments)

    return server


async def serve_stdio(project_path: Path, config: TechLeadConfig) -> None:
    """Run the MCP server over stdio until the host disconnects."""
    server = create_server(project_path, config)
    logger.info(
        "%s %s serving %s on stdio", config.server.name, config.server.version, project_path
    )
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def _interrupt(signum: int, frame: object) -> None:
    raise KeyboardInterrupt


def run_stdio(project_path: Path, config: TechLeadConfig) -> None:
    """Serve until the host closes stdio; SIGINT and SIGTERM exit cleanly."""
    signal.signal(signal.SIGTERM, _interrupt)
    try:
        asyncio.run(serve_stdio(project_path, config))
    except KeyboardInterrupt:
        logger.info("Received shutdown signal, stopping")


__all__ = ["create_server", "handle_call", "run_stdio", "serve_stdio", "tool_catalog"]
