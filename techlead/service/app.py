"""FastAPI application entrypoint for techlead service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from pydantic import BaseModel, Field

from ..config import TechLeadConfig, load_config
from ..project_info import get_project_info
from ..project_root import detect_project_path
from ..tools import TOOL_DEFINITIONS, call_tool


class HealthResponse(BaseModel):
    status: str


class ToolDefinition(BaseModel):
    name: str
    description: str
    inputSchema: Dict[str, Any]


class ToolListResponse(BaseModel):
    tools: List[ToolDefinition]


class ToolCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


class ContentBlock(BaseModel):
    type: str
    text: str


class ToolCallResponse(BaseModel):
    content: List[ContentBlock]


def _default_project_path() -> Path:
    return detect_project_path()


def create_app(
    project_path_factory: Callable[[], Path] = _default_project_path,
    config: Optional[TechLeadConfig] = None,
) -> FastAPI:
    """Create the FastAPI application exposing the techlead tools."""

    app = FastAPI(title="techlead", version=config.server.version if config else "0.0.1")

    async def get_project_path() -> Path:
        # Resolved per request so editor environment changes are honoured.
        return project_path_factory()

    def _config_for(project_path: Path) -> TechLeadConfig:
        return config if config is not None else load_config(project_path)

    async def _run(func: Callable[[], Any]) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/tools", response_model=ToolListResponse)
    async def list_tools() -> ToolListResponse:
        return ToolListResponse(tools=[ToolDefinition(**item) for item in TOOL_DEFINITIONS])

    @app.post("/tools/{name}", response_model=ToolCallResponse)
    async def invoke_tool(
        name: str,
        payload: ToolCallRequest,
        project_path: Path = Depends(get_project_path),
    ) -> ToolCallResponse:
        def _call() -> List[Dict[str, str]]:
            detectors = _config_for(project_path).selected_detectors()
            return call_tool(name, payload.arguments, project_path, detectors)

        blocks = await _run(_call)
        return ToolCallResponse(content=[ContentBlock(**block) for block in blocks])

    @app.get("/project")
    async def project(project_path: Path = Depends(get_project_path)) -> Dict[str, Any]:
        def _inspect() -> Dict[str, Any]:
            detectors = _config_for(project_path).selected_detectors()
            return get_project_info(project_path, detectors).to_dict()

        return await _run(_inspect)

    return app


def run_service(
    host: str = "127.0.0.1",
    port: int = 8000,
    project_path: Optional[Path] = None,
    config: Optional[TechLeadConfig] = None,
) -> None:  # pragma: no cover - integration path
    import uvicorn

    if project_path is not None:
        app = create_app(lambda: project_path, config)
    else:
        app = create_app(config=config)
    uvicorn.run(app, host=host, port=port)
