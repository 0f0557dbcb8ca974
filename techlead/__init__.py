"""Frontend tech lead tools for editor and agent hosts."""

from .project_info import get_project_info, get_project_name, render_report

__version__ = "0.0.1"

__all__ = ["get_project_info", "get_project_name", "render_report"]
