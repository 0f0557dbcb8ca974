"""Locate the project an editor host launched the server for."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from .logging import get_logger

# Editors export these in the environment of spawned tool servers.
PROJECT_PATH_ENV_VARS = (
    "CURSOR_PROJECT_PATH",
    "VSCODE_CWD",
    "PROJECT_ROOT",
    "WORKSPACE_FOLDER",
)

logger = get_logger("project_root")


def find_manifest_root(start: Path) -> Optional[Path]:
    """Return the nearest ancestor of ``start`` (inclusive) holding a package.json."""
    current = start
    while current != current.parent:
        if (current / "package.json").exists():
            return current
        current = current.parent
    return None


def detect_project_path(
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> Path:
    """Pick the project root from editor variables, the nearest manifest, or cwd."""
    env = os.environ if environ is None else environ
    working_dir = Path.cwd() if cwd is None else cwd

    for variable in PROJECT_PATH_ENV_VARS:
        value = env.get(variable)
        if value and Path(value).exists():
            logger.info("Using project path from %s: %s", variable, value)
            return Path(value)

    manifest_root = find_manifest_root(working_dir)
    if manifest_root is not None:
        logger.info("Found package.json, using project path: %s", manifest_root)
        return manifest_root

    logger.info("Using current working directory: %s", working_dir)
    return working_dir


__all__ = ["PROJECT_PATH_ENV_VARS", "detect_project_path", "find_manifest_root"]
