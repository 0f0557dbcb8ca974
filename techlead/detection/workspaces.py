"""Resolve workspace declarations into sub-project descriptors."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Any, List, Mapping, Optional, Sequence

from .. import fs
from ..logging import get_logger
from ..models import Detection, MonorepoTool, SubProject
from .frameworks import classify_framework, detect_typescript, merge_dependencies
from .globs import expand_pattern

PACKAGE_JSON = "package.json"
NX_PROJECT = "project.json"

logger = get_logger("detection.workspaces")


def _base_name(relative_path: str) -> str:
    return PurePosixPath(relative_path.rstrip("/")).name or relative_path


def _string_field(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if isinstance(value, str) and value:
        return value
    return None


def describe_sub_project(
    root: Path,
    relative_path: str,
    manifest: Mapping[str, Any],
    name: Optional[str] = None,
) -> SubProject:
    """Summarise one workspace directory from its manifest."""
    return SubProject(
        name=name or _string_field(manifest, "name") or _base_name(relative_path),
        relative_path=relative_path,
        framework=classify_framework(merge_dependencies(manifest)),
        has_typescript=detect_typescript(root / relative_path, manifest),
        version=_string_field(manifest, "version"),
    )


def resolve_workspaces(root: Path, declarations: Sequence[str]) -> List[SubProject]:
    """Expand declarations in order and describe every directory with a package.json."""
    sub_projects: List[SubProject] = []
    for declaration in declarations:
        for relative_path in expand_pattern(root, declaration):
            manifest = fs.read_manifest(root / relative_path / PACKAGE_JSON)
            if not manifest.ok:
                logger.debug("Skipping %s: %s", relative_path, manifest.error.value)  # type: ignore[union-attr]
                continue
            sub_projects.append(
                describe_sub_project(root, relative_path, manifest.unwrap_or({}))
            )
    return sub_projects


def resolve_nx_projects(root: Path, declarations: Sequence[str]) -> List[SubProject]:
    """Nx flavour of ``resolve_workspaces``.

    A directory counts when it has either a ``project.json`` or a
    ``package.json``. The project name comes from ``project.json`` first,
    then the manifest, then the directory name.
    """
    sub_projects: List[SubProject] = []
    for declaration in declarations:
        for relative_path in expand_pattern(root, declaration):
            directory = root / relative_path
            project = fs.read_manifest(directory / NX_PROJECT)
            manifest = fs.read_manifest(directory / PACKAGE_JSON)
            if not project.ok and not manifest.ok:
                logger.debug("Skipping Nx project %s: no project.json or package.json", relative_path)
                continue
            sub_projects.append(
                describe_sub_project(
                    root,
                    relative_path,
                    manifest.unwrap_or({}),
                    name=_string_field(project.unwrap_or({}), "name"),
                )
            )
    return sub_projects


def resolve_detection(root: Path, detection: Detection) -> List[SubProject]:
    if detection.tool is MonorepoTool.NX:
        return resolve_nx_projects(root, detection.declarations)
    return resolve_workspaces(root, detection.declarations)


__all__ = [
    "describe_sub_project",
    "resolve_detection",
    "resolve_nx_projects",
    "resolve_workspaces",
]
