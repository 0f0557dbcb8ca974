"""Monorepo convention detectors.

Each detector is a plain function ``(root, manifest) -> Detection | None``.
``DETECTORS`` holds them in priority order and ``detect_convention`` returns
the first claim, so a repository carrying leftover configuration from more
than one tool is classified deterministically.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .. import fs
from ..logging import get_logger
from ..models import Detection, MonorepoTool
from .globs import expand_pattern
from .package_manager import NPM_LOCK, YARN_LOCK

LERNA_CONFIG = "lerna.json"
PNPM_WORKSPACE = "pnpm-workspace.yaml"
NX_CONFIG = "nx.json"
NX_WORKSPACE = "workspace.json"
RUSH_CONFIG = "rush.json"

DEFAULT_LERNA_PACKAGES = ("packages/*",)
NX_FALLBACK_PATTERNS = ("apps/*", "libs/*")

DetectorFn = Callable[[Path, Mapping[str, Any]], Optional[Detection]]

logger = get_logger("detection.conventions")


def _strings(values: Iterable[Any]) -> Tuple[str, ...]:
    return tuple(str(value) for value in values if isinstance(value, str) and value.strip())


def workspace_declarations(manifest: Mapping[str, Any]) -> Tuple[str, ...]:
    """Return package.json ``workspaces`` as a list of patterns.

    Accepts both the array form and the object form with a ``packages`` key.
    """
    workspaces = manifest.get("workspaces")
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    if isinstance(workspaces, list):
        return _strings(workspaces)
    return ()


def detect_lerna(root: Path, manifest: Mapping[str, Any]) -> Optional[Detection]:
    config = fs.read_manifest(root / LERNA_CONFIG)
    if not config.ok:
        return None
    packages = config.unwrap_or({}).get("packages")
    declarations = _strings(packages) if isinstance(packages, list) else DEFAULT_LERNA_PACKAGES
    return Detection(MonorepoTool.LERNA, declarations, LERNA_CONFIG)


def detect_yarn_workspaces(root: Path, manifest: Mapping[str, Any]) -> Optional[Detection]:
    if "workspaces" not in manifest or not fs.exists(root / YARN_LOCK):
        return None
    return Detection(MonorepoTool.YARN_WORKSPACES, workspace_declarations(manifest), "package.json")


def detect_npm_workspaces(root: Path, manifest: Mapping[str, Any]) -> Optional[Detection]:
    if "workspaces" not in manifest:
        return None
    if not fs.exists(root / NPM_LOCK) or fs.exists(root / YARN_LOCK):
        return None
    return Detection(MonorepoTool.NPM_WORKSPACES, workspace_declarations(manifest), "package.json")


def detect_pnpm_workspaces(root: Path, manifest: Mapping[str, Any]) -> Optional[Detection]:
    result = fs.read_yaml(root / PNPM_WORKSPACE)
    if not result.ok:
        if fs.exists(root / PNPM_WORKSPACE):
            logger.warning("Ignoring %s: %s", PNPM_WORKSPACE, result.detail)
        return None
    data = result.unwrap_or({})
    packages = data.get("packages") if isinstance(data, dict) else None
    if not isinstance(packages, list):
        return None
    return Detection(MonorepoTool.PNPM_WORKSPACES, _strings(packages), PNPM_WORKSPACE)


def detect_nx(root: Path, manifest: Mapping[str, Any]) -> Optional[Detection]:
    if not fs.exists(root / NX_CONFIG):
        return None

    workspace = fs.read_manifest(root / NX_WORKSPACE)
    if workspace.ok:
        return Detection(MonorepoTool.NX, _nx_project_roots(workspace.unwrap_or({})), NX_CONFIG)

    declarations: List[str] = []
    for pattern in NX_FALLBACK_PATTERNS:
        declarations.extend(expand_pattern(root, pattern))
    return Detection(MonorepoTool.NX, tuple(declarations), NX_CONFIG)


def _nx_project_roots(workspace: Mapping[str, Any]) -> Tuple[str, ...]:
    projects = workspace.get("projects")
    if not isinstance(projects, dict):
        return ()
    roots: List[str] = []
    for config in projects.values():
        # workspace.json v2 allows a bare path instead of a project config.
        if isinstance(config, str):
            roots.append(config)
        elif isinstance(config, dict) and isinstance(config.get("root"), str):
            roots.append(config["root"])
    return _strings(roots)


def detect_rush(root: Path, manifest: Mapping[str, Any]) -> Optional[Detection]:
    config = fs.read_manifest(root / RUSH_CONFIG)
    if not config.ok:
        return None
    projects = config.unwrap_or({}).get("projects")
    folders: List[Any] = []
    if isinstance(projects, list):
        folders = [entry.get("projectFolder") for entry in projects if isinstance(entry, dict)]
    return Detection(MonorepoTool.RUSH, _strings(folders), RUSH_CONFIG)


DETECTORS: Tuple[Tuple[str, DetectorFn], ...] = (
    ("lerna", detect_lerna),
    ("yarn", detect_yarn_workspaces),
    ("npm", detect_npm_workspaces),
    ("pnpm", detect_pnpm_workspaces),
    ("nx", detect_nx),
    ("rush", detect_rush),
)

_DETECTOR_KEYS: Dict[str, DetectorFn] = dict(DETECTORS)


def select_detectors(enabled: Sequence[str] | None = None) -> Tuple[Tuple[str, DetectorFn], ...]:
    """Return detectors in priority order, honoring optional enabled names."""
    if enabled is None:
        return DETECTORS

    enabled_set = {name.strip().lower() for name in enabled}
    missing = enabled_set.difference(_DETECTOR_KEYS)
    if missing:
        raise ValueError(f"Unknown detectors requested: {', '.join(sorted(missing))}")
    return tuple((key, fn) for key, fn in DETECTORS if key in enabled_set)


def detect_convention(
    root: Path,
    manifest: Mapping[str, Any],
    detectors: Sequence[Tuple[str, DetectorFn]] = DETECTORS,
) -> Optional[Detection]:
    """Run detectors in order and return the first claim."""
    for key, detector in detectors:
        detection = detector(root, manifest)
        if detection is not None:
            logger.debug(
                "%s claimed %s via %s (%d declarations)",
                key,
                root,
                detection.config_file,
                len(detection.declarations),
            )
            return detection
    return None


__all__ = [
    "DETECTORS",
    "DetectorFn",
    "detect_convention",
    "detect_lerna",
    "detect_npm_workspaces",
    "detect_nx",
    "detect_pnpm_workspaces",
    "detect_rush",
    "detect_yarn_workspaces",
    "select_detectors",
    "workspace_declarations",
]
