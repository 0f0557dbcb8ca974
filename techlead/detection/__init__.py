"""Workspace, package manager and framework detection for Node projects."""

from __future__ import annotations

from .conventions import DETECTORS, DetectorFn, detect_convention, select_detectors
from .frameworks import classify_framework, detect_typescript, merge_dependencies
from .globs import expand_pattern, is_supported_pattern
from .package_manager import detect_package_manager
from .workspaces import resolve_detection, resolve_nx_projects, resolve_workspaces

__all__ = [
    "DETECTORS",
    "DetectorFn",
    "classify_framework",
    "detect_convention",
    "detect_package_manager",
    "detect_typescript",
    "expand_pattern",
    "is_supported_pattern",
    "merge_dependencies",
    "resolve_detection",
    "resolve_nx_projects",
    "resolve_workspaces",
    "select_detectors",
]
