"""Framework and TypeScript heuristics for package manifests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

from .. import fs
from ..models import Framework

# First match wins: meta-frameworks sit above the libraries they build on.
FRAMEWORK_PRIORITY: Tuple[Tuple[str, Framework], ...] = (
    ("next", Framework.NEXT),
    ("nuxt", Framework.NUXT),
    ("gatsby", Framework.GATSBY),
    ("react", Framework.REACT),
    ("vue", Framework.VUE),
    ("@angular/core", Framework.ANGULAR),
    ("svelte", Framework.SVELTE),
    ("express", Framework.EXPRESS),
    ("fastify", Framework.FASTIFY),
    ("@nestjs/core", Framework.NESTJS),
    ("solid", Framework.SOLID),
    ("astro", Framework.ASTRO),
)

TYPESCRIPT_PACKAGES = ("typescript", "@types/node")
TSCONFIG = "tsconfig.json"


def merge_dependencies(manifest: Mapping[str, Any]) -> Dict[str, Any]:
    """Return dependencies and devDependencies combined into one mapping."""
    merged: Dict[str, Any] = {}
    for key in ("dependencies", "devDependencies"):
        deps = manifest.get(key)
        if isinstance(deps, dict):
            merged.update(deps)
    return merged


def classify_framework(dependencies: Mapping[str, Any]) -> Framework:
    for package, framework in FRAMEWORK_PRIORITY:
        if package in dependencies:
            return framework
    return Framework.UNKNOWN


def detect_typescript(directory: Path, manifest: Mapping[str, Any]) -> bool:
    """Return True when the project depends on TypeScript or ships a tsconfig."""
    dependencies = merge_dependencies(manifest)
    if any(package in dependencies for package in TYPESCRIPT_PACKAGES):
        return True
    return fs.exists(directory / TSCONFIG)


__all__ = [
    "FRAMEWORK_PRIORITY",
    "classify_framework",
    "detect_typescript",
    "merge_dependencies",
]
