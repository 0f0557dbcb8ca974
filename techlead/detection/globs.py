"""Single-level workspace pattern expansion.

Only two shapes are understood: a literal path (``apps/web``) and a single
trailing wildcard segment (``packages/*``). Anything else is logged and kept
as a literal path so it resolves to nothing instead of matching the wrong
directories.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from ..logging import get_logger

_WILDCARD = "*"
_TRAILING = "/*"

logger = get_logger("detection.globs")


def _normalise(pattern: str) -> str:
    pattern = pattern.strip()
    while pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern.rstrip("/") or pattern


def is_supported_pattern(pattern: str) -> bool:
    """Return True for literal paths and ``<dir>/*`` patterns."""
    pattern = _normalise(pattern)
    if _WILDCARD not in pattern:
        return True
    if not pattern.endswith(_TRAILING):
        return False
    parent = pattern[: -len(_TRAILING)]
    return bool(parent) and _WILDCARD not in parent and not parent.startswith("!")


def expand_pattern(root: Path, pattern: str) -> List[str]:
    """Expand a workspace declaration into directory paths relative to ``root``."""
    normalised = _normalise(pattern)
    if _WILDCARD not in normalised:
        return [pattern]

    if not is_supported_pattern(normalised):
        logger.warning(
            "Unsupported workspace pattern %r; only '<dir>/*' wildcards are expanded", pattern
        )
        return [pattern]

    parent = normalised[: -len(_TRAILING)]
    try:
        with os.scandir(root / parent) as entries:
            names = sorted(entry.name for entry in entries if _is_directory(entry))
    except OSError:
        logger.debug("Workspace parent %s is missing or unreadable", parent)
        return []

    return [f"{parent}/{name}" for name in names]


def _is_directory(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


__all__ = ["expand_pattern", "is_supported_pattern"]
