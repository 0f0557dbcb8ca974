"""Read-only filesystem probes used by the detection engine."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import yaml

from .models import ProbeError, ReadResult


def exists(path: Path) -> bool:
    """Return True when ``path`` exists; inaccessible paths count as missing."""
    try:
        return path.exists()
    except OSError:
        return False


def is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False


def _read_text(path: Path) -> ReadResult[str]:
    try:
        return ReadResult.success(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        return ReadResult.failure(ProbeError.PARSE_FAILURE, f"{path.name}: {exc}")
    except OSError as exc:
        return ReadResult.failure(ProbeError.NOT_FOUND, f"{path.name}: {exc}")


def read_json(path: Path) -> ReadResult[Any]:
    """Parse a JSON file, reporting missing and malformed files as failures."""
    text = _read_text(path)
    if not text.ok:
        return ReadResult.failure(text.error, text.detail)  # type: ignore[arg-type]
    try:
        return ReadResult.success(json.loads(text.value or ""))
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError is a ValueError; so is the int digit limit.
        return ReadResult.failure(ProbeError.PARSE_FAILURE, f"{path.name}: {exc}")


def read_manifest(path: Path) -> ReadResult[Dict[str, Any]]:
    """Parse a JSON file that must hold an object (package.json and friends)."""
    result = read_json(path)
    if not result.ok:
        return result
    if not isinstance(result.value, dict):
        return ReadResult.failure(
            ProbeError.PARSE_FAILURE, f"{path.name}: expected a JSON object"
        )
    return result


def read_yaml(path: Path) -> ReadResult[Any]:
    text = _read_text(path)
    if not text.ok:
        return ReadResult.failure(text.error, text.detail)  # type: ignore[arg-type]
    try:
        return ReadResult.success(yaml.safe_load(text.value or ""))
    except (yaml.YAMLError, ValueError, RecursionError) as exc:
        return ReadResult.failure(ProbeError.PARSE_FAILURE, f"{path.name}: {exc}")


__all__ = ["exists", "is_dir", "read_json", "read_manifest", "read_yaml"]
