"""Package manager detection from lockfiles."""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

from .. import fs
from ..models import PackageManager

YARN_LOCK = "yarn.lock"
PNPM_LOCK = "pnpm-lock.yaml"
NPM_LOCK = "package-lock.json"

# Checked in order; a stray yarn.lock next to package-lock.json means Yarn.
_LOCKFILES: Tuple[Tuple[str, PackageManager], ...] = (
    (YARN_LOCK, PackageManager.YARN),
    (PNPM_LOCK, PackageManager.PNPM),
    (NPM_LOCK, PackageManager.NPM),
)


def detect_package_manager(root: Path) -> PackageManager:
    """Infer the package manager in use based on lockfiles at ``root``."""
    for filename, manager in _LOCKFILES:
        if fs.exists(root / filename):
            return manager
    return PackageManager.UNKNOWN


__all__ = ["NPM_LOCK", "PNPM_LOCK", "YARN_LOCK", "detect_package_manager"]
