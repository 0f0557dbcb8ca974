"""Core data models shared across techlead components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


class ProbeError(str, Enum):
    """Reasons a filesystem probe can come back empty."""

    NOT_FOUND = "not-found"
    PARSE_FAILURE = "parse-failure"


@dataclass(frozen=True)
class ReadResult(Generic[T]):
    """Outcome of reading a file: either a value or a soft failure."""

    value: Optional[T] = None
    error: Optional[ProbeError] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        """Return the parsed value, or ``default`` when the read failed."""
        if self.error is not None or self.value is None:
            return default
        return self.value

    @classmethod
    def success(cls, value: T) -> "ReadResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ProbeError, detail: str = "") -> "ReadResult[T]":
        return cls(error=error, detail=detail)


class MonorepoTool(str, Enum):
    """Workspace conventions recognised at a repository root."""

    NONE = "None"
    LERNA = "Lerna"
    YARN_WORKSPACES = "Yarn Workspaces"
    NPM_WORKSPACES = "npm Workspaces"
    PNPM_WORKSPACES = "pnpm Workspaces"
    NX = "Nx"
    RUSH = "Rush"


class PackageManager(str, Enum):
    """Node package manager inferred from lockfiles."""

    UNKNOWN = "Unknown"
    YARN = "Yarn"
    PNPM = "pnpm"
    NPM = "npm"


class Framework(str, Enum):
    """Framework labels reported for a project or sub-project."""

    NEXT = "Next.js"
    NUXT = "Nuxt.js"
    GATSBY = "Gatsby"
    REACT = "React"
    VUE = "Vue.js"
    ANGULAR = "Angular"
    SVELTE = "Svelte"
    EXPRESS = "Express.js"
    FASTIFY = "Fastify"
    NESTJS = "NestJS"
    SOLID = "Solid.js"
    ASTRO = "Astro"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Detection:
    """Claim made by a workspace convention detector."""

    tool: MonorepoTool
    declarations: Tuple[str, ...]
    config_file: str


@dataclass(frozen=True)
class SubProject:
    """Summary of a single package discovered inside a monorepo."""

    name: str
    relative_path: str
    framework: Framework
    has_typescript: bool
    version: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "relativePath": self.relative_path,
            "framework": self.framework.value,
            "hasTypeScript": self.has_typescript,
            "version": self.version,
        }


@dataclass(frozen=True)
class MonorepoInfo:
    """Workspace topology of a repository root."""

    is_monorepo: bool
    tool: MonorepoTool
    package_manager: PackageManager
    workspaces: Tuple[str, ...] = ()
    sub_projects: Tuple[SubProject, ...] = ()

    @classmethod
    def none(cls, package_manager: PackageManager = PackageManager.UNKNOWN) -> "MonorepoInfo":
        return cls(
            is_monorepo=False,
            tool=MonorepoTool.NONE,
            package_manager=package_manager,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isMonorepo": self.is_monorepo,
            "tool": self.tool.value,
            "packageManager": self.package_manager.value,
            "workspaces": list(self.workspaces),
            "subProjects": [sub.to_dict() for sub in self.sub_projects],
        }


@dataclass(frozen=True)
class ProjectReport:
    """Everything ``project_info`` knows about a project root."""

    project_name: str
    path: str
    has_package_json: bool
    framework: Framework
    has_typescript: bool
    monorepo: MonorepoInfo = field(default_factory=MonorepoInfo.none)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projectName": self.project_name,
            "path": self.path,
            "hasPackageJson": self.has_package_json,
            "framework": self.framework.value,
            "hasTypeScript": self.has_typescript,
            "monorepo": self.monorepo.to_dict(),
        }
