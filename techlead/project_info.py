"""Project inspection for the ``project_info`` and ``hello_world`` tools."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from . import fs
from .detection import (
    DETECTORS,
    DetectorFn,
    classify_framework,
    detect_convention,
    detect_package_manager,
    detect_typescript,
    merge_dependencies,
    resolve_detection,
)
from .logging import get_logger
from .models import MonorepoInfo, ProbeError, ProjectReport, SubProject

PACKAGE_JSON = "package.json"

logger = get_logger("project_info")


def _project_path(root: Path | str) -> Path:
    return Path(root).expanduser().resolve()


def _load_root_manifest(root: Path) -> Tuple[Dict[str, Any], bool]:
    result = fs.read_manifest(root / PACKAGE_JSON)
    if not result.ok:
        logger.info("No usable package.json in %s (%s)", root, result.error.value)  # type: ignore[union-attr]
        return {}, result.error is not ProbeError.NOT_FOUND
    return result.unwrap_or({}), True


def _manifest_name(manifest: Mapping[str, Any], root: Path) -> str:
    name = manifest.get("name")
    if isinstance(name, str) and name:
        return name
    return root.name or str(root)


def get_project_name(root: Path | str) -> str:
    """Return the package.json name of ``root``, or its directory name."""
    path = _project_path(root)
    manifest, _ = _load_root_manifest(path)
    return _manifest_name(manifest, path)


def analyze_monorepo(
    root: Path,
    manifest: Mapping[str, Any],
    detectors: Sequence[Tuple[str, DetectorFn]] = DETECTORS,
) -> MonorepoInfo:
    package_manager = detect_package_manager(root)
    detection = detect_convention(root, manifest, detectors)
    if detection is None:
        return MonorepoInfo.none(package_manager)

    sub_projects = resolve_detection(root, detection)
    logger.debug(
        "%s workspace resolved %d sub-projects", detection.tool.value, len(sub_projects)
    )
    return MonorepoInfo(
        is_monorepo=True,
        tool=detection.tool,
        package_manager=package_manager,
        workspaces=detection.declarations,
        sub_projects=tuple(sub_projects),
    )


def get_project_info(
    root: Path | str,
    detectors: Sequence[Tuple[str, DetectorFn]] = DETECTORS,
) -> ProjectReport:
    """Inspect ``root`` and return its report.

    Missing or malformed files degrade to defaults; an unexpected failure
    while analysing workspaces degrades to a single-package report.
    """
    path = _project_path(root)
    manifest, has_package_json = _load_root_manifest(path)

    try:
        monorepo = analyze_monorepo(path, manifest, detectors)
    except Exception as exc:
        logger.warning("Monorepo analysis failed for %s: %s", path, exc)
        monorepo = MonorepoInfo.none(detect_package_manager(path))

    return ProjectReport(
        project_name=_manifest_name(manifest, path),
        path=str(path),
        has_package_json=has_package_json,
        framework=classify_framework(merge_dependencies(manifest)),
        has_typescript=detect_typescript(path, manifest),
        monorepo=monorepo,
    )


def _flag(value: bool) -> str:
    return "✅" if value else "❌"


def _sub_project_line(sub: SubProject) -> str:
    line = f"- **{sub.name}** (`{sub.relative_path}`): {sub.framework.value}, TypeScript {_flag(sub.has_typescript)}"
    if sub.version:
        line += f", v{sub.version}"
    return line


def render_report(report: ProjectReport) -> str:
    """Render a report as the markdown-flavoured text returned to the host."""
    monorepo = report.monorepo
    lines = [
        "📁 **Project Information**",
        "",
        f"**Name:** {report.project_name}",
        f"**Path:** {report.path}",
        f"**Framework:** {report.framework.value}",
        f"**TypeScript:** {_flag(report.has_typescript)}",
        f"**Has package.json:** {_flag(report.has_package_json)}",
        f"**Package Manager:** {monorepo.package_manager.value}",
        "",
    ]

    if monorepo.is_monorepo:
        lines.append(f"🏗️ **Monorepo:** ✅ ({monorepo.tool.value})")
        workspaces = ", ".join(f"`{item}`" for item in monorepo.workspaces) or "(none declared)"
        lines.append(f"**Workspaces:** {workspaces}")
        lines.append(f"**Sub-projects ({len(monorepo.sub_projects)}):**")
        if monorepo.sub_projects:
            lines.extend(_sub_project_line(sub) for sub in monorepo.sub_projects)
        else:
            lines.append("- (no sub-projects with a manifest found)")
    else:
        lines.append("🏗️ **Monorepo:** ❌")
    lines.append("")

    lines.append("✅ Frontend Final Boss MCP server is working!")
    lines.append("🔧 Ready to add more frontend tech lead tools!")
    return "\n".join(lines)


def text_content(text: str) -> Dict[str, str]:
    return {"type": "text", "text": text}


def project_info(
    root: Path | str,
    detectors: Sequence[Tuple[str, DetectorFn]] = DETECTORS,
) -> List[Dict[str, str]]:
    """Return the ``project_info`` tool payload; never raises."""
    try:
        text = render_report(get_project_info(root, detectors))
    except Exception as exc:
        logger.error("project_info failed for %s: %s", root, exc)
        text = f"Error getting project info: {str(exc) or type(exc).__name__}"
    return [text_content(text)]


__all__ = [
    "analyze_monorepo",
    "get_project_info",
    "get_project_name",
    "project_info",
    "render_report",
    "text_content",
]
