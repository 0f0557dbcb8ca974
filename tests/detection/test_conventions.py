"""Tests for monorepo convention detectors and their priority order."""

from __future__ import annotations

import pytest

from techlead.detection.conventions import (
    DETECTORS,
    detect_convention,
    detect_lerna,
    detect_npm_workspaces,
    detect_nx,
    detect_pnpm_workspaces,
    detect_rush,
    detect_yarn_workspaces,
    select_detectors,
    workspace_declarations,
)
from techlead.models import MonorepoTool
from tests._fixtures.repo_builder import RepoBuilder


def test_plain_project_is_not_claimed(repo_builder: RepoBuilder) -> None:
    manifest = {"name": "solo", "dependencies": {"react": "^18"}}
    repo_builder.write_json("package.json", manifest)
    repo_builder.write({"package-lock.json": "{}\n"})

    assert detect_convention(repo_builder.path(), manifest) is None


def test_lerna_uses_declared_packages(repo_builder: RepoBuilder) -> None:
    repo_builder.write_json("lerna.json", {"packages": ["modules/*", "tools/cli"]})

    detection = detect_lerna(repo_builder.path(), {})

    assert detection is not None
    assert detection.tool is MonorepoTool.LERNA
    assert detection.declarations == ("modules/*", "tools/cli")


def test_lerna_defaults_packages(repo_builder: RepoBuilder) -> None:
    repo_builder.write_json("lerna.json", {"version": "independent"})

    detection = detect_lerna(repo_builder.path(), {})

    assert detection is not None
    assert detection.declarations == ("packages/*",)


def test_unparseable_lerna_config_is_ignored(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"lerna.json": "{ broken"})

    assert detect_lerna(repo_builder.path(), {}) is None


def test_workspace_declarations_accepts_both_shapes() -> None:
    assert workspace_declarations({"workspaces": ["apps/*", "libs/*"]}) == ("apps/*", "libs/*")
    assert workspace_declarations({"workspaces": {"packages": ["packages/*"], "nohoist": ["**/x"]}}) == (
        "packages/*",
    )
    assert workspace_declarations({"workspaces": "packages/*"}) == ()


def test_yarn_requires_lockfile(repo_builder: RepoBuilder) -> None:
    manifest = {"workspaces": ["apps/*"]}

    assert detect_yarn_workspaces(repo_builder.path(), manifest) is None

    repo_builder.write({"yarn.lock": "# yarn lockfile v1\n"})
    detection = detect_yarn_workspaces(repo_builder.path(), manifest)

    assert detection is not None
    assert detection.tool is MonorepoTool.YARN_WORKSPACES
    assert detection.declarations == ("apps/*",)


def test_npm_requires_package_lock_without_yarn_lock(repo_builder: RepoBuilder) -> None:
    manifest = {"workspaces": {"packages": ["packages/*"]}}
    repo_builder.write({"package-lock.json": "{}\n"})

    detection = detect_npm_workspaces(repo_builder.path(), manifest)
    assert detection is not None
    assert detection.tool is MonorepoTool.NPM_WORKSPACES
    assert detection.declarations == ("packages/*",)

    repo_builder.write({"yarn.lock": "\n"})
    assert detect_npm_workspaces(repo_builder.path(), manifest) is None


def test_workspaces_field_without_lockfile_is_not_claimed(repo_builder: RepoBuilder) -> None:
    manifest = {"workspaces": ["packages/*"]}

    assert detect_convention(repo_builder.path(), manifest) is None


def test_pnpm_reads_quoted_entries(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "pnpm-workspace.yaml": """
            packages:
              - 'packages/*'
              - "apps/web"
              # comment
              - tools/cli
            """
        }
    )

    detection = detect_pnpm_workspaces(repo_builder.path(), {})

    assert detection is not None
    assert detection.tool is MonorepoTool.PNPM_WORKSPACES
    assert detection.declarations == ("packages/*", "apps/web", "tools/cli")


def test_pnpm_without_packages_list_is_not_claimed(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"pnpm-workspace.yaml": "catalog:\n  react: ^18\n"})

    assert detect_pnpm_workspaces(repo_builder.path(), {}) is None


def test_nx_prefers_workspace_json_roots(repo_builder: RepoBuilder) -> None:
    repo_builder.write_json("nx.json", {"npmScope": "acme"})
    repo_builder.write_json(
        "workspace.json",
        {
            "version": 2,
            "projects": {
                "web": {"root": "apps/web"},
                "ui": "libs/ui",
                "broken": {"sourceRoot": "libs/broken/src"},
            },
        },
    )
    repo_builder.mkdir("apps/other")

    detection = detect_nx(repo_builder.path(), {})

    assert detection is not None
    assert detection.tool is MonorepoTool.NX
    assert detection.declarations == ("apps/web", "libs/ui")


def test_nx_falls_back_to_apps_and_libs(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"nx.json": "{}\n"})
    repo_builder.mkdir("apps/web", "apps/admin", "libs/ui", "tools/scripts")

    detection = detect_nx(repo_builder.path(), {})

    assert detection is not None
    assert detection.declarations == ("apps/admin", "apps/web", "libs/ui")


def test_rush_reads_project_folders(repo_builder: RepoBuilder) -> None:
    repo_builder.write_json(
        "rush.json",
        {
            "rushVersion": "5.100.0",
            "projects": [
                {"packageName": "@acme/web", "projectFolder": "apps/web"},
                {"packageName": "@acme/lib", "projectFolder": "libraries/lib"},
                {"packageName": "@acme/ghost"},
            ],
        },
    )

    detection = detect_rush(repo_builder.path(), {})

    assert detection is not None
    assert detection.tool is MonorepoTool.RUSH
    assert detection.declarations == ("apps/web", "libraries/lib")


def test_lerna_wins_over_nx(repo_builder: RepoBuilder) -> None:
    repo_builder.write_json("lerna.json", {"packages": ["packages/*"]})
    repo_builder.write({"nx.json": "{}\n"})

    detection = detect_convention(repo_builder.path(), {})

    assert detection is not None
    assert detection.tool is MonorepoTool.LERNA


def test_yarn_wins_over_pnpm_workspace_file(repo_builder: RepoBuilder) -> None:
    manifest = {"workspaces": ["apps/*"]}
    repo_builder.write({"yarn.lock": "\n", "pnpm-workspace.yaml": "packages:\n  - libs/*\n"})

    detection = detect_convention(repo_builder.path(), manifest)

    assert detection is not None
    assert detection.tool is MonorepoTool.YARN_WORKSPACES


def test_detector_table_order() -> None:
    assert [key for key, _ in DETECTORS] == ["lerna", "yarn", "npm", "pnpm", "nx", "rush"]


def test_select_detectors_keeps_priority_order() -> None:
    selected = select_detectors(["nx", "LERNA"])

    assert [key for key, _ in selected] == ["lerna", "nx"]
    assert select_detectors(None) == DETECTORS


def test_select_detectors_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="turborepo"):
        select_detectors(["lerna", "turborepo"])


def test_disabled_detector_is_skipped(repo_builder: RepoBuilder) -> None:
    repo_builder.write_json("lerna.json", {})
    repo_builder.write({"nx.json": "{}\n"})

    detection = detect_convention(repo_builder.path(), {}, select_detectors(["nx"]))

    assert detection is not None
    assert detection.tool is MonorepoTool.NX
