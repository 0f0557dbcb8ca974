"""Tests for techlead.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from techlead.config import ConfigError, TechLeadConfig, load_config
from techlead.detection import DETECTORS


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, TechLeadConfig)
    assert config.root == tmp_path.resolve()
    assert config.server.name == "frontend-final-boss"
    assert config.server.version == "0.0.1"
    assert config.detectors.enabled is None
    assert config.selected_detectors() == DETECTORS
    assert config.logging.verbose is False
    assert config.logging.file is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".techlead.yml"
    config_file.write_text(
        """
server:
  name: "acme-lead"
  version: 1.4.0
detectors:
  enabled: [rush, lerna]
logging:
  verbose: yes
  file: ".techlead/server.log"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.server.name == "acme-lead"
    assert config.server.version == "1.4.0"
    assert config.detectors.enabled == ["rush", "lerna"]
    assert [key for key, _ in config.selected_detectors()] == ["lerna", "rush"]
    assert config.logging.verbose is True
    assert config.logging.file == tmp_path.resolve() / ".techlead" / "server.log"


def test_load_config_accepts_sibling_file_path(tmp_path: Path) -> None:
    (tmp_path / ".techlead.yml").write_text("server:\n  name: sibling\n", encoding="utf-8")

    config = load_config(tmp_path / "package.json")

    assert config.server.name == "sibling"


def test_empty_config_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / ".techlead.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.server.name == "frontend-final-boss"


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".techlead.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".techlead.yml").write_text("server: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_unknown_detector_names_are_rejected(tmp_path: Path) -> None:
    (tmp_path / ".techlead.yml").write_text("detectors:\n  enabled: [lerna, turbo]\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="turbo"):
        load_config(tmp_path)
