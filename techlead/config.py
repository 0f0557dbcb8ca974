"""Configuration loading for techlead (.techlead.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .detection import DetectorFn, select_detectors

CONFIG_FILENAME = ".techlead.yml"
DEFAULT_SERVER_NAME = "frontend-final-boss"
DEFAULT_SERVER_VERSION = "0.0.1"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ServerConfig:
    """Identity the server advertises to the host."""

    name: str = DEFAULT_SERVER_NAME
    version: str = DEFAULT_SERVER_VERSION


@dataclass
class DetectorConfig:
    """Which monorepo conventions are considered."""

    enabled: Optional[List[str]] = None


@dataclass
class LoggingConfig:
    verbose: bool = False
    file: Optional[Path] = None


@dataclass
class TechLeadConfig:
    """Represents the settings defined in .techlead.yml."""

    root: Path
    server: ServerConfig = field(default_factory=ServerConfig)
    detectors: DetectorConfig = field(default_factory=DetectorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def selected_detectors(self) -> Tuple[Tuple[str, DetectorFn], ...]:
        """Return the enabled detectors in priority order."""
        try:
            return select_detectors(self.detectors.enabled)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc


def load_config(config_path: Path) -> TechLeadConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return TechLeadConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    server = ServerConfig()
    server_data = _as_dict(data.get("server"))
    if server_data:
        server.name = _as_str(server_data.get("name")) or DEFAULT_SERVER_NAME
        server.version = _as_str(server_data.get("version")) or DEFAULT_SERVER_VERSION

    detectors = DetectorConfig()
    detector_data = _as_dict(data.get("detectors"))
    if "enabled" in detector_data:
        detectors.enabled = _as_str_list(detector_data.get("enabled"))

    logging_config = LoggingConfig()
    logging_data = _as_dict(data.get("logging"))
    if logging_data:
        logging_config.verbose = _as_bool(logging_data.get("verbose")) or False
        log_file = _as_str(logging_data.get("file"))
        logging_config.file = root / log_file if log_file else None

    config = TechLeadConfig(
        root=root,
        server=server,
        detectors=detectors,
        logging=logging_config,
    )
    # Surface typos in detector names at load time rather than per request.
    config.selected_detectors()
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DetectorConfig",
    "LoggingConfig",
    "ServerConfig",
    "TechLeadConfig",
    "load_config",
]
