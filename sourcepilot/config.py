"""Configuration loading for sourcepilot (.sourcepilot.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".sourcepilot.yml"
_ENV_REQUEST_TIMEOUT = "SOURCEPILOT_REQUEST_TIMEOUT"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ResourceConfig:
    """Where resource files live and which resource features are enabled."""

    root_segment: str = "main"
    enabled: Optional[List[str]] = None


@dataclass
class ResolutionConfig:
    """Import resolution settings."""

    denied_prefixes: List[str] = field(default_factory=list)


@dataclass
class NavigationConfig:
    """Network-facing navigation behaviour."""

    validate_links: bool = True
    follow_methods: bool = True
    request_timeout: float = 10.0


@dataclass
class SourcePilotConfig:
    """Represents the settings defined in .sourcepilot.yml."""

    root: Path
    resources: ResourceConfig = field(default_factory=ResourceConfig)
    resolution: ResolutionConfig = field(default_factory=ResolutionConfig)
    navigation: NavigationConfig = field(default_factory=NavigationConfig)


def default_config() -> SourcePilotConfig:
    config = SourcePilotConfig(root=Path.cwd())
    _apply_env_overrides(config)
    return config


def load_config(config_path: Path) -> SourcePilotConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    config = SourcePilotConfig(root=root)
    if not config_file.exists():
        _apply_env_overrides(config)
        return config

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    resources_data = _as_dict(data.get("resources"))
    if resources_data:
        root_segment = _as_str(resources_data.get("root_segment"))
        if root_segment:
            config.resources.root_segment = root_segment.strip("/")
        if "enabled" in resources_data:
            config.resources.enabled = _as_str_list(resources_data.get("enabled"))

    resolution_data = _as_dict(data.get("resolution"))
    if resolution_data:
        config.resolution.denied_prefixes = _as_str_list(
            resolution_data.get("denied_prefixes")
        )

    navigation_data = _as_dict(data.get("navigation"))
    if navigation_data:
        validate = _as_bool(navigation_data.get("validate_links"))
        if validate is not None:
            config.navigation.validate_links = validate
        follow = _as_bool(navigation_data.get("follow_methods"))
        if follow is not None:
            config.navigation.follow_methods = follow
        timeout = _as_float(navigation_data.get("request_timeout"))
        if timeout is not None:
            config.navigation.request_timeout = timeout

    _apply_env_overrides(config)
    return config


def _apply_env_overrides(config: SourcePilotConfig) -> None:
    timeout = _as_float(os.getenv(_ENV_REQUEST_TIMEOUT))
    if timeout is not None:
        config.navigation.request_timeout = timeout


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
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
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


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
    "NavigationConfig",
    "ResolutionConfig",
    "ResourceConfig",
    "SourcePilotConfig",
    "default_config",
    "load_config",
]
