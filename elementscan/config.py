"""Configuration loading for elementscan (.elementscan.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ElementScanError
from .logging import parse_level

CONFIG_FILENAME = ".elementscan.yml"
DEFAULT_FACTORY_NAME = "Polymer"
DEFAULT_EXTENSIONS = (".js", ".mjs")


class ConfigError(ElementScanError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ElementScanConfig:
    """Represents the settings defined in .elementscan.yml."""

    root: Path
    factory_name: str = DEFAULT_FACTORY_NAME
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude_paths: List[str] = field(default_factory=list)
    log_levels: Dict[str, int] = field(default_factory=dict)


def load_config(config_path: Path) -> ElementScanConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ElementScanConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ElementScanConfig(root=root)
    factory_name = _as_str(data.get("factory_name"))
    if factory_name:
        config.factory_name = factory_name
    extensions = _as_str_list(data.get("extensions"))
    if extensions:
        config.extensions = [ext if ext.startswith(".") else f".{ext}" for ext in extensions]
    config.exclude_paths = _as_str_list(data.get("exclude_paths"))
    config.log_levels = _as_level_map(data.get("log_levels"))
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


def _as_level_map(value: Any) -> Dict[str, int]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError("log_levels must map logger names to level names")
    levels: Dict[str, int] = {}
    for name, level in value.items():
        try:
            levels[str(name)] = parse_level(str(level))
        except ValueError as exc:
            raise ConfigError(f"log_levels.{name}: {exc}") from exc
    return levels


__all__ = ["ConfigError", "ElementScanConfig", "load_config"]
