"""Configuration loading for modmap (.modmap.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .mapping import DEFAULT_README_NAME
from .plugins.module_map import OPTION_PATTERN, OPTION_README_NAME

CONFIG_FILENAME = ".modmap.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class PluginConfig:
    """Plugin enablement."""

    enabled: Optional[List[str]] = None


@dataclass
class ModMapConfig:
    """Settings defined in .modmap.yml.

    ``external_modulemap`` is kept exactly as written so that a non-string value
    (``external_modulemap: 123``) disables mapping instead of being coerced.
    """

    root: Path
    external_modulemap: Any = None
    readme_name: str = DEFAULT_README_NAME
    plugins: PluginConfig = field(default_factory=PluginConfig)

    def options(self) -> Dict[str, Any]:
        """Return the option mapping handed to plugins at the start of a run."""
        return {
            OPTION_PATTERN: self.external_modulemap,
            OPTION_README_NAME: self.readme_name,
        }


def load_config(config_path: Path) -> ModMapConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ModMapConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    readme_name = _as_str(data.get("readme_name")) or DEFAULT_README_NAME

    plugins = PluginConfig()
    plugin_data = _as_dict(data.get("plugins"))
    if "enabled" in plugin_data:
        plugins.enabled = _as_str_list(plugin_data.get("enabled"))

    return ModMapConfig(
        root=root,
        external_modulemap=data.get("external_modulemap"),
        readme_name=readme_name,
        plugins=plugins,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
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
    return value if isinstance(value, str) and value.strip() else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "ModMapConfig", "PluginConfig", "load_config"]
