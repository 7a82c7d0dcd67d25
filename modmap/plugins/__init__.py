"""Converter plugins and their lookup by declared name.

modmap ships a single built-in plugin. Third-party packages may add more by
exposing a :class:`ConverterPlugin` subclass under the ``modmap.plugins``
entry-point group. Plugins are identified by their ``name`` attribute, not by
the entry-point name, and a third-party plugin can never replace a built-in.
"""

from __future__ import annotations

from importlib import metadata
from typing import Dict, Iterable, List, Optional, Sequence, Type

from ..logging import get_logger
from .base import ConverterPlugin
from .module_map import ExternalModuleMapPlugin

_LOGGER = get_logger("plugins")

ENTRY_POINT_GROUP = "modmap.plugins"

BUILTIN_PLUGINS: tuple[Type[ConverterPlugin], ...] = (ExternalModuleMapPlugin,)


def discover_plugins(enabled: Sequence[str] | None = None) -> List[ConverterPlugin]:
    """Instantiate the available plugins, optionally restricted to ``enabled`` names.

    Names compare case-insensitively. Requesting a name no plugin declares raises
    ``ValueError``; entry points that fail to load or do not provide a plugin
    class are logged and ignored.
    """
    available: Dict[str, Type[ConverterPlugin]] = {}
    for plugin_cls in BUILTIN_PLUGINS:
        available[plugin_cls.name.lower()] = plugin_cls

    for entry in _entry_points():
        plugin_cls = _load_plugin_class(entry)
        if plugin_cls is None:
            continue
        key = plugin_cls.name.lower()
        if key in available:
            _LOGGER.warning(
                "Ignoring plugin %s from entry point %s: name already provided by %s",
                plugin_cls.name,
                entry.name,
                available[key].__qualname__,
            )
            continue
        available[key] = plugin_cls

    if enabled is None:
        return [plugin_cls() for plugin_cls in available.values()]

    selected: List[ConverterPlugin] = []
    unknown: List[str] = []
    for name in dict.fromkeys(item.lower() for item in enabled):
        plugin_cls = available.get(name)
        if plugin_cls is None:
            unknown.append(name)
        else:
            selected.append(plugin_cls())
    if unknown:
        known = ", ".join(sorted(available)) or "(none)"
        raise ValueError(f"Unknown plugins requested: {', '.join(unknown)} (available: {known})")
    return selected


def _load_plugin_class(entry: metadata.EntryPoint) -> Optional[Type[ConverterPlugin]]:
    try:
        loaded = entry.load()
    except Exception as exc:
        _LOGGER.warning("Failed to load plugin entry point %s: %s", entry.name, exc)
        return None
    if not (isinstance(loaded, type) and issubclass(loaded, ConverterPlugin)):
        _LOGGER.warning("Entry point %s does not provide a ConverterPlugin subclass", entry.name)
        return None
    if entry.name.lower() != loaded.name.lower():
        _LOGGER.debug("Entry point %s registers plugin %s", entry.name, loaded.name)
    return loaded


def _entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=ENTRY_POINT_GROUP)


__all__ = [
    "BUILTIN_PLUGINS",
    "ConverterPlugin",
    "ENTRY_POINT_GROUP",
    "ExternalModuleMapPlugin",
    "discover_plugins",
]
