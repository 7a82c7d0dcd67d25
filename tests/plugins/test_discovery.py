"""Tests for plugin lookup by declared name."""

from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

import modmap.plugins as plugins_module
from modmap.plugins import ConverterPlugin, ExternalModuleMapPlugin, discover_plugins


class RecordingPlugin(ConverterPlugin):
    """Third-party style plugin that only records the hooks it receives."""

    name = "recorder"

    def on_begin(self, options):  # pragma: no cover - unused
        pass

    def on_create_declaration(self, project, reflection, file_path):  # pragma: no cover - unused
        pass

    def on_begin_resolve(self, project):  # pragma: no cover - unused
        pass


class ShadowingPlugin(RecordingPlugin):
    name = "External-Module-Map"


def _install(monkeypatch, *entries: SimpleNamespace) -> None:
    monkeypatch.setattr(plugins_module, "_entry_points", lambda: list(entries))


def _entry(name: str, loader) -> SimpleNamespace:
    return SimpleNamespace(name=name, load=loader)


def _broken_loader():
    raise ImportError("missing dependency")


def test_builtin_plugin_is_available_by_default(monkeypatch) -> None:
    _install(monkeypatch)

    plugins = discover_plugins()

    assert [type(plugin) for plugin in plugins] == [ExternalModuleMapPlugin]


def test_enabled_names_match_declared_plugin_names(monkeypatch) -> None:
    _install(monkeypatch, _entry("vendor-recorder", lambda: RecordingPlugin))

    plugins = discover_plugins(["RECORDER", "external-module-map", "recorder"])

    assert [type(plugin) for plugin in plugins] == [RecordingPlugin, ExternalModuleMapPlugin]


def test_entry_point_name_is_not_a_plugin_name(monkeypatch) -> None:
    _install(monkeypatch, _entry("vendor-recorder", lambda: RecordingPlugin))

    with pytest.raises(ValueError, match="vendor-recorder"):
        discover_plugins(["vendor-recorder"])


def test_empty_selection_disables_every_plugin(monkeypatch) -> None:
    _install(monkeypatch, _entry("recorder", lambda: RecordingPlugin))

    assert discover_plugins([]) == []


def test_entry_point_cannot_replace_builtin(monkeypatch, caplog) -> None:
    _install(monkeypatch, _entry("shadow", lambda: ShadowingPlugin))

    with caplog.at_level(logging.WARNING, logger="modmap"):
        plugins = discover_plugins(["external-module-map"])

    assert [type(plugin) for plugin in plugins] == [ExternalModuleMapPlugin]
    assert "already provided" in caplog.text


def test_unusable_entry_points_are_skipped(monkeypatch, caplog) -> None:
    _install(
        monkeypatch,
        _entry("broken", _broken_loader),
        _entry("instance", lambda: RecordingPlugin()),
        _entry("recorder", lambda: RecordingPlugin),
    )

    with caplog.at_level(logging.WARNING, logger="modmap"):
        plugins = discover_plugins()

    assert [type(plugin) for plugin in plugins] == [ExternalModuleMapPlugin, RecordingPlugin]
    assert "Failed to load plugin entry point broken" in caplog.text
    assert "instance does not provide a ConverterPlugin subclass" in caplog.text


def test_each_call_returns_fresh_instances(monkeypatch) -> None:
    _install(monkeypatch)

    assert discover_plugins()[0] is not discover_plugins()[0]
