"""Replays reflection creation through plugin lifecycle callbacks."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from .logging import get_logger
from .plugins import ConverterPlugin, discover_plugins
from .project import ProjectTree
from .serialization import Declaration


class Converter:
    """Builds a :class:`ProjectTree` while notifying plugins.

    Every run fires ``on_begin`` once, ``on_create_declaration`` once per
    declaration in the given order and ``on_begin_resolve`` once at the end.
    """

    def __init__(self, plugins: Optional[Iterable[ConverterPlugin]] = None) -> None:
        self.plugins: List[ConverterPlugin] = (
            list(plugins) if plugins is not None else discover_plugins()
        )
        self.logger = get_logger("converter")

    def convert(
        self,
        declarations: Iterable[Declaration],
        options: Mapping[str, Any] | None = None,
        *,
        name: str = "project",
    ) -> ProjectTree:
        options = dict(options or {})
        project = ProjectTree(name)
        self.logger.debug(
            "Starting conversion of %s with plugins: %s",
            name,
            ", ".join(plugin.name for plugin in self.plugins) or "(none)",
        )

        for plugin in self.plugins:
            plugin.on_begin(options)

        created = 0
        for declaration in declarations:
            parent = project.get(declaration.parent) if declaration.parent is not None else None
            if declaration.parent is not None and parent is None:
                raise ValueError(
                    f"Declaration {declaration.reflection.id} references unknown parent {declaration.parent}"
                )
            project.add(declaration.reflection, parent)
            created += 1
            for plugin in self.plugins:
                plugin.on_create_declaration(project, declaration.reflection, declaration.file_name)
        self.logger.debug("Created %d reflections", created)

        for plugin in self.plugins:
            plugin.on_begin_resolve(project)

        return project


__all__ = ["Converter"]
