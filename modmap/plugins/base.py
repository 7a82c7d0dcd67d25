"""Base classes for converter plugins."""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from ..models import Reflection
from ..project import ProjectTree


class ConverterPlugin(ABC):
    """Contract for plugins driven by the converter's lifecycle callbacks.

    The converter calls :meth:`on_begin` once per run, :meth:`on_create_declaration`
    for every reflection it creates, and :meth:`on_begin_resolve` once after the
    tree is complete. Calls never overlap.
    """

    name: str = "plugin"

    @abstractmethod
    def on_begin(self, options: Mapping[str, Any]) -> None:
        """Reset per-run state and read options."""

    @abstractmethod
    def on_create_declaration(
        self, project: ProjectTree, reflection: Reflection, file_path: Optional[str]
    ) -> None:
        """Observe a newly created reflection and its source file, if any."""

    @abstractmethod
    def on_begin_resolve(self, project: ProjectTree) -> None:
        """Mutate the finished project tree before names are resolved."""
