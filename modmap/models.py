"""Core data models for the reflection tree handled by modmap."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class ReflectionKind(str, Enum):
    """Discriminates the code entity a reflection documents."""

    PROJECT = "project"
    MODULE = "module"
    NAMESPACE = "namespace"
    ENUM = "enum"
    ENUM_MEMBER = "enum_member"
    VARIABLE = "variable"
    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    CONSTRUCTOR = "constructor"
    PROPERTY = "property"
    METHOD = "method"
    ACCESSOR = "accessor"
    TYPE_ALIAS = "type_alias"

    @property
    def label(self) -> str:
        """Human readable label, e.g. ``Type alias`` for ``type_alias``."""
        return self.value.replace("_", " ").capitalize()


class GroupingKind(str, Enum):
    """Display designation layered on top of a reflection's kind."""

    NONE = "none"
    PACKAGE = "package"


PACKAGE_LABEL = "Package"


@dataclass
class Comment:
    """Descriptive text attached to a reflection."""

    short_text: str = ""
    text: str = ""


@dataclass(eq=False)
class Reflection:
    """A node of the documentation tree.

    Ownership is stored arena-style: ``parent`` and ``children`` hold reflection
    ids, never object references, so that relocating a child is a plain data
    update on the owning :class:`~modmap.project.ProjectTree`. ``children`` is
    ``None`` until the node owns something. Reflections compare by identity.
    """

    id: int
    kind: ReflectionKind
    name: str
    original_name: str = ""
    parent: Optional[int] = None
    children: Optional[List[int]] = None
    comment: Optional[Comment] = None
    grouping: GroupingKind = GroupingKind.NONE

    @property
    def kind_string(self) -> str:
        """Display label; reports ``Package`` once marked as a grouping unit."""
        if self.grouping is GroupingKind.PACKAGE:
            return PACKAGE_LABEL
        return self.kind.label

    @property
    def is_package(self) -> bool:
        return self.grouping is GroupingKind.PACKAGE


@dataclass(eq=False)
class PendingRename:
    """A reflection whose source path matched, waiting for reconciliation."""

    target_name: str
    reflection: Reflection


__all__ = [
    "Comment",
    "GroupingKind",
    "PACKAGE_LABEL",
    "PendingRename",
    "Reflection",
    "ReflectionKind",
]
