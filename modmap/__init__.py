"""Map source folders onto logical modules of a documentation reflection tree."""

from .converter import Converter
from .models import Comment, GroupingKind, PendingRename, Reflection, ReflectionKind
from .project import ProjectTree

__all__ = [
    "Comment",
    "Converter",
    "GroupingKind",
    "PendingRename",
    "ProjectTree",
    "Reflection",
    "ReflectionKind",
]
