"""Records pending module renames while the reflection tree is being built."""

from __future__ import annotations

from typing import List, Optional, Set

from ..logging import get_logger
from ..models import PendingRename, Reflection
from .matcher import PatternMatcher

_LOGGER = get_logger("collector")


class RenameCollector:
    """Observes created reflections and queues renames for matching paths."""

    def __init__(self, matcher: PatternMatcher | None = None) -> None:
        self.matcher = matcher or PatternMatcher()
        self._pending: List[PendingRename] = []
        self._logical_names: Set[str] = set()

    def reset(self, matcher: PatternMatcher | None = None) -> None:
        """Forget previous state; optionally swap in a freshly compiled matcher."""
        if matcher is not None:
            self.matcher = matcher
        self._pending = []
        self._logical_names = set()

    @property
    def pending(self) -> List[PendingRename]:
        return list(self._pending)

    @property
    def logical_names(self) -> Set[str]:
        return set(self._logical_names)

    def observe(self, reflection: Reflection, file_path: Optional[str]) -> Optional[PendingRename]:
        """Queue a rename for ``reflection`` when ``file_path`` matches."""
        if not file_path or not self.matcher.enabled:
            return None
        target = self.matcher.match(file_path)
        if target is None:
            return None
        _LOGGER.info("Mapping %s ==> %s", file_path, target)
        self._logical_names.add(target)
        rename = PendingRename(target_name=target, reflection=reflection)
        self._pending.append(rename)
        return rename


__all__ = ["RenameCollector"]
