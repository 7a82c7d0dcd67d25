"""Arena-backed container for the reflections of one conversion run."""

from __future__ import annotations

from typing import Dict, List, Optional

from .models import Reflection, ReflectionKind


class ProjectTree:
    """Owns every reflection of a run, addressable by reflection id.

    The root is the project reflection itself. Insertion order is preserved and
    is the order exposed by :meth:`reflections`, which merge-target discovery
    relies on.
    """

    def __init__(self, name: str = "project", *, root_id: int = 0) -> None:
        self.root = Reflection(id=root_id, kind=ReflectionKind.PROJECT, name=name)
        self._reflections: Dict[int, Reflection] = {root_id: self.root}

    def __contains__(self, reflection: object) -> bool:
        if not isinstance(reflection, Reflection):
            return False
        return self._reflections.get(reflection.id) is reflection

    def get(self, reflection_id: Optional[int]) -> Optional[Reflection]:
        if reflection_id is None:
            return None
        return self._reflections.get(reflection_id)

    def next_id(self) -> int:
        return max(self._reflections) + 1

    def reflections(self) -> List[Reflection]:
        """Flat snapshot of every live reflection, root included."""
        return list(self._reflections.values())

    def add(self, reflection: Reflection, parent: Optional[Reflection] = None) -> Reflection:
        """Register ``reflection`` under ``parent`` (the root when omitted)."""
        if reflection.id in self._reflections:
            raise ValueError(f"Reflection id {reflection.id} is already registered")
        owner = parent if parent is not None else self.root
        if owner not in self:
            raise ValueError(f"Parent reflection {owner.id} is not part of this project")
        reflection.parent = owner.id
        if owner.children is None:
            owner.children = []
        owner.children.append(reflection.id)
        self._reflections[reflection.id] = reflection
        return reflection

    def parent_of(self, reflection: Reflection) -> Optional[Reflection]:
        return self.get(reflection.parent)

    def children_of(self, reflection: Reflection) -> List[Reflection]:
        """Resolve ``reflection.children`` to live objects, skipping stale ids."""
        resolved: List[Reflection] = []
        for child_id in reflection.children or []:
            child = self._reflections.get(child_id)
            if child is not None:
                resolved.append(child)
        return resolved

    def remove(self, reflection: Reflection) -> None:
        """Detach ``reflection`` from its parent and drop it from the project.

        Children still listed on the removed node go with it.
        """
        if reflection is self.root:
            raise ValueError("The project root cannot be removed")
        if reflection not in self:
            return

        for child in self.children_of(reflection):
            if child.parent == reflection.id:
                self.remove(child)

        parent = self.parent_of(reflection)
        if parent is not None and parent.children:
            parent.children = [cid for cid in parent.children if cid != reflection.id]
        del self._reflections[reflection.id]

    def check_links(self) -> List[str]:
        """Return human readable descriptions of broken parent/child links."""
        problems: List[str] = []
        for reflection in self._reflections.values():
            if reflection is self.root:
                continue
            if reflection.parent == reflection.id:
                problems.append(f"{reflection.id} ({reflection.name}) is its own parent")
                continue
            parent = self.get(reflection.parent)
            if parent is None:
                problems.append(
                    f"{reflection.id} ({reflection.name}) points to missing parent {reflection.parent}"
                )
                continue
            occurrences = (parent.children or []).count(reflection.id)
            if occurrences != 1:
                problems.append(
                    f"{reflection.id} ({reflection.name}) listed {occurrences} times under parent {parent.id}"
                )
        for reflection in self._reflections.values():
            for child_id in reflection.children or []:
                child = self._reflections.get(child_id)
                if child is None:
                    problems.append(f"{reflection.id} ({reflection.name}) lists missing child {child_id}")
                elif child.parent != reflection.id:
                    problems.append(
                        f"{reflection.id} ({reflection.name}) lists child {child_id} owned by {child.parent}"
                    )
        reachable = self._reachable_ids()
        for reflection in self._reflections.values():
            if reflection.id not in reachable:
                problems.append(f"{reflection.id} ({reflection.name}) is not reachable from the root")
        return problems

    def _reachable_ids(self) -> set[int]:
        reached: set[int] = set()
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.id in reached:
                continue
            reached.add(node.id)
            stack.extend(
                child for child in self.children_of(node) if child.parent == node.id
            )
        return reached


__all__ = ["ProjectTree"]
