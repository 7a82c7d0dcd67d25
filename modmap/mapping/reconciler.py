"""Applies pending module renames to a built project tree.

Each pending rename either renames its reflection in place or, when a
reflection of the same kind already carries the target name, moves the
reflection's children under that merge target and removes the emptied node.

Merge targets are looked up in a snapshot of the project taken before the first
rename is applied. The first matching reflection in the project's insertion
order wins; when the host enumerates reflections in a different order between
runs, the chosen target can differ as well.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..logging import get_logger
from ..models import PendingRename, Reflection
from ..project import ProjectTree

_LOGGER = get_logger("reconciler")


@dataclass
class ReconcileReport:
    """Summary of what a reconciliation pass changed."""

    renamed: List[int] = field(default_factory=list)
    merged: List[int] = field(default_factory=list)
    relocated: int = 0
    skipped: List[int] = field(default_factory=list)
    discarded: List[int] = field(default_factory=list)
    lifted: List[int] = field(default_factory=list)


class TreeReconciler:
    """Renames and merges reflections recorded by the rename collector."""

    def reconcile(self, project: ProjectTree, pending: Sequence[PendingRename]) -> ReconcileReport:
        report = ReconcileReport()
        snapshot = project.reflections()

        for item in pending:
            renaming = item.reflection
            if renaming not in project:
                _LOGGER.warning(
                    "Skipping rename of %s to %s: reflection was already removed",
                    renaming.id,
                    item.target_name,
                )
                report.skipped.append(renaming.id)
                continue

            target = self._find_merge_target(project, snapshot, renaming, item.target_name)
            if target is None:
                renaming.name = item.target_name
                report.renamed.append(renaming.id)
                continue
            if target is renaming:
                continue

            self._merge(project, snapshot, renaming, target, report)

        _LOGGER.debug(
            "Reconciled %d renames (%d merged, %d children relocated)",
            len(pending),
            len(report.merged),
            report.relocated,
        )
        return report

    @staticmethod
    def _find_merge_target(
        project: ProjectTree,
        snapshot: Sequence[Reflection],
        renaming: Reflection,
        target_name: str,
    ) -> Optional[Reflection]:
        for candidate in snapshot:
            if candidate.kind != renaming.kind or candidate.name != target_name:
                continue
            if candidate in project:
                return candidate
        return None

    def _merge(
        self,
        project: ProjectTree,
        snapshot: Sequence[Reflection],
        renaming: Reflection,
        target: Reflection,
        report: ReconcileReport,
    ) -> None:
        if _is_nested_in(project, target, renaming):
            _LOGGER.warning(
                "Merge target %s (%s) is nested inside %s (%s); moving it up before the merge",
                target.id,
                target.name,
                renaming.id,
                renaming.name,
            )
            _lift_beside(project, target, renaming)
            report.lifted.append(target.id)

        if target.children is None:
            target.children = []

        moved: set[int] = set()
        for child in snapshot:
            if child is target or child.parent != renaming.id or child not in project:
                continue
            child.parent = target.id
            target.children.append(child.id)
            moved.add(child.id)
        report.relocated += len(moved)

        # Ids still listed here were never re-parented and vanish with the node.
        leftovers = [cid for cid in renaming.children or [] if cid not in moved]
        if leftovers:
            _LOGGER.warning(
                "Discarding %d un-relocated children of %s (%s): %s",
                len(leftovers),
                renaming.id,
                renaming.name,
                ", ".join(str(cid) for cid in leftovers),
            )
            report.discarded.extend(leftovers)
            for child_id in leftovers:
                child = project.get(child_id)
                if child is not None and child.parent == renaming.id:
                    project.remove(child)

        if renaming.children is not None:
            renaming.children.clear()
        project.remove(renaming)
        report.merged.append(renaming.id)


def _is_nested_in(project: ProjectTree, reflection: Reflection, ancestor: Reflection) -> bool:
    seen: set[int] = set()
    current = project.parent_of(reflection)
    while current is not None and current.id not in seen:
        if current is ancestor:
            return True
        seen.add(current.id)
        current = project.parent_of(current)
    return False


def _lift_beside(project: ProjectTree, reflection: Reflection, sibling: Reflection) -> None:
    """Re-parent ``reflection`` next to ``sibling`` under ``sibling``'s parent."""
    old_parent = project.parent_of(reflection)
    if old_parent is not None and old_parent.children:
        old_parent.children = [cid for cid in old_parent.children if cid != reflection.id]
    new_parent = project.parent_of(sibling) or project.root
    if new_parent.children is None:
        new_parent.children = []
    position = (
        new_parent.children.index(sibling.id) + 1
        if sibling.id in new_parent.children
        else len(new_parent.children)
    )
    new_parent.children.insert(position, reflection.id)
    reflection.parent = new_parent.id


__all__ = ["ReconcileReport", "TreeReconciler"]
