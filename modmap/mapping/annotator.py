"""Marks merged modules as packages and attaches their README text."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional

from ..logging import get_logger
from ..models import Comment, GroupingKind, Reflection
from ..project import ProjectTree

_LOGGER = get_logger("annotator")

DEFAULT_README_NAME = "README.md"


class PackageAnnotator:
    """Annotates the canonical reflection of every logical module name."""

    def __init__(self, readme_name: str = DEFAULT_README_NAME) -> None:
        self.readme_name = readme_name

    def annotate(self, project: ProjectTree, logical_names: Iterable[str]) -> List[Reflection]:
        annotated: List[Reflection] = []
        for name in sorted(logical_names):
            reflection = self._find_package(project, name)
            if reflection is None:
                _LOGGER.debug("No file-backed reflection named %s; skipping", name)
                continue
            reflection.grouping = GroupingKind.PACKAGE
            readme = self.find_readme(reflection.original_name, name)
            if readme is None:
                _LOGGER.warning('No README found for module "%s"', name)
            else:
                reflection.comment = Comment(short_text="", text=readme)
            annotated.append(reflection)
        return annotated

    @staticmethod
    def _find_package(project: ProjectTree, name: str) -> Optional[Reflection]:
        for reflection in project.reflections():
            if reflection.name == name and os.path.isabs(reflection.original_name):
                return reflection
        return None

    def find_readme(self, original_name: str, name: str) -> Optional[str]:
        """Walk up from ``original_name`` looking for ``<name>/<readme_name>``.

        Only directories whose base name equals ``name`` are checked, starting at
        the directory that contains ``original_name`` and ending at the
        filesystem root. Unreadable files are skipped.
        """
        start = Path(original_name).parent
        for directory in (start, *start.parents):
            if directory.name != name:
                continue
            readme_path = directory / self.readme_name
            _LOGGER.info("Expecting README for %s at %s", name, readme_path)
            try:
                return readme_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                _LOGGER.info("Error reading %s: %s", readme_path, exc)
        return None


__all__ = ["DEFAULT_README_NAME", "PackageAnnotator"]
