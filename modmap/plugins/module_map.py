"""Plugin that maps source folders onto logical module names.

The first capture group of the ``external_modulemap`` pattern, applied to each
module's source path, becomes the module name. Modules that end up with the
same name are merged, and each resulting module is shown as a package with the
README found in its directory.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..logging import get_logger
from ..mapping import (
    DEFAULT_README_NAME,
    PackageAnnotator,
    PatternMatcher,
    RenameCollector,
    TreeReconciler,
)
from ..models import Reflection
from ..project import ProjectTree
from .base import ConverterPlugin

_LOGGER = get_logger("plugins.module_map")

OPTION_PATTERN = "external_modulemap"
OPTION_README_NAME = "readme_name"


class ExternalModuleMapPlugin(ConverterPlugin):
    """Renames, merges and annotates modules according to a path pattern."""

    name = "external-module-map"

    def __init__(self) -> None:
        self.collector = RenameCollector()
        self.reconciler = TreeReconciler()
        self.annotator = PackageAnnotator()

    def on_begin(self, options: Mapping[str, Any]) -> None:
        matcher = PatternMatcher.from_option(options.get(OPTION_PATTERN))
        self.collector.reset(matcher)
        readme_name = options.get(OPTION_README_NAME)
        self.annotator = PackageAnnotator(
            readme_name if isinstance(readme_name, str) and readme_name else DEFAULT_README_NAME
        )

    def on_create_declaration(
        self, project: ProjectTree, reflection: Reflection, file_path: Optional[str]
    ) -> None:
        self.collector.observe(reflection, file_path)

    def on_begin_resolve(self, project: ProjectTree) -> None:
        pending = self.collector.pending
        if not pending:
            return
        try:
            self.reconciler.reconcile(project, pending)
            self.annotator.annotate(project, self.collector.logical_names)
        except Exception:  # pragma: no cover - defensive guard
            _LOGGER.exception("Module mapping failed; leaving the remaining tree untouched")


__all__ = ["ExternalModuleMapPlugin", "OPTION_PATTERN", "OPTION_README_NAME"]
