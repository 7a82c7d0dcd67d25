"""Module-map core: pattern matching, rename collection, reconciliation, annotation."""

from .annotator import DEFAULT_README_NAME, PackageAnnotator
from .collector import RenameCollector
from .matcher import PatternMatcher
from .reconciler import ReconcileReport, TreeReconciler

__all__ = [
    "DEFAULT_README_NAME",
    "PackageAnnotator",
    "PatternMatcher",
    "ReconcileReport",
    "RenameCollector",
    "TreeReconciler",
]
