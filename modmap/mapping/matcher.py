"""Compiles the module-map pattern and extracts logical names from paths."""

from __future__ import annotations

import re
from typing import Any, Optional, Pattern

from ..logging import get_logger

_LOGGER = get_logger("matcher")


class PatternMatcher:
    """Maps source file paths onto logical module names.

    The first capture group of the configured pattern is the logical name. A
    matcher built from a missing, non-string or invalid option is disabled and
    never matches.
    """

    def __init__(self, pattern: Optional[Pattern[str]] = None) -> None:
        self._pattern = pattern

    @classmethod
    def from_option(cls, value: Any) -> "PatternMatcher":
        if not isinstance(value, str):
            if value is not None:
                _LOGGER.debug("Ignoring non-string module map option %r", value)
            return cls()
        _LOGGER.info("Applying regexp %s to calculate module names", value)
        try:
            compiled = re.compile(value)
        except re.error as exc:
            _LOGGER.warning("External module map not recognized, not processing: %s", exc)
            return cls()
        _LOGGER.info("Module mapping enabled")
        return cls(compiled)

    @property
    def enabled(self) -> bool:
        return self._pattern is not None

    @property
    def pattern(self) -> Optional[str]:
        return self._pattern.pattern if self._pattern is not None else None

    def match(self, file_path: str) -> Optional[str]:
        """Return the first capture group for ``file_path`` or ``None``."""
        if self._pattern is None or self._pattern.groups < 1:
            return None
        found = self._pattern.search(file_path)
        if found is None:
            return None
        return found.group(1)


__all__ = ["PatternMatcher"]
