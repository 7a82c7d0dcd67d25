from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from modmap.project import ProjectTree
from tests._fixtures.tree_builder import TreeBuilder


@pytest.fixture
def tree_builder(tmp_path: Path) -> TreeBuilder:
    """Provide a tree builder rooted at the pytest tmp_path."""
    return TreeBuilder(tmp_path)


@pytest.fixture
def project() -> ProjectTree:
    return ProjectTree("demo")


@pytest.fixture(autouse=True)
def _restore_modmap_logger() -> Iterator[None]:
    """Undo configure_logging() so caplog keeps seeing modmap records."""
    yield
    logger = logging.getLogger("modmap")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
