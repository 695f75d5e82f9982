"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from dirsize.utils.logging import VERBOSE_LOGGER_NAME, TraversalIdFilter, clear_traversal_id
from tests.fixtures.filesystem import MakeFile, build_sample_tree, write_file


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo logging configuration done by a test (e.g. through the CLI)."""
    root_logger = logging.getLogger()
    saved_level = root_logger.level
    try:
        yield
    finally:
        # Handlers installed by configure_logging carry the traversal id filter
        for handler in list(root_logger.handlers):
            if any(isinstance(f, TraversalIdFilter) for f in handler.filters):
                root_logger.removeHandler(handler)
        root_logger.setLevel(saved_level)
        verbose_logger = logging.getLogger(VERBOSE_LOGGER_NAME)
        verbose_logger.handlers.clear()
        verbose_logger.propagate = True
        verbose_logger.setLevel(logging.NOTSET)
        clear_traversal_id()


@pytest.fixture
def make_file() -> MakeFile:
    """Return a helper that writes ``size`` bytes to ``path``."""
    return write_file


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Tree of 5 counted entries totalling 1000 bytes, see build_sample_tree."""
    return build_sample_tree(tmp_path / "root")
