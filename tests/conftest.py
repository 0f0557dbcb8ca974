from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from techlead.logging import reset_logging
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable repo builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_techlead_logger() -> Iterator[None]:
    """Keep log records flowing to caplog even after configure_logging runs."""
    yield
    logger = reset_logging()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
