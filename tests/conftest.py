from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.sfc_builder import SfcBuilder


@pytest.fixture
def sfc_builder(tmp_path: Path) -> SfcBuilder:
    """Provide a reusable SFC builder rooted at the pytest tmp_path."""
    return SfcBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _propagate_logs() -> None:
    """Let caplog see vue_analyzer records even after configure_logging ran."""
    logger = logging.getLogger("vue_analyzer")
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
