from __future__ import annotations

import logging
from pathlib import Path

import pytest

from vue_analyzer.logging import ROOT_LOGGER, configure_logging, get_logger


def test_get_logger_nests_under_package_logger() -> None:
    assert get_logger().name == "vue_analyzer"
    assert get_logger("scanner").name == "vue_analyzer.scanner"
    assert get_logger("vue_analyzer.orchestrator").name == "vue_analyzer.orchestrator"


def test_configure_logging_writes_console_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(verbose=False)

    get_logger("scanner").info("scanning %d file(s)", 3)
    get_logger("scanner").debug("hidden")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "[vue-analyzer] INFO scanning 3 file(s)" in captured.err
    assert "hidden" not in captured.err


def test_configure_logging_replaces_handlers_and_writes_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "run.log"

    configure_logging(verbose=True)
    logger = configure_logging(verbose=True, log_file=log_file)
    get_logger("orchestrator").debug("analysed %s", "App.vue")
    for handler in logger.handlers:
        handler.flush()

    assert logger is logging.getLogger(ROOT_LOGGER)
    assert len(logger.handlers) == 2
    text = log_file.read_text(encoding="utf-8")
    assert "DEBUG [MainThread] vue_analyzer.orchestrator: analysed App.vue" in text
