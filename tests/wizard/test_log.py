"""Tests for the loguru setup."""

from __future__ import annotations

import io
import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from wsforge.wizard.log import setup_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    logger.remove()
    logger.add(sys.stderr)
    root.handlers[:] = handlers
    root.setLevel(level)


def test_console_level_filters() -> None:
    out = io.StringIO()
    setup_logging("warning", sink=out)

    logger.info("chatty")
    logger.warning("Loading templates failed")

    assert "chatty" not in out.getvalue()
    assert "WARNING  | Loading templates failed" in out.getvalue()


def test_stdlib_records_are_forwarded() -> None:
    out = io.StringIO()
    setup_logging("DEBUG", sink=out)

    logging.getLogger("some.library").error("boom")
    logging.getLogger("httpx").info("HTTP Request: GET /templates")

    assert "boom" in out.getvalue()
    assert "HTTP Request" not in out.getvalue()


def test_log_file_gets_debug(tmp_path: Path) -> None:
    log_file = tmp_path / "wizard.log"
    out = io.StringIO()
    setup_logging("ERROR", log_file=log_file, sink=out)

    logger.debug("Wizard event: GoNext()")
    logger.remove()  # flush and close the file sink

    assert out.getvalue() == ""
    assert "Wizard event: GoNext()" in log_file.read_text(encoding="utf-8")
