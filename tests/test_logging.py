"""Tests for pkgsite.logging."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from pkgsite.logging import WarningCounter, configure_logging, count_warnings, get_logger


@pytest.fixture
def pkgsite_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("pkgsite")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in saved[0]:
            handler.close()
    for handler in saved[0]:
        logger.addHandler(handler)
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_get_logger_names_components() -> None:
    assert get_logger().name == "pkgsite"
    assert get_logger("manual.assets").name == "pkgsite.manual.assets"


def test_count_warnings_collects_only_warnings(pkgsite_logger: logging.Logger) -> None:
    pkgsite_logger.setLevel(logging.DEBUG)
    with count_warnings() as counter:
        get_logger("manual.assets").warning("image %s not present, not copied", "a.png")
        get_logger("generator").info("Wrote %d files", 3)
        get_logger("catalog").error("broken")

    assert counter.count == 2
    assert counter.messages == ["image a.png not present, not copied", "broken"]
    assert not any(isinstance(h, WarningCounter) for h in pkgsite_logger.handlers)


def test_configure_logging_replaces_output_handlers(
    pkgsite_logger: logging.Logger, tmp_path: Path
) -> None:
    log_file = tmp_path / "build.log"
    with count_warnings() as counter:
        configure_logging(verbose=True)
        logger = configure_logging(log_file=log_file)
        get_logger("generator").warning("couldn't open NEWS for reading")

    assert logger.level == logging.INFO
    assert logger.propagate is False
    streams = [h for h in logger.handlers if type(h) is logging.StreamHandler]
    assert len(streams) == 1
    assert counter.count == 1
    for handler in logger.handlers:
        handler.flush()
    assert "WARNING pkgsite.generator: couldn't open NEWS for reading" in log_file.read_text(
        encoding="utf-8"
    )
