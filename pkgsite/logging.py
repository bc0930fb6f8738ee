"""Logging utilities for pkgsite commands.

Every skipped asset, undocumented function or missing optional input is
reported as a warning on the ``pkgsite`` logger.  ``count_warnings`` lets a
caller tally those warnings for one package run.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

_LOGGER_NAME = "pkgsite"

CONSOLE_FORMAT = "[pkgsite] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a component logger (``generator``, ``manual.assets``...) under pkgsite."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class WarningCounter(logging.Handler):
    """Collects the messages of warning records emitted during a run."""

    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.messages: List[str] = []

    @property
    def count(self) -> int:
        return len(self.messages)

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


@contextmanager
def count_warnings() -> Iterator[WarningCounter]:
    """Attach a ``WarningCounter`` to the pkgsite logger for the ``with`` block."""
    logger = logging.getLogger(_LOGGER_NAME)
    counter = WarningCounter()
    logger.addHandler(counter)
    try:
        yield counter
    finally:
        logger.removeHandler(counter)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send pkgsite records to stderr, and to ``log_file`` when given.

    Progress messages are shown at INFO; ``verbose`` adds the converter
    command lines and asset counts logged at DEBUG.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Building several sites from one process must not duplicate output.
    for handler in list(logger.handlers):
        if not isinstance(handler, WarningCounter):
            logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["WarningCounter", "configure_logging", "count_warnings", "get_logger"]
