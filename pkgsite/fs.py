"""Filesystem helpers shared by the page and index writers."""

from __future__ import annotations

import os
from pathlib import Path

from .errors import SiteGenerationError


def ensure_dir(directory: Path) -> Path:
    """Create ``directory`` (and parents) unless it exists."""
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SiteGenerationError(f"Could not create '{directory}': {exc.strerror or exc}") from exc
    return directory


def write_file(path: Path, what: str, content: str) -> Path:
    """Replace ``path`` with ``content``; ``what`` names the file in error messages.

    The content goes to a sibling temporary file first, so a failed write never
    leaves a truncated destination behind.
    """
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
        os.replace(tmp_path, path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise SiteGenerationError(f"Could not open {what} for writing: {exc.strerror or exc}") from exc
    return path


def read_text(path: Path, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SiteGenerationError(f"Couldn't open {what} for reading: {exc.strerror or exc}") from exc


__all__ = ["ensure_dir", "read_text", "write_file"]
