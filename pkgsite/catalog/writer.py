"""Writes the alphabetical lookup files consumed by the site's letter pages."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..fs import ensure_dir, write_file
from ..logging import get_logger
from .indexer import LETTERS, CatalogIndex
from .names import FunctionKind

_WHAT = "alphabet database"


class AlphabetWriter:
    """Emits name/description lists per letter plus class and namespace trees.

    Function lists exist for every letter, even when empty, so link generation
    never has to special-case a missing letter.
    """

    def __init__(self) -> None:
        self.logger = get_logger("catalog.writer")

    def write(self, index: CatalogIndex, directory: Path) -> List[Path]:
        ensure_dir(directory)
        classes_dir = ensure_dir(directory / "classes")
        namespaces_dir = ensure_dir(directory / "namespaces")

        written: List[Path] = []
        for letter in LETTERS:
            names, descriptions = index.function_listing(letter)
            written.append(
                write_file(directory / f"function_names_{letter}", _WHAT, _lines(names))
            )
            written.append(
                write_file(
                    directory / f"function_descriptions_{letter}", _WHAT, _lines(descriptions)
                )
            )
            written.extend(
                self._write_grouped(
                    index, FunctionKind.CLASS_METHOD, letter, classes_dir / f"class_names_{letter}"
                )
            )
            written.extend(
                self._write_grouped(
                    index,
                    FunctionKind.NAMESPACED,
                    letter,
                    namespaces_dir / f"namespace_names_{letter}",
                )
            )
        self.logger.debug("Wrote %d alphabetical index files to %s", len(written), directory)
        return written

    def _write_grouped(
        self, index: CatalogIndex, kind: FunctionKind, letter: str, letter_dir: Path
    ) -> List[Path]:
        listing = index.grouped_listing(kind, letter)
        if not listing:
            return []
        ensure_dir(letter_dir)
        written = []
        for owner, members in listing:
            owner_dir = ensure_dir(letter_dir / owner)
            for leaf, summary in members:
                written.append(write_file(owner_dir / leaf, _WHAT, f"{summary}\n"))
        return written


def _lines(values: List[str]) -> str:
    return "".join(f"{value}\n" for value in values)


__all__ = ["AlphabetWriter"]
