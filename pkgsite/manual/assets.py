"""Copies images and stylesheets referenced by converted manual pages.

The scan is line oriented and regex based: the HTML comes from a trusted
converter, so attribute-level matching is enough.  References are only ever
resolved below the manual's source root and copied below the output root.
"""

from __future__ import annotations

import posixpath
import re
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set

from ..errors import SiteGenerationError
from ..logging import get_logger


class AssetKind(str, Enum):
    IMAGE = "image"
    CSS = "css"


_PATTERNS = {
    AssetKind.IMAGE: re.compile(r'<(?:img.+?src|object.+?data)="([^"]+)".*?>'),
    AssetKind.CSS: re.compile(r'<(?:link rel="stylesheet".+?href|object.+?data)="([^"]+)".*?>'),
}

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")


@dataclass(frozen=True)
class AssetReference:
    url: str
    source_root: Path
    output_root: Path

    @property
    def directory(self) -> str:
        return posixpath.dirname(self.url)

    @property
    def source(self) -> Path:
        return self.source_root / self.url

    @property
    def destination(self) -> Path:
        return self.output_root / self.url


def is_external(url: str) -> bool:
    return "//" in url or bool(_SCHEME.match(url))


def is_traversal(url: str) -> bool:
    return ".." in url or url.startswith(("/", "\\"))


def scan_references(html_file: Path, kind: AssetKind | str) -> Iterator[str]:
    """Yield every URL of ``kind`` referenced in ``html_file``, in document order.

    Only failing to open the file raises; undecodable bytes are replaced.
    """
    pattern = _PATTERNS[_as_kind(kind)]
    try:
        handle = open(html_file, encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SiteGenerationError(f"Couldn't open {html_file} for reading: {exc.strerror or exc}") from exc
    with handle:
        for line in handle:
            for match in pattern.finditer(line):
                yield match.group(1)


class AssetCopier:
    """Mirrors assets referenced from manual pages into the output tree."""

    def __init__(self, source_root: Path, output_root: Path) -> None:
        self.source_root = source_root
        self.output_root = output_root
        self.logger = get_logger("manual.assets")
        self._copied: Set[str] = set()

    def copy_all(self, html_files: Iterable[Path]) -> List[Path]:
        copied: List[Path] = []
        for html_file in html_files:
            for kind in AssetKind:
                copied.extend(self.copy_references(html_file, kind))
        return copied

    def copy_references(self, html_file: Path, kind: AssetKind | str) -> List[Path]:
        kind = _as_kind(kind)
        copied: List[Path] = []
        for url in scan_references(html_file, kind):
            destination = self._copy(AssetReference(url, self.source_root, self.output_root), kind)
            if destination is not None:
                copied.append(destination)
        return copied

    def _copy(self, reference: AssetReference, kind: AssetKind) -> Optional[Path]:
        url = reference.url
        if is_external(url):
            self.logger.warning("not copying %s %s because it is an external reference", kind.value, url)
            return None
        if is_traversal(url):
            self.logger.warning("not copying %s %s because path contains '..'", kind.value, url)
            return None
        if url in self._copied:
            return None

        directory = reference.directory
        if directory and directory not in (".", "./"):
            target_dir = self.output_root / directory
            if not target_dir.is_dir():
                try:
                    target_dir.mkdir(parents=True, exist_ok=True)
                except OSError as exc:
                    self.logger.warning(
                        "could not create directory %s for %s file %s: %s",
                        target_dir,
                        kind.value,
                        url,
                        exc.strerror or exc,
                    )
                    return None

        if not reference.source.is_file():
            self.logger.warning("%s file %s not present, not copied", kind.value, url)
            return None

        try:
            shutil.copyfile(reference.source, reference.destination)
        except OSError as exc:
            self.logger.warning("could not copy %s file %s: %s", kind.value, url, exc.strerror or exc)
            return None
        self._copied.add(url)
        return reference.destination


def _as_kind(kind: AssetKind | str) -> AssetKind:
    try:
        return AssetKind(kind)
    except ValueError:
        raise ValueError(f"invalid asset kind '{kind}'") from None


__all__ = [
    "AssetCopier",
    "AssetKind",
    "AssetReference",
    "is_external",
    "is_traversal",
    "scan_references",
]
