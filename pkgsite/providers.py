"""Package metadata and function documentation providers.

The generator only depends on the two protocols below.  ``YamlPackageProvider``
implements both from a single description file::

    name: demo
    version: 1.2.0
    depends:
      - package: octave
        operator: ">="
        version: "6.1.0"
    categories:
      - name: Core
        functions: [foo, "@Bar/baz"]
    functions:
      foo: "Compute foo.  Details follow."
      "@Bar/baz": null        # known but undocumented

Functions listed in a category but missing from ``functions`` are reported as
not found.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol

import yaml

from .errors import PackageNotFoundError, SiteGenerationError
from .models import CategorySpec, Dependency, DocResult, DocStatus, PackageDescription
from .text import first_sentence


class PackageMetadataProvider(Protocol):
    def describe(self, name: str) -> PackageDescription:
        """Return the description of package ``name`` or raise PackageNotFoundError."""


class DocumentationProvider(Protocol):
    def help_text(self, name: str) -> DocResult:
        """Return the full help text of function ``name``."""

    def first_sentence(self, name: str, max_length: int) -> DocResult:
        """Return the first help sentence of ``name``, at most ``max_length`` characters."""


class YamlPackageProvider:
    """Reads a package description and its function help texts from YAML."""

    def __init__(self, path: Path) -> None:
        self.path = path
        data = _load_yaml(path)
        self._package = _parse_package(data, default_directory=path.parent)
        self._docs = _parse_docs(data.get("functions"), path)

    @property
    def package_name(self) -> str:
        return self._package.name

    def describe(self, name: str) -> PackageDescription:
        if name != self._package.name:
            raise PackageNotFoundError(f"Couldn't locate package '{name}'")
        return self._package

    def help_text(self, name: str) -> DocResult:
        if name not in self._docs:
            return DocResult.not_found()
        text = self._docs[name]
        if not text or not text.strip():
            return DocResult.not_documented()
        return DocResult.found(text)

    def first_sentence(self, name: str, max_length: int) -> DocResult:
        result = self.help_text(name)
        if result.status is not DocStatus.OK:
            return result
        return DocResult.found(first_sentence(result.text, max_length))


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SiteGenerationError(f"Couldn't read package description {path}: {exc.strerror or exc}") from exc
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SiteGenerationError(f"Failed to parse {path.name}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise SiteGenerationError(f"{path.name} must contain a mapping at the root")
    return loaded


def _parse_package(data: Mapping[str, Any], *, default_directory: Path) -> PackageDescription:
    name = _as_str(data.get("name"))
    if not name:
        raise SiteGenerationError("Package description lacks a 'name'")

    directory_value = _as_str(data.get("directory"))
    directory = default_directory / directory_value if directory_value else default_directory

    return PackageDescription(
        name=name,
        version=_as_str(data.get("version")) or "",
        date=_as_str(data.get("date")) or "",
        author=_as_str(data.get("author")) or "",
        maintainer=_as_str(data.get("maintainer")) or "",
        license=_as_str(data.get("license")),
        url=_as_str(data.get("url")) or "",
        description=_as_str(data.get("description")) or "",
        buildrequires=_as_str(data.get("buildrequires")),
        systemrequirements=_as_str(data.get("systemrequirements")),
        depends=_parse_depends(data.get("depends")),
        categories=_parse_categories(data.get("categories")),
        directory=directory,
    )


def _parse_depends(value: Any) -> List[Dependency]:
    depends: List[Dependency] = []
    for item in value or []:
        if isinstance(item, str):
            depends.append(Dependency(package=item))
        elif isinstance(item, dict) and _as_str(item.get("package")):
            depends.append(
                Dependency(
                    package=str(item["package"]),
                    operator=_as_str(item.get("operator")),
                    version=_as_str(item.get("version")),
                )
            )
        else:
            raise SiteGenerationError(f"Invalid dependency entry: {item!r}")
    return depends


def _parse_categories(value: Any) -> List[CategorySpec]:
    categories: List[CategorySpec] = []
    for item in value or []:
        if not isinstance(item, dict) or not _as_str(item.get("name")):
            raise SiteGenerationError(f"Invalid category entry: {item!r}")
        functions = item.get("functions") or []
        if not isinstance(functions, list):
            raise SiteGenerationError(f"Functions of category '{item['name']}' must be a list")
        categories.append(
            CategorySpec(name=str(item["name"]), functions=[str(fn) for fn in functions])
        )
    return categories


def _parse_docs(value: Any, path: Path) -> Dict[str, Optional[str]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SiteGenerationError(f"'functions' in {path.name} must be a mapping")
    return {str(name): (None if text is None else str(text)) for name, text in value.items()}


def _as_str(value: Any) -> Optional[str]:
    # unquoted YAML dates load as datetime.date
    if isinstance(value, date):
        return value.isoformat()
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


__all__ = ["DocumentationProvider", "PackageMetadataProvider", "YamlPackageProvider"]
