"""Core data models shared across pkgsite components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


@dataclass
class Dependency:
    """A package dependency with an optional version constraint."""

    package: str
    operator: Optional[str] = None
    version: Optional[str] = None

    @property
    def constraint(self) -> str:
        if self.operator and self.version:
            return f"{self.operator} {self.version}"
        return ""


@dataclass
class CategorySpec:
    """Category as declared by the package: a name and its ordered function names."""

    name: str
    functions: List[str] = field(default_factory=list)


@dataclass
class PackageDescription:
    """Metadata describing an installed package."""

    name: str
    version: str = ""
    date: str = ""
    author: str = ""
    maintainer: str = ""
    license: Optional[str] = None
    url: str = ""
    description: str = ""
    buildrequires: Optional[str] = None
    systemrequirements: Optional[str] = None
    depends: List[Dependency] = field(default_factory=list)
    categories: List[CategorySpec] = field(default_factory=list)
    directory: Optional[Path] = None


@dataclass
class FunctionEntry:
    """One function of the catalog, positioned within its category."""

    name: str
    category: str
    category_index: int
    position: int
    implemented: bool = True
    summary: Optional[str] = None


@dataclass
class Category:
    """Category of the overview page with its anchor and entries."""

    name: str
    anchor_id: str
    entries: List[FunctionEntry] = field(default_factory=list)


class DocStatus(str, Enum):
    """Outcome of a documentation lookup."""

    OK = "ok"
    NOT_DOCUMENTED = "not_documented"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class DocResult:
    """Tagged result returned by documentation providers."""

    status: DocStatus
    text: str = ""

    @classmethod
    def found(cls, text: str) -> "DocResult":
        return cls(DocStatus.OK, text)

    @classmethod
    def not_documented(cls) -> "DocResult":
        return cls(DocStatus.NOT_DOCUMENTED)

    @classmethod
    def not_found(cls) -> "DocResult":
        return cls(DocStatus.NOT_FOUND)
