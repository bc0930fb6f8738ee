"""Function catalog indexing for the overview page and alphabetical lookups."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from itertools import accumulate
from typing import Collection, Dict, Iterator, List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import Category, CategorySpec, DocStatus, FunctionEntry
from ..providers import DocumentationProvider
from ..text import single_line, truncate
from .names import FunctionKind, FunctionName, classify

LETTERS = string.ascii_lowercase

NOT_DOCUMENTED = "Not documented"
NOT_IMPLEMENTED = "Not implemented."

_NON_ALPHA = re.compile(r"[^a-zA-Z]")

PlainBucket = Dict[str, FunctionEntry]
GroupedBucket = Dict[str, Dict[str, FunctionEntry]]


def anchor_for(category: str) -> str:
    """Anchor id of a category: every non-letter character becomes ``_``."""
    return _NON_ALPHA.sub("_", category)


@dataclass
class CatalogIndex:
    """Categories with summaries plus the per-letter buckets built from them."""

    categories: List[Category]
    offsets: List[int]
    summaries: List[Optional[str]]
    functions: Dict[str, PlainBucket] = field(default_factory=dict)
    classes: Dict[str, GroupedBucket] = field(default_factory=dict)
    namespaces: Dict[str, GroupedBucket] = field(default_factory=dict)

    def linear_offset(self, entry: FunctionEntry) -> int:
        return self.offsets[entry.category_index] + entry.position

    def summary_of(self, entry: FunctionEntry) -> str:
        return self.summaries[self.linear_offset(entry)] or ""

    def entries(self) -> Iterator[FunctionEntry]:
        for category in self.categories:
            yield from category.entries

    def function_listing(self, letter: str) -> Tuple[List[str], List[str]]:
        """Sorted names of plain functions under ``letter`` and their summaries."""
        bucket = self.functions.get(letter, {})
        names = sorted(bucket)
        return names, [self.summary_of(bucket[name]) for name in names]

    def grouped_listing(
        self, kind: FunctionKind, letter: str
    ) -> List[Tuple[str, List[Tuple[str, str]]]]:
        """``(owner, [(leaf, summary), ...])`` pairs for class or namespace buckets."""
        if kind is FunctionKind.CLASS_METHOD:
            bucket = self.classes.get(letter, {})
        elif kind is FunctionKind.NAMESPACED:
            bucket = self.namespaces.get(letter, {})
        else:
            raise ValueError(f"{kind.value} entries are not grouped by owner")
        listing = []
        for owner in sorted(bucket):
            members = bucket[owner]
            listing.append(
                (owner, [(leaf, self.summary_of(members[leaf])) for leaf in sorted(members)])
            )
        return listing


class CatalogIndexer:
    """Builds a :class:`CatalogIndex` from a package's categories."""

    def __init__(self, docs: DocumentationProvider, *, summary_length: int = 200) -> None:
        if summary_length < 0:
            raise ValueError("summary_length must not be negative")
        self.docs = docs
        self.summary_length = summary_length
        self.logger = get_logger("catalog")

    def build(
        self,
        categories: Sequence[CategorySpec],
        *,
        not_implemented: Collection[str] = (),
    ) -> CatalogIndex:
        annotated = self._annotate(categories, set(not_implemented))
        counts = [len(category.entries) for category in annotated]
        offsets = [0, *accumulate(counts)][: len(annotated)]
        summaries = [entry.summary for category in annotated for entry in category.entries]
        index = CatalogIndex(categories=annotated, offsets=offsets, summaries=summaries)
        for entry in index.entries():
            if entry.implemented:
                self._insert(index, entry)
        return index

    def _annotate(
        self, categories: Sequence[CategorySpec], not_implemented: set[str]
    ) -> List[Category]:
        annotated: List[Category] = []
        seen_anchors: Dict[str, int] = {}
        for category_index, spec in enumerate(categories):
            anchor = self._unique_anchor(spec.name, seen_anchors)
            category = Category(name=spec.name, anchor_id=anchor)
            for position, name in enumerate(spec.functions):
                entry = FunctionEntry(
                    name=name,
                    category=spec.name,
                    category_index=category_index,
                    position=position,
                    implemented=name not in not_implemented,
                )
                if entry.implemented:
                    self._summarise(entry)
                category.entries.append(entry)
            annotated.append(category)
        return annotated

    def _unique_anchor(self, category: str, seen: Dict[str, int]) -> str:
        anchor = anchor_for(category)
        count = seen.get(anchor, 0) + 1
        seen[anchor] = count
        if count == 1:
            return anchor
        unique = f"{anchor}_{count}"
        self.logger.warning(
            "category '%s' reduces to anchor '%s' already in use; using '%s'",
            category,
            anchor,
            unique,
        )
        return unique

    def _summarise(self, entry: FunctionEntry) -> None:
        result = self.docs.first_sentence(entry.name, self.summary_length)
        if result.status is DocStatus.OK:
            entry.summary = truncate(single_line(result.text), self.summary_length)
        elif result.status is DocStatus.NOT_DOCUMENTED:
            self.logger.warning("%s is undocumented", entry.name)
            entry.summary = truncate(NOT_DOCUMENTED, self.summary_length)
        else:
            self.logger.warning("marking '%s' as not implemented", entry.name)
            entry.implemented = False

    def _insert(self, index: CatalogIndex, entry: FunctionEntry) -> None:
        name: FunctionName = classify(entry.name)
        letter = name.initial
        if letter not in LETTERS:
            self.logger.warning(
                "'%s' does not start with a letter and is left out of the alphabetical lists",
                entry.name,
            )
        if name.kind is FunctionKind.PLAIN:
            index.functions.setdefault(letter, {})[name.leaf] = entry
        elif name.kind is FunctionKind.CLASS_METHOD:
            index.classes.setdefault(letter, {}).setdefault(name.owner or "", {})[name.leaf] = entry
        else:
            index.namespaces.setdefault(letter, {}).setdefault(name.owner or "", {})[name.leaf] = entry


__all__ = [
    "CatalogIndex",
    "CatalogIndexer",
    "LETTERS",
    "NOT_DOCUMENTED",
    "NOT_IMPLEMENTED",
    "anchor_for",
]
