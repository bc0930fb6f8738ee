"""Function catalog: name classification, indexing and alphabetical lists."""

from .indexer import (
    LETTERS,
    NOT_DOCUMENTED,
    NOT_IMPLEMENTED,
    CatalogIndex,
    CatalogIndexer,
    anchor_for,
)
from .names import FunctionKind, FunctionName, classify
from .writer import AlphabetWriter

__all__ = [
    "AlphabetWriter",
    "CatalogIndex",
    "CatalogIndexer",
    "FunctionKind",
    "FunctionName",
    "LETTERS",
    "NOT_DOCUMENTED",
    "NOT_IMPLEMENTED",
    "anchor_for",
    "classify",
]
