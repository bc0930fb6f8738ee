"""Package manual conversion and asset mirroring."""

from .assets import AssetCopier, AssetKind, AssetReference, scan_references
from .converter import COMMAND_NOT_FOUND, ManualConverter

__all__ = [
    "AssetCopier",
    "AssetKind",
    "AssetReference",
    "COMMAND_NOT_FOUND",
    "ManualConverter",
    "scan_references",
]
