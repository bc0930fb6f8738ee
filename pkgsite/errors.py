"""Exception hierarchy for site generation failures."""

from __future__ import annotations


class SiteGenerationError(RuntimeError):
    """Raised when a run cannot continue; the message is shown to the user unchanged."""


class PackageNotFoundError(SiteGenerationError):
    """Raised when the metadata provider does not know the requested package."""


class MalformedNameError(SiteGenerationError, ValueError):
    """Raised for function names that cannot be classified, e.g. ``@Class`` without a method."""


class SerializationError(TypeError):
    """Raised when a metadata record holds a value the object serializer cannot encode."""


class ManualConversionError(SiteGenerationError):
    """Raised when the package manual cannot be converted to HTML."""


class ProgramNotFoundError(ManualConversionError):
    """Raised when the manual conversion program is not installed."""


__all__ = [
    "MalformedNameError",
    "ManualConversionError",
    "PackageNotFoundError",
    "ProgramNotFoundError",
    "SerializationError",
    "SiteGenerationError",
]
