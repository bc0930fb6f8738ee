"""Minimal object-notation encoder for package metadata records.

Records are ordered mappings whose values are strings, booleans or nested
records.  The output looks like JSON::

    {
      "name": "demo",
      "depends":
      {
        "octave": ">= 6.1.0"
      },
      "has_news": true
    }

String values are wrapped in double quotes without any escaping; callers must
not pass values containing quotes, backslashes or control characters.
"""

from __future__ import annotations

from typing import Mapping, Union

from .errors import SerializationError

MetadataValue = Union[str, bool, "MetadataRecord"]
MetadataRecord = Mapping[str, MetadataValue]

_STEP = "  "


def encode_object(record: MetadataRecord, indent: str = "") -> str:
    """Encode ``record`` starting at ``indent``; no trailing newline is added."""
    fields = [
        f'\n{indent}{_STEP}"{key}": {_encode_value(key, value, indent)}'
        for key, value in record.items()
    ]
    return f"{indent}{{{','.join(fields)}\n{indent}}}"


def _encode_value(key: str, value: object, indent: str) -> str:
    # bool first: a nested record check must not see True/False
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping):
        return "\n" + encode_object(value, indent + _STEP)
    if isinstance(value, str):
        return f'"{value}"'
    raise SerializationError(
        f"Cannot encode field '{key}' of type {type(value).__name__}; "
        "only strings, booleans and nested records are supported"
    )


__all__ = ["MetadataRecord", "MetadataValue", "encode_object"]
