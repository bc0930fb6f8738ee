"""Text helpers: HTML entity encoding and documentation summaries."""

from __future__ import annotations

import html
import re

_SENTENCE_END = re.compile(r"[.!?](?=\s|$)")
_WHITESPACE = re.compile(r"\s+")


def encode_entities(text: str) -> str:
    """Escape markup characters and replace non-ASCII characters by numeric entities."""
    escaped = html.escape(text, quote=True)
    return escaped.encode("ascii", "xmlcharrefreplace").decode("ascii")


def truncate(text: str, max_length: int) -> str:
    """Hard cut ``text`` at ``max_length`` characters, without an ellipsis."""
    if max_length < 0:
        raise ValueError("max_length must not be negative")
    return text[:max_length]


def single_line(text: str) -> str:
    return text.replace("\r\n", " ").replace("\n", " ")


def first_sentence(text: str, max_length: int) -> str:
    """Return the first sentence of a help text, collapsed to one line and capped."""
    collapsed = _WHITESPACE.sub(" ", text).strip()
    match = _SENTENCE_END.search(collapsed)
    sentence = collapsed[: match.end()] if match else collapsed
    return truncate(sentence, max_length)


__all__ = ["encode_entities", "first_sentence", "single_line", "truncate"]
