"""HTML text/attribute encoding and whitespace preservation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

NBSP = "\xa0"
BREAK = "<br/>"


def preserve_whitespace(text: str) -> str:
    """Protect spaces that HTML would otherwise collapse.

    A space at the start, at the end, or directly after another space becomes
    a non-breaking space. Every other space is left alone.

    Example:
        "  a  b  " -> "\\xa0\\xa0a \\xa0b \\xa0"
    """
    last = len(text) - 1
    chars = list(text)
    for i, char in enumerate(text):
        if char == " " and (i == 0 or i == last or text[i - 1] == " "):
            chars[i] = NBSP
    return "".join(chars)


def encode_content(text: str, line_break: str = BREAK) -> str:
    """Encode literal text for use as element content."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace(NBSP, "&nbsp;")
        .replace("\n", line_break + "\n")
    )


def encode_attr(text: str) -> str:
    """Encode a value for use inside a double-quoted attribute."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def stringify_attrs(attrs: Mapping[str, Any] | None) -> str:
    """Render attributes as ` key="value"` pairs, skipping None values."""
    if not attrs:
        return ""
    return "".join(
        f' {key}="{encode_attr(str(value))}"' for key, value in attrs.items() if value is not None
    )
