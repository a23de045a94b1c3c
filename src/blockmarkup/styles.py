"""Legacy style-label tables and inline CSS formatting.

Built-in styles (BOLD, ITALIC, ...) render as semantic tags. Every other style
label is looked up in a style table and, when found, contributes CSS properties
to a single ``<span style="...">`` around the styled text.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from enum import Enum

# label -> {cssPropertyInCamelCase: value}
StyleTable = Mapping[str, Mapping[str, str]]

_PALETTE = [
    ("RED", "rgb(255, 0, 0)"),
    ("ORANGE", "rgb(255, 127, 0)"),
    ("YELLOW", "rgb(180, 180, 0)"),
    ("GREEN", "rgb(0, 180, 0)"),
    ("BLUE", "rgb(0, 0, 255)"),
    ("INDIGO", "rgb(75, 0, 130)"),
    ("VIOLET", "rgb(127, 0, 255)"),
]

NAMED_STYLE_MAP: dict[str, dict[str, str]] = {
    "TEXT_DEFAULT": {"color": "#878787"},
    "TEXT_WHITE": {"color": "#fff"},
    "TEXT_BLACK": {"color": "#000"},
    **{f"TEXT_{name}": {"color": value} for name, value in _PALETTE},
    "BACKGROUND_DEFAULT": {"backgroundColor": "#fff"},
    "BACKGROUND_BLACK": {"backgroundColor": "#000"},
    **{f"BACKGROUND_{name}": {"backgroundColor": value} for name, value in _PALETTE},
}

# Numbered colors follow the palette order, with 0 as black.
NUMBERED_STYLE_MAP: dict[str, dict[str, str]] = {
    "COLOR_0": {"color": "#000"},
    **{f"COLOR_{i}": {"color": value} for i, (_, value) in enumerate(_PALETTE, start=1)},
    "BACKGROUND_COLOR_0": {"backgroundColor": "#fff"},
    **{
        f"BACKGROUND_COLOR_{i}": {"backgroundColor": value}
        for i, (_, value) in enumerate(_PALETTE, start=1)
    },
    "FONT_SIZE_SMALL": {"fontSize": "0.75em"},
    "FONT_SIZE_NORMAL": {"fontSize": "1em"},
    "FONT_SIZE_LARGE": {"fontSize": "1.5em"},
    "FONT_SIZE_HUGE": {"fontSize": "2.5em"},
}


class StyleTableName(str, Enum):
    """Built-in legacy style tables."""

    NAMED = "named"
    NUMBERED = "numbered"
    NONE = "none"


_TABLES: dict[StyleTableName, StyleTable] = {
    StyleTableName.NAMED: NAMED_STYLE_MAP,
    StyleTableName.NUMBERED: NUMBERED_STYLE_MAP,
    StyleTableName.NONE: {},
}


def get_style_table(
    name: StyleTableName | str, overrides: StyleTable | None = None
) -> dict[str, dict[str, str]]:
    """Return a copy of a built-in table, with override labels merged on top.

    Args:
        name: Built-in table name ("named", "numbered" or "none")
        overrides: Extra or replacement label definitions

    Returns:
        A new table; overridden labels replace the built-in definition entirely
    """
    table = {label: dict(props) for label, props in _TABLES[StyleTableName(name)].items()}
    for label, props in (overrides or {}).items():
        table[label] = dict(props)
    return table


def css_property_name(prop: str, sep: str = "-") -> str:
    """Convert a camelCase CSS property name to its dashed form.

    Example:
        css_property_name("backgroundColor") -> "background-color"

    Raises:
        TypeError: If prop is not a string
    """
    if not isinstance(prop, str):
        raise TypeError("Expected a string")
    prop = re.sub(r"([a-z\d])([A-Z])", rf"\1{sep}\2", prop)
    prop = re.sub(r"([A-Z]+)([A-Z][a-z\d]+)", rf"\1{sep}\2", prop)
    return prop.lower()


def merge_label_styles(labels: Iterable[str], table: StyleTable) -> dict[str, str]:
    """Merge CSS properties for every active label found in the table.

    Labels are applied in table order, so a later table entry wins when two
    active labels set the same property. Unknown labels are ignored.
    """
    active = set(labels)
    merged: dict[str, str] = {}
    for label, props in table.items():
        if label in active:
            merged.update(props)
    return merged


def format_css(styles: Mapping[str, str]) -> str:
    """Format properties as an inline style string: ``"color: red; font-size: 2em;"``."""
    return " ".join(f"{css_property_name(prop)}: {value};" for prop, value in styles.items())


def build_style_attribute(labels: Iterable[str], table: StyleTable) -> str | None:
    """Inline style string for the active labels, or None if none are in the table."""
    merged = merge_label_styles(labels, table)
    if not merged:
        return None
    return format_css(merged)
