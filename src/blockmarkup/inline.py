"""Inline content rendering: style decoration and entity wrapping."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .escaping import BREAK, encode_attr, encode_content, preserve_whitespace, stringify_attrs
from .logger import get_logger
from .models import Block, BlockType, EntityInstance, EntityLookup, EntityType, InlineStyle
from .ranges import get_entity_ranges
from .styles import NAMED_STYLE_MAP, StyleTable, build_style_attribute

logger = get_logger()

# Entity data field -> element attribute, per entity type
ENTITY_ATTR_MAP: dict[str, dict[str, str]] = {
    EntityType.LINK.value: {"url": "href", "rel": "rel", "target": "target", "title": "title"},
    EntityType.IMAGE.value: {"src": "src", "alt": "alt", "data-original-url": "href"},
}

# Applied innermost first; each tag wraps everything applied before it.
STYLE_TAGS: list[tuple[InlineStyle, str]] = [
    (InlineStyle.BOLD, "strong"),
    (InlineStyle.UNDERLINE, "ins"),
    (InlineStyle.ITALIC, "em"),
    (InlineStyle.STRIKETHROUGH, "del"),
    (InlineStyle.CODE, "code"),
]


def data_to_attrs(entity_type: str, entity: EntityInstance) -> dict[str, Any]:
    """Map entity data fields to element attributes.

    Fields without an entry in ENTITY_ATTR_MAP for this entity type are dropped.
    Values are passed through unchanged, including None.
    """
    attr_map = ENTITY_ATTR_MAP.get(entity_type, {})
    return {attr_map[key]: value for key, value in entity.data.items() if key in attr_map}


def checkbox(checked: bool) -> str:
    return f'<input type="checkbox" {"checked " if checked else ""}/>'


class InlineRenderer:
    """Render the inline content of single blocks.

    Holds the lookups shared by every block of one document: the legacy style
    table, the entity registry and the checked state of checkable list items.
    """

    def __init__(
        self,
        entities: EntityLookup | None = None,
        checked_state: Mapping[str, bool | None] | None = None,
        style_table: StyleTable = NAMED_STYLE_MAP,
        line_break: str = BREAK,
    ):
        """Initialize the renderer.

        Args:
            entities: Registry used to resolve entity keys (None: no entities resolve)
            checked_state: Block key -> checked flag for checkable list items
            style_table: Legacy style label -> CSS property table
            line_break: Markup used for newlines and empty blocks
        """
        self.entities = entities
        self.checked_state = checked_state or {}
        self.style_table = style_table
        self.line_break = line_break

    def render_block(self, block: Block) -> str:
        """Render a block's text with styles and entities applied."""
        if block.text == "":
            # Prevent element collapse if completely empty
            return self.line_break

        text = preserve_whitespace(block.text)
        pieces = get_entity_ranges(text, block.character_runs())

        output: list[str] = []
        for entity_key, style_pieces in pieces:
            content = "".join(
                self.render_styled(piece_text, styles, block) for piece_text, styles in style_pieces
            )
            output.append(self.wrap_entity(entity_key, content))
        return "".join(output)

    def render_styled(self, text: str, styles: frozenset[str], block: Block) -> str:
        """Encode one style piece and wrap it in its style tags."""
        content = encode_content(text, self.line_break)

        css = build_style_attribute(styles, self.style_table)
        if css is not None:
            content = f'<span style="{encode_attr(css)}">{content}</span>'

        for style, tag in STYLE_TAGS:
            if style.value not in styles:
                continue
            # A code block already wraps everything in <code>
            if style is InlineStyle.CODE and block.type == BlockType.CODE.value:
                continue
            content = f"<{tag}>{content}</{tag}>"

        if block.type == BlockType.CHECKABLE_LIST_ITEM.value:
            content = checkbox(bool(self.checked_state.get(block.key))) + content
        return content

    def wrap_entity(self, entity_key: str | None, content: str) -> str:
        """Wrap rendered content in the element for its entity, if any."""
        entity = self.resolve_entity(entity_key)
        if entity is None:
            return content

        if entity.type == EntityType.LINK.value:
            attrs = data_to_attrs(entity.type, entity)
            return f"<a{stringify_attrs(attrs)}>{content}</a>"

        if entity.type == EntityType.IMAGE.value:
            attrs = data_to_attrs(entity.type, entity)
            href, src, alt = (_attr_value(attrs.get(name)) for name in ("href", "src", "alt"))
            return f'<a href="{href}"><img src="{src}" alt="{alt}" /></a>'

        return content

    def resolve_entity(self, entity_key: str | None) -> EntityInstance | None:
        if entity_key is None or self.entities is None:
            return None
        entity = self.entities.get(entity_key)
        if entity is None:
            logger.notice(f"Entity '{entity_key}' not found; rendering text unwrapped")
        return entity


def _attr_value(value: Any) -> str:
    return "" if value is None else encode_attr(str(value))
