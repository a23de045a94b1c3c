"""Pytest configuration and fixtures for blockmarkup tests."""

from __future__ import annotations

from collections.abc import Iterable

import pytest

from blockmarkup.logger import reset_logger
from blockmarkup.models import (
    Block,
    BlockType,
    CharacterMeta,
    ContentState,
    EntityInstance,
    EntityMap,
    InlineStyle,
)

# (start, end, style labels)
StyleSpan = tuple[int, int, Iterable[str | InlineStyle]]
# (start, end, entity key)
EntitySpan = tuple[int, int, str]


@pytest.fixture(autouse=True)
def clean_logger() -> None:
    """Reset logger state before each test for isolation."""
    reset_logger()


def make_block(  # noqa: PLR0913 - mirrors Block fields plus span helpers
    key: str,
    text: str,
    block_type: str | BlockType = BlockType.UNSTYLED,
    depth: int = 0,
    *,
    styles: Iterable[StyleSpan] = (),
    entities: Iterable[EntitySpan] = (),
) -> Block:
    """Create a Block with style and entity spans applied to its characters.

    Example:
        make_block("a", "Hello world", styles=[(0, 5, ["BOLD"])])
    """
    char_styles: list[set[str]] = [set() for _ in text]
    char_entities: list[str | None] = [None] * len(text)
    for start, end, labels in styles:
        for i in range(start, end):
            char_styles[i].update(
                label.value if isinstance(label, InlineStyle) else label for label in labels
            )
    for start, end, entity_key in entities:
        for i in range(start, end):
            char_entities[i] = entity_key

    characters = [
        CharacterMeta(styles=frozenset(s), entity=e)
        for s, e in zip(char_styles, char_entities, strict=True)
    ]
    return Block(key=key, type=block_type, text=text, depth=depth, characters=characters)


def make_content(*blocks: Block, entities: dict[str, EntityInstance] | None = None) -> ContentState:
    """Create a ContentState from blocks and an optional key -> entity mapping."""
    return ContentState.from_blocks(blocks, EntityMap(entities))


def list_items(block_type: BlockType, *items: tuple[str, int]) -> list[Block]:
    """Create list item blocks from (text, depth) pairs with keys b0, b1, ..."""
    return [
        Block(key=f"b{i}", type=block_type, text=text, depth=depth)
        for i, (text, depth) in enumerate(items)
    ]
