"""Block-type to HTML tag lookups."""

from __future__ import annotations

from .models import BlockType

# A block may be wrapped in more than one tag, outermost first.
BLOCK_TAGS: dict[str, tuple[str, ...]] = {
    BlockType.HEADER_ONE.value: ("h1",),
    BlockType.HEADER_TWO.value: ("h2",),
    BlockType.HEADER_THREE.value: ("h3",),
    BlockType.HEADER_FOUR.value: ("h4",),
    BlockType.HEADER_FIVE.value: ("h5",),
    BlockType.HEADER_SIX.value: ("h6",),
    BlockType.UNORDERED_LIST_ITEM.value: ("li",),
    BlockType.ORDERED_LIST_ITEM.value: ("li",),
    BlockType.CHECKABLE_LIST_ITEM.value: ("li",),
    BlockType.BLOCKQUOTE.value: ("blockquote",),
    BlockType.CODE.value: ("pre", "code"),
    BlockType.ATOMIC.value: ("figure",),
}

DEFAULT_TAGS: tuple[str, ...] = ("div",)

WRAPPER_TAGS: dict[str, str] = {
    BlockType.UNORDERED_LIST_ITEM.value: "ul",
    BlockType.CHECKABLE_LIST_ITEM.value: "ul",
    BlockType.ORDERED_LIST_ITEM.value: "ol",
}

NESTABLE_TYPES = frozenset(WRAPPER_TAGS)


def get_tags(block_type: str) -> tuple[str, ...]:
    """Tags that wrap a block's content, outermost first."""
    return BLOCK_TAGS.get(_type_name(block_type), DEFAULT_TAGS)


def get_wrapper_tag(block_type: str) -> str | None:
    """List container tag for a block type, or None for non-list blocks."""
    return WRAPPER_TAGS.get(_type_name(block_type))


def can_have_depth(block_type: str) -> bool:
    """Whether blocks of this type nest by depth (list items only)."""
    return _type_name(block_type) in NESTABLE_TYPES


def start_tags(block_type: str) -> str:
    return "".join(f"<{tag}>" for tag in get_tags(block_type))


def end_tags(block_type: str) -> str:
    return "".join(f"</{tag}>" for tag in reversed(get_tags(block_type)))


def _type_name(block_type: str) -> str:
    return block_type.value if isinstance(block_type, BlockType) else block_type
