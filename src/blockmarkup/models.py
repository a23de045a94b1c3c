"""Data models for blockmarkup documents."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


class BlockType(str, Enum):
    """Block types with dedicated rendering rules.

    Any other type string is valid on a Block and renders as a generic ``div``.
    """

    UNSTYLED = "unstyled"
    PARAGRAPH = "paragraph"
    HEADER_ONE = "header-one"
    HEADER_TWO = "header-two"
    HEADER_THREE = "header-three"
    HEADER_FOUR = "header-four"
    HEADER_FIVE = "header-five"
    HEADER_SIX = "header-six"
    UNORDERED_LIST_ITEM = "unordered-list-item"
    ORDERED_LIST_ITEM = "ordered-list-item"
    CHECKABLE_LIST_ITEM = "checkable-list-item"
    BLOCKQUOTE = "blockquote"
    PULLQUOTE = "pullquote"
    CODE = "code-block"
    ATOMIC = "atomic"


class InlineStyle(str, Enum):
    """Built-in inline styles that map to semantic HTML tags."""

    BOLD = "BOLD"
    CODE = "CODE"
    ITALIC = "ITALIC"
    STRIKETHROUGH = "STRIKETHROUGH"
    UNDERLINE = "UNDERLINE"


class EntityType(str, Enum):
    """Entity types the renderer knows how to wrap."""

    LINK = "LINK"
    IMAGE = "IMAGE"


@dataclass(frozen=True)
class CharacterMeta:
    """Style labels and entity reference attached to a single character."""

    styles: frozenset[str] = frozenset()
    entity: str | None = None

    @classmethod
    def of(cls, *styles: str | InlineStyle, entity: str | None = None) -> CharacterMeta:
        """Build metadata from style labels, accepting enum members or plain strings."""
        return cls(styles=frozenset(_style_label(s) for s in styles), entity=entity)

    def has(self, style: str | InlineStyle) -> bool:
        """Return True if the given style label is active."""
        return _style_label(style) in self.styles


EMPTY_META = CharacterMeta()


@dataclass(frozen=True)
class CharacterRun:
    """A maximal span of characters sharing identical styles and entity.

    ``start`` is inclusive and ``end`` exclusive.
    """

    start: int
    end: int
    styles: frozenset[str] = frozenset()
    entity: str | None = None

    @property
    def meta(self) -> CharacterMeta:
        return CharacterMeta(styles=self.styles, entity=self.entity)

    def __len__(self) -> int:
        return self.end - self.start


def merge_runs(characters: Sequence[CharacterMeta]) -> list[CharacterRun]:
    """Merge per-character metadata into maximal runs of identical metadata.

    Args:
        characters: Metadata for each character of a block's text

    Returns:
        Non-overlapping runs in text order whose lengths sum to len(characters)
    """
    runs: list[CharacterRun] = []
    start = 0
    for index in range(1, len(characters) + 1):
        if index == len(characters) or characters[index] != characters[start]:
            meta = characters[start]
            runs.append(CharacterRun(start, index, meta.styles, meta.entity))
            start = index
    return runs


@dataclass
class Block:
    """One structural unit of a document (paragraph, heading, list item, ...)."""

    key: str
    type: str = BlockType.UNSTYLED.value
    text: str = ""
    depth: int = 0
    characters: list[CharacterMeta] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.type, BlockType):
            self.type = self.type.value
        if self.depth < 0:
            raise ValueError(f"Block '{self.key}' has negative depth {self.depth}")
        if self.characters and len(self.characters) != len(self.text):
            raise ValueError(
                f"Block '{self.key}' has {len(self.characters)} character entries "
                f"for {len(self.text)} characters of text"
            )

    def character_list(self) -> list[CharacterMeta]:
        """Per-character metadata, padded with unstyled entries when absent."""
        if self.characters:
            return self.characters
        return [EMPTY_META] * len(self.text)

    def character_runs(self) -> list[CharacterRun]:
        """Contiguous runs of identical (styles, entity) covering the text exactly."""
        return merge_runs(self.character_list())


@dataclass
class EntityInstance:
    """An out-of-band annotation (link, image, ...) referenced from text."""

    type: str
    mutability: str = "MUTABLE"
    data: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.type, EntityType):
            self.type = self.type.value


class EntityLookup(Protocol):
    """Read-only entity registry consulted while rendering."""

    def get(self, key: str) -> EntityInstance | None:
        """Get an entity by key, or None if not found."""
        ...


class EntityMap:
    """In-memory entity registry keyed by stringified integers."""

    def __init__(self, entities: Mapping[str, EntityInstance] | None = None) -> None:
        self._entities: dict[str, EntityInstance] = dict(entities or {})
        self._next_key = len(self._entities)

    def add(self, entity: EntityInstance) -> str:
        """Register an entity and return its new key."""
        while str(self._next_key) in self._entities:
            self._next_key += 1
        key = str(self._next_key)
        self._entities[key] = entity
        self._next_key += 1
        return key

    def set(self, key: str, entity: EntityInstance) -> None:
        """Register an entity under an explicit key."""
        self._entities[str(key)] = entity

    def get(self, key: str) -> EntityInstance | None:
        return self._entities.get(str(key))

    def __contains__(self, key: object) -> bool:
        return str(key) in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entities)


@dataclass
class ContentState:
    """A document: ordered blocks plus the entity registry they reference."""

    block_list: list[Block] = field(default_factory=list)
    entity_map: EntityMap = field(default_factory=EntityMap)

    def __post_init__(self) -> None:
        counts = Counter(block.key for block in self.block_list)
        duplicates = sorted(key for key, count in counts.items() if count > 1)
        if duplicates:
            raise ValueError(f"Duplicate block keys: {', '.join(duplicates)}")

    @classmethod
    def from_blocks(
        cls, blocks: Iterable[Block], entity_map: EntityMap | None = None
    ) -> ContentState:
        if entity_map is None:
            entity_map = EntityMap()
        return cls(block_list=list(blocks), entity_map=entity_map)

    def blocks(self) -> list[Block]:
        """Blocks in traversal order."""
        return self.block_list

    def get_block(self, key: str) -> Block | None:
        for block in self.block_list:
            if block.key == key:
                return block
        return None

    def plain_text(self, delimiter: str = "\n") -> str:
        """Concatenated block text."""
        return delimiter.join(block.text for block in self.block_list)


def _style_label(style: str | InlineStyle) -> str:
    return style.value if isinstance(style, InlineStyle) else style
