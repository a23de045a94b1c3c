"""Build documents from raw JSON/YAML data."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .logger import get_logger
from .models import Block, CharacterMeta, ContentState, EntityInstance, EntityMap
from .schemas import RawBlock, RawContent

logger = get_logger()


def _utf16_index(text: str) -> list[int]:
    """Map every UTF-16 code unit offset in ``text`` to a code point index.

    Characters outside the Basic Multilingual Plane take two code units, so
    both of their offsets map to the same index. The final entry maps the
    offset one past the end to ``len(text)``.
    """
    index: list[int] = []
    for i, char in enumerate(text):
        index.extend([i] * (len(char.encode("utf-16-le")) // 2))
    index.append(len(text))
    return index


def _code_point_span(index: list[int], offset: int, length: int) -> tuple[int, int, bool]:
    """Convert a UTF-16 (offset, length) range to code point (start, end).

    Returns:
        start, end (exclusive) and whether the range ran past the text
    """
    units = len(index) - 1
    end_unit = offset + length
    return index[min(offset, units)], index[min(end_unit, units)], end_unit > units


def _block_characters(raw: RawBlock) -> list[CharacterMeta]:
    """Expand style and entity ranges into per-character metadata.

    Range offsets and lengths count UTF-16 code units. Ranges are clipped to the
    block text. When entity ranges overlap, the later range wins.
    """
    length = len(raw.text)
    index = _utf16_index(raw.text)
    styles: list[set[str]] = [set() for _ in range(length)]
    entities: list[str | None] = [None] * length

    for style_range in raw.inline_style_ranges:
        start, end, clipped = _code_point_span(index, style_range.offset, style_range.length)
        if clipped:
            logger.notice(
                f"Block '{raw.key}': style range {style_range.style} clipped to text length"
            )
        for i in range(start, end):
            styles[i].add(style_range.style)

    for entity_range in raw.entity_ranges:
        start, end, _ = _code_point_span(index, entity_range.offset, entity_range.length)
        for i in range(start, end):
            entities[i] = entity_range.key

    return [
        CharacterMeta(styles=frozenset(char_styles), entity=entity)
        for char_styles, entity in zip(styles, entities, strict=True)
    ]


def content_from_raw(data: dict[str, Any]) -> ContentState:
    """Convert raw document data into a ContentState.

    Args:
        data: Mapping with ``blocks`` and optional ``entityMap`` keys

    Returns:
        ContentState holding the blocks and their entity map

    Raises:
        ValidationError: If the data does not match the raw document schema
    """
    try:
        raw = RawContent.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid document structure: {e}") from e

    entity_map = EntityMap()
    for key, raw_entity in raw.entity_map.items():
        entity = EntityInstance(
            type=raw_entity.type, mutability=raw_entity.mutability, data=raw_entity.data
        )
        entity_map.set(key, entity)

    blocks: list[Block] = []
    for raw_block in raw.blocks:
        for entity_range in raw_block.entity_ranges:
            if entity_range.key not in entity_map:
                logger.notice(
                    f"Block '{raw_block.key}' references unknown entity '{entity_range.key}'"
                )
        blocks.append(
            Block(
                key=raw_block.key,
                type=raw_block.type,
                text=raw_block.text,
                depth=raw_block.depth,
                characters=_block_characters(raw_block),
                data=raw_block.data,
            )
        )

    try:
        return ContentState(block_list=blocks, entity_map=entity_map)
    except ValueError as e:
        raise ValidationError(str(e)) from e


def load_content(file_path: Path | str) -> ContentState:
    """Load a raw document from a JSON or YAML file.

    Files ending in .json are read as JSON; anything else as YAML.

    Raises:
        ParseError: If the file is missing or cannot be parsed
        ValidationError: If the parsed data is not a valid document
    """
    path = Path(file_path)
    if not path.exists():
        raise ParseError(f"File not found: {file_path}")

    try:
        with path.open(encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data: Any = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ParseError(f"Failed to parse document: {e}") from e

    if not isinstance(data, dict):
        raise ParseError("Document must contain a mapping at the root level")

    return content_from_raw(data)  # type: ignore[arg-type]
