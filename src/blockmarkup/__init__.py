"""Render rich-text block documents to HTML."""

from blockmarkup.config import DepthPolicy, RenderConfig, load_render_config
from blockmarkup.exceptions import BlockMarkupError, DepthError, ParseError, ValidationError
from blockmarkup.generator import MarkupGenerator, render, state_to_html
from blockmarkup.loader import content_from_raw, load_content
from blockmarkup.models import (
    Block,
    BlockType,
    CharacterMeta,
    CharacterRun,
    ContentState,
    EntityInstance,
    EntityLookup,
    EntityMap,
    EntityType,
    InlineStyle,
)
from blockmarkup.styles import NAMED_STYLE_MAP, NUMBERED_STYLE_MAP, StyleTableName

__all__ = [
    "NAMED_STYLE_MAP",
    "NUMBERED_STYLE_MAP",
    "Block",
    "BlockMarkupError",
    "BlockType",
    "CharacterMeta",
    "CharacterRun",
    "ContentState",
    "DepthError",
    "DepthPolicy",
    "EntityInstance",
    "EntityLookup",
    "EntityMap",
    "EntityType",
    "InlineStyle",
    "MarkupGenerator",
    "ParseError",
    "RenderConfig",
    "StyleTableName",
    "ValidationError",
    "content_from_raw",
    "load_content",
    "load_render_config",
    "render",
    "state_to_html",
]
