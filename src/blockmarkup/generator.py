"""HTML markup generation from block documents."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .config import DepthPolicy, RenderConfig
from .exceptions import DepthError
from .inline import InlineRenderer
from .logger import get_logger
from .models import Block, ContentState, EntityLookup
from .tags import can_have_depth, end_tags, get_wrapper_tag, start_tags

logger = get_logger()

# (index of the next unconsumed block, output fragments)
ScopeResult = tuple[int, list[str]]


class MarkupGenerator:
    """Turn a flat, depth-annotated block sequence into nested HTML.

    List nesting is recovered by lookahead: a list item followed by a list item
    one level deeper gets that run of deeper items rendered as a nested list
    inside its own ``<li>``.

    Each call to generate() walks the blocks with fresh state, so one generator
    may be reused and independent generators may run concurrently.
    """

    def __init__(
        self,
        content: ContentState,
        checked_state: Mapping[str, bool | None] | None = None,
        entities: EntityLookup | None = None,
        config: RenderConfig | None = None,
    ):
        """Initialize the generator.

        Args:
            content: Document to render
            checked_state: Block key -> checked flag for checkable list items
            entities: Entity registry (defaults to the document's own entity map)
            config: Rendering configuration (defaults to RenderConfig())
        """
        self.content = content
        self.checked_state = checked_state or {}
        self.entities = entities if entities is not None else content.entity_map
        self.config = config or RenderConfig()
        self.inline = InlineRenderer(
            entities=self.entities,
            checked_state=self.checked_state,
            style_table=self.config.resolved_style_table(),
            line_break=self.config.line_break,
        )

    def generate(self) -> str:
        """Render the whole document.

        Returns:
            HTML fragment with leading/trailing whitespace trimmed
        """
        blocks = self.content.blocks()
        logger.debug(f"Rendering {len(blocks)} blocks")
        _, fragments = self._render_scope(blocks, 0, None, 0)
        return "".join(fragments).strip()

    def _render_scope(
        self, blocks: Sequence[Block], cursor: int, depth: int | None, indent_level: int
    ) -> ScopeResult:
        """Render consecutive blocks at one depth, managing list wrapper tags.

        Args:
            blocks: All document blocks
            cursor: Index of the first block in this scope
            depth: Depth every block in the scope must have (None: top level, any depth)
            indent_level: Indentation of the scope's outermost tags

        Returns:
            Index of the first block not in this scope, and the rendered fragments
        """
        output: list[str] = []
        wrapper_tag: str | None = None

        while cursor < len(blocks) and (depth is None or blocks[cursor].depth == depth):
            new_wrapper_tag = get_wrapper_tag(blocks[cursor].type)
            if wrapper_tag != new_wrapper_tag:
                if wrapper_tag:
                    indent_level -= 1
                    output.append(self._indent(indent_level) + f"</{wrapper_tag}>\n")
                if new_wrapper_tag:
                    output.append(self._indent(indent_level) + f"<{new_wrapper_tag}>\n")
                    indent_level += 1
                wrapper_tag = new_wrapper_tag

            cursor, block_output = self._render_block(blocks, cursor, indent_level)
            output.extend(block_output)

        if wrapper_tag:
            indent_level -= 1
            output.append(self._indent(indent_level) + f"</{wrapper_tag}>\n")
        return cursor, output

    def _render_block(
        self, blocks: Sequence[Block], cursor: int, indent_level: int
    ) -> ScopeResult:
        """Render one block plus any nested list that follows it."""
        block = blocks[cursor]
        logger.trace(f"Block '{block.key}' ({block.type}, depth {block.depth})")

        output = [
            self._indent(indent_level),
            start_tags(block.type),
            self.inline.render_block(block),
        ]

        nested_depth = self._nested_depth(block, blocks[cursor + 1 : cursor + 2])
        if nested_depth is None:
            cursor += 1
        else:
            output.append("\n")
            cursor += 1
            while True:
                cursor, child_output = self._render_scope(
                    blocks, cursor, nested_depth, indent_level + 1
                )
                output.extend(child_output)
                nested_depth = self._continued_depth(block, blocks[cursor : cursor + 1])
                if nested_depth is None:
                    break
            output.append(self._indent(indent_level))

        output.append(end_tags(block.type) + "\n")
        return cursor, output

    def _nested_depth(self, block: Block, following: Sequence[Block]) -> int | None:
        """Depth of the nested list that starts after ``block``, if any.

        Raises:
            DepthError: Under the strict policy, if the next block is a list item
                more than one level deeper than ``block``
        """
        if not following:
            return None
        next_block = following[0]
        policy = self.config.depth_policy
        if (
            policy == DepthPolicy.STRICT
            and can_have_depth(next_block.type)
            and next_block.depth > block.depth + 1
        ):
            raise DepthError(next_block.key, next_block.depth, block.depth)

        if not can_have_depth(block.type):
            return None
        if next_block.depth == block.depth + 1:
            return next_block.depth
        if next_block.depth <= block.depth:
            return None
        if policy == DepthPolicy.NEST:
            logger.notice(
                f"Block '{next_block.key}' jumps from depth {block.depth} to "
                f"{next_block.depth}; nesting it under '{block.key}'"
            )
            return next_block.depth
        return None

    def _continued_depth(self, block: Block, following: Sequence[Block]) -> int | None:
        """Depth of another nested scope still owed to ``block`` after a scope ends.

        Only the NEST policy produces one: when a deeper-than-+1 run ends on a
        block that is shallower than that run but still deeper than ``block``.
        """
        if self.config.depth_policy != DepthPolicy.NEST or not following:
            return None
        next_block = following[0]
        if next_block.depth <= block.depth:
            return None
        logger.notice(
            f"Block '{next_block.key}' at depth {next_block.depth} follows a deeper list; "
            f"nesting it under '{block.key}'"
        )
        return next_block.depth

    def _indent(self, indent_level: int) -> str:
        return self.config.indent * indent_level


def render(
    content: ContentState,
    checked_state: Mapping[str, bool | None] | None = None,
    *,
    entities: EntityLookup | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Render a document to an HTML fragment.

    Args:
        content: Document to render
        checked_state: Block key -> checked flag for checkable list items
        entities: Entity registry (defaults to the document's own entity map)
        config: Rendering configuration

    Returns:
        HTML string, trimmed, without any <html>/<body> wrapper
    """
    return MarkupGenerator(content, checked_state, entities=entities, config=config).generate()


def state_to_html(
    content: ContentState, checked_state: Mapping[str, bool | None] | None = None
) -> str:
    """Render a document with default configuration."""
    return render(content, checked_state)
