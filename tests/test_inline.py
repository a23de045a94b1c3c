"""Tests for inline style and entity rendering."""

import io
import itertools

import pytest

from blockmarkup.inline import InlineRenderer, data_to_attrs
from blockmarkup.logger import setup_logger
from blockmarkup.models import Block, BlockType, EntityInstance, EntityMap, InlineStyle
from blockmarkup.styles import NUMBERED_STYLE_MAP
from tests.conftest import make_block


def render_inline(block: Block, **kwargs: object) -> str:
    """Render one block's inline content with a fresh renderer."""
    return InlineRenderer(**kwargs).render_block(block)


class TestStyleDecoration:
    """Test style tags and their fixed nesting order."""

    def test_plain_text(self) -> None:
        assert render_inline(Block(key="a", text="hello")) == "hello"

    def test_empty_block_renders_break(self) -> None:
        """Empty text renders the line break placeholder, never an empty string."""
        assert render_inline(Block(key="a", text="")) == "<br/>"

    def test_single_styles(self) -> None:
        cases = {
            "BOLD": "<strong>x</strong>",
            "ITALIC": "<em>x</em>",
            "UNDERLINE": "<ins>x</ins>",
            "STRIKETHROUGH": "<del>x</del>",
            "CODE": "<code>x</code>",
        }
        for style, expected in cases.items():
            assert render_inline(make_block("a", "x", styles=[(0, 1, [style])])) == expected

    @pytest.mark.parametrize(
        "order", list(itertools.permutations(["BOLD", "ITALIC", "UNDERLINE"]))
    )
    def test_nesting_order_independent_of_insertion(self, order: tuple[str, ...]) -> None:
        """Bold is innermost, then underline, then italic, whatever order styles were set."""
        spans = [(0, 1, [style]) for style in order]
        result = render_inline(make_block("a", "x", styles=spans))
        assert result == "<em><ins><strong>x</strong></ins></em>"

    def test_all_styles_with_legacy_span(self) -> None:
        """Legacy span is innermost, code outermost."""
        labels = ["CODE", "STRIKETHROUGH", "ITALIC", "UNDERLINE", "BOLD", "TEXT_RED"]
        result = render_inline(make_block("a", "x", styles=[(0, 1, labels)]))
        assert result == (
            "<code><del><em><ins><strong>"
            '<span style="color: rgb(255, 0, 0);">x</span>'
            "</strong></ins></em></del></code>"
        )

    def test_code_style_skipped_in_code_block(self) -> None:
        """Inline code is not wrapped again inside a code block."""
        block = make_block("a", "x = 1", BlockType.CODE, styles=[(0, 5, [InlineStyle.CODE])])
        assert render_inline(block) == "x = 1"

    def test_partial_styles_split_text(self) -> None:
        block = make_block("a", "Hello world", styles=[(0, 5, ["BOLD"]), (6, 11, ["ITALIC"])])
        assert render_inline(block) == "<strong>Hello</strong> <em>world</em>"

    def test_legacy_labels_merge_into_one_span(self) -> None:
        block = make_block("a", "x", styles=[(0, 1, ["TEXT_WHITE", "BACKGROUND_BLACK"])])
        assert render_inline(block) == (
            '<span style="color: #fff; background-color: #000;">x</span>'
        )

    def test_unknown_label_ignored(self) -> None:
        block = make_block("a", "x", styles=[(0, 1, ["GLITTER"])])
        assert render_inline(block) == "x"

    def test_style_table_is_injected(self) -> None:
        block = make_block("a", "x", styles=[(0, 1, ["COLOR_1", "FONT_SIZE_HUGE"])])
        assert render_inline(block) == "x"
        assert render_inline(block, style_table=NUMBERED_STYLE_MAP) == (
            '<span style="color: rgb(255, 0, 0); font-size: 2.5em;">x</span>'
        )


class TestTextEncoding:
    """Test encoding inside styled content."""

    def test_markup_escaped_inside_tags(self) -> None:
        block = make_block("a", "<b>&", styles=[(0, 4, ["BOLD"])])
        assert render_inline(block) == "<strong>&lt;b&gt;&amp;</strong>"

    def test_whitespace_rule_spans_style_boundaries(self) -> None:
        """A double space split across two style runs still gets protected."""
        block = make_block("a", "a  b", styles=[(0, 2, ["BOLD"])])
        assert render_inline(block) == "<strong>a </strong>&nbsp;b"

    def test_newline(self) -> None:
        assert render_inline(Block(key="a", text="one\ntwo")) == "one<br/>\ntwo"


class TestCheckableItems:
    """Test checkbox prefixes for checkable list items."""

    def test_checked(self) -> None:
        block = Block(key="todo", type=BlockType.CHECKABLE_LIST_ITEM, text="Buy milk")
        result = render_inline(block, checked_state={"todo": True})
        assert result == '<input type="checkbox" checked />Buy milk'

    @pytest.mark.parametrize("state", [{}, {"todo": False}, {"todo": None}, None])
    def test_unchecked(self, state: dict[str, bool | None] | None) -> None:
        block = Block(key="todo", type=BlockType.CHECKABLE_LIST_ITEM, text="Buy milk")
        result = render_inline(block, checked_state=state)
        assert result == '<input type="checkbox" />Buy milk'
        assert "checked" not in result

    def test_each_style_piece_gets_checkbox(self) -> None:
        block = make_block(
            "todo", "ab", BlockType.CHECKABLE_LIST_ITEM, styles=[(0, 1, ["BOLD"])]
        )
        result = render_inline(block)
        assert result == '<input type="checkbox" /><strong>a</strong><input type="checkbox" />b'

    def test_checkbox_only_on_checkable_items(self) -> None:
        block = Block(key="todo", type=BlockType.UNORDERED_LIST_ITEM, text="x")
        assert render_inline(block, checked_state={"todo": True}) == "x"


class TestEntities:
    """Test link and image entity wrapping."""

    def test_link_with_all_fields(self) -> None:
        entities = EntityMap(
            {
                "0": EntityInstance(
                    type="LINK",
                    data={"url": "https://x", "rel": "nofollow", "target": "_blank", "title": "X"},
                )
            }
        )
        block = make_block("a", "go", entities=[(0, 2, "0")])
        assert render_inline(block, entities=entities) == (
            '<a href="https://x" rel="nofollow" target="_blank" title="X">go</a>'
        )

    def test_link_omits_null_attributes(self) -> None:
        """A None field is left out of the tag entirely."""
        entities = EntityMap(
            {"0": EntityInstance(type="LINK", data={"url": "https://x", "rel": None})}
        )
        block = make_block("a", "go", entities=[(0, 2, "0")])
        result = render_inline(block, entities=entities)
        assert result == '<a href="https://x">go</a>'
        assert "rel" not in result

    def test_link_drops_unmapped_fields(self) -> None:
        entities = EntityMap(
            {"0": EntityInstance(type="LINK", data={"url": "https://x", "tracking": "abc"})}
        )
        block = make_block("a", "go", entities=[(0, 2, "0")])
        assert render_inline(block, entities=entities) == '<a href="https://x">go</a>'

    def test_link_attribute_values_escaped(self) -> None:
        entities = EntityMap(
            {"0": EntityInstance(type="LINK", data={"url": 'https://x?a=1&b="2"'})}
        )
        block = make_block("a", "go", entities=[(0, 2, "0")])
        assert render_inline(block, entities=entities) == (
            '<a href="https://x?a=1&amp;b=&quot;2&quot;">go</a>'
        )

    def test_link_wraps_styled_pieces(self) -> None:
        entities = EntityMap({"0": EntityInstance(type="LINK", data={"url": "u"})})
        block = make_block(
            "a", "see docs", styles=[(4, 8, ["BOLD"])], entities=[(0, 8, "0")]
        )
        assert render_inline(block, entities=entities) == (
            '<a href="u">see <strong>docs</strong></a>'
        )

    def test_image_fixed_structure(self) -> None:
        """Images ignore the styled run content."""
        entities = EntityMap(
            {
                "0": EntityInstance(
                    type="IMAGE",
                    data={"src": "S", "alt": "A", "data-original-url": "H", "width": "10"},
                )
            }
        )
        block = make_block(
            "a", " ", BlockType.ATOMIC, styles=[(0, 1, ["BOLD", "ITALIC"])], entities=[(0, 1, "0")]
        )
        assert render_inline(block, entities=entities) == '<a href="H"><img src="S" alt="A" /></a>'

    def test_image_missing_fields_render_empty(self) -> None:
        entities = EntityMap({"0": EntityInstance(type="IMAGE", data={"src": "S"})})
        block = make_block("a", "x", entities=[(0, 1, "0")])
        assert render_inline(block, entities=entities) == '<a href=""><img src="S" alt="" /></a>'

    def test_other_entity_type_unwrapped(self) -> None:
        entities = EntityMap({"0": EntityInstance(type="MENTION", data={"user": "bob"})})
        block = make_block("a", "@bob", styles=[(0, 4, ["BOLD"])], entities=[(0, 4, "0")])
        assert render_inline(block, entities=entities) == "<strong>@bob</strong>"

    def test_missing_entity_unwrapped_and_logged(self) -> None:
        stream = io.StringIO()
        setup_logger(1, stream)
        block = make_block("a", "go", entities=[(0, 2, "9")])
        assert render_inline(block, entities=EntityMap()) == "go"
        assert "Entity '9' not found" in stream.getvalue()

    def test_plain_dict_works_as_lookup(self) -> None:
        entities = {"0": EntityInstance(type="LINK", data={"url": "u"})}
        block = make_block("a", "go", entities=[(0, 2, "0")])
        assert render_inline(block, entities=entities) == '<a href="u">go</a>'


class TestDataToAttrs:
    """Test entity data to attribute mapping."""

    def test_link_fields(self) -> None:
        entity = EntityInstance(type="LINK", data={"url": "u", "title": "t", "other": "o"})
        assert data_to_attrs("LINK", entity) == {"href": "u", "title": "t"}

    def test_image_fields(self) -> None:
        entity = EntityInstance(type="IMAGE", data={"src": "s", "data-original-url": "h"})
        assert data_to_attrs("IMAGE", entity) == {"src": "s", "href": "h"}

    def test_unknown_type_maps_nothing(self) -> None:
        entity = EntityInstance(type="EMBED", data={"url": "u"})
        assert data_to_attrs("EMBED", entity) == {}
