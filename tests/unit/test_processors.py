#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_processors.py
"""Unit tests for the node processors.

Tests cover:
- Font stacking for inline styles, links and code spans
- Heading fonts and standalone sections
- Verbatim blocks through the highlight and diagram transforms
- Table state (header/body styling, zebra striping)
- Lists, quotes and the render context balance after every node

"""

import pytest

from mdlayout.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    Heading,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Paragraph,
    SpecialText,
    Strikethrough,
    Strong,
    Table,
    TableBody,
    TableCell,
    TableHeader,
    TableRow,
    Text,
    ThematicBreak,
)
from mdlayout.constants import (
    BLACK,
    DEFAULT_BULLET_SYMBOL,
    H2_FONT,
    H4_FONT,
    INLINE_CODE_BACKGROUND,
    LINK_COLOR,
    TABLE_ALTERNATE_BACKGROUND,
    TASK_CHECKED_SYMBOL,
    TASK_UNCHECKED_SYMBOL,
    WHITE,
)
from mdlayout.elements import RGB, Cell, ListBlock, Quote, Rule, Section
from mdlayout.elements import Image as ImageElement
from mdlayout.elements import Paragraph as ParagraphElement
from mdlayout.elements import Table as TableElement
from mdlayout.exceptions import NoOpenTableError, StructuralError
from mdlayout.processors import Processor


def text(content):
    return Text(content=content)


def table(*body_rows, header=("H1", "H2")):
    head = TableHeader(children=[TableRow(children=[TableCell(children=[text(h)]) for h in header])])
    body = TableBody(children=[TableRow(children=[TableCell(children=[text(c)]) for c in row]) for row in body_rows])
    return Table(children=[head, body])


@pytest.mark.unit
class TestInlineProcessors:
    """Text runs and font stacking."""

    def test_text_uses_current_font(self, dispatcher, styles):
        [run] = dispatcher.process(1, text("hello"))
        assert run.text == "hello"
        assert run.font == styles.default_font()

    def test_special_text_printed_literally(self, dispatcher):
        [run] = dispatcher.process(1, SpecialText(content="<br>"))
        assert run.text == "<br>"

    def test_nested_styles_accumulate(self, dispatcher, render_context):
        node = Strong(children=[text("a"), Emphasis(children=[text("b")])])
        a, b = dispatcher.process(1, node)
        assert a.font.bold and not a.font.italic
        assert b.font.bold and b.font.italic
        render_context.assert_balanced()

    def test_strikethrough(self, dispatcher):
        [run] = dispatcher.process(1, Strikethrough(children=[text("gone")]))
        assert run.font.strike

    def test_code_span(self, dispatcher, styles):
        [run] = dispatcher.process(1, Code(content="x = 1"))
        assert run.text == "x = 1"
        assert run.font.family == "Courier"
        assert run.background == styles.resolve_color(INLINE_CODE_BACKGROUND)

    def test_link(self, dispatcher, styles, render_context):
        [run] = dispatcher.process(1, Link(url="https://example.com", children=[text("site")]))
        assert run.link == "https://example.com"
        assert run.font.underline
        assert run.font.color == styles.resolve_color(LINK_COLOR)
        render_context.assert_balanced()

    def test_empty_link_shows_url(self, dispatcher):
        [run] = dispatcher.process(1, Link(url="https://example.com"))
        assert run.text == "https://example.com"

    def test_line_breaks(self, dispatcher):
        [soft] = dispatcher.process(1, LineBreak(soft=True))
        [hard] = dispatcher.process(1, LineBreak(soft=False))
        assert soft.text == " "
        assert hard.text == "\n"

    def test_image(self, dispatcher):
        [image] = dispatcher.process(1, Image(url="pic.png", alt_text="A picture"))
        assert isinstance(image, ImageElement)
        assert image.uri == "pic.png"
        assert image.alt_text == "A picture"


@pytest.mark.unit
class TestBlockProcessors:
    """Paragraphs, headings, quotes and rules."""

    def test_paragraph(self, dispatcher):
        [paragraph] = dispatcher.process(1, Paragraph(children=[text("a"), text("b")]))
        assert isinstance(paragraph, ParagraphElement)
        assert paragraph.text == "ab"

    def test_paragraph_lifts_images(self, dispatcher):
        node = Paragraph(children=[text("before"), Image(url="a.png"), text("after")])
        before, image, after = dispatcher.process(1, node)
        assert before.text == "before"
        assert isinstance(image, ImageElement)
        assert after.text == "after"

    def test_heading_builds_section(self, dispatcher, styles, render_context):
        [section] = dispatcher.process(1, Heading(level=2, children=[text("Title")]))
        assert isinstance(section, Section)
        assert section.level == 2
        assert section.title_text == "Title"
        assert section.title[0].font == styles.resolve(H2_FONT)
        assert section.children == []
        render_context.assert_balanced()

    def test_deep_heading_uses_nearest_font(self, dispatcher, styles):
        [section] = dispatcher.process(1, Heading(level=6, children=[text("Deep")]))
        assert section.title[0].font == styles.resolve(H4_FONT)

    def test_heading_in_quote_becomes_paragraph(self, dispatcher):
        quote = BlockQuote(children=[Heading(level=1, children=[text("Inside")])])
        [element] = dispatcher.process(1, quote)
        assert isinstance(element, Quote)
        [heading] = element.children
        assert isinstance(heading, ParagraphElement)
        assert heading.style == "heading"
        assert heading.text == "Inside"

    def test_quote_is_italic(self, dispatcher):
        [quote] = dispatcher.process(1, BlockQuote(children=[Paragraph(children=[text("q")])]))
        assert quote.children[0].children[0].font.italic

    def test_thematic_break(self, dispatcher):
        assert dispatcher.process(1, ThematicBreak()) == [Rule()]


@pytest.mark.unit
class TestCodeBlocks:
    """Verbatim blocks go through the content transforms."""

    def test_highlighted_code(self, dispatcher, render_context):
        code = 'def hello():\n    return "world"\n'
        [block] = dispatcher.process(1, CodeBlock(content=code, language="python"))
        assert isinstance(block, ParagraphElement)
        assert block.preformatted
        assert block.style == "code"
        assert block.text == code.rstrip("\n")
        assert all(run.font.family == "Courier" for run in block.children)
        assert len({run.font for run in block.children}) > 1
        render_context.assert_balanced()

    def test_unknown_language_is_plain_text(self, dispatcher):
        [block] = dispatcher.process(1, CodeBlock(content="just text", language="no-such-language"))
        assert block.text == "just text"

    def test_no_language(self, dispatcher):
        [block] = dispatcher.process(1, CodeBlock(content="plain\n  indented"))
        assert block.text == "plain\n  indented"

    def test_diagram_rendered_as_image(self, dispatcher):
        diagram = "+---+    +---+\n| A |--->| B |\n+---+    +---+\n"
        [image] = dispatcher.process(1, CodeBlock(content=diagram, language="ditaa"))
        assert isinstance(image, ImageElement)
        assert image.data.startswith(b"\x89PNG")
        assert image.scale == 0.5

    def test_diagram_tag_case_insensitive(self, dispatcher):
        [image] = dispatcher.process(1, CodeBlock(content="+--+\n|  |\n+--+", language="DITAA"))
        assert isinstance(image, ImageElement)

    @pytest.mark.parametrize("content", ["+--+\n|\x07|\n+--+", "", "   \n  "])
    def test_malformed_diagram_falls_back_to_highlighting(self, dispatcher, render_context, content):
        [block] = dispatcher.process(1, CodeBlock(content=content, language="ditaa"))
        assert isinstance(block, ParagraphElement)
        assert block.preformatted
        assert [block] == dispatcher.transforms.default.process(None, content)
        render_context.assert_balanced()


@pytest.mark.unit
class TestTableProcessors:
    """Header/body styling and alternating row backgrounds."""

    def test_structure(self, dispatcher, render_context):
        [result] = dispatcher.process(1, table(("a", "1"), ("b", "2"), ("c", "3")))
        assert isinstance(result, TableElement)
        assert result.columns == 2
        assert len(result.rows) == 4
        assert result.header_rows == 1
        assert all(isinstance(cell, Cell) for row in result.rows for cell in row.cells)
        render_context.assert_balanced()

    def test_header_style(self, dispatcher):
        [result] = dispatcher.process(1, table(("a", "1")))
        header = result.rows[0]
        assert header.header
        for cell in header.cells:
            assert cell.background == RGB.of(BLACK)
            assert cell.font.bold
            assert cell.font.color == RGB.of(WHITE)
            assert cell.children[0].font == cell.font

    def test_zebra_striping(self, dispatcher, styles):
        [result] = dispatcher.process(1, table(("a", "1"), ("b", "2"), ("c", "3")))
        stripe = styles.resolve_color(TABLE_ALTERNATE_BACKGROUND)
        backgrounds = [row.cells[0].background for row in result.rows[1:]]
        assert backgrounds == [None, stripe, None]

    def test_body_font(self, dispatcher, styles):
        [result] = dispatcher.process(1, table(("a", "1")))
        assert result.rows[1].cells[0].font == styles.default_font()

    def test_short_rows_padded(self, dispatcher):
        [result] = dispatcher.process(1, table(("only",)))
        assert len(result.rows[1].cells) == 2
        assert result.rows[1].cells[1].children == []

    def test_alignment(self, dispatcher):
        node = Table(
            children=[TableBody(children=[TableRow(children=[TableCell(children=[text("r")], alignment="right")])])]
        )
        [result] = dispatcher.process(1, node)
        assert result.rows[0].cells[0].alignment == "right"

    def test_row_outside_table(self, dispatcher):
        with pytest.raises(NoOpenTableError):
            dispatcher.process(1, TableRow(children=[TableCell(children=[text("x")])]))

    def test_cell_outside_table(self, dispatcher):
        with pytest.raises(NoOpenTableError):
            dispatcher.process(1, TableCell(children=[text("x")]))

    def test_row_directly_under_table(self, dispatcher, render_context):
        node = Table(children=[TableRow(children=[TableCell(children=[text("x")])])])
        with pytest.raises(StructuralError, match="TableHeader or TableBody") as exc_info:
            dispatcher.process(1, node)
        assert not isinstance(exc_info.value, NoOpenTableError)
        render_context.assert_balanced()

    def test_nested_tables_restore_outer_state(self, dispatcher, render_context):
        inner = table(("i", "j"))
        outer = Table(children=[TableBody(children=[TableRow(children=[TableCell(children=[inner, text("after")])])])])
        [result] = dispatcher.process(1, outer)
        cell = result.rows[0].cells[0]
        assert isinstance(cell.children[0], TableElement)
        assert cell.children[1].text == "after"
        render_context.assert_balanced()

    def test_heading_in_cell_becomes_paragraph(self, dispatcher):
        node = Table(
            children=[TableBody(children=[TableRow(children=[TableCell(children=[Heading(children=[text("h")])])])])]
        )
        [result] = dispatcher.process(1, node)
        assert result.rows[0].cells[0].children[0].style == "heading"


@pytest.mark.unit
class TestListProcessors:
    """Bullets, numbers and task symbols."""

    def test_unordered_bullets(self, dispatcher):
        node = List(children=[ListItem(children=[Paragraph(children=[text(t)])]) for t in ("a", "b")])
        [block] = dispatcher.process(1, node)
        assert isinstance(block, ListBlock)
        assert not block.ordered
        assert [item.symbol.name for item in block.items] == [DEFAULT_BULLET_SYMBOL] * 2
        assert block.items[0].children[0].text == "a"

    def test_ordered_labels(self, dispatcher):
        node = List(ordered=True, start=3, children=[ListItem(children=[Paragraph(children=[text("x")])])] * 2)
        [block] = dispatcher.process(1, node)
        assert [item.label for item in block.items] == ["3.", "4."]

    def test_task_symbols(self, dispatcher):
        node = List(
            children=[
                ListItem(children=[Paragraph(children=[text("done")])], task_status="checked"),
                ListItem(children=[Paragraph(children=[text("todo")])], task_status="unchecked"),
            ]
        )
        [block] = dispatcher.process(1, node)
        assert [item.symbol.name for item in block.items] == [TASK_CHECKED_SYMBOL, TASK_UNCHECKED_SYMBOL]

    def test_nested_list(self, dispatcher, render_context):
        inner = List(children=[ListItem(children=[Paragraph(children=[text("inner")])])])
        node = List(children=[ListItem(children=[Paragraph(children=[text("outer")]), inner])])
        [block] = dispatcher.process(1, node)
        assert isinstance(block.items[0].children[1], ListBlock)
        render_context.assert_balanced()


class FailingProcessor(Processor):
    def process(self, depth, node, ctx):
        raise RuntimeError("processor failure")


@pytest.mark.unit
class TestContextBalanceOnFailure:
    """Scopes are unwound even when a nested processor raises."""

    def test_failure_inside_table_cell(self, dispatcher, render_context):
        dispatcher.registry.register(Text, FailingProcessor())
        node = table(("a",))
        with pytest.raises(RuntimeError):
            dispatcher.process(1, Strong(children=[Link(url="u", children=[node])]))
        render_context.assert_balanced()
