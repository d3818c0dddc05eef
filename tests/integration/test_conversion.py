"""Integration tests for the Markdown to element tree pipeline."""

import io

import pytest

from mdlayout import to_elements
from mdlayout.api import build_styles
from mdlayout.ast.nodes import Document, Heading, Paragraph as ParagraphNode, Text
from mdlayout.constants import H1_FONT, TABLE_ALTERNATE_BACKGROUND
from mdlayout.elements import (
    Chapter,
    Image,
    ListBlock,
    Paragraph,
    Quote,
    Rule,
    Section,
    Table,
    describe,
    iter_sections,
)
from mdlayout.options import ConversionOptions
from mdlayout.styles import FontDescriptor


@pytest.mark.integration
class TestSampleDocument:
    """Convert a document exercising every construct."""

    @pytest.fixture
    def tree(self, sample_markdown):
        return to_elements(sample_markdown)

    def test_top_level_shape(self, tree):
        """Test content before the first heading stays at the top level."""
        assert isinstance(tree[0], Paragraph)
        assert tree[0].text == "Preface text."
        chapters = [element for element in tree if isinstance(element, Chapter)]
        assert [chapter.title_text for chapter in chapters] == ["Introduction", "Second chapter"]
        assert [chapter.number for chapter in chapters] == [(1,), (2,)]

    def test_section_nesting(self, tree):
        """Test subsections are nested under the nearest lower-level section."""
        sections = list(iter_sections(tree))
        numbers = {section.title_text: section.number for section in sections}

        assert numbers == {
            "Introduction": (1,),
            "Details": (1, 1),
            "Second chapter": (2,),
            "Deep section": (2, 1),
        }

    def test_details_content(self, tree):
        """Test block content lands in the section that precedes it."""
        details = next(section for section in iter_sections(tree) if section.title_text == "Details")
        kinds = [type(child) for child in details.children]

        assert kinds == [Quote, ListBlock, ListBlock, ListBlock, Table, Paragraph, Image, Rule]

        bullets, ordered, tasks = details.children[1:4]
        assert not bullets.ordered
        assert [item.label for item in ordered.items] == ["1.", "2."]
        assert tasks.items[0].symbol is not None

        code = details.children[5]
        assert code.preformatted
        assert "def hello():" in code.text

    def test_table_striping(self, tree):
        """Test the header row is styled and body rows alternate."""
        table = next(
            child
            for section in iter_sections(tree)
            for child in section.children
            if isinstance(child, Table)
        )
        styles = build_styles()
        stripe = styles.resolve_color(TABLE_ALTERNATE_BACKGROUND)

        assert table.columns == 2
        assert table.header_rows == 1
        assert [row.cells[0].background for row in table.rows[1:]] == [None, stripe, None]
        assert table.rows[1].cells[1].alignment == "right"

    def test_idempotent(self, sample_markdown):
        """Test converting the same source twice yields the same tree."""
        first = to_elements(sample_markdown)
        second = to_elements(sample_markdown)

        assert first == second
        assert first is not second

    def test_without_diagrams(self, sample_markdown):
        """Test diagram blocks are highlighted as code when diagrams are disabled."""
        tree = to_elements(sample_markdown, options=ConversionOptions(enable_diagrams=False))

        assert not any(
            isinstance(child, Image) for section in iter_sections(tree) for child in section.children
        )


@pytest.mark.integration
class TestDocumentShapes:
    """Edge cases of document structure."""

    def test_empty_document(self):
        assert to_elements("") == []

    def test_no_headings(self):
        """Test a document without headings yields bare content."""
        tree = to_elements("First.\n\nSecond.\n")

        assert [element.text for element in tree] == ["First.", "Second."]

    def test_headings_only(self):
        """Test empty sections are kept."""
        tree = to_elements("# One\n## Two\n# Three\n")

        assert len(tree) == 2
        assert tree[0].sections[0].title_text == "Two"
        assert tree[1].children == []

    def test_orphan_section_promoted(self):
        """Test a subsection before any chapter becomes a chapter of its own."""
        tree = to_elements("## Orphan\n\nBody\n\n# Chapter\n")

        assert all(isinstance(element, Chapter) for element in tree)
        assert tree[0].level == 2
        assert tree[0].children[0].text == "Body"
        assert [element.number for element in tree] == [(1,), (2,)]

    def test_section_numbers_unique(self):
        """Test subsections of a leading orphan never reuse a chapter number."""
        tree = to_elements("## A\n\n### B\n\n# C\n\nx\n")

        numbered = [(section.title_text, section.number) for section in iter_sections(tree)]
        assert numbered == [("A", (1,)), ("B", (1, 1)), ("C", (2,))]
        assert not any(type(element) is Section for element in tree)

    def test_heading_in_quote_is_paragraph(self):
        """Test headings inside block containers do not open sections."""
        tree = to_elements("> # Quoted title\n> body\n")

        assert isinstance(tree[0], Quote)
        assert tree[0].children[0].style == "heading"
        assert not list(iter_sections(tree))


@pytest.mark.integration
class TestSources:
    """Every accepted source kind converts to the same tree."""

    def test_bytes_path_stream_and_document(self, tmp_path):
        markdown = "# Title\n\nBody text.\n"
        path = tmp_path / "doc.md"
        path.write_text(markdown, encoding="utf-8")
        expected = describe(to_elements(markdown))

        assert describe(to_elements(markdown.encode("utf-8"))) == expected
        assert describe(to_elements(path)) == expected
        assert describe(to_elements(io.BytesIO(markdown.encode("utf-8")))) == expected

        document = Document(
            children=[Heading(level=1, children=[Text("Title")]), ParagraphNode(children=[Text("Body text.")])]
        )
        assert describe(to_elements(document)) == expected


@pytest.mark.integration
class TestCustomStyles:
    """Style registry changes flow into the tree."""

    def test_registered_heading_font(self):
        styles = build_styles()
        styles.register(H1_FONT, FontDescriptor("Courier", 30.0, bold=True))

        tree = to_elements("# Big\n", styles=styles)

        run = tree[0].title[0]
        assert run.font.family == "Courier"
        assert run.font.size == 30.0
