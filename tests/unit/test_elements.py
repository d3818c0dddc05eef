#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_elements.py
"""Unit tests for layout elements, colors and fonts."""

import pytest

from mdlayout.elements import (
    RGB,
    Chapter,
    Font,
    Paragraph,
    Rule,
    Section,
    Table,
    TableRow,
    TextRun,
    describe,
    iter_sections,
)


@pytest.mark.unit
class TestRGB:
    """Tests for the RGB color type."""

    def test_from_hex(self):
        assert RGB.from_hex("#ff8000") == RGB(255, 128, 0)
        assert RGB.from_hex("0a0b0c") == RGB(10, 11, 12)
        assert RGB.from_hex("#fff") == RGB(255, 255, 255)

    def test_hex_property(self):
        assert RGB(255, 128, 0).hex == "#ff8000"

    @pytest.mark.parametrize("value", ["", "#12", "#gggggg", "12345678"])
    def test_invalid_hex(self, value):
        with pytest.raises(ValueError):
            RGB.from_hex(value)

    def test_component_range(self):
        with pytest.raises(ValueError):
            RGB(256, 0, 0)
        with pytest.raises(ValueError):
            RGB(0, -1, 0)

    def test_to_reportlab(self):
        color = RGB(255, 0, 0).to_reportlab()
        assert color.red == pytest.approx(1.0)
        assert color.green == pytest.approx(0.0)


@pytest.mark.unit
class TestFont:
    """Tests for resolved fonts."""

    @pytest.mark.parametrize(
        "bold,italic,face",
        [(False, False, "Helvetica"), (True, False, "Helvetica-Bold"), (True, True, "Helvetica-BoldOblique")],
    )
    def test_face(self, bold, italic, face):
        assert Font("Helvetica", 12, bold=bold, italic=italic).face == face

    def test_unknown_family_face(self):
        assert Font("MyCustomFont", 12, bold=True).face == "MyCustomFont"

    def test_combine_accumulates_flags(self):
        font = Font("Helvetica", 12, bold=True)
        combined = font.combine(italic=True)
        assert combined.bold and combined.italic
        assert not font.italic

    def test_combine_color(self):
        red = RGB(255, 0, 0)
        assert Font("Helvetica", 12).combine(underline=True, color=red).color == red

    def test_derive(self):
        assert Font("Helvetica", 12).derive(size=20).size == 20


@pytest.mark.unit
class TestSections:
    """Tests for sections and tree helpers."""

    def test_title_text_and_sections(self):
        font = Font("Helvetica", 12)
        child = Section(title=[TextRun("Child", font)], level=2)
        chapter = Chapter(title=[TextRun("Top", font)], level=1)
        chapter.add(Paragraph(children=[TextRun("x", font)]))
        chapter.add(child)
        assert chapter.title_text == "Top"
        assert chapter.sections == [child]
        assert list(iter_sections([chapter])) == [chapter, child]

    def test_chapter_from_section(self):
        section = Section(title=[], level=1, children=[Rule()])
        chapter = Chapter.from_section(section)
        assert isinstance(chapter, Chapter)
        assert chapter.children == [Rule()]

    def test_table_header_rows(self):
        table = Table(columns=1, rows=[TableRow(header=True), TableRow(), TableRow()])
        assert table.header_rows == 1

    def test_describe(self):
        font = Font("Helvetica", 12)
        chapter = Chapter(title=[TextRun("Intro", font)], number=(1,))
        chapter.add(Paragraph(children=[TextRun("Hello", font)]))
        dump = describe([chapter])
        assert dump.splitlines() == ['Chapter 1 "Intro"', '    Paragraph "Hello"']
