#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/elements.py
"""Abstract layout elements produced by the conversion engine.

Elements are what a page-layout backend consumes: styled text runs grouped in
paragraphs, sections nested into chapters, tables, images, lists and inline
symbols. They carry resolved fonts and colors but no page geometry.

A Chapter is a Section at nesting depth 0; chapters only ever appear at the
top level of an assembled tree, every other section is reachable through the
``children`` of its enclosing section.

"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from reportlab.lib.colors import Color
from reportlab.lib.fonts import tt2ps

from mdlayout.constants import BLACK, Alignment


@dataclass(frozen=True)
class RGB:
    """Immutable 8-bit RGB color."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} component must be within 0..255, got {value}")

    @classmethod
    def of(cls, components: tuple[int, int, int]) -> RGB:
        """Build a color from a palette triplet."""
        return cls(*components)

    @classmethod
    def from_hex(cls, value: str) -> RGB:
        """Parse ``#rrggbb``, ``rrggbb`` or ``#rgb`` notation.

        Raises
        ------
        ValueError
            If the value is not a hexadecimal color

        """
        text = value.strip().lstrip("#")
        if len(text) == 3:
            text = "".join(ch * 2 for ch in text)
        if len(text) != 6:
            raise ValueError(f"Invalid hex color: {value!r}")
        try:
            return cls(int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
        except ValueError as e:
            raise ValueError(f"Invalid hex color: {value!r}") from e

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def to_reportlab(self) -> Color:
        """Return the equivalent reportlab color."""
        return Color(self.red / 255.0, self.green / 255.0, self.blue / 255.0)


@dataclass(frozen=True)
class Font:
    """A resolved, renderable font.

    Parameters
    ----------
    family : str
        Base font family (e.g. "Helvetica", "Courier")
    size : float
        Size in points
    bold, italic, underline, strike : bool
        Style flags
    color : RGB
        Foreground color

    """

    family: str
    size: float
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strike: bool = False
    color: RGB = field(default_factory=lambda: RGB.of(BLACK))

    @property
    def face(self) -> str:
        """Concrete face name for the family and weight/posture flags.

        Families unknown to reportlab's font map are returned unchanged.
        """
        try:
            return tt2ps(self.family, int(self.bold), int(self.italic))
        except ValueError:
            return self.family

    def derive(self, **changes: object) -> Font:
        """Return a copy with the given attributes replaced."""
        return replace(self, **changes)  # type: ignore[arg-type]

    def combine(
        self,
        bold: bool = False,
        italic: bool = False,
        underline: bool = False,
        strike: bool = False,
        color: Optional[RGB] = None,
    ) -> Font:
        """Add style flags on top of this font; flags already set are kept."""
        return replace(
            self,
            bold=self.bold or bold,
            italic=self.italic or italic,
            underline=self.underline or underline,
            strike=self.strike or strike,
            color=color if color is not None else self.color,
        )


class Element:
    """Base class for layout elements."""


@dataclass(frozen=True)
class TextRun(Element):
    """Run of text sharing a single font.

    Parameters
    ----------
    text : str
        The text
    font : Font
        Font used for the whole run
    background : RGB or None
        Highlight color behind the run (inline code)
    link : str or None
        Hyperlink target

    """

    text: str
    font: Font
    background: Optional[RGB] = None
    link: Optional[str] = None


@dataclass(frozen=True)
class Symbol(Element):
    """Inline icon identified by an icon-font glyph name (e.g. "circle")."""

    name: str
    size: float
    color: RGB


@dataclass
class Paragraph(Element):
    """Block of inline elements.

    Parameters
    ----------
    children : list of Element
        Text runs, symbols and inline images
    alignment : {"left", "center", "right"}
        Horizontal alignment
    background : RGB or None
        Block background (code blocks)
    preformatted : bool
        Whether whitespace and newlines are kept as-is
    style : str
        Semantic hint for the backend ("body", "code", "heading")

    """

    children: list[Element] = field(default_factory=list)
    alignment: Alignment = "left"
    background: Optional[RGB] = None
    preformatted: bool = False
    style: str = "body"

    @property
    def text(self) -> str:
        return "".join(child.text for child in self.children if isinstance(child, TextRun))


@dataclass
class Section(Element):
    """Titled container nested under the nearest enclosing section.

    Parameters
    ----------
    title : list of Element
        Processed inline content of the heading
    level : int
        Heading level the section was created from
    children : list of Element
        Content and sub-sections in document order
    number : tuple of int
        Outline number assigned during tree assembly (e.g. ``(1, 2)``)

    """

    title: list[Element] = field(default_factory=list)
    level: int = 1
    children: list[Element] = field(default_factory=list)
    number: tuple[int, ...] = ()

    def add(self, element: Element) -> None:
        """Append a child element."""
        self.children.append(element)

    @property
    def title_text(self) -> str:
        return "".join(child.text for child in self.title if isinstance(child, TextRun))

    @property
    def sections(self) -> list[Section]:
        """Direct sub-sections."""
        return [child for child in self.children if isinstance(child, Section)]


@dataclass
class Chapter(Section):
    """Top-level section, attached directly to the document root."""

    @classmethod
    def from_section(cls, section: Section) -> Chapter:
        """Promote a section to a chapter, keeping its title and children."""
        return cls(title=section.title, level=section.level, children=section.children, number=section.number)


@dataclass
class Cell(Element):
    """Table cell with its own font and background."""

    children: list[Element] = field(default_factory=list)
    font: Optional[Font] = None
    background: Optional[RGB] = None
    alignment: Alignment = "left"


@dataclass
class TableRow(Element):
    """Row of cells; ``header`` marks rows coming from the table header."""

    cells: list[Cell] = field(default_factory=list)
    header: bool = False


@dataclass
class Table(Element):
    """Grid of cells.

    Parameters
    ----------
    columns : int
        Number of columns
    rows : list of TableRow
        Header rows first, then body rows

    """

    columns: int = 0
    rows: list[TableRow] = field(default_factory=list)

    @property
    def header_rows(self) -> int:
        return sum(1 for row in self.rows if row.header)


@dataclass
class Image(Element):
    """Embedded image, either inline bytes or a reference to a file/URL.

    Parameters
    ----------
    data : bytes or None
        Encoded image (PNG) when the image was produced by a transform
    uri : str or None
        Location of an external image
    width, height : int or None
        Pixel size of ``data``
    scale : float
        Display scale factor applied by the backend
    alt_text : str
        Alternative text

    """

    data: Optional[bytes] = None
    uri: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    scale: float = 1.0
    alt_text: str = ""


@dataclass
class ListEntry(Element):
    """List item: a leading symbol or number followed by block content."""

    children: list[Element] = field(default_factory=list)
    symbol: Optional[Symbol] = None
    label: Optional[str] = None


@dataclass
class ListBlock(Element):
    """Ordered or unordered list."""

    items: list[ListEntry] = field(default_factory=list)
    ordered: bool = False
    start: int = 1


@dataclass
class Quote(Element):
    """Indented block quotation."""

    children: list[Element] = field(default_factory=list)


@dataclass
class Rule(Element):
    """Horizontal rule."""


def iter_sections(elements: Iterable[Element]) -> Iterable[Section]:
    """Yield every section of a tree in document order (depth first)."""
    for element in elements:
        if isinstance(element, Section):
            yield element
            yield from iter_sections(element.children)


def describe(elements: Iterable[Element], indent: int = 0) -> str:
    """Return an indented, human-readable dump of an element tree.

    Examples
    --------
        >>> print(describe(tree))
        Chapter 1 "Intro"
            Paragraph "Some text"

    """
    lines: list[str] = []
    pad = "    " * indent
    for element in elements:
        if isinstance(element, Section):
            label = " ".join(filter(None, [type(element).__name__, ".".join(str(n) for n in element.number)]))
            lines.append(f'{pad}{label} "{element.title_text}"')
            lines.append(describe(element.children, indent + 1))
        elif isinstance(element, Paragraph):
            kind = "Code" if element.preformatted else "Paragraph"
            lines.append(f'{pad}{kind} "{_shorten(element.text)}"')
        elif isinstance(element, TextRun):
            lines.append(f'{pad}TextRun "{_shorten(element.text)}"')
        elif isinstance(element, Table):
            lines.append(f"{pad}Table {len(element.rows)}x{element.columns}")
        elif isinstance(element, Image):
            source = element.uri or f"{len(element.data or b'')} bytes"
            lines.append(f"{pad}Image {source} scale={element.scale:g}")
        elif isinstance(element, ListBlock):
            lines.append(f"{pad}List ordered={element.ordered} items={len(element.items)}")
            for item in element.items:
                lines.append(describe(item.children, indent + 1))
        elif isinstance(element, Quote):
            lines.append(f"{pad}Quote")
            lines.append(describe(element.children, indent + 1))
        else:
            lines.append(f"{pad}{type(element).__name__}")
    return "\n".join(line for line in lines if line)


def _shorten(text: str, width: int = 40) -> str:
    text = text.replace("\n", " ")
    return text if len(text) <= width else text[: width - 3] + "..."
