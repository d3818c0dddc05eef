#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/backends/pdf.py
"""PDF layout backend using ReportLab.

This module lays out an assembled element tree with ReportLab's Platypus
framework. All fonts and colors are already resolved in the elements, so the
backend only translates them into Platypus flowables and paragraph markup;
pagination and PDF encoding are ReportLab's job.

"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import IO, Any, Optional, Union
from urllib.parse import urlparse
from xml.sax.saxutils import escape

from mdlayout.constants import (
    DEFAULT_BULLET_SYMBOL,
    DEPS_PDF_RENDER,
    GRAY,
    TASK_CHECKED_SYMBOL,
    TASK_UNCHECKED_SYMBOL,
)
from mdlayout.elements import (
    RGB,
    Cell,
    Element,
    Font,
    Image,
    ListBlock,
    Paragraph,
    Quote,
    Rule,
    Section,
    Symbol,
    Table,
    TextRun,
)
from mdlayout.exceptions import RenderingError
from mdlayout.options.pdf import PdfBackendOptions
from mdlayout.styles import StyleRegistry
from mdlayout.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

# ZapfDingbats glyphs for the icon names produced by the list processors
SYMBOL_GLYPHS = {
    DEFAULT_BULLET_SYMBOL: "l",
    TASK_CHECKED_SYMBOL: "4",
    TASK_UNCHECKED_SYMBOL: "o",
}
SYMBOL_FONT = "ZapfDingbats"

QUOTE_INDENT = 20.0
LEADING_FACTOR = 1.2


class PdfBackend:
    """Render element trees to PDF.

    Parameters
    ----------
    options : PdfBackendOptions, optional
        Page settings
    styles : StyleRegistry, optional
        Used for the base font of elements that carry no font of their own

    Examples
    --------
        >>> from mdlayout.api import to_elements
        >>> data = PdfBackend().render(to_elements("# Hello"))
        >>> data[:4]
        b'%PDF'

    """

    def __init__(self, options: Optional[PdfBackendOptions] = None, styles: Optional[StyleRegistry] = None):
        self.options = options or PdfBackendOptions()
        self.styles = styles or StyleRegistry().init_defaults()
        self._style_count = 0

    @requires_dependencies("pdf", DEPS_PDF_RENDER)
    def render(self, elements: list[Element], output: Union[str, Path, IO[bytes], None] = None) -> Optional[bytes]:
        """Lay out ``elements`` and write the PDF.

        Parameters
        ----------
        elements : list of Element
            Assembled element tree
        output : str, Path, IO[bytes] or None
            Destination; when None the PDF bytes are returned

        Raises
        ------
        RenderingError
            If ReportLab fails to build the document

        """
        from reportlab.lib.pagesizes import A4, LEGAL, LETTER
        from reportlab.platypus import SimpleDocTemplate

        page_sizes = {"letter": LETTER, "a4": A4, "legal": LEGAL}
        doc_kwargs: dict[str, Any] = {
            "pagesize": page_sizes[self.options.page_size],
            "rightMargin": self.options.margin_right,
            "leftMargin": self.options.margin_left,
            "topMargin": self.options.margin_top,
            "bottomMargin": self.options.margin_bottom,
        }
        if self.options.creator:
            doc_kwargs["creator"] = self.options.creator
        if self.options.title:
            doc_kwargs["title"] = self.options.title

        buffer = io.BytesIO()
        try:
            flowables = self._flowables(elements)
            SimpleDocTemplate(buffer, **doc_kwargs).build(flowables)
        except RenderingError:
            raise
        except Exception as e:
            raise RenderingError(f"Failed to render PDF: {e!r}", rendering_stage="layout", original_error=e) from e

        data = buffer.getvalue()
        if output is None:
            return data
        if isinstance(output, (str, Path)):
            Path(output).write_bytes(data)
        else:
            output.write(data)
        logger.info(f"Wrote {len(data)} bytes of PDF")
        return None

    # ------------------------------------------------------------------
    # Block elements
    # ------------------------------------------------------------------

    def _flowables(self, elements: list[Element]) -> list[Any]:
        from reportlab.platypus import HRFlowable, Indenter, Spacer

        flowables: list[Any] = []
        inline: list[Element] = []

        def flush_inline() -> None:
            if inline:
                flowables.append(self._paragraph(Paragraph(children=list(inline))))
                inline.clear()

        for element in elements:
            if isinstance(element, (TextRun, Symbol)):
                inline.append(element)
                continue
            flush_inline()

            if isinstance(element, Section):
                flowables.append(self._section_title(element))
                flowables.extend(self._flowables(element.children))
            elif isinstance(element, Paragraph):
                flowables.append(self._paragraph(element))
            elif isinstance(element, Table):
                flowables.append(self._table(element))
                flowables.append(Spacer(1, 6))
            elif isinstance(element, Image):
                flowables.extend(self._image(element))
            elif isinstance(element, ListBlock):
                flowables.append(self._list(element))
            elif isinstance(element, Quote):
                flowables.append(Indenter(left=QUOTE_INDENT))
                flowables.extend(self._flowables(element.children))
                flowables.append(Indenter(left=-QUOTE_INDENT))
            elif isinstance(element, Rule):
                rule = HRFlowable(width="100%", color=RGB.of(GRAY).to_reportlab(), spaceBefore=6, spaceAfter=6)
                flowables.append(rule)
            else:
                logger.debug(f"No PDF layout for element {type(element).__name__}")

        flush_inline()
        return flowables

    def _section_title(self, section: Section) -> Any:
        from reportlab.platypus import Paragraph as RLParagraph

        font = self._first_font(section.title) or self.styles.section_title_font(section.level)
        markup = self._markup(section.title)
        if self.options.number_sections and section.number:
            markup = f"{'.'.join(str(n) for n in section.number)} {markup}"
        style = self._style(font, space_before=12, space_after=6)
        return RLParagraph(markup, style)

    def _paragraph(self, paragraph: Paragraph) -> Any:
        from reportlab.platypus import Paragraph as RLParagraph
        from reportlab.platypus import XPreformatted

        font = self._first_font(paragraph.children) or self.styles.default_font()
        style = self._style(
            font,
            background=paragraph.background,
            alignment=paragraph.alignment,
            space_after=6,
            padding=4 if paragraph.background is not None else 0,
        )
        if paragraph.preformatted:
            return XPreformatted(self._markup(paragraph.children, preformatted=True), style)
        return RLParagraph(self._markup(paragraph.children), style)

    def _table(self, table: Table) -> Any:
        from reportlab.platypus import Paragraph as RLParagraph
        from reportlab.platypus import Table as RLTable
        from reportlab.platypus import TableStyle

        data: list[list[Any]] = []
        commands: list[tuple[Any, ...]] = [
            ("GRID", (0, 0), (-1, -1), 0.5, RGB.of(GRAY).to_reportlab()),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ]
        for row_index, row in enumerate(table.rows):
            cells: list[Any] = []
            for column, cell in enumerate(row.cells[: table.columns]):
                cells.append(RLParagraph(self._markup(cell.children), self._cell_style(cell)))
                if cell.background is not None:
                    position = (column, row_index)
                    commands.append(("BACKGROUND", position, position, cell.background.to_reportlab()))
            data.append(cells)

        rl_table = RLTable(data, repeatRows=table.header_rows)
        rl_table.setStyle(TableStyle(commands))
        return rl_table

    def _cell_style(self, cell: Cell) -> Any:
        return self._style(cell.font or self.styles.default_font(), alignment=cell.alignment)

    def _image(self, image: Image) -> list[Any]:
        from reportlab.platypus import Image as RLImage

        if image.data is not None:
            width = (image.width or 0) * image.scale or None
            height = (image.height or 0) * image.scale or None
            return [RLImage(io.BytesIO(image.data), width=width, height=height)]

        if image.uri and urlparse(image.uri).scheme in ("", "file"):
            path = Path(urlparse(image.uri).path)
            if path.is_file():
                return [RLImage(str(path), kind="proportional")]

        # Remote or missing images are replaced by their alternative text
        logger.warning(f"Image not embedded: {image.uri}")
        fallback = TextRun(f"[{image.alt_text or image.uri}]", self.styles.default_font().derive(italic=True))
        return [self._paragraph(Paragraph(children=[fallback]))]

    def _list(self, block: ListBlock) -> Any:
        from reportlab.platypus import ListFlowable, ListItem

        items = []
        for entry in block.items:
            flowables = self._flowables(entry.children)
            if not flowables:
                flowables = [self._paragraph(Paragraph())]
            if entry.symbol is not None and not block.ordered:
                items.append(
                    ListItem(
                        flowables,
                        value=SYMBOL_GLYPHS.get(entry.symbol.name, SYMBOL_GLYPHS[DEFAULT_BULLET_SYMBOL]),
                        bulletFontName=SYMBOL_FONT,
                        bulletFontSize=entry.symbol.size,
                        bulletColor=entry.symbol.color.to_reportlab(),
                    )
                )
            else:
                items.append(ListItem(flowables))

        if block.ordered:
            return ListFlowable(items, bulletType="1", start=block.start)
        return ListFlowable(items, bulletType="bullet")

    # ------------------------------------------------------------------
    # Inline markup
    # ------------------------------------------------------------------

    def _markup(self, children: list[Element], preformatted: bool = False) -> str:
        """Translate inline elements into ReportLab paragraph markup."""
        parts: list[str] = []
        for child in children:
            if isinstance(child, TextRun):
                parts.append(self._run_markup(child, preformatted))
            elif isinstance(child, Symbol):
                glyph = SYMBOL_GLYPHS.get(child.name, SYMBOL_GLYPHS[DEFAULT_BULLET_SYMBOL])
                attrs = f'name="{SYMBOL_FONT}" size="{child.size:g}" color="{child.color.hex}"'
                parts.append(f"<font {attrs}>{glyph}</font> ")
            elif isinstance(child, Paragraph):
                parts.append(self._markup(child.children, preformatted))
        return "".join(parts)

    def _run_markup(self, run: TextRun, preformatted: bool) -> str:
        text = escape(run.text)
        if not preformatted:
            text = text.replace("\n", "<br/>")

        font = run.font
        attrs = f'name="{font.face}" size="{font.size:g}" color="{font.color.hex}"'
        if run.background is not None:
            attrs += f' backColor="{run.background.hex}"'
        markup = f"<font {attrs}>{text}</font>"
        if font.underline:
            markup = f"<u>{markup}</u>"
        if font.strike:
            markup = f"<strike>{markup}</strike>"
        if run.link:
            href = escape(run.link, {'"': "&quot;"})
            markup = f'<link href="{href}">{markup}</link>'
        return markup

    @staticmethod
    def _first_font(children: list[Element]) -> Optional[Font]:
        for child in children:
            if isinstance(child, TextRun):
                return child.font
        return None

    def _style(
        self,
        font: Font,
        background: Optional[RGB] = None,
        alignment: str = "left",
        space_before: float = 0,
        space_after: float = 0,
        padding: float = 0,
    ) -> Any:
        from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
        from reportlab.lib.styles import ParagraphStyle

        self._style_count += 1
        return ParagraphStyle(
            name=f"mdlayout-{self._style_count}",
            fontName=font.face,
            fontSize=font.size,
            leading=font.size * LEADING_FACTOR,
            textColor=font.color.to_reportlab(),
            backColor=background.to_reportlab() if background is not None else None,
            alignment={"left": TA_LEFT, "center": TA_CENTER, "right": TA_RIGHT}.get(alignment, TA_LEFT),
            spaceBefore=space_before,
            spaceAfter=space_after,
            borderPadding=padding,
        )
