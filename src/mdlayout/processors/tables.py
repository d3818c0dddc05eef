#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/processors/tables.py
"""Table processors.

The table processor opens a TableInfos for the table, the header and body
processors each open a CellStyler, and the row and cell processors only read
that state back from the render context. A row or cell reached outside of a
table fails with NoOpenTableError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mdlayout.ast.nodes import Node, TableCell
from mdlayout.ast.nodes import Table as TableNode
from mdlayout.constants import (
    BLACK,
    TABLE_ALTERNATE_BACKGROUND,
    TABLE_BODY_FONT,
    TABLE_HEADER_BACKGROUND,
    TABLE_HEADER_FONT,
    WHITE,
)
from mdlayout.context import AlternateTableRowBackground, CellStyler, TableInfos
from mdlayout.elements import RGB, Cell, Element, Table, TableRow
from mdlayout.processors.base import Processor

if TYPE_CHECKING:
    from mdlayout.processors.base import Dispatcher
    from mdlayout.styles import StyleRegistry


def header_styler(styles: StyleRegistry) -> CellStyler:
    """Bold white on black unless the registry says otherwise."""
    font = styles.resolve(TABLE_HEADER_FONT, bold=True) or styles.default_font().derive(
        bold=True, color=RGB.of(WHITE)
    )
    background = styles.resolve_color(TABLE_HEADER_BACKGROUND) or RGB.of(BLACK)
    return CellStyler(font=font, background=background, header=True)


def body_styler(styles: StyleRegistry) -> CellStyler:
    """Body font, background left to the table's zebra striping."""
    return CellStyler(font=styles.resolve(TABLE_BODY_FONT) or styles.default_font())


class TableProcessor(Processor):
    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        assert isinstance(node, TableNode)
        alternate = ctx.styles.resolve_color(TABLE_ALTERNATE_BACKGROUND)
        infos = TableInfos(
            columns=node.column_count,
            row_background=AlternateTableRowBackground(alternate) if alternate is not None else None,
        )
        with ctx.render_context.table_scope(infos):
            rows = [row for row in ctx.process_children(depth, node) if isinstance(row, TableRow)]
        return [Table(columns=infos.columns, rows=rows)]


class TableSectionProcessor(Processor):
    """Header or body group of rows; installs the matching cell styler."""

    def __init__(self, header: bool) -> None:
        self.header = header

    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        render = ctx.render_context
        render.peek_table()
        styler = header_styler(ctx.styles) if self.header else body_styler(ctx.styles)
        with render.cell_styler_scope(styler):
            return ctx.process_children(depth, node)


class TableRowProcessor(Processor):
    """Start a row in the open table; short rows are padded with empty cells."""

    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        render = ctx.render_context
        infos = render.peek_table()
        styler = render.peek_cell_styler()
        row_index = infos.start_row(styler.header)

        with render.row_scope(row_index):
            cells = [cell for cell in ctx.process_children(depth, node) if isinstance(cell, Cell)]

        background = styler.background_for(infos, row_index)
        while len(cells) < infos.columns:
            cells.append(Cell(font=styler.font, background=background))
        return [TableRow(cells=cells, header=styler.header)]


class TableCellProcessor(Processor):
    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        assert isinstance(node, TableCell)
        render = ctx.render_context
        infos = render.peek_table()
        styler = render.peek_cell_styler()
        background = styler.background_for(infos, render.current_row())

        with render.font_scope(styler.font), render.block_scope("cell"):
            children = ctx.process_children(depth, node)
        return [Cell(children=children, font=styler.font, background=background, alignment=node.alignment or "left")]
