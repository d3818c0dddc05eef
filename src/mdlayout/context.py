#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/context.py
"""Scoped rendering state threaded through the recursive tree walk.

A RenderContext holds three stacks:

- the font stack, whose bottom entry is the document default font and which
  therefore never becomes empty;
- the table stack, one TableInfos per open table;
- the cell-styler stack, one CellStyler per open table header or body.

Processors never call the push/pop pairs directly: they use the
``font_scope``, ``table_scope`` and ``cell_styler_scope`` context managers,
which pop on every exit path including exceptions.

A context belongs to a single conversion; concurrent conversions each need
their own instance.

"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, Optional

from mdlayout.elements import RGB, Font
from mdlayout.exceptions import NoOpenTableError, StackUnderflowError, StructuralError

logger = logging.getLogger(__name__)


class AlternateTableRowBackground:
    """Zebra striping policy: every other body row gets a background color."""

    def __init__(self, color: RGB) -> None:
        self.color = color

    def background_for(self, row_index: int) -> Optional[RGB]:
        """Background of the body row at ``row_index`` (0-based); odd rows are shaded."""
        return self.color if row_index % 2 == 1 else None


@dataclass
class TableInfos:
    """State of the table currently being processed.

    Parameters
    ----------
    columns : int
        Number of columns of the table
    row_background : AlternateTableRowBackground or None
        Policy for body-row backgrounds
    body_rows : int
        Number of body rows started so far

    """

    columns: int
    row_background: Optional[AlternateTableRowBackground] = None
    body_rows: int = 0

    def start_row(self, header: bool) -> int:
        """Record the start of a row and return its body index (-1 for header rows)."""
        if header:
            return -1
        self.body_rows += 1
        return self.body_rows - 1

    def background_for(self, row_index: int) -> Optional[RGB]:
        if row_index < 0 or self.row_background is None:
            return None
        return self.row_background.background_for(row_index)


@dataclass(frozen=True)
class CellStyler:
    """Cell styling policy for a table header or body.

    Parameters
    ----------
    font : Font
        Font used for the cell content
    background : RGB or None
        Fixed background; when None, the table's row background applies
    header : bool
        Whether cells styled by this policy belong to header rows

    """

    font: Font
    background: Optional[RGB] = None
    header: bool = False

    def background_for(self, table: TableInfos, row_index: int) -> Optional[RGB]:
        if self.background is not None:
            return self.background
        return table.background_for(row_index)


class RenderContext:
    """Per-conversion stacks of fonts, open tables and cell stylers."""

    def __init__(self, default_font: Font) -> None:
        self._fonts: list[Font] = [default_font]
        self._tables: list[TableInfos] = []
        self._cell_stylers: list[CellStyler] = []
        self._rows: list[int] = []
        self._blocks: list[str] = []

    # -- fonts ---------------------------------------------------------------

    def peek_font(self) -> Font:
        return self._fonts[-1]

    def push_font(self, font: Font) -> None:
        self._fonts.append(font)

    def pop_font(self) -> Font:
        """Pop the current font; the default font at the bottom cannot be popped."""
        if len(self._fonts) <= 1:
            raise StackUnderflowError("font")
        return self._fonts.pop()

    @contextmanager
    def font_scope(self, font: Font) -> Generator[Font, None, None]:
        """Make ``font`` current for the duration of the block."""
        self.push_font(font)
        try:
            yield font
        finally:
            self.pop_font()

    # -- tables --------------------------------------------------------------

    def peek_table(self) -> TableInfos:
        """Return the innermost open table.

        Raises
        ------
        NoOpenTableError
            If no table is open
        """
        if not self._tables:
            raise NoOpenTableError("table")
        return self._tables[-1]

    def push_table(self, table: TableInfos) -> None:
        self._tables.append(table)

    def pop_table(self) -> TableInfos:
        if not self._tables:
            raise StackUnderflowError("table")
        return self._tables.pop()

    @contextmanager
    def table_scope(self, table: TableInfos) -> Generator[TableInfos, None, None]:
        self.push_table(table)
        try:
            yield table
        finally:
            self.pop_table()

    # -- rows ----------------------------------------------------------------

    def current_row(self) -> int:
        """Body index of the row being processed (-1 for header rows)."""
        self.peek_table()
        if not self._rows:
            raise StructuralError("Table cell processed outside of a table row")
        return self._rows[-1]

    @contextmanager
    def row_scope(self, row_index: int) -> Generator[int, None, None]:
        self.peek_table()
        self._rows.append(row_index)
        try:
            yield row_index
        finally:
            self._rows.pop()

    # -- cell stylers --------------------------------------------------------

    def peek_cell_styler(self) -> CellStyler:
        """Return the cell styler of the innermost table's header or body group.

        Raises
        ------
        NoOpenTableError
            If no table is open
        StructuralError
            If the innermost table has no open TableHeader or TableBody group
        """
        self.peek_table()
        # header and body groups each hold exactly one styler while open
        if len(self._cell_stylers) < len(self._tables):
            raise StructuralError(
                "Table row or cell processed outside of a TableHeader or TableBody group of the innermost table"
            )
        return self._cell_stylers[-1]

    def push_cell_styler(self, styler: CellStyler) -> None:
        self._cell_stylers.append(styler)

    def pop_cell_styler(self) -> CellStyler:
        if not self._cell_stylers:
            raise StackUnderflowError("cell-styler")
        return self._cell_stylers.pop()

    @contextmanager
    def cell_styler_scope(self, styler: CellStyler) -> Generator[CellStyler, None, None]:
        self.push_cell_styler(styler)
        try:
            yield styler
        finally:
            self.pop_cell_styler()

    # -- nested blocks -------------------------------------------------------

    @property
    def inside_block(self) -> bool:
        """Whether processing happens inside a quote, list item or table cell."""
        return bool(self._blocks)

    @contextmanager
    def block_scope(self, kind: str) -> Generator[str, None, None]:
        self._blocks.append(kind)
        try:
            yield kind
        finally:
            self._blocks.pop()

    # -- balance checks ------------------------------------------------------

    def snapshot(self) -> dict[str, int]:
        """Current depth of every stack."""
        return {
            "font": len(self._fonts),
            "table": len(self._tables),
            "cell-styler": len(self._cell_stylers),
            "row": len(self._rows),
            "block": len(self._blocks),
        }

    def assert_balanced(self, expected: Optional[dict[str, int]] = None) -> None:
        """Verify the stacks are back at their initial depth.

        Raises
        ------
        StructuralError
            If a scope leaked
        """
        expected = expected or INITIAL_DEPTHS
        actual = self.snapshot()
        if actual != expected:
            raise StructuralError(f"Render context not balanced after conversion: expected {expected}, got {actual}")


INITIAL_DEPTHS = {"font": 1, "table": 0, "cell-styler": 0, "row": 0, "block": 0}
