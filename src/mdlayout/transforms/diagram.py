#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/transforms/diagram.py
"""Rasterization of ASCII box diagrams (ditaa-style) with Pillow.

The diagram is read as a grid of characters. ``-`` and ``|`` runs become
lines, ``=`` and ``:`` dashed lines, ``+`` ``/`` and ``\\`` junctions that
connect to their line neighbours, ``< > ^ v`` arrow heads when they touch a
line, and every other character is drawn as text. The grid is drawn at a
fixed upscale factor and the image is displayed at a fraction of that size,
so it stays sharp when printed.

Any failure is reported as DiagramRenderError; wrap the transform with
``diagram_with_fallback`` to get a transform that never fails.

"""

from __future__ import annotations

import io
import logging
import unicodedata
from dataclasses import dataclass
from typing import Iterable, Optional

from PIL import Image as PILImage
from PIL import ImageDraw, ImageFont

from mdlayout.constants import (
    DEFAULT_DIAGRAM_DISPLAY_SCALE,
    DEFAULT_DIAGRAM_LANGUAGES,
    DEFAULT_DIAGRAM_MAX_CELLS,
    DEFAULT_DIAGRAM_SCALE,
    DIAGRAM_CELL_HEIGHT,
    DIAGRAM_CELL_WIDTH,
)
from mdlayout.elements import Element, Image
from mdlayout.exceptions import DiagramRenderError
from mdlayout.transforms.base import ContentTransform, FallbackTransform

logger = logging.getLogger(__name__)

HORIZONTAL = "-="
VERTICAL = "|:"
JUNCTIONS = "+/\\"
DASHED = "=:"

_LINE_FG = (0, 0, 0)
_BACKGROUND = (255, 255, 255)


@dataclass(frozen=True)
class TextGrid:
    """Rectangular grid of characters, padded with spaces."""

    rows: tuple[str, ...]

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    def at(self, x: int, y: int) -> str:
        if 0 <= y < self.height and 0 <= x < self.width:
            return self.rows[y][x]
        return " "

    @classmethod
    def from_text(cls, text: str, max_cells: int = DEFAULT_DIAGRAM_MAX_CELLS) -> TextGrid:
        """Build a grid from a diagram description.

        Raises
        ------
        DiagramRenderError
            If the text is empty, holds control characters or characters
            outside latin-1, or exceeds ``max_cells``

        """
        if not text.strip():
            raise DiagramRenderError("Diagram is empty")
        try:
            text.encode("latin-1")
        except UnicodeEncodeError as e:
            bad = e.object[e.start : e.end]
            raise DiagramRenderError(f"Diagram contains characters outside latin-1: {bad!r}", original_error=e) from e

        lines = text.expandtabs(4).splitlines()
        for line_no, line in enumerate(lines, start=1):
            for ch in line:
                if unicodedata.category(ch).startswith("C"):
                    raise DiagramRenderError(f"Control character {ch!r} on line {line_no}")

        while lines and not lines[0].strip():
            lines.pop(0)
        while lines and not lines[-1].strip():
            lines.pop()

        width = max(len(line.rstrip()) for line in lines)
        if width * len(lines) > max_cells:
            raise DiagramRenderError(f"Diagram too large: {width}x{len(lines)} cells (limit {max_cells})")
        return cls(tuple(line.rstrip().ljust(width) for line in lines))


class DiagramRenderer:
    """Draw a TextGrid onto a Pillow image."""

    def __init__(self, scale: float = DEFAULT_DIAGRAM_SCALE) -> None:
        if scale <= 0:
            raise ValueError(f"Diagram scale must be positive, got {scale}")
        self.scale = scale
        self.cell_width = max(1, round(DIAGRAM_CELL_WIDTH * scale))
        self.cell_height = max(1, round(DIAGRAM_CELL_HEIGHT * scale))
        self.line_width = max(1, round(scale))
        self.margin = self.cell_width

    def render(self, grid: TextGrid) -> PILImage.Image:
        size = (grid.width * self.cell_width + 2 * self.margin, grid.height * self.cell_height + 2 * self.margin)
        image = PILImage.new("RGB", size, _BACKGROUND)
        draw = ImageDraw.Draw(image)
        font = ImageFont.load_default()

        for y in range(grid.height):
            for x in range(grid.width):
                ch = grid.at(x, y)
                if ch == " ":
                    continue
                if ch in HORIZONTAL and self._joins_horizontally(grid, x, y):
                    self._segments(draw, x, y, ("left", "right"), dashed=ch in DASHED)
                elif ch in VERTICAL and self._joins_vertically(grid, x, y):
                    self._segments(draw, x, y, ("up", "down"), dashed=ch in DASHED)
                elif ch in JUNCTIONS and self._junction_arms(grid, x, y):
                    self._segments(draw, x, y, self._junction_arms(grid, x, y))
                elif self._arrow_direction(grid, x, y):
                    self._arrow(draw, x, y, self._arrow_direction(grid, x, y))  # type: ignore[arg-type]
                else:
                    left, top = self._origin(x, y)
                    draw.text((left + self.line_width, top + self.line_width), ch, fill=_LINE_FG, font=font)
        return image

    def _origin(self, x: int, y: int) -> tuple[int, int]:
        return self.margin + x * self.cell_width, self.margin + y * self.cell_height

    def _center(self, x: int, y: int) -> tuple[int, int]:
        left, top = self._origin(x, y)
        return left + self.cell_width // 2, top + self.cell_height // 2

    @staticmethod
    def _joins_horizontally(grid: TextGrid, x: int, y: int) -> bool:
        connectors = HORIZONTAL + JUNCTIONS + "<>"
        return grid.at(x - 1, y) in connectors or grid.at(x + 1, y) in connectors

    @staticmethod
    def _joins_vertically(grid: TextGrid, x: int, y: int) -> bool:
        connectors = VERTICAL + JUNCTIONS + "^vV"
        return grid.at(x, y - 1) in connectors or grid.at(x, y + 1) in connectors

    @staticmethod
    def _junction_arms(grid: TextGrid, x: int, y: int) -> tuple[str, ...]:
        arms = []
        if grid.at(x - 1, y) in HORIZONTAL + JUNCTIONS + "<":
            arms.append("left")
        if grid.at(x + 1, y) in HORIZONTAL + JUNCTIONS + ">":
            arms.append("right")
        if grid.at(x, y - 1) in VERTICAL + JUNCTIONS + "^":
            arms.append("up")
        if grid.at(x, y + 1) in VERTICAL + JUNCTIONS + "vV":
            arms.append("down")
        return tuple(arms)

    @staticmethod
    def _arrow_direction(grid: TextGrid, x: int, y: int) -> Optional[str]:
        ch = grid.at(x, y)
        if ch == ">" and grid.at(x - 1, y) in HORIZONTAL + JUNCTIONS:
            return "right"
        if ch == "<" and grid.at(x + 1, y) in HORIZONTAL + JUNCTIONS:
            return "left"
        if ch == "^" and grid.at(x, y + 1) in VERTICAL + JUNCTIONS:
            return "up"
        if ch in "vV" and grid.at(x, y - 1) in VERTICAL + JUNCTIONS:
            return "down"
        return None

    def _segments(self, draw: ImageDraw.ImageDraw, x: int, y: int, arms: Iterable[str], dashed: bool = False) -> None:
        cx, cy = self._center(x, y)
        left, top = self._origin(x, y)
        ends = {
            "left": (left, cy),
            "right": (left + self.cell_width, cy),
            "up": (cx, top),
            "down": (cx, top + self.cell_height),
        }
        for arm in arms:
            end = ends[arm]
            if dashed:
                # half-length dash from the center, leaving a gap at the cell edge
                end = ((cx + end[0]) // 2, (cy + end[1]) // 2)
            draw.line([(cx, cy), end], fill=_LINE_FG, width=self.line_width)

    def _arrow(self, draw: ImageDraw.ImageDraw, x: int, y: int, direction: str) -> None:
        cx, cy = self._center(x, y)
        left, top = self._origin(x, y)
        right, bottom = left + self.cell_width, top + self.cell_height
        half_w, half_h = self.cell_width // 2, self.cell_height // 3
        if direction == "right":
            points = [(left, cy - half_h), (right, cy), (left, cy + half_h)]
        elif direction == "left":
            points = [(right, cy - half_h), (left, cy), (right, cy + half_h)]
        elif direction == "up":
            points = [(cx - half_w, bottom), (cx, top), (cx + half_w, bottom)]
        else:
            points = [(cx - half_w, top), (cx, bottom), (cx + half_w, top)]
        draw.polygon(points, fill=_LINE_FG)


class DiagramTransform(ContentTransform):
    """Render diagram blocks as embedded PNG images.

    Parameters
    ----------
    languages : iterable of str, default ("ditaa",)
        Language tags handled by this transform
    scale : float, default 2.0
        Upscale factor used when drawing
    display_scale : float, default 0.5
        Scale applied to the image when it is placed on the page
    max_cells : int
        Largest accepted grid (columns x rows)

    """

    def __init__(
        self,
        languages: Iterable[str] = DEFAULT_DIAGRAM_LANGUAGES,
        scale: float = DEFAULT_DIAGRAM_SCALE,
        display_scale: float = DEFAULT_DIAGRAM_DISPLAY_SCALE,
        max_cells: int = DEFAULT_DIAGRAM_MAX_CELLS,
    ) -> None:
        self.languages = frozenset(language.lower() for language in languages)
        self.renderer = DiagramRenderer(scale)
        self.display_scale = display_scale
        self.max_cells = max_cells

    def accepts(self, language: str) -> bool:
        return bool(language) and language.lower() in self.languages

    def process(self, language: Optional[str], code: str) -> list[Element]:
        grid = TextGrid.from_text(code, self.max_cells)
        try:
            image = self.renderer.render(grid)
            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
        except (OSError, ValueError, UnicodeError) as e:
            raise DiagramRenderError(f"Failed to rasterize diagram: {e}", language=language, original_error=e) from e

        logger.debug(f"Rendered {grid.width}x{grid.height} diagram to {image.width}x{image.height} px")
        return [
            Image(
                data=buffer.getvalue(),
                width=image.width,
                height=image.height,
                scale=self.display_scale,
                alt_text=language or "diagram",
            )
        ]


def diagram_with_fallback(fallback: ContentTransform, **kwargs: object) -> FallbackTransform:
    """Build a diagram transform that falls back to ``fallback`` on failure."""
    return FallbackTransform(DiagramTransform(**kwargs), fallback)  # type: ignore[arg-type]
