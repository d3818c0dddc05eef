#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for converting a Markdown AST into layout elements."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdlayout.constants import (
    DEFAULT_CODE_FONT_FAMILY,
    DEFAULT_DIAGRAM_DISPLAY_SCALE,
    DEFAULT_DIAGRAM_LANGUAGES,
    DEFAULT_DIAGRAM_MAX_CELLS,
    DEFAULT_DIAGRAM_SCALE,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_HIGHLIGHT_STYLE,
)
from mdlayout.options.base import CloneFrozenMixin


# src/mdlayout/options/conversion.py
@dataclass(frozen=True)
class ConversionOptions(CloneFrozenMixin):
    """Settings for the AST to element-tree conversion.

    Parameters
    ----------
    font_family : str, default "Helvetica"
        Base family of the default style registry
    font_size : float, default 12.0
        Base size of the default style registry
    code_font_family : str, default "Courier"
        Family of the verbatim fonts
    highlight_style : str, default "friendly"
        Pygments style sheet used for code blocks
    diagram_languages : tuple of str, default ("ditaa",)
        Code block tags rendered as diagrams
    diagram_scale : float, default 2.0
        Upscale factor used when rasterizing diagrams
    diagram_display_scale : float, default 0.5
        Scale of the diagram image on the page
    diagram_max_cells : int
        Largest diagram grid accepted before falling back to highlighting
    enable_diagrams : bool, default True
        Register the diagram transform
    discover_plugins : bool, default False
        Load extra content transforms from the ``mdlayout.transforms`` entry points
    check_balance : bool, default True
        Verify that the render context stacks are balanced after a conversion

    """

    font_family: str = DEFAULT_FONT_FAMILY
    font_size: float = DEFAULT_FONT_SIZE
    code_font_family: str = DEFAULT_CODE_FONT_FAMILY
    highlight_style: str = DEFAULT_HIGHLIGHT_STYLE
    diagram_languages: tuple[str, ...] = field(default=DEFAULT_DIAGRAM_LANGUAGES)
    diagram_scale: float = DEFAULT_DIAGRAM_SCALE
    diagram_display_scale: float = DEFAULT_DIAGRAM_DISPLAY_SCALE
    diagram_max_cells: int = DEFAULT_DIAGRAM_MAX_CELLS
    enable_diagrams: bool = True
    discover_plugins: bool = False
    check_balance: bool = True

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size}")
        if self.diagram_scale <= 0:
            raise ValueError(f"diagram_scale must be positive, got {self.diagram_scale}")
        if not 0 < self.diagram_display_scale <= 1:
            raise ValueError(f"diagram_display_scale must be within (0, 1], got {self.diagram_display_scale}")
        if self.diagram_max_cells <= 0:
            raise ValueError(f"diagram_max_cells must be positive, got {self.diagram_max_cells}")
        if isinstance(self.diagram_languages, list):
            object.__setattr__(self, "diagram_languages", tuple(self.diagram_languages))
