#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the reportlab PDF backend."""

from __future__ import annotations

from dataclasses import dataclass

from mdlayout.constants import DEFAULT_CREATOR, DEFAULT_PDF_MARGIN, DEFAULT_PDF_PAGE_SIZE, PageSize
from mdlayout.options.base import CloneFrozenMixin


# src/mdlayout/options/pdf.py
@dataclass(frozen=True)
class PdfBackendOptions(CloneFrozenMixin):
    """Page settings for rendering an element tree to PDF.

    Parameters
    ----------
    page_size : {"letter", "a4", "legal"}, default "a4"
        Page format
    margin_top, margin_bottom, margin_left, margin_right : float, default 72.0
        Page margins in points
    number_sections : bool, default True
        Prefix section titles with their outline number
    title : str or None
        Document title written to the PDF metadata
    creator : str or None, default "mdlayout"
        Creator application name for document metadata

    """

    page_size: PageSize = DEFAULT_PDF_PAGE_SIZE
    margin_top: float = DEFAULT_PDF_MARGIN
    margin_bottom: float = DEFAULT_PDF_MARGIN
    margin_left: float = DEFAULT_PDF_MARGIN
    margin_right: float = DEFAULT_PDF_MARGIN
    number_sections: bool = True
    title: str | None = None
    creator: str | None = DEFAULT_CREATOR

    def __post_init__(self) -> None:
        if self.page_size not in ("letter", "a4", "legal"):
            raise ValueError(f"page_size must be one of letter, a4, legal; got {self.page_size!r}")
        for name in ("margin_top", "margin_bottom", "margin_left", "margin_right"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
