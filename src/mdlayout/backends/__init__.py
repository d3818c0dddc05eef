#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Layout backends consuming assembled element trees."""

from mdlayout.backends.pdf import PdfBackend

__all__ = ["PdfBackend"]
