#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for mdlayout conversions and backends.

Options are frozen dataclasses; use ``create_updated`` to derive a modified
copy.
"""

from mdlayout.options.base import CloneFrozenMixin
from mdlayout.options.conversion import ConversionOptions
from mdlayout.options.pdf import PdfBackendOptions

__all__ = ["CloneFrozenMixin", "ConversionOptions", "PdfBackendOptions"]
