"""mdlayout - lay out Markdown documents through an abstract element tree.

mdlayout walks a Markdown AST and converts every node into layout elements:
styled text runs, paragraphs, tables with zebra striping, lists, images, and
sections nested into chapters. Fonts and colors come from a role-based style
registry; verbatim blocks go through content transforms that either
syntax-highlight the code with Pygments or draw ASCII-art diagrams as images.
The resulting tree is backend-neutral; a ReportLab backend turns it into PDF.

Requirements
------------
- Python 3.10+
- mistune, Pygments, Pillow, ReportLab

Examples
--------
Build the element tree:

    >>> from mdlayout import to_elements
    >>> tree = to_elements("# Intro\\n\\nHello *world*")
    >>> tree[0].title_text
    'Intro'

Render a PDF:

    >>> from mdlayout import to_pdf
    >>> to_pdf("# Intro\\n\\nHello", "intro.pdf")

Custom styles:

    >>> from mdlayout import StyleRegistry, FontDescriptor
    >>> from mdlayout.constants import H1_FONT
    >>> styles = StyleRegistry("Times-Roman", 11).init_defaults()
    >>> styles.register(H1_FONT, FontDescriptor("Times-Roman", 24, bold=True))
    >>> tree = to_elements("# Big", styles=styles)

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "mdlayout requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from mdlayout.api import build_styles, build_transforms, to_elements, to_pdf
from mdlayout.assembler import TreeAssembler
from mdlayout.context import RenderContext
from mdlayout.exceptions import (
    DependencyError,
    MdLayoutError,
    ParsingError,
    RenderingError,
    StructuralError,
    TransformError,
    ValidationError,
)
from mdlayout.options import ConversionOptions, PdfBackendOptions
from mdlayout.styles import FontDescriptor, StyleRegistry

__all__ = [
    "__version__",
    "to_elements",
    "to_pdf",
    "build_styles",
    "build_transforms",
    "TreeAssembler",
    "RenderContext",
    "StyleRegistry",
    "FontDescriptor",
    "ConversionOptions",
    "PdfBackendOptions",
    "MdLayoutError",
    "DependencyError",
    "ParsingError",
    "RenderingError",
    "StructuralError",
    "TransformError",
    "ValidationError",
]
