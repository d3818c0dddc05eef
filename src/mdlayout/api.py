#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/api.py
"""Public conversion API.

``to_elements`` turns Markdown (or an already parsed Document) into an
assembled tree of layout elements; ``to_pdf`` additionally lays that tree out
with the reportlab backend.

Every call builds a fresh RenderContext, so concurrent conversions never
share mutable state. The style and processor registries may be shared as long
as nobody registers into them while conversions run.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Optional, Union

from mdlayout.ast.nodes import Document
from mdlayout.constants import CODE_FONT
from mdlayout.context import RenderContext
from mdlayout.elements import Element
from mdlayout.options.conversion import ConversionOptions
from mdlayout.options.pdf import PdfBackendOptions
from mdlayout.parsers.markdown import MarkdownParser
from mdlayout.processors import Dispatcher, ProcessorRegistry, build_default_registry
from mdlayout.styles import FontDescriptor, StyleRegistry
from mdlayout.transforms import HighlightTransform, TransformRegistry, diagram_with_fallback
from mdlayout.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

MarkdownSource = Union[str, Path, IO[bytes], bytes, Document]


def build_styles(options: Optional[ConversionOptions] = None) -> StyleRegistry:
    """Return a style registry with the default palette for ``options``."""
    options = options or ConversionOptions()
    return StyleRegistry(options.font_family, options.font_size).init_defaults(options.code_font_family)


def build_transforms(styles: StyleRegistry, options: Optional[ConversionOptions] = None) -> TransformRegistry:
    """Return the content transforms: diagrams first, highlighting as the default."""
    options = options or ConversionOptions()
    code_font = styles.descriptor(CODE_FONT) or FontDescriptor(options.code_font_family, styles.base_size)
    highlighter = HighlightTransform(code_font, options.highlight_style)

    transforms = TransformRegistry(default=highlighter)
    if options.enable_diagrams and options.diagram_languages:
        transforms.register(
            diagram_with_fallback(
                highlighter,
                languages=options.diagram_languages,
                scale=options.diagram_scale,
                display_scale=options.diagram_display_scale,
                max_cells=options.diagram_max_cells,
            )
        )
    if options.discover_plugins:
        transforms.discover_plugins()
    return transforms


def to_elements(
    source: MarkdownSource,
    options: Optional[ConversionOptions] = None,
    styles: Optional[StyleRegistry] = None,
    registry: Optional[ProcessorRegistry] = None,
) -> list[Element]:
    """Convert Markdown to an assembled element tree.

    Parameters
    ----------
    source : str, Path, IO[bytes], bytes or Document
        Markdown text, file, stream, or a parsed AST
    options : ConversionOptions, optional
        Conversion settings
    styles : StyleRegistry, optional
        Fonts and colors; built from ``options`` when omitted
    registry : ProcessorRegistry, optional
        Node processors; the default set when omitted

    Returns
    -------
    list of Element
        Chapters, plus any content or sections preceding the first chapter

    Raises
    ------
    ParsingError
        If the Markdown cannot be parsed
    StructuralError
        If the render context stacks are unbalanced after the conversion

    Examples
    --------
        >>> tree = to_elements("# Intro\\n\\nHello *world*")
        >>> type(tree[0]).__name__
        'Chapter'

    """
    options = options or ConversionOptions()
    styles = styles or build_styles(options)

    if isinstance(source, Document):
        document = source
    else:
        with debug_timer(logger, "Parsing (markdown)"):
            document = MarkdownParser().parse(source)

    render_context = RenderContext(styles.default_font())
    dispatcher = Dispatcher(
        registry=registry or build_default_registry(),
        styles=styles,
        transforms=build_transforms(styles, options),
        render_context=render_context,
    )

    with debug_timer(logger, "Conversion (elements)"):
        elements = dispatcher.process(0, document)

    if options.check_balance:
        render_context.assert_balanced()
    return elements


def to_pdf(
    source: MarkdownSource,
    output: Union[str, Path, IO[bytes], None] = None,
    options: Optional[ConversionOptions] = None,
    styles: Optional[StyleRegistry] = None,
    pdf_options: Optional[PdfBackendOptions] = None,
) -> Optional[bytes]:
    """Convert Markdown to PDF.

    Returns the PDF bytes when ``output`` is None, otherwise writes to
    ``output`` and returns None.
    """
    from mdlayout.backends.pdf import PdfBackend

    options = options or ConversionOptions()
    styles = styles or build_styles(options)
    elements = to_elements(source, options=options, styles=styles)

    with debug_timer(logger, "Rendering (pdf)"):
        return PdfBackend(pdf_options, styles=styles).render(elements, output)
