#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/processors/__init__.py
"""Node processors and the dispatcher that drives them."""

from __future__ import annotations

from mdlayout.ast import nodes
from mdlayout.processors.base import Dispatcher, PassThroughProcessor, Processor, ProcessorRegistry
from mdlayout.processors.blocks import (
    BlockQuoteProcessor,
    CodeBlockProcessor,
    HeadingProcessor,
    ParagraphProcessor,
    ThematicBreakProcessor,
)
from mdlayout.processors.inline import (
    CodeSpanProcessor,
    ImageProcessor,
    LineBreakProcessor,
    LinkProcessor,
    StyledSpanProcessor,
    TextProcessor,
)
from mdlayout.processors.lists import ListItemProcessor, ListProcessor
from mdlayout.processors.tables import (
    TableCellProcessor,
    TableProcessor,
    TableRowProcessor,
    TableSectionProcessor,
)


def build_default_registry() -> ProcessorRegistry:
    """Return a registry with a processor for every Markdown node variant.

    Document and Container are left to the pass-through default.
    Processors are stateless, so the registry can be shared between
    conversions.
    """
    registry = ProcessorRegistry()
    text = TextProcessor()
    registry.register(nodes.Paragraph, ParagraphProcessor())
    registry.register(nodes.Text, text)
    registry.register(nodes.SpecialText, text)
    registry.register(nodes.Heading, HeadingProcessor())
    registry.register(nodes.CodeBlock, CodeBlockProcessor())
    registry.register(nodes.Code, CodeSpanProcessor())
    registry.register(nodes.Emphasis, StyledSpanProcessor(italic=True))
    registry.register(nodes.Strong, StyledSpanProcessor(bold=True))
    registry.register(nodes.Strikethrough, StyledSpanProcessor(strike=True))
    registry.register(nodes.Link, LinkProcessor())
    registry.register(nodes.Image, ImageProcessor())
    registry.register(nodes.LineBreak, LineBreakProcessor())
    registry.register(nodes.ThematicBreak, ThematicBreakProcessor())
    registry.register(nodes.BlockQuote, BlockQuoteProcessor())
    registry.register(nodes.List, ListProcessor())
    registry.register(nodes.ListItem, ListItemProcessor())
    registry.register(nodes.Table, TableProcessor())
    registry.register(nodes.TableHeader, TableSectionProcessor(header=True))
    registry.register(nodes.TableBody, TableSectionProcessor(header=False))
    registry.register(nodes.TableRow, TableRowProcessor())
    registry.register(nodes.TableCell, TableCellProcessor())
    return registry


__all__ = [
    "Processor",
    "PassThroughProcessor",
    "ProcessorRegistry",
    "Dispatcher",
    "build_default_registry",
    "BlockQuoteProcessor",
    "CodeBlockProcessor",
    "HeadingProcessor",
    "ParagraphProcessor",
    "ThematicBreakProcessor",
    "CodeSpanProcessor",
    "ImageProcessor",
    "LineBreakProcessor",
    "LinkProcessor",
    "StyledSpanProcessor",
    "TextProcessor",
    "ListItemProcessor",
    "ListProcessor",
    "TableCellProcessor",
    "TableProcessor",
    "TableRowProcessor",
    "TableSectionProcessor",
]
