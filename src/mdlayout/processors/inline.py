#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/processors/inline.py
"""Processors for inline nodes: text, styled spans, code spans, links."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from mdlayout.ast.nodes import Code, Image, LineBreak, Link, Node, SpecialText, Text
from mdlayout.constants import INLINE_CODE_BACKGROUND, INLINE_CODE_FONT, LINK_COLOR
from mdlayout.elements import Element, TextRun
from mdlayout.elements import Image as ImageElement
from mdlayout.processors.base import Processor

if TYPE_CHECKING:
    from mdlayout.processors.base import Dispatcher


class TextProcessor(Processor):
    """Emit the node text as a run in the current font."""

    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        assert isinstance(node, (Text, SpecialText))
        if not node.content:
            return []
        return [TextRun(node.content, ctx.render_context.peek_font())]


class StyledSpanProcessor(Processor):
    """Process children with style flags added to the current font.

    Used for emphasis (italic), strong (bold) and strikethrough; nested
    spans accumulate their flags.
    """

    def __init__(self, bold: bool = False, italic: bool = False, strike: bool = False) -> None:
        self.bold = bold
        self.italic = italic
        self.strike = strike

    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        render = ctx.render_context
        font = render.peek_font().combine(bold=self.bold, italic=self.italic, strike=self.strike)
        with render.font_scope(font):
            return ctx.process_children(depth, node)


class CodeSpanProcessor(Processor):
    """Inline code: verbatim font on a light background."""

    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        assert isinstance(node, Code)
        font = ctx.styles.resolve(INLINE_CODE_FONT) or ctx.render_context.peek_font()
        return [TextRun(node.content, font, background=ctx.styles.resolve_color(INLINE_CODE_BACKGROUND))]


class LinkProcessor(Processor):
    """Underline the link text in the link color and attach the target."""

    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        assert isinstance(node, Link)
        render = ctx.render_context
        font = render.peek_font().combine(underline=True, color=ctx.styles.resolve_color(LINK_COLOR))
        with render.font_scope(font):
            children = ctx.process_children(depth, node)
        if not children:
            children = [TextRun(node.url, font)]
        return [replace(child, link=node.url) if isinstance(child, TextRun) else child for child in children]


class ImageProcessor(Processor):
    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        assert isinstance(node, Image)
        return [ImageElement(uri=node.url, alt_text=node.alt_text)]


class LineBreakProcessor(Processor):
    """Soft breaks become spaces, hard breaks newlines."""

    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        assert isinstance(node, LineBreak)
        return [TextRun(" " if node.soft else "\n", ctx.render_context.peek_font())]
