#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/processors/blocks.py
"""Processors for block nodes: paragraphs, headings, code blocks, quotes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mdlayout.ast.nodes import CodeBlock, Heading, Node
from mdlayout.constants import CODE_FONT
from mdlayout.elements import Element, Image, Paragraph, Quote, Rule, Section
from mdlayout.processors.base import Processor

if TYPE_CHECKING:
    from mdlayout.processors.base import Dispatcher

logger = logging.getLogger(__name__)


def split_paragraph(children: list[Element], **paragraph_kwargs: object) -> list[Element]:
    """Wrap inline elements in paragraphs, lifting images out as blocks."""
    blocks: list[Element] = []
    inline: list[Element] = []
    for child in children:
        if isinstance(child, Image):
            if inline:
                blocks.append(Paragraph(children=inline, **paragraph_kwargs))  # type: ignore[arg-type]
                inline = []
            blocks.append(child)
        else:
            inline.append(child)
    if inline or not blocks:
        blocks.append(Paragraph(children=inline, **paragraph_kwargs))  # type: ignore[arg-type]
    return blocks


class ParagraphProcessor(Processor):
    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        return split_paragraph(ctx.process_children(depth, node))


class HeadingProcessor(Processor):
    """Build a standalone Section titled with the heading content.

    The title font is the nearest heading font at or below the heading level.
    Headings nested in a quote, list item or table cell cannot open a section
    and become heading-styled paragraphs instead.
    """

    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        assert isinstance(node, Heading)
        render = ctx.render_context
        with render.font_scope(ctx.styles.section_title_font(node.level)):
            title = ctx.process_children(depth, node)

        if render.inside_block:
            return [Paragraph(children=title, style="heading")]
        return [Section(title=title, level=node.level)]


class CodeBlockProcessor(Processor):
    """Delegate verbatim blocks to the content transform matching their tag."""

    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        assert isinstance(node, CodeBlock)
        render = ctx.render_context
        font = ctx.styles.resolve(CODE_FONT) or ctx.styles.default_font()
        with render.font_scope(font):
            transform = ctx.transforms.find(node.language)
            logger.debug(f"Code block '{node.language}' handled by {type(transform).__name__}")
            return transform.process(node.language, node.content)


class BlockQuoteProcessor(Processor):
    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        render = ctx.render_context
        with render.font_scope(render.peek_font().combine(italic=True)), render.block_scope("quote"):
            return [Quote(children=ctx.process_children(depth, node))]


class ThematicBreakProcessor(Processor):
    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        return [Rule()]
