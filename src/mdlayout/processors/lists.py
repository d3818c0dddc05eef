#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/processors/lists.py
"""Processors for lists; structural wrapping only, no font changes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mdlayout.ast.nodes import List, ListItem, Node
from mdlayout.constants import DEFAULT_BULLET_SYMBOL, TASK_CHECKED_SYMBOL, TASK_UNCHECKED_SYMBOL
from mdlayout.elements import Element, ListBlock, ListEntry, Symbol
from mdlayout.processors.base import Processor

if TYPE_CHECKING:
    from mdlayout.processors.base import Dispatcher


class ListProcessor(Processor):
    """Collect the item entries; number ordered items, bullet the others."""

    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        assert isinstance(node, List)
        entries: list[ListEntry] = []
        for element in ctx.process_children(depth, node):
            entries.append(element if isinstance(element, ListEntry) else ListEntry(children=[element]))

        font = ctx.render_context.peek_font()
        for index, entry in enumerate(entries):
            if node.ordered:
                entry.label = f"{node.start + index}."
            elif entry.symbol is None:
                entry.symbol = Symbol(DEFAULT_BULLET_SYMBOL, font.size / 2, ctx.styles.default_color())
        return [ListBlock(items=entries, ordered=node.ordered, start=node.start)]


class ListItemProcessor(Processor):
    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        assert isinstance(node, ListItem)
        render = ctx.render_context
        with render.block_scope("list-item"):
            children = ctx.process_children(depth, node)

        symbol = None
        if node.task_status is not None:
            name = TASK_CHECKED_SYMBOL if node.task_status == "checked" else TASK_UNCHECKED_SYMBOL
            symbol = Symbol(name, render.peek_font().size, ctx.styles.default_color())
        return [ListEntry(children=children, symbol=symbol)]
