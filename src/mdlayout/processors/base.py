#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/processors/base.py
"""Processor interface, registry and the recursive dispatcher.

Dispatch is purely structural: the processor is looked up by the concrete
node class, and unregistered node classes go through a pass-through
processor that concatenates the output of the children.

Every processor receives the dispatcher itself as context. Through it a
processor reaches the per-conversion RenderContext, the StyleRegistry, the
content transforms and ``process_children``.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from mdlayout.assembler import TreeAssembler
from mdlayout.ast.nodes import CodeBlock, Heading, Node

if TYPE_CHECKING:
    from mdlayout.context import RenderContext
    from mdlayout.elements import Element
    from mdlayout.styles import StyleRegistry
    from mdlayout.transforms.base import TransformRegistry

logger = logging.getLogger(__name__)


class Processor(ABC):
    """Convert one node variant (and its children) into layout elements."""

    @abstractmethod
    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        """Convert ``node``.

        Parameters
        ----------
        depth : int
            Depth of ``node`` in the tree (0 for the root)
        node : Node
            Node to convert
        ctx : Dispatcher
            Conversion context; use ``ctx.process_children`` to recurse

        Returns
        -------
        list of Element
            Elements produced for this node, in document order

        """


class PassThroughProcessor(Processor):
    """Default processor: concatenate the children's output unchanged."""

    def process(self, depth: int, node: Node, ctx: Dispatcher) -> list[Element]:
        return ctx.process_children(depth, node)


class ProcessorRegistry:
    """Mapping from node class to processor, with a pass-through default.

    A registry may be shared by concurrent conversions once it is fully
    built; do not register processors while conversions are running.
    """

    def __init__(self, default: Optional[Processor] = None) -> None:
        self._processors: dict[type[Node], Processor] = {}
        self.default = default or PassThroughProcessor()

    def register(self, node_type: type[Node], processor: Processor) -> None:
        if node_type in self._processors:
            logger.debug(f"Replacing processor for {node_type.__name__}")
        self._processors[node_type] = processor

    def get(self, node_type: type[Node]) -> Processor:
        """Return the processor for ``node_type``, or the default."""
        return self._processors.get(node_type, self.default)

    def is_registered(self, node_type: type[Node]) -> bool:
        return node_type in self._processors

    def __len__(self) -> int:
        return len(self._processors)


class Dispatcher:
    """Recursive tree walk over the AST.

    Parameters
    ----------
    registry : ProcessorRegistry
        Node-class to processor mapping
    styles : StyleRegistry
        Fonts and colors by role
    transforms : TransformRegistry
        Content transforms for verbatim blocks
    render_context : RenderContext
        Scoped state of this conversion
    assembler : TreeAssembler, optional
        Applied to the output of the root (depth 0)

    """

    def __init__(
        self,
        registry: ProcessorRegistry,
        styles: StyleRegistry,
        transforms: TransformRegistry,
        render_context: RenderContext,
        assembler: Optional[TreeAssembler] = None,
    ) -> None:
        self.registry = registry
        self.styles = styles
        self.transforms = transforms
        self.render_context = render_context
        self.assembler = assembler or TreeAssembler()

    def process(self, depth: int, node: Node) -> list[Element]:
        """Convert ``node`` and, at depth 0, assemble the section tree."""
        processor = self.registry.get(node.variant)
        if logger.isEnabledFor(logging.DEBUG):
            self._trace(depth, node, processor)

        elements = processor.process(depth, node, self)
        if depth == 0:
            return self.assembler.assemble(elements)
        return elements

    def process_children(self, depth: int, node: Node) -> list[Element]:
        """Process each child at ``depth + 1`` and concatenate the results in child order."""
        elements: list[Element] = []
        for child in node.children:
            elements.extend(self.process(depth + 1, child))
        return elements

    def _trace(self, depth: int, node: Node, processor: Processor) -> None:
        marker = " " if processor is self.registry.default else "*"
        details = ""
        if isinstance(node, Heading):
            details = f" L:{node.level}"
        elif isinstance(node, CodeBlock):
            details = f" T:{node.language}"
        logger.debug(f"{'    ' * depth}{marker}{type(node).__name__}{details}")
