#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/ast/nodes.py
"""AST node classes for parsed Markdown documents.

This module defines the node hierarchy consumed by the conversion engine.
Nodes are produced by the Markdown parser (or built by hand) and are treated
as read-only by every processor.

Each node exposes an ordered ``children`` list; leaf nodes return an empty
list. Dispatch is keyed by the concrete node class, so the class *is* the
node variant.

Node Hierarchy
--------------
Block-level nodes:
    - Document, Container, Heading, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, ThematicBreak
    - Table, TableHeader, TableBody, TableRow, TableCell

Inline nodes:
    - Text, SpecialText, Code
    - Emphasis, Strong, Strikethrough
    - Link, Image, LineBreak

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from mdlayout.constants import Alignment, TaskStatus


class Node:
    """Base class for all AST nodes.

    Container nodes declare a ``children`` dataclass field; leaves derive
    from LeafNode, whose ``children`` is always empty.
    """

    children: list[Node]

    @property
    def variant(self) -> type[Node]:
        """Return the node variant used as dispatch key."""
        return type(self)


class LeafNode(Node):
    """Base class for nodes without children."""

    @property
    def children(self) -> list[Node]:  # type: ignore[override]
        """Return an empty list."""
        return []


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document

    """

    children: list[Node] = field(default_factory=list)


@dataclass
class Container(Node):
    """Generic container whose children are processed in order."""

    children: list[Node] = field(default_factory=list)


@dataclass
class Heading(Node):
    """Heading node (``# Title``).

    Parameters
    ----------
    level : int
        Heading level, 1 or greater
    children : list of Node
        Inline content of the heading

    """

    level: int = 1
    children: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.level < 1:
            raise ValueError(f"Heading level must be >= 1, got {self.level}")


@dataclass
class Paragraph(Node):
    """Paragraph of inline content."""

    children: list[Node] = field(default_factory=list)


@dataclass
class CodeBlock(LeafNode):
    """Verbatim block (fenced or indented code).

    Parameters
    ----------
    content : str
        Raw text of the block
    language : str or None, default = None
        Language tag from the fence info string

    """

    content: str = ""
    language: Optional[str] = None


@dataclass
class BlockQuote(Node):
    """Block quote containing block-level children."""

    children: list[Node] = field(default_factory=list)


@dataclass
class List(Node):
    """Ordered or unordered list whose children are ListItem nodes.

    Parameters
    ----------
    ordered : bool, default = False
        Whether the list is numbered
    start : int, default = 1
        First number of an ordered list
    children : list of ListItem
        The list items

    """

    ordered: bool = False
    start: int = 1
    children: list[Node] = field(default_factory=list)


@dataclass
class ListItem(Node):
    """Single list item.

    Parameters
    ----------
    children : list of Node
        Block-level content of the item
    task_status : {"checked", "unchecked"} or None
        Task-list checkbox state, if the item is a task

    """

    children: list[Node] = field(default_factory=list)
    task_status: Optional[TaskStatus] = None


@dataclass
class ThematicBreak(LeafNode):
    """Horizontal rule (``---``)."""


@dataclass
class Table(Node):
    """Table whose children are a TableHeader and/or a TableBody."""

    children: list[Node] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        """Return the number of cells in the widest row of the table."""
        widest = 0
        for section in self.children:
            for row in section.children:
                widest = max(widest, len(row.children))
        return widest


@dataclass
class TableHeader(Node):
    """Header part of a table; children are TableRow nodes."""

    children: list[Node] = field(default_factory=list)


@dataclass
class TableBody(Node):
    """Body part of a table; children are TableRow nodes."""

    children: list[Node] = field(default_factory=list)


@dataclass
class TableRow(Node):
    """Table row; children are TableCell nodes."""

    children: list[Node] = field(default_factory=list)


@dataclass
class TableCell(Node):
    """Table cell holding inline content.

    Parameters
    ----------
    children : list of Node
        Inline content
    alignment : {"left", "center", "right"} or None
        Column alignment declared by the table delimiter row

    """

    children: list[Node] = field(default_factory=list)
    alignment: Optional[Alignment] = None


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(LeafNode):
    """Plain text run."""

    content: str = ""


@dataclass
class SpecialText(LeafNode):
    """Text printed literally, without any Markdown interpretation (raw inline HTML, escapes)."""

    content: str = ""


@dataclass
class Code(LeafNode):
    """Inline code span."""

    content: str = ""


@dataclass
class Emphasis(Node):
    """Emphasized (italic) inline content."""

    children: list[Node] = field(default_factory=list)


@dataclass
class Strong(Node):
    """Strong (bold) inline content."""

    children: list[Node] = field(default_factory=list)


@dataclass
class Strikethrough(Node):
    """Struck-through inline content."""

    children: list[Node] = field(default_factory=list)


@dataclass
class Link(Node):
    """Hyperlink.

    Parameters
    ----------
    url : str
        Link target
    children : list of Node
        Link text
    title : str or None
        Optional link title

    """

    url: str = ""
    children: list[Node] = field(default_factory=list)
    title: Optional[str] = None


@dataclass
class Image(LeafNode):
    """Image reference (``![alt](url)``)."""

    url: str = ""
    alt_text: str = ""
    title: Optional[str] = None


@dataclass
class LineBreak(LeafNode):
    """Line break; soft breaks come from plain newlines inside a paragraph."""

    soft: bool = False
