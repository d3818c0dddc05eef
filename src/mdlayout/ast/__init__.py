#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/ast/__init__.py
"""Markdown AST consumed by the conversion engine.

Examples
--------
    >>> from mdlayout.ast import Document, Heading, Paragraph, Text
    >>> doc = Document(children=[
    ...     Heading(level=1, children=[Text(content="Title")]),
    ...     Paragraph(children=[Text(content="Body")]),
    ... ])

"""

from mdlayout.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    Container,
    Document,
    Emphasis,
    Heading,
    Image,
    LeafNode,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    SpecialText,
    Strikethrough,
    Strong,
    Table,
    TableBody,
    TableCell,
    TableHeader,
    TableRow,
    Text,
    ThematicBreak,
)

__all__ = [
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Container",
    "Document",
    "Emphasis",
    "Heading",
    "Image",
    "LeafNode",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Node",
    "Paragraph",
    "SpecialText",
    "Strikethrough",
    "Strong",
    "Table",
    "TableBody",
    "TableCell",
    "TableHeader",
    "TableRow",
    "Text",
    "ThematicBreak",
]
