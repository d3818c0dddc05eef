#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/parsers/markdown.py
"""Markdown to AST parser.

This module builds the node tree consumed by the conversion engine from the
token stream of the mistune parser (GFM tables, strikethrough and task lists
enabled). Tables are split into a header and a body group so that each group
can be styled on its own.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Callable, Optional, Union

from mdlayout.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    Image,
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
from mdlayout.constants import DEPS_MARKDOWN
from mdlayout.exceptions import ParsingError
from mdlayout.utils.decorators import requires_dependencies
from mdlayout.utils.encoding import load_text

logger = logging.getLogger(__name__)

MISTUNE_PLUGINS = ["table", "strikethrough", "task_lists"]


class MarkdownParser:
    """Convert Markdown source to an AST Document.

    Examples
    --------
        >>> parser = MarkdownParser()
        >>> doc = parser.parse("# Title\\n\\nSome *text*.")
        >>> [type(child).__name__ for child in doc.children]
        ['Heading', 'Paragraph']

    """

    def __init__(self) -> None:
        self._inline_handlers: dict[str, Callable[[dict[str, Any]], Optional[Node]]] = {
            "text": self._handle_text_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "strikethrough": self._handle_strikethrough_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
            "inline_html": self._handle_inline_html_token,
        }

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse(self, source: Union[str, Path, IO[bytes], bytes]) -> Document:
        """Parse Markdown into a Document.

        Parameters
        ----------
        source : str, Path, IO[bytes] or bytes
            Markdown text, a file path, a binary stream or raw bytes

        Returns
        -------
        Document
            AST root

        Raises
        ------
        ParsingError
            If the source cannot be read or tokenized

        """
        try:
            content = load_text(source)
        except OSError as e:
            raise ParsingError(f"Cannot read Markdown source: {e}", original_error=e) from e

        import mistune

        markdown = mistune.create_markdown(plugins=MISTUNE_PLUGINS, renderer=None)
        try:
            tokens, _state = markdown.parse(content)
        except Exception as e:
            raise ParsingError(f"Markdown tokenization failed: {e}", original_error=e) from e

        return Document(children=self._process_tokens(tokens if isinstance(tokens, list) else []))

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _process_token(self, token: dict[str, Any]) -> Optional[Node]:
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is used for tight list items
            return Paragraph(children=self._process_inline_tokens(token.get("children", [])))
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return Paragraph(children=[SpecialText(content=token.get("raw", "").rstrip("\n"))])

        if token_type not in ("blank_line", ""):
            logger.debug(f"Ignoring unsupported Markdown token: {token_type}")
        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        attrs = token.get("attrs") or {}
        level = attrs.get("level", 1)
        if not isinstance(level, int) or level < 1:
            level = 1
        return Heading(level=level, children=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Keep the first word of the info string as the language tag."""
        attrs = token.get("attrs") or {}
        info = (attrs.get("info") or "").strip()
        language = info.split(maxsplit=1)[0] if info else None
        return CodeBlock(content=token.get("raw", ""), language=language)

    def _process_list(self, token: dict[str, Any]) -> List:
        attrs = token.get("attrs") or {}
        items: list[Node] = []
        for child in token.get("children", []):
            if isinstance(child, dict) and child.get("type") in ("list_item", "task_list_item"):
                items.append(self._process_list_item(child))
        return List(ordered=bool(attrs.get("ordered", False)), start=attrs.get("start", 1), children=items)

    def _process_list_item(self, token: dict[str, Any]) -> ListItem:
        attrs = token.get("attrs") or {}
        task_status = None
        if "checked" in attrs:
            task_status = "checked" if attrs["checked"] else "unchecked"
        return ListItem(children=self._process_tokens(token.get("children", [])), task_status=task_status)

    def _process_table(self, token: dict[str, Any]) -> Table:
        """Split the table into a header group and a body group."""
        children: list[Node] = []
        for part in token.get("children", []):
            part_type = part.get("type", "")
            if part_type == "table_head":
                # Header cells are direct children of table_head
                children.append(TableHeader(children=[TableRow(children=self._process_cells(part))]))
            elif part_type == "table_body":
                rows: list[Node] = [TableRow(children=self._process_cells(row)) for row in part.get("children", [])]
                children.append(TableBody(children=rows))
        return Table(children=children)

    def _process_cells(self, row_token: dict[str, Any]) -> list[Node]:
        cells: list[Node] = []
        for cell_token in row_token.get("children", []):
            if cell_token.get("type") != "table_cell":
                continue
            attrs = cell_token.get("attrs") or {}
            cells.append(
                TableCell(
                    children=self._process_inline_tokens(cell_token.get("children", [])),
                    alignment=attrs.get("align"),
                )
            )
        return cells

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            handler = self._inline_handlers.get(token.get("type", ""))
            if handler is None:
                logger.debug(f"Ignoring unsupported inline token: {token.get('type')}")
                continue
            node = handler(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        return Text(content=token.get("raw", ""))

    def _handle_strong_token(self, token: dict[str, Any]) -> Strong:
        return Strong(children=self._process_inline_tokens(token.get("children", [])))

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        return Emphasis(children=self._process_inline_tokens(token.get("children", [])))

    def _handle_strikethrough_token(self, token: dict[str, Any]) -> Strikethrough:
        return Strikethrough(children=self._process_inline_tokens(token.get("children", [])))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        return Code(content=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        attrs = token.get("attrs") or {}
        return Link(
            url=attrs.get("url", ""),
            title=attrs.get("title"),
            children=self._process_inline_tokens(token.get("children", [])),
        )

    def _handle_image_token(self, token: dict[str, Any]) -> Image:
        """Alt text is carried by the text children, not the attrs."""
        attrs = token.get("attrs") or {}
        alt_text = "".join(
            child.get("raw", "") for child in token.get("children", []) if child.get("type") == "text"
        )
        return Image(url=attrs.get("url", ""), alt_text=alt_text, title=attrs.get("title"))

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        return LineBreak(soft=False)

    def _handle_softbreak_token(self, token: dict[str, Any]) -> LineBreak:
        return LineBreak(soft=True)

    def _handle_inline_html_token(self, token: dict[str, Any]) -> Optional[SpecialText]:
        content = token.get("raw", "")
        return SpecialText(content=content) if content else None


def markdown_to_ast(source: Union[str, Path, IO[bytes], bytes]) -> Document:
    """Parse Markdown into a Document using the default parser."""
    return MarkdownParser().parse(source)
