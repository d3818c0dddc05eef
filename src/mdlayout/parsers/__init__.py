#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers producing the AST consumed by the conversion engine."""

from mdlayout.parsers.markdown import MarkdownParser, markdown_to_ast

__all__ = ["MarkdownParser", "markdown_to_ast"]
