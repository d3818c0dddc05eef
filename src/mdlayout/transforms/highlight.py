#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/transforms/highlight.py
"""Syntax highlighting of verbatim blocks with Pygments.

The highlighter tokenizes the block with the lexer registered for its
language tag (plain text when the tag is unknown or absent) and maps each
token kind to a color and weight taken from a Pygments style sheet. It never
fails: tokens without a style use the style sheet's default foreground.

"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pygments import lex
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.styles import get_style_by_name
from pygments.token import Token
from pygments.util import ClassNotFound

from mdlayout.constants import BLACK, DEFAULT_HIGHLIGHT_STYLE
from mdlayout.elements import RGB, Element, Font, Paragraph, TextRun
from mdlayout.exceptions import ValidationError
from mdlayout.styles import FontDescriptor
from mdlayout.transforms.base import ContentTransform

logger = logging.getLogger(__name__)


def _to_rgb(value: Optional[str]) -> Optional[RGB]:
    if not value:
        return None
    try:
        return RGB.from_hex(value)
    except ValueError:
        logger.debug(f"Ignoring unparseable style color {value!r}")
        return None


class HighlightTransform(ContentTransform):
    """Highlight code with Pygments, emitting one preformatted paragraph.

    Parameters
    ----------
    font : FontDescriptor
        Verbatim font; token styles override its color, weight and posture
    style_name : str, default "friendly"
        Name of the Pygments style sheet

    Raises
    ------
    ValidationError
        If the style sheet does not exist

    """

    def __init__(self, font: FontDescriptor, style_name: str = DEFAULT_HIGHLIGHT_STYLE) -> None:
        try:
            self._style = get_style_by_name(style_name)
        except ClassNotFound as e:
            raise ValidationError(
                f"Unknown highlight style '{style_name}'",
                parameter_name="highlight_style",
                parameter_value=style_name,
                original_error=e,
            ) from e
        self.style_name = style_name
        self.font = font
        self.foreground = _to_rgb(self._style.style_for_token(Token.Text).get("color")) or RGB.of(BLACK)
        self.background = _to_rgb(self._style.background_color)
        self._fonts: dict[Any, Font] = {}

    def accepts(self, language: str) -> bool:
        return True

    def lexer_for(self, language: Optional[str]) -> Lexer:
        """Return the lexer for a tag, or a plain-text lexer."""
        if language:
            try:
                return get_lexer_by_name(language.lower(), stripnl=False, ensurenl=False)
            except ClassNotFound:
                logger.debug(f"No lexer for '{language}', highlighting as plain text")
        return TextLexer(stripnl=False, ensurenl=False)

    def font_for(self, token_type: Any) -> Font:
        font = self._fonts.get(token_type)
        if font is None:
            token_style = self._style.style_for_token(token_type)
            font = self.font.font(
                bold=bool(token_style.get("bold")),
                italic=bool(token_style.get("italic")),
                color=_to_rgb(token_style.get("color")) or self.foreground,
            )
            self._fonts[token_type] = font
        return font

    def process(self, language: Optional[str], code: str) -> list[Element]:
        runs: list[Element] = []
        pending_text: list[str] = []
        pending_font: Optional[Font] = None

        for token_type, value in lex(code.rstrip("\n"), self.lexer_for(language)):
            if not value:
                continue
            font = self.font_for(token_type)
            if font != pending_font and pending_text:
                runs.append(TextRun("".join(pending_text), pending_font))  # type: ignore[arg-type]
                pending_text = []
            pending_font = font
            pending_text.append(value)

        if pending_text:
            runs.append(TextRun("".join(pending_text), pending_font))  # type: ignore[arg-type]

        return [Paragraph(children=runs, background=self.background, preformatted=True, style="code")]
