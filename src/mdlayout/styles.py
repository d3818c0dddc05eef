#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/styles.py
"""Named font and color definitions keyed by semantic role.

The StyleRegistry maps role names (see ``mdlayout.constants``) to font
descriptors and colors. Looking up an unknown role is not an error: the
lookup returns None and the caller applies its own fallback, usually the
registry's default font.

Examples
--------
    >>> styles = StyleRegistry().init_defaults()
    >>> styles.resolve(H1_FONT).size
    18.0
    >>> styles.resolve("no-such-role") is None
    True

"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

from mdlayout.constants import (
    BLACK,
    CODE_FONT,
    DARK_GRAY,
    DEFAULT_CODE_FONT_FAMILY,
    DEFAULT_COLOR,
    DEFAULT_FONT,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    H1_FONT,
    H2_FONT,
    H3_FONT,
    H4_FONT,
    INLINE_CODE_BACKGROUND,
    INLINE_CODE_FONT,
    LIGHT_GRAY,
    LINK_BLUE,
    LINK_COLOR,
    TABLE_ALTERNATE_BACKGROUND,
    TABLE_BODY_FONT,
    TABLE_HEADER_BACKGROUND,
    TABLE_HEADER_FONT,
    VERY2_LIGHT_GRAY,
    WHITE,
    heading_role,
)
from mdlayout.elements import RGB, Font

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontDescriptor:
    """Immutable description of a font, resolved lazily into a Font.

    Parameters
    ----------
    family : str
        Base font family
    size : float
        Size in points
    bold : bool, default = False
    italic : bool, default = False
    color : RGB, default = black

    """

    family: str
    size: float
    bold: bool = False
    italic: bool = False
    color: RGB = field(default_factory=lambda: RGB.of(BLACK))

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"Font size must be positive, got {self.size}")

    def font(
        self,
        bold: Optional[bool] = None,
        italic: Optional[bool] = None,
        color: Optional[RGB] = None,
    ) -> Font:
        """Resolve the descriptor, optionally overriding style and color."""
        return Font(
            family=self.family,
            size=self.size,
            bold=self.bold if bold is None else bold,
            italic=self.italic if italic is None else italic,
            color=self.color if color is None else color,
        )


class StyleRegistry:
    """Registry of fonts and colors keyed by role name.

    Registration is guarded by a lock; during concurrent conversions the
    registry must be treated as read-only, or each conversion given its own
    ``copy()``.
    """

    def __init__(self, base_family: str = DEFAULT_FONT_FAMILY, base_size: float = DEFAULT_FONT_SIZE) -> None:
        self._fonts: dict[str, FontDescriptor] = {}
        self._colors: dict[str, RGB] = {}
        self._lock = threading.Lock()
        self.base_family = base_family
        self.base_size = base_size

    def init_defaults(self, code_family: str = DEFAULT_CODE_FONT_FAMILY) -> StyleRegistry:
        """Register the default palette and return the registry."""
        black, dark_gray = RGB.of(BLACK), RGB.of(DARK_GRAY)
        default = FontDescriptor(self.base_family, self.base_size, color=black)

        self.register_color(DEFAULT_COLOR, black)
        self.register(DEFAULT_FONT, default)

        self.register(CODE_FONT, FontDescriptor(code_family, self.base_size, color=black))
        self.register(INLINE_CODE_FONT, FontDescriptor(code_family, self.base_size, color=black))
        self.register_color(INLINE_CODE_BACKGROUND, RGB.of(LIGHT_GRAY))

        self.register(H1_FONT, FontDescriptor(self.base_family, 18.0, bold=True, color=black))
        self.register(H2_FONT, FontDescriptor(self.base_family, 16.0, bold=True, color=dark_gray))
        self.register(H3_FONT, FontDescriptor(self.base_family, 14.0, bold=True, color=dark_gray))
        self.register(H4_FONT, FontDescriptor(self.base_family, 14.0, italic=True, color=dark_gray))

        self.register_color(TABLE_ALTERNATE_BACKGROUND, RGB.of(VERY2_LIGHT_GRAY))
        self.register(TABLE_HEADER_FONT, FontDescriptor(self.base_family, 14.0, italic=True, color=RGB.of(WHITE)))
        self.register_color(TABLE_HEADER_BACKGROUND, black)
        self.register(TABLE_BODY_FONT, default)

        self.register_color(LINK_COLOR, RGB.of(LINK_BLUE))
        return self

    def register(self, role: str, descriptor: FontDescriptor) -> None:
        """Register (or replace) the font descriptor for a role."""
        with self._lock:
            if role in self._fonts:
                logger.debug(f"Replacing font for role '{role}'")
            self._fonts[role] = descriptor

    def register_color(self, role: str, color: RGB) -> None:
        """Register (or replace) the color for a role."""
        with self._lock:
            self._colors[role] = color

    def descriptor(self, role: str) -> Optional[FontDescriptor]:
        return self._fonts.get(role)

    def resolve(
        self,
        role: str,
        bold: Optional[bool] = None,
        italic: Optional[bool] = None,
        color: Optional[RGB] = None,
    ) -> Optional[Font]:
        """Resolve a role to a font, or None when the role is not registered."""
        descriptor = self._fonts.get(role)
        if descriptor is None:
            return None
        return descriptor.font(bold=bold, italic=italic, color=color)

    def resolve_color(self, role: str) -> Optional[RGB]:
        """Resolve a role to a color, or None when the role is not registered."""
        return self._colors.get(role)

    def default_font(self) -> Font:
        """Return the document default font."""
        return self.resolve(DEFAULT_FONT) or Font(self.base_family, self.base_size)

    def default_color(self) -> RGB:
        color = self.resolve_color(DEFAULT_COLOR)
        return color if color is not None else RGB.of(BLACK)

    def section_title_font(self, level: int) -> Font:
        """Return the title font for a heading level.

        Walks from ``level`` down to 1 and uses the nearest registered heading
        font; never looks at levels above the requested one. Falls back to the
        default font when no heading font at or below ``level`` exists.
        """
        for candidate in range(level, 0, -1):
            descriptor = self._fonts.get(heading_role(candidate))
            if descriptor is not None:
                return descriptor.font()
        return self.default_font()

    def copy(self) -> StyleRegistry:
        """Return an independent registry with the same registrations."""
        clone = StyleRegistry(self.base_family, self.base_size)
        with self._lock:
            clone._fonts = dict(self._fonts)
            clone._colors = dict(self._colors)
        return clone

    def roles(self) -> list[str]:
        return sorted(set(self._fonts) | set(self._colors))
