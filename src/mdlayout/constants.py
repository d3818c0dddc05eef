#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for mdlayout.

This module centralizes the role names, palette values and default
configuration constants used across the conversion engine.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Style Roles - Semantic role names understood by the style registry
3. Palette - Named colors used by the default styles
4. Conversion Defaults - Highlighting, diagram and table settings
5. PDF Backend Defaults - Page geometry for the reportlab backend
6. Dependency Specifications - Packages checked by requires_dependencies
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Alignment = Literal["left", "center", "right"]
PageSize = Literal["letter", "a4", "legal"]
TaskStatus = Literal["checked", "unchecked"]

# =============================================================================
# Style Roles
# =============================================================================

DEFAULT_COLOR = "default-color"
DEFAULT_FONT = "default-font"

CODE_FONT = "code-font"

INLINE_CODE_FONT = "inline-code-font"
INLINE_CODE_BACKGROUND = "inline-code-background"

H1_FONT = "H1-font"
H2_FONT = "H2-font"
H3_FONT = "H3-font"
H4_FONT = "H4-font"

TABLE_ALTERNATE_BACKGROUND = "table-alternate-background"
TABLE_HEADER_FONT = "table-header-font"
TABLE_HEADER_BACKGROUND = "table-header-background"
TABLE_BODY_FONT = "table-body-font"

LINK_COLOR = "link-color"


def heading_role(level: int) -> str:
    """Return the font role name for a heading level (``H<level>-font``)."""
    return f"H{level}-font"


# =============================================================================
# Palette
# =============================================================================

# (red, green, blue) triplets, converted to RGB by mdlayout.elements
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
DARK_GRAY = (64, 64, 64)
GRAY = (128, 128, 128)
LIGHT_GRAY = (192, 192, 192)
VERY2_LIGHT_GRAY = (240, 240, 240)
LINK_BLUE = (0, 0, 238)

# =============================================================================
# Conversion Defaults
# =============================================================================

DEFAULT_FONT_FAMILY = "Helvetica"
DEFAULT_FONT_SIZE = 12.0
DEFAULT_CODE_FONT_FAMILY = "Courier"

DEFAULT_HIGHLIGHT_STYLE = "friendly"

DEFAULT_DIAGRAM_LANGUAGES = ("ditaa",)
DEFAULT_DIAGRAM_SCALE = 2.0
DEFAULT_DIAGRAM_DISPLAY_SCALE = 0.5
DEFAULT_DIAGRAM_MAX_CELLS = 200_000
DIAGRAM_CELL_WIDTH = 8
DIAGRAM_CELL_HEIGHT = 14

DEFAULT_BULLET_SYMBOL = "circle"
TASK_CHECKED_SYMBOL = "check-square-o"
TASK_UNCHECKED_SYMBOL = "square-o"

# =============================================================================
# PDF Backend Defaults
# =============================================================================

DEFAULT_PDF_PAGE_SIZE: PageSize = "a4"
DEFAULT_PDF_MARGIN = 72.0
DEFAULT_CREATOR = "mdlayout"

# =============================================================================
# Dependency Specifications
# =============================================================================
# (pip_package, import_name, version_constraint)

DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
DEPS_PDF_RENDER = [("reportlab", "reportlab", ">=4.0.0")]

# =============================================================================
# Configuration Discovery
# =============================================================================

CONFIG_FILENAMES = [".mdlayout.toml", ".mdlayout.yaml", ".mdlayout.yml", ".mdlayout.json"]
