#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/transforms/__init__.py
"""Content transforms for verbatim blocks (syntax highlighting, diagrams)."""

from mdlayout.transforms.base import ContentTransform, FallbackTransform, TransformRegistry
from mdlayout.transforms.diagram import DiagramTransform, TextGrid, diagram_with_fallback
from mdlayout.transforms.highlight import HighlightTransform

__all__ = [
    "ContentTransform",
    "DiagramTransform",
    "FallbackTransform",
    "HighlightTransform",
    "TextGrid",
    "TransformRegistry",
    "diagram_with_fallback",
]
