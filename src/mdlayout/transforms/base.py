#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/transforms/base.py
"""Content transform interface, fallback combinator and registry.

A content transform turns the raw text of a verbatim block into layout
elements, selected by the block's language tag. The registry returns the
first transform accepting a tag and falls back to the syntax highlighter.

Plugins can contribute transforms through the ``mdlayout.transforms`` entry
point group. Each entry point must load to a callable that receives the
default (highlight) transform and returns a ContentTransform.

"""

from __future__ import annotations

import importlib.metadata
import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from mdlayout.elements import Element
from mdlayout.exceptions import TransformError

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "mdlayout.transforms"


class ContentTransform(ABC):
    """Turn the raw text of a verbatim block into layout elements."""

    @abstractmethod
    def accepts(self, language: str) -> bool:
        """Return whether this transform handles ``language`` (case-insensitive)."""

    @abstractmethod
    def process(self, language: Optional[str], code: str) -> list[Element]:
        """Convert ``code`` into elements.

        Raises
        ------
        TransformError
            If the transform cannot handle the input
        """


class FallbackTransform(ContentTransform):
    """Run ``primary``; on TransformError log it and use ``secondary`` instead.

    The combinator never raises TransformError itself, so callers can treat
    the wrapped transform as non-failing as long as ``secondary`` is.

    Parameters
    ----------
    primary : ContentTransform
        Transform tried first; also decides which tags are accepted
    secondary : ContentTransform
        Transform used when the primary fails

    """

    def __init__(self, primary: ContentTransform, secondary: ContentTransform) -> None:
        self.primary = primary
        self.secondary = secondary

    def accepts(self, language: str) -> bool:
        return self.primary.accepts(language)

    def process(self, language: Optional[str], code: str) -> list[Element]:
        try:
            return self.primary.process(language, code)
        except TransformError as e:
            logger.warning(
                f"{type(self.primary).__name__} failed on a '{language}' block, "
                f"falling back to {type(self.secondary).__name__}: {e}"
            )
            logger.debug("Transform failure", exc_info=e)
            return self.secondary.process(language, code)


class TransformRegistry:
    """Ordered collection of content transforms with a default.

    Parameters
    ----------
    default : ContentTransform
        Transform used when no registered transform accepts a tag
    transforms : iterable of ContentTransform, optional
        Transforms tried in order

    """

    def __init__(self, default: ContentTransform, transforms: Iterable[ContentTransform] = ()) -> None:
        self.default = default
        self._transforms: list[ContentTransform] = list(transforms)

    def register(self, transform: ContentTransform, first: bool = False) -> None:
        """Add a transform; ``first=True`` gives it priority over existing ones."""
        if first:
            self._transforms.insert(0, transform)
        else:
            self._transforms.append(transform)
        logger.debug(f"Registered content transform: {type(transform).__name__}")

    def find(self, language: Optional[str]) -> ContentTransform:
        """Return the first transform accepting ``language``, else the default."""
        if language:
            for transform in self._transforms:
                if transform.accepts(language):
                    return transform
        return self.default

    def __len__(self) -> int:
        return len(self._transforms)

    def discover_plugins(self) -> int:
        """Register transforms contributed through entry points.

        Returns
        -------
        int
            Number of transforms discovered and registered

        """
        discovered_count = 0
        for ep in importlib.metadata.entry_points().select(group=ENTRY_POINT_GROUP):
            try:
                factory = ep.load()
                transform = factory(self.default)
            except Exception as e:
                logger.warning(f"Failed to load content transform entry point '{ep.name}': {e}")
                continue

            if not isinstance(transform, ContentTransform):
                logger.warning(f"Entry point '{ep.name}' did not produce a ContentTransform, skipping")
                continue

            self.register(transform)
            discovered_count += 1
            logger.debug(f"Discovered content transform from entry point: {ep.name}")

        if discovered_count:
            logger.info(f"Discovered {discovered_count} content transform(s) from entry points")
        return discovered_count
