#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/assembler.py
"""Rebuild the chapter/section hierarchy from the flat top-level output.

Heading processors only ever build standalone sections. The top-level
dispatch output is therefore a flat, document-ordered stream of sections and
content; TreeAssembler turns it into the nested tree handed to a layout
backend in a single pass:

- a Chapter (or a level-1 section, which is promoted to a Chapter) is
  appended to the tree;
- any other section is attached under the nearest open section of a lower
  level, and becomes the current section;
- content is attached to the current section, or to the tree when no
  section has been opened yet.

A section with no enclosing open section (a subheading before the first
chapter) is promoted to a Chapter that keeps its level, so the tree root only
ever holds chapters and leading content, and no content is dropped.

"""

from __future__ import annotations

import logging
from typing import Iterable

from mdlayout.elements import Chapter, Element, Section

logger = logging.getLogger(__name__)


class TreeAssembler:
    """Single-pass chapter/section tree reconstruction."""

    def assemble(self, elements: Iterable[Element]) -> list[Element]:
        """Nest a flat element stream into chapters and sections.

        Parameters
        ----------
        elements : iterable of Element
            Top-level dispatch output in document order

        Returns
        -------
        list of Element
            Chapters, and any content preceding the first section

        Examples
        --------
            >>> tree = TreeAssembler().assemble([Chapter(title=[...]), para_x, Section(level=2), para_y])
            >>> # -> [Chapter[para_x, Section[para_y]]]

        """
        tree: list[Element] = []
        open_sections: list[Section] = []
        current: Section | None = None
        chapter_count = 0

        for element in elements:
            if not isinstance(element, Section):
                if current is not None:
                    current.add(element)
                else:
                    tree.append(element)
                continue

            section = element
            if not isinstance(section, Chapter) and section.level <= 1:
                section = Chapter.from_section(section)

            while open_sections and open_sections[-1].level >= section.level:
                open_sections.pop()

            if not isinstance(section, Chapter) and not open_sections:
                logger.debug(f"Section '{section.title_text}' has no enclosing chapter, promoting it to a chapter")
                section = Chapter.from_section(section)

            if isinstance(section, Chapter):
                open_sections.clear()
                chapter_count += 1
                section.number = (chapter_count,)
                tree.append(section)
            else:
                parent = open_sections[-1]
                section.number = parent.number + (len(parent.sections) + 1,)
                parent.add(section)

            open_sections.append(section)
            current = section

        return tree
