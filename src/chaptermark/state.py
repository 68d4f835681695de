#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chaptermark/state.py
"""Cross-construct render state.

The parser calls one renderer hook per construct, children first, with no
shared tree. ``RenderState`` is what lets those independent calls produce
coherent output: it owns the heading counters, remembers which construct
(and which block-level construct) was rendered last, and tracks whether a
``<div class="paragraphs">`` group is currently open.

Every construct hook calls :meth:`RenderState.before_construct` before
building its own markup and prepends the fragment it returns. Once the whole
document is rendered, :meth:`RenderState.finalize` closes a group that is
still open.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from chaptermark.constants import DEFAULT_CHAPTER, PARAGRAPH_GROUP_CLOSE, PARAGRAPH_GROUP_OPEN

logger = logging.getLogger(__name__)


class ConstructKind(str, Enum):
    """Syntactic constructs the renderer distinguishes."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    HTML = "html"
    INLINE_HTML = "inline_html"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    CODE = "code"
    HR = "hr"
    LIST = "list"
    LIST_ITEM = "list_item"
    CHECKBOX = "checkbox"
    BLOCKQUOTE = "blockquote"
    IMAGE = "image"
    LINK = "link"
    STRONG = "strong"
    EM = "em"
    CODESPAN = "codespan"
    BR = "br"
    DEL = "del"
    TEXT = "text"

    @property
    def is_block(self) -> bool:
        """Whether the construct occupies its own visual block."""
        return self in BLOCK_LEVEL_CONSTRUCTS


BLOCK_LEVEL_CONSTRUCTS = frozenset(
    {
        ConstructKind.HEADING,
        ConstructKind.HTML,
        ConstructKind.TABLE,
        ConstructKind.CODE,
        ConstructKind.HR,
        ConstructKind.LIST,
        ConstructKind.BLOCKQUOTE,
        ConstructKind.PARAGRAPH,
        ConstructKind.TABLE_ROW,
        ConstructKind.TABLE_CELL,
    }
)


@dataclass
class RenderState:
    """Mutable state for rendering one document.

    Parameters
    ----------
    chapter : int, default 1
        Chapter number; the first component of every heading number

    Attributes
    ----------
    section : int
        Level-2 heading counter
    subsection : int
        Level-3 heading counter, reset by every level-2 heading
    last_construct : ConstructKind or None
        Most recently rendered construct of any kind
    last_block_construct : ConstructKind or None
        Most recently rendered block-level construct
    paragraph_group_open : bool
        True while a paragraph group wrapper is open

    Notes
    -----
    The state is not reentrant. Use one instance per document and never share
    it between documents rendered concurrently.

    """

    chapter: int = DEFAULT_CHAPTER
    section: int = 0
    subsection: int = 0
    last_construct: ConstructKind | None = None
    last_block_construct: ConstructKind | None = None
    paragraph_group_open: bool = False

    def before_construct(self, kind: ConstructKind, level: int | None = None) -> str:
        """Update the state for a construct about to be rendered.

        Parameters
        ----------
        kind : ConstructKind
            The construct being rendered
        level : int, optional
            Heading level, only meaningful for headings

        Returns
        -------
        str
            Fragment to prepend to the construct's markup: the paragraph group
            opener, the group closer, or an empty string

        """
        if kind is ConstructKind.HEADING:
            self._advance_counters(level)

        previous_block = self.last_block_construct
        self.last_construct = kind
        if kind.is_block:
            self.last_block_construct = kind

        if kind is ConstructKind.PARAGRAPH and previous_block is not ConstructKind.PARAGRAPH:
            self.paragraph_group_open = True
            return PARAGRAPH_GROUP_OPEN

        if kind is not ConstructKind.PARAGRAPH and kind.is_block and self.paragraph_group_open:
            self.paragraph_group_open = False
            return PARAGRAPH_GROUP_CLOSE

        return ""

    def _advance_counters(self, level: int | None) -> None:
        if level == 2:
            self.section += 1
            self.subsection = 0
        elif level == 3:
            self.subsection += 1

    def heading_number(self, level: int) -> str:
        """Return the displayed number for a heading at ``level``.

        Levels deeper than 3 reuse the level-3 number.

        >>> state = RenderState(chapter=4, section=2, subsection=1)
        >>> state.heading_number(1), state.heading_number(2), state.heading_number(5)
        ('4', '4.2', '4.2.1')

        """
        if level == 1:
            return str(self.chapter)
        if level == 2:
            return f"{self.chapter}.{self.section}"
        return f"{self.chapter}.{self.section}.{self.subsection}"

    def discard_paragraph_group(self) -> None:
        """Forget an open group whose opener was removed from the output."""
        self.paragraph_group_open = False

    def finalize(self, content: str) -> str:
        """Close a paragraph group left open at the end of the document.

        Parameters
        ----------
        content : str
            The fully rendered document

        Returns
        -------
        str
            The document with the group closer appended if one was needed

        """
        if self.paragraph_group_open:
            logger.debug("Closing paragraph group at end of document")
            self.paragraph_group_open = False
            return content + PARAGRAPH_GROUP_CLOSE
        return content


__all__ = ["ConstructKind", "BLOCK_LEVEL_CONSTRUCTS", "RenderState"]
