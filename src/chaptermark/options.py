#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chaptermark/options.py
"""Configuration options for the book renderer.

Options are frozen dataclasses. Use ``create_updated`` to derive a modified
copy instead of mutating an instance.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from chaptermark.constants import (
    DEFAULT_BASEDIR,
    DEFAULT_CHAPTER,
    DEFAULT_FAIL_ON_RESOURCE_ERRORS,
    DEFAULT_SANITIZE,
    DEFAULT_SMALL_IMAGE_MAX_WIDTH,
    DEFAULT_TAB_REPLACE,
    DEFAULT_XHTML,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class RendererOptions(CloneFrozenMixin):
    """Configuration options for rendering a markdown document to book HTML.

    Parameters
    ----------
    sanitize : bool, default False
        Reject ``javascript:``, ``vbscript:`` and ``data:`` link targets.
        A rejected link is rendered as its bare text.
    base_url : str or None, default None
        Base used to resolve relative link targets. Absolute, protocol-relative
        and fragment/query-only targets are left alone.
    xhtml : bool, default False
        Self-close void elements (``<br />``, ``<hr />``, ``<img />``, checkboxes).
    basedir : str, default ""
        Directory image paths are resolved against when probing dimensions.
    chapter : int, default 1
        Chapter number that seeds heading numbering.
    tab_replace : str, default "\\t"
        Replacement for tab characters in highlighted code listings.
    fail_on_resource_errors : bool, default False
        Raise ``RenderingError`` when an image cannot be probed instead of
        logging a warning and rendering it without dimensions.
    small_image_max_width : int, default 400
        Probed widths at or below this value mark the figure as ``small``.

    Examples
    --------
        >>> options = RendererOptions(chapter=3, basedir="book/images")
        >>> strict = options.create_updated(fail_on_resource_errors=True)

    """

    sanitize: bool = field(
        default=DEFAULT_SANITIZE,
        metadata={"help": "Reject dangerous URL schemes in link targets", "importance": "security"},
    )
    base_url: str | None = field(
        default=None,
        metadata={"help": "Base URL used to resolve relative link targets", "importance": "core"},
    )
    xhtml: bool = field(
        default=DEFAULT_XHTML,
        metadata={"help": "Self-close void elements", "importance": "advanced"},
    )
    basedir: str = field(
        default=DEFAULT_BASEDIR,
        metadata={"help": "Directory that image paths are resolved against", "importance": "core"},
    )
    chapter: int = field(
        default=DEFAULT_CHAPTER,
        metadata={"help": "Chapter number used to seed heading numbering", "type": int, "importance": "core"},
    )
    tab_replace: str = field(
        default=DEFAULT_TAB_REPLACE,
        metadata={"help": "Replacement string for tabs in highlighted code", "importance": "advanced"},
    )
    fail_on_resource_errors: bool = field(
        default=DEFAULT_FAIL_ON_RESOURCE_ERRORS,
        metadata={
            "help": "Raise RenderingError on image probing failures instead of logging warnings",
            "importance": "advanced",
        },
    )
    small_image_max_width: int = field(
        default=DEFAULT_SMALL_IMAGE_MAX_WIDTH,
        metadata={"help": "Maximum pixel width of figures marked as small", "type": int, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.chapter < 0:
            raise ValueError(f"chapter must be non-negative, got {self.chapter}")
        if self.small_image_max_width <= 0:
            raise ValueError(f"small_image_max_width must be positive, got {self.small_image_max_width}")


__all__ = ["CloneFrozenMixin", "RendererOptions"]
