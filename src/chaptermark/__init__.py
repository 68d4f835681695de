#  Copyright (c) 2025 Tom Villani, Ph.D.
"""chaptermark - book-style HTML rendering for markdown.

Renders markdown into HTML for long-form publications: numbered,
self-linking headings, grouped paragraphs, footnotes, captioned figures,
embedded videos, line-numbered highlighted code listings and blockquotes
with citations.

Basic usage:

    >>> from chaptermark import render_markdown
    >>> html = render_markdown("# Getting started\\n\\nHello.", chapter=2)

Bring your own options:

    >>> from chaptermark import RendererOptions, create_markdown
    >>> markdown = create_markdown(RendererOptions(basedir="book/images", sanitize=True))
    >>> html = markdown("![A map](map.png \\"Route taken. Credit: A. Cartographer\\")")

"""

from chaptermark.exceptions import (
    ChaptermarkError,
    DependencyError,
    ImageProbeError,
    InvalidOptionsError,
    RenderingError,
    ResourceError,
    ValidationError,
)
from chaptermark.markdown import create_markdown, render_markdown
from chaptermark.options import RendererOptions
from chaptermark.renderer import BookRenderer, render_inline
from chaptermark.state import ConstructKind, RenderState

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BookRenderer",
    "ChaptermarkError",
    "ConstructKind",
    "DependencyError",
    "ImageProbeError",
    "InvalidOptionsError",
    "RenderState",
    "RendererOptions",
    "RenderingError",
    "ResourceError",
    "ValidationError",
    "create_markdown",
    "render_inline",
    "render_markdown",
]
