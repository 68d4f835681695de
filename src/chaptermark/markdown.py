#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chaptermark/markdown.py
"""Entry points tying the mistune parser to the book renderer.

The renderer keeps per-document state, so every document gets its own
renderer. ``create_markdown`` builds a parser bound to a fresh renderer;
``render_markdown`` does that for a single call.
"""

from __future__ import annotations

import logging
from typing import Any

import mistune

from chaptermark.options import RendererOptions
from chaptermark.renderer import BookRenderer, render_inline

logger = logging.getLogger(__name__)

PLUGINS = ["strikethrough", "table", "task_lists"]


def _flush_paragraph_group(md: mistune.Markdown, result: str, state: Any) -> str:
    return md.renderer.finalize(result)


def _parse_ref_link_or_footnote(block: Any, m: Any, state: Any) -> int | None:
    # [^label]: lines are footnote definitions, left to the paragraph renderer
    if m.group("reflink_1").startswith("^"):
        return None
    return block.parse_ref_link(m, state)


def create_markdown(options: RendererOptions | None = None, renderer: BookRenderer | None = None) -> mistune.Markdown:
    """Create a mistune parser that renders one document as book HTML.

    Parameters
    ----------
    options : RendererOptions or None, default None
        Rendering options; ignored when ``renderer`` is given
    renderer : BookRenderer or None, default None
        Renderer to bind; a fresh one is created when omitted

    Returns
    -------
    mistune.Markdown
        Callable parser. Its output already has any open paragraph group
        closed.

    Notes
    -----
    The returned parser carries the renderer's state. Calling it a second
    time continues the heading numbering of the first document, which is
    what a chapter split across several sources wants; create a new parser
    to start over.

    """
    renderer = renderer or BookRenderer(options)
    markdown = mistune.create_markdown(renderer=renderer, plugins=PLUGINS)
    markdown.block.register("ref_link", None, _parse_ref_link_or_footnote)
    markdown.after_render_hooks.append(_flush_paragraph_group)
    return markdown


def render_markdown(text: str, options: RendererOptions | None = None, **overrides: Any) -> str:
    """Render a markdown document to book HTML.

    Parameters
    ----------
    text : str
        Markdown source
    options : RendererOptions or None, default None
        Rendering options
    **overrides
        Option fields to override, e.g. ``chapter=3``

    Returns
    -------
    str
        HTML fragment for the document

    Examples
    --------
        >>> html = render_markdown("# Introduction", chapter=4)
        >>> '<a href="#4">4</a>' in html
        True

    """
    options = options or RendererOptions()
    if overrides:
        options = options.create_updated(**overrides)

    logger.debug("Rendering chapter %s (%d characters)", options.chapter, len(text))
    return create_markdown(options)(text)


__all__ = ["PLUGINS", "create_markdown", "render_markdown", "render_inline"]
