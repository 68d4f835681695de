#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chaptermark/figures.py
"""Figure markup for images and embedded videos."""

from __future__ import annotations

import logging
from typing import NamedTuple

from chaptermark.constants import CREDIT_MARKER, VIDEO_ASPECT_RATIO, VIDEO_EMBED_URL
from chaptermark.utils.html_utils import autolink, escape_html
from chaptermark.utils.images import ImageSize, extract_video_id

logger = logging.getLogger(__name__)


class Caption(NamedTuple):
    """Figure title split into caption text and an optional credit."""

    text: str
    credit: str | None


def split_credit(title: str) -> Caption:
    """Split ``credit:`` (case-insensitive) and what follows off a title.

    A title that *starts* with the marker is left whole.

    >>> split_credit("A lighthouse. Credit: J. Doe")
    Caption(text='A lighthouse.', credit='J. Doe')
    >>> split_credit("credit: J. Doe")
    Caption(text='credit: J. Doe', credit=None)

    """
    index = title.lower().find(CREDIT_MARKER)
    if index > 0:
        return Caption(text=title[:index].strip(), credit=title[index + len(CREDIT_MARKER) :].strip())
    return Caption(text=title, credit=None)


def render_video_embed(href: str) -> str:
    """Render a responsive 16:9 iframe for a video URL."""
    video_id = extract_video_id(href)
    if video_id is None:
        logger.warning('Unable to find a video id in "%s"', href)

    src = VIDEO_EMBED_URL.format(video_id=escape_html(video_id or ""))
    return (
        '<div class="iframe">\n'
        "<iframe\n"
        f'  src="{src}"\n'
        '  frameborder="0"\n'
        '  allow="accelerometer; autoplay; encrypted-media; gyroscope; picture-in-picture"\n'
        "  allowfullscreen\n"
        "></iframe>\n"
        f'<div class="ratio" style="padding-top: {VIDEO_ASPECT_RATIO};"></div>\n'
        "</div>"
    )


def render_still_image(src: str, alt: str, size: ImageSize | None, *, xhtml: bool = False) -> str:
    """Render the ``<img>`` element, sized and lazy-loaded when dimensions are known."""
    size_attrs = f' width="{size.width}" height="{size.height}" loading="lazy"' if size else ""
    close = " /" if xhtml else ""
    return f'<div class="img"><img alt="{alt}" src="{src}"{size_attrs}{close}></div>'


def render_ratio_placeholder(size: ImageSize | None) -> str:
    """Render the box that reserves the image's height before it loads."""
    if size is None:
        return ""
    return f'<div class="ratio" style="padding-top: {size.ratio_percent}%;"></div>'


def render_credit(credit: str | None) -> str:
    """Render an autolinked credit footer."""
    if not credit:
        return ""
    return f"<footer>{autolink(credit)}</footer>"


def render_figure(content: str, *, classes: list[str], placeholder: str, caption: str = "") -> str:
    """Wrap figure content, its placeholder and caption in a ``<figure>``."""
    class_attr = " ".join(["image", *classes])
    return (
        "\n<figure>\n"
        f'<div class="{class_attr}">\n'
        f"{content}\n"
        f"{placeholder}\n"
        "</div>\n"
        f"{caption}"
        "</figure>\n"
    )


__all__ = [
    "Caption",
    "split_credit",
    "render_video_embed",
    "render_still_image",
    "render_ratio_placeholder",
    "render_credit",
    "render_figure",
]
