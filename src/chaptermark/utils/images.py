#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chaptermark/utils/images.py
"""Image and embedded video helpers for figure rendering.

Provides dimension probing for local images (backed by Pillow) and the
detection of video URLs that are rendered as responsive iframes instead of
still images.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote

from chaptermark.constants import DEPS_IMAGES, VIDEO_HOSTS
from chaptermark.exceptions import ImageProbeError
from chaptermark.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

# Short links, /embed/, /v/, /u/x/ and watch?v= all carry the id in group 1
VIDEO_ID_PATTERN = re.compile(r".*(?:youtu\.be/|v/|u/\w/|embed/|watch\?v=)([^#&?]*).*")


@dataclass(frozen=True)
class ImageSize:
    """Pixel dimensions of an image."""

    width: int
    height: int

    @property
    def ratio_percent(self) -> str:
        """Height as a percentage of width, formatted with six decimals."""
        return f"{self.height / self.width * 100:.6f}"


def resolve_image_path(basedir: str, href: str) -> Path:
    """Resolve an image href against the configured base directory.

    Leading slashes are kept inside ``basedir`` rather than escaping to the
    filesystem root, and percent-escapes added by the parser are decoded.

    >>> resolve_image_path("book", "/img/cover%20art.png").as_posix()
    'book/img/cover art.png'

    """
    relative = unquote(href)
    if basedir:
        relative = relative.lstrip("/")
    return Path(os.path.join(basedir, relative))


@requires_dependencies("image probing", DEPS_IMAGES)
def probe_image_size(path: str | Path) -> ImageSize:
    """Read the pixel dimensions of an image file.

    Only the header is decoded.

    Parameters
    ----------
    path : str or Path
        Image file to probe

    Returns
    -------
    ImageSize
        Width and height in pixels

    Raises
    ------
    ImageProbeError
        If the file is missing, unreadable or not a recognised image
    DependencyError
        If Pillow is not installed

    """
    from PIL import Image, UnidentifiedImageError

    try:
        with Image.open(path) as image:
            width, height = image.size
    except (OSError, UnidentifiedImageError, ValueError) as e:
        raise ImageProbeError(f"Unable to read size of '{path}': {e}", resource=str(path), original_error=e) from e

    if not width or not height:
        raise ImageProbeError(f"Image '{path}' reports empty dimensions", resource=str(path))

    return ImageSize(width=width, height=height)


def is_embeddable_video(href: str) -> bool:
    """Return True if ``href`` points at a video host rendered as an iframe."""
    return any(host in href for host in VIDEO_HOSTS)


def extract_video_id(href: str) -> str | None:
    """Pull the video id out of a video URL.

    Parameters
    ----------
    href : str
        Video page, embed or short-link URL

    Returns
    -------
    str or None
        The id, or None when the URL has none of the known shapes

    Examples
    --------
    >>> extract_video_id("https://www.youtube.com/watch?v=abc123&t=10")
    'abc123'
    >>> extract_video_id("https://youtu.be/xyz789")
    'xyz789'

    """
    match = VIDEO_ID_PATTERN.match(href)
    if match is None:
        return None
    return match.group(1)


__all__ = [
    "ImageSize",
    "VIDEO_ID_PATTERN",
    "resolve_image_path",
    "probe_image_size",
    "is_embeddable_video",
    "extract_video_id",
]
