#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chaptermark/utils/security.py
"""URL sanitization and resolution for rendered links.

The rules mirror what markdown renderers traditionally do with link targets:
dangerous schemes are rejected when sanitization is requested, relative
targets are resolved against a configured base, and the result is
percent-encoded without double-encoding existing escapes.

"""

from __future__ import annotations

import html
import logging
import re
from functools import lru_cache
from urllib.parse import quote, unquote

from chaptermark.constants import DANGEROUS_SCHEMES

logger = logging.getLogger(__name__)

_NON_WORD_AND_COLON = re.compile(r"[^\w:]")
# Empty, scheme-qualified, or query/fragment-only targets never need a base
_ORIGIN_INDEPENDENT_URL = re.compile(r"^$|^[a-z][a-z0-9+.\-]*:|^[?#]", re.IGNORECASE)
_JUST_DOMAIN = re.compile(r"^[^:]+:/*[^/]*$")
_PROTOCOL = re.compile(r"^([^:]+:)[\s\S]*$")
_DOMAIN = re.compile(r"^([^:]+:/*[^/]*)[\s\S]*$")

# Characters encodeURI leaves untouched besides alphanumerics and -_.~
_URI_SAFE = ";,/?:@&=+$!*'()#"


def is_url_scheme_dangerous(url: str) -> bool:
    """Check if a URL uses a scheme that can execute script.

    The check runs on the entity-decoded, percent-decoded URL with every
    character except word characters and colons removed, so obfuscations
    like ``java&#115;cript:`` or ``java script:`` are still caught.

    Parameters
    ----------
    url : str
        URL to check

    Returns
    -------
    bool
        True if URL uses a dangerous scheme or cannot be decoded

    Examples
    --------
    >>> is_url_scheme_dangerous("javascript:alert(1)")
    True
    >>> is_url_scheme_dangerous("https://example.com")
    False

    """
    try:
        decoded = unquote(html.unescape(url), errors="strict")
    except UnicodeDecodeError:
        return True

    protocol = _NON_WORD_AND_COLON.sub("", decoded).lower()
    return protocol.startswith(DANGEROUS_SCHEMES)


@lru_cache(maxsize=64)
def _normalize_base(base: str) -> str:
    if _JUST_DOMAIN.match(base):
        return base + "/"
    # Trim back to the last slash so "docs/page" resolves siblings of "page"
    return base[: base.rfind("/") + 1]


def resolve_url(base: str, href: str) -> str:
    """Resolve a relative link target against a base URL.

    Parameters
    ----------
    base : str
        Base URL, e.g. ``https://example.com/book/``
    href : str
        Relative target

    Returns
    -------
    str
        Resolved target

    Examples
    --------
    >>> resolve_url("https://example.com/book/intro", "chapter-2")
    'https://example.com/book/chapter-2'
    >>> resolve_url("https://example.com/book/", "/about")
    'https://example.com/about'

    """
    base = _normalize_base(base)
    relative_base = ":" not in base

    if href.startswith("//"):
        if relative_base:
            return href
        return _PROTOCOL.sub(r"\1", base) + href

    if href.startswith("/"):
        if relative_base:
            return href
        return _DOMAIN.sub(r"\1", base) + href

    return base + href


def clean_url(sanitize: bool, base: str | None, href: str) -> str | None:
    """Sanitize, resolve and percent-encode a link target.

    Parameters
    ----------
    sanitize : bool
        Reject dangerous schemes when True
    base : str or None
        Base URL for relative targets
    href : str
        Link target as written by the author

    Returns
    -------
    str or None
        The cleaned URL, or None if it was rejected or cannot be encoded

    """
    if sanitize and is_url_scheme_dangerous(href):
        logger.debug("Rejected unsafe link target: %r", href)
        return None

    if base and not _ORIGIN_INDEPENDENT_URL.match(href):
        href = resolve_url(base, href)

    try:
        encoded = quote(href, safe=_URI_SAFE)
    except UnicodeEncodeError:
        return None

    # Existing escapes are re-encoded by quote(); fold them back
    return encoded.replace("%25", "%")


__all__ = ["is_url_scheme_dangerous", "resolve_url", "clean_url"]
