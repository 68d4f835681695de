"""HTML-related utility helpers."""

from __future__ import annotations

import re

_ESCAPE_REPLACEMENTS = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}

_ESCAPE_ALL = re.compile(r"[&<>\"']")
# Leaves existing entities such as &nbsp; or &#8212; untouched
_ESCAPE_NO_ENCODE = re.compile(r"[<>\"']|&(?!#?\w+;)")

_ESCAPE_TEXT = re.compile(r"[<>]|&(?!#?\w+;)")

_TAG_PATTERN = re.compile(r"<[^>]+>")

# Existing anchors and tags are skipped; only bare URLs in text are linked
_AUTOLINK_PATTERN = re.compile(
    r"(?P<markup><a\b[^>]*>.*?</a>|<[^>]*>)|(?P<url>(?:https?|ftps?)://[^\s<>\"]+)",
    re.IGNORECASE | re.DOTALL,
)
_TRAILING_PUNCTUATION = ".,;:!?"


def escape_html(text: str, *, encode: bool = False) -> str:
    """Escape HTML special characters.

    Parameters
    ----------
    text : str
        Text to escape
    encode : bool, default False
        When False, ampersands that already start an entity are kept so that
        escaping is safe to apply to partially rendered markup.

    Returns
    -------
    str
        Escaped text

    """
    pattern = _ESCAPE_ALL if encode else _ESCAPE_NO_ENCODE
    return pattern.sub(lambda match: _ESCAPE_REPLACEMENTS[match.group(0)], text)


def escape_text(text: str) -> str:
    """Escape text content.

    Quotes are left alone since they are safe outside attributes, and so are
    entities the author typed.

    >>> escape_text('"Fish & chips" &copy; <b>')
    '"Fish &amp; chips" &copy; &lt;b&gt;'

    """
    return _ESCAPE_TEXT.sub(lambda match: _ESCAPE_REPLACEMENTS[match.group(0)], text)


def strip_html_tags(content: str) -> str:
    """Remove all HTML tags from content, leaving only text.

    >>> strip_html_tags("<em>Hello</em> world")
    'Hello world'

    """
    return _TAG_PATTERN.sub("", content)


def _trim_url(url: str) -> str:
    if "&nbsp;" in url:
        url = url[: url.index("&nbsp;")]

    has_query = "?" in url
    if not has_query:
        url = url.rstrip(_TRAILING_PUNCTUATION)
    else:
        url = url.rstrip(",;")

    # Unbalanced closing parens belong to the surrounding sentence
    if url.endswith(")"):
        open_count = url.count("(")
        close_count = url.count(")")
        while close_count > open_count and url.endswith(")"):
            url = url[:-1]
            close_count -= 1
        if not has_query:
            url = url.rstrip(_TRAILING_PUNCTUATION)

    return url


def autolink(text: str) -> str:
    """Turn bare URLs in a fragment of text or HTML into anchors.

    URLs that are already inside an anchor or a tag attribute are left alone.
    Trailing sentence punctuation and unbalanced closing parentheses are not
    treated as part of the URL.

    Parameters
    ----------
    text : str
        Plain text or HTML fragment

    Returns
    -------
    str
        Fragment with bare URLs wrapped in ``<a href="...">`` elements

    Examples
    --------
    >>> autolink("Photo: https://example.com/p.")
    'Photo: <a href="https://example.com/p">https://example.com/p</a>.'

    """

    def replace(match: re.Match[str]) -> str:
        if match.group("markup"):
            return match.group("markup")

        raw = match.group("url")
        url = _trim_url(raw)
        rest = raw[len(url) :]
        return f'<a href="{escape_html(url)}">{url}</a>{rest}'

    return _AUTOLINK_PATTERN.sub(replace, text)


__all__ = ["escape_html", "escape_text", "strip_html_tags", "autolink"]
