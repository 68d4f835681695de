#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chaptermark/listings.py
"""Code listing markup.

A highlighted listing is laid out as a table with one row per source line:
a line-number cell whose number is supplied through a ``data-pseudo-content``
attribute (so copying the code never copies the numbers) and a code cell
holding that line's markup in a ``<pre>``.

Splitting highlighted output on newlines only produces balanced rows if no
span crosses a line boundary. Multi-line comment spans and embedded CSS
spans are therefore closed at the end of every line and reopened at the
start of the next one before the split.
"""

from __future__ import annotations

import re

from chaptermark.constants import ASCII_ART_LANGUAGE
from chaptermark.highlight import highlight
from chaptermark.utils.html_utils import escape_html

_NEWLINE = re.compile(r"\r?\n")
_LANGUAGE = re.compile(r"\S*")

MULTILINE_SPAN_CLASSES = ("hljs-comment", "css")


def listing_language(info: str | None) -> str:
    """Return the language tag of a fence info string ('' if there is none)."""
    match = _LANGUAGE.match(info or "")
    return match.group(0) if match else ""


def split_multiline_spans(highlighted: str) -> str:
    """Close and reopen multi-line comment and CSS spans at every line break.

    >>> split_multiline_spans('<span class="hljs-comment">/* a\\n b */</span>')
    '<span class="hljs-comment">/* a</span>\\n<span class="hljs-comment"> b */</span>'

    """
    for class_name in MULTILINE_SPAN_CLASSES:
        opener = f'<span class="{class_name}">'
        pattern = re.compile(re.escape(opener) + r"[\s\S]*?</span>")
        highlighted = pattern.sub(
            lambda match, opener=opener: _NEWLINE.sub(f"</span>\n{opener}", match.group(0)),
            highlighted,
        )
    return highlighted


def strip_stray_closer(line: str) -> str:
    """Drop a ``</span>`` that opens a line, a leftover of span splitting."""
    if line.strip().startswith("</span>"):
        return line.replace("</span>", "", 1)
    return line


def render_listing_rows(highlighted: str) -> str:
    """Lay highlighted markup out as numbered table rows."""
    rows = []
    for number, line in enumerate(_NEWLINE.split(split_multiline_spans(highlighted)), start=1):
        rows.append(
            "<tr>"
            f'<td class="line-number" data-pseudo-content="{number}"></td>'
            f"<td><pre>{strip_stray_closer(line)}</pre></td>"
            "</tr>\n"
        )
    return "".join(rows)


def render_ascii_listing(code: str) -> str:
    """Render ASCII art verbatim; only ``<`` is escaped."""
    return f'<div class="code code-{ASCII_ART_LANGUAGE}"><pre>{code.replace("<", "&lt;")}</pre></div>\n'


def render_plain_listing(code: str) -> str:
    """Render a listing without a language tag."""
    return f'<div class="code"><pre>{escape_html(code, encode=True)}</pre></div>\n'


def render_code_listing(code: str, info: str | None = None, *, tab_replace: str = "\t") -> str:
    """Render a fenced or indented code block.

    Parameters
    ----------
    code : str
        Raw listing text
    info : str, optional
        Fence info string; its first word is the language
    tab_replace : str, default "\\t"
        Replacement for tabs in highlighted output

    Returns
    -------
    str
        Listing markup

    """
    language = listing_language(info)

    if not language:
        return render_plain_listing(code)

    if language == ASCII_ART_LANGUAGE:
        return render_ascii_listing(code)

    highlighted = highlight(code, [language], tab_replace=tab_replace)
    language_class = escape_html(language, encode=True)
    return (
        f'<div class="code code-{language_class}">\n'
        '<table class="code-table">\n'
        f"{render_listing_rows(highlighted)}"
        "</table>\n"
        "</div>\n"
    )


__all__ = [
    "listing_language",
    "split_multiline_spans",
    "strip_stray_closer",
    "render_listing_rows",
    "render_ascii_listing",
    "render_plain_listing",
    "render_code_listing",
]
