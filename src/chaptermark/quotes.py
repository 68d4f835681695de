#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chaptermark/quotes.py
"""Blockquote citation extraction and quote-mark stripping.

These are literal string-position rules, not a grammar: the citation is
whatever follows the last line that starts with an em-dash, and quote marks
are removed by looking only at the first and last characters of the body.
A quote that happens to start or end with a quote-like glyph for other
reasons loses it too.
"""

from __future__ import annotations

from typing import NamedTuple

CITATION_MARKER = "\n\u2014"
OPENING_QUOTES = ('"', "\u201c", "\u201e")
CLOSING_QUOTES = ('"', "\u201d", "\u201c")


class Citation(NamedTuple):
    """A blockquote body with its citation split off."""

    body: str
    citation: str | None


def split_citation(quote: str) -> Citation:
    """Split the trailing em-dash citation off a rendered quote.

    Parameters
    ----------
    quote : str
        Rendered inner HTML of the blockquote

    Returns
    -------
    Citation
        The body up to the citation and the citation text, which runs to the
        next ``</p>``. ``citation`` is None when there is none.

    Examples
    --------
    >>> split_citation("<p>To be.\\n\u2014 Hamlet</p>\\n")
    Citation(body='<p>To be.', citation='\\n\u2014 Hamlet')

    """
    index = quote.rfind(CITATION_MARKER)
    if index <= 0:
        return Citation(body=quote, citation=None)

    citation = quote[index:]
    paragraph_end = citation.find("</p>")
    if paragraph_end > 0:
        citation = citation[:paragraph_end]

    return Citation(body=quote[:index].strip(), citation=citation)


def strip_quote_marks(body: str) -> str:
    """Remove the paragraph wrapper and one pair of quote marks from a quote body.

    >>> strip_quote_marks("<p>\u201cBrevity is the soul of wit.\u201d</p>")
    'Brevity is the soul of wit.'

    """
    if body.startswith("<p>"):
        body = body[3:].strip()

    if body.startswith(OPENING_QUOTES):
        body = body[1:].strip()

    # A body cut before a citation paragraph ends in its opening tag
    if body.endswith("</p>") or body.endswith("<p>"):
        body = body[:-4].strip()

    if body.endswith(CLOSING_QUOTES):
        body = body[:-1].strip()

    return body


__all__ = ["Citation", "CITATION_MARKER", "split_citation", "strip_quote_marks"]
