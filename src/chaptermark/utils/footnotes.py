#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Footnote marker interpolation.

Footnotes are linked purely by label: a reference ``[^label]`` in running
text becomes a superscript pointing at ``#footnote:label`` and a paragraph of
the form ``[^label]: body`` becomes the note itself, pointing back at
``#footnote-reference:label``. No registry is kept.
"""

from __future__ import annotations

import re

from chaptermark.constants import FOOTNOTE_PREFIX, FOOTNOTE_REFERENCE_PREFIX

FOOTNOTE_DEFINITION_PATTERN = re.compile(r"^\[\^([^\]]+)\]:([\s\S]*)$")
# A trailing ":" marks a definition and "(" an inline link, neither is a reference
FOOTNOTE_REFERENCE_PATTERN = re.compile(r"\[\^([^\]]+)\](?![(:])")


def render_footnote_reference(label: str) -> str:
    """Render the in-text superscript marker for ``label``."""
    return (
        f'<sup class="footnote-mark" data-number="{label}" id="{FOOTNOTE_REFERENCE_PREFIX}:{label}">'
        f'<a href="#{FOOTNOTE_PREFIX}:{label}">{label}</a></sup>'
    )


def render_footnote_definition(label: str, body: str) -> str:
    """Render the note marker for ``label`` followed by its body."""
    return (
        f'<sup class="footnote-text" data-number="{label}" id="{FOOTNOTE_PREFIX}:{label}">'
        f'<a href="#{FOOTNOTE_REFERENCE_PREFIX}:{label}">{label}</a></sup>{body}'
    )


def is_footnote_definition(text: str) -> bool:
    """Return True if the whole of ``text`` is a ``[^label]: body`` definition."""
    return FOOTNOTE_DEFINITION_PATTERN.match(text) is not None


def interpolate_references(text: str) -> str:
    """Replace every ``[^label]`` reference in ``text`` with its marker.

    >>> interpolate_references("See[^1].")  # doctest: +ELLIPSIS
    'See<sup class="footnote-mark" data-number="1" id="footnote-reference:1">...</sup>.'

    """
    return FOOTNOTE_REFERENCE_PATTERN.sub(lambda match: render_footnote_reference(match.group(1)), text)


def interpolate_footnotes(text: str) -> str:
    """Render ``text`` as a footnote definition if it has the definition shape."""
    return FOOTNOTE_DEFINITION_PATTERN.sub(
        lambda match: render_footnote_definition(match.group(1), match.group(2)), text
    )


__all__ = [
    "FOOTNOTE_DEFINITION_PATTERN",
    "FOOTNOTE_REFERENCE_PATTERN",
    "render_footnote_reference",
    "render_footnote_definition",
    "is_footnote_definition",
    "interpolate_references",
    "interpolate_footnotes",
]
