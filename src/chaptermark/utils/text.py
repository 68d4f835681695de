#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chaptermark/utils/text.py
"""Text-level helpers used by the construct renderers."""

from __future__ import annotations

import re
from typing import NamedTuple

# The optional &nbsp; comes from widow prevention on the heading text
CUSTOM_ID_PATTERN = re.compile(r"(&nbsp;)?\{#(.*)\}$")

NBSP = "&nbsp;"


class CustomId(NamedTuple):
    """A heading identifier split out of its visible text."""

    identifier: str
    text: str


def prevent_widow(text: str) -> str:
    """Join the last two words of ``text`` with a non-breaking space.

    Nothing changes when the only space is the first character or the last.

    Parameters
    ----------
    text : str
        A run of already escaped text

    Returns
    -------
    str
        Text with its last space replaced by ``&nbsp;``

    Examples
    --------
    >>> prevent_widow("the final word")
    'the final&nbsp;word'
    >>> prevent_widow("trailing ")
    'trailing '

    """
    last_space = text.rfind(" ")
    if last_space > 0 and last_space != len(text) - 1:
        return f"{text[:last_space]}{NBSP}{text[last_space + 1:]}"
    return text


def parse_custom_id(text: str) -> CustomId | None:
    """Extract a trailing ``{#identifier}`` marker from heading text.

    Parameters
    ----------
    text : str
        Rendered heading text

    Returns
    -------
    CustomId or None
        The identifier and the text with the marker removed, or None when the
        text carries no (non-empty) marker

    Examples
    --------
    >>> parse_custom_id("Getting started&nbsp;{#start}")
    CustomId(identifier='start', text='Getting started')

    """
    match = CUSTOM_ID_PATTERN.search(text or "")
    if not match or not match.group(2):
        return None
    return CustomId(identifier=match.group(2), text=text[: match.start()].rstrip())


__all__ = ["CustomId", "prevent_widow", "parse_custom_id", "NBSP"]
