#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chaptermark/highlight.py
"""Syntax highlighting for code listings.

Highlighting is delegated to Pygments. Its token stream is written out by a
small formatter that produces ``<span class="hljs-{category}">`` markup, the
class vocabulary the book stylesheets are written against. Consecutive tokens
of the same category share a span, so a comment that covers several lines is
emitted as one span containing newlines; the code listing renderer is
responsible for splitting such spans per line.
"""

from __future__ import annotations

import logging
from typing import IO, Iterable, Sequence

from pygments import highlight as pygments_highlight
from pygments.formatter import Formatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.token import Comment, Generic, Keyword, Literal, Name, Number, Operator, String, _TokenType
from pygments.util import ClassNotFound

from chaptermark.constants import DEFAULT_TAB_REPLACE, HIGHLIGHT_CLASS_PREFIX
from chaptermark.utils.html_utils import escape_html

logger = logging.getLogger(__name__)

# Most specific token types first; the first match wins
TOKEN_CATEGORIES: tuple[tuple[_TokenType, str], ...] = (
    (Comment.Preproc, "meta"),
    (Comment.PreprocFile, "meta"),
    (Comment, "comment"),
    (String.Doc, "comment"),
    (Keyword.Type, "type"),
    (Keyword.Constant, "literal"),
    (Keyword, "keyword"),
    (Operator.Word, "keyword"),
    (Name.Builtin.Pseudo, "variable"),
    (Name.Builtin, "built_in"),
    (Name.Function, "title"),
    (Name.Class, "title"),
    (Name.Decorator, "meta"),
    (Name.Tag, "name"),
    (Name.Attribute, "attr"),
    (Name.Variable, "variable"),
    (Name.Constant, "variable"),
    (Name.Entity, "symbol"),
    (Name.Label, "symbol"),
    (String.Regex, "regexp"),
    (String.Escape, "char escape_"),
    (String, "string"),
    (Number, "number"),
    (Literal, "literal"),
    (Generic.Deleted, "deletion"),
    (Generic.Inserted, "addition"),
    (Generic.Heading, "section"),
    (Generic.Subheading, "section"),
    (Generic.Emph, "emphasis"),
    (Generic.Strong, "strong"),
)


def token_category(ttype: _TokenType) -> str | None:
    """Return the highlight category for a Pygments token type, if any."""
    for parent, category in TOKEN_CATEGORIES:
        if ttype in parent:
            return category
    return None


class CategorySpanFormatter(Formatter):
    """Pygments formatter emitting ``hljs-`` category spans without a wrapper.

    Parameters
    ----------
    tab_replace : str, default "\\t"
        String substituted for every tab character
    class_prefix : str, default "hljs-"
        Prefix for category class names

    """

    name = "Category spans"
    aliases = ["hljs"]

    def __init__(self, **options):
        super().__init__(**options)
        self.tab_replace = options.get("tab_replace", DEFAULT_TAB_REPLACE)
        self.class_prefix = options.get("class_prefix", HIGHLIGHT_CLASS_PREFIX)

    def _emit(self, outfile: IO[str], category: str | None, parts: list[str]) -> None:
        value = escape_html("".join(parts), encode=True).replace("\t", self.tab_replace)
        if category is None:
            outfile.write(value)
            return
        # Spans never cross a newline, so every source line stays balanced
        open_tag = f'<span class="{self.class_prefix}{category}">'
        lines = value.split("\n")
        outfile.write("\n".join(f"{open_tag}{line}</span>" if line else "" for line in lines))

    def format(self, tokensource: Iterable[tuple[_TokenType, str]], outfile: IO[str]) -> None:
        current: str | None = None
        parts: list[str] = []

        for ttype, value in tokensource:
            category = token_category(ttype)
            if category != current and parts:
                self._emit(outfile, current, parts)
                parts = []
            current = category
            parts.append(value)

        if parts:
            self._emit(outfile, current, parts)


def get_lexer(languages: Sequence[str]) -> Lexer:
    """Return a lexer for the first known language, or a plain text lexer."""
    for language in languages:
        try:
            return get_lexer_by_name(language, stripnl=False, ensurenl=False)
        except ClassNotFound:
            logger.debug("No highlighter for language %r", language)
    return TextLexer(stripnl=False, ensurenl=False)


def highlight(code: str, languages: Sequence[str], *, tab_replace: str = DEFAULT_TAB_REPLACE) -> str:
    """Highlight ``code`` restricted to the given languages.

    Parameters
    ----------
    code : str
        Raw source text
    languages : sequence of str
        Languages the code may be in; the first one Pygments knows is used
    tab_replace : str, default "\\t"
        Replacement for tab characters

    Returns
    -------
    str
        Escaped source with ``<span class="hljs-...">`` markup and the
        original line structure

    """
    lexer = get_lexer(languages)
    formatter = CategorySpanFormatter(tab_replace=tab_replace)
    return pygments_highlight(code, lexer, formatter)


__all__ = ["TOKEN_CATEGORIES", "token_category", "CategorySpanFormatter", "get_lexer", "highlight"]
