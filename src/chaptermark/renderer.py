#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/chaptermark/renderer.py
"""Book-style HTML rendering for mistune.

This module provides the BookRenderer class, a mistune renderer that turns
markdown into HTML for long-form publications: numbered self-linking
headings, grouped paragraphs, footnotes, captioned figures, embedded videos,
line-numbered code listings and cited blockquotes.

mistune calls one hook per construct, children first, and concatenates the
returned strings. The hooks share a :class:`~chaptermark.state.RenderState`
so that a construct can depend on what was rendered before it.

"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Any

import mistune
from mistune import HTMLRenderer

from chaptermark.constants import PARAGRAPH_GROUP_OPEN
from chaptermark.exceptions import DependencyError, ImageProbeError, InvalidOptionsError, RenderingError
from chaptermark.figures import (
    render_credit,
    render_figure,
    render_ratio_placeholder,
    render_still_image,
    render_video_embed,
    split_credit,
)
from chaptermark.listings import render_code_listing
from chaptermark.options import RendererOptions
from chaptermark.quotes import split_citation, strip_quote_marks
from chaptermark.state import ConstructKind, RenderState
from chaptermark.utils.footnotes import interpolate_footnotes, interpolate_references, is_footnote_definition
from chaptermark.utils.html_utils import autolink, escape_html, escape_text, strip_html_tags
from chaptermark.utils.images import ImageSize, is_embeddable_video, probe_image_size, resolve_image_path
from chaptermark.utils.security import clean_url, is_url_scheme_dangerous
from chaptermark.utils.text import NBSP, parse_custom_id, prevent_widow

logger = logging.getLogger(__name__)

# Paragraph text starting with any other tag is treated as already block-level
_INLINE_TAG_PREFIXES = ("<em", "<del", "<a ", "<strong")

_PARAGRAPH_WRAPPER = re.compile(r"^<p>([\s\S]*)</p>\s*$")


@lru_cache(maxsize=1)
def _inline_markdown() -> mistune.Markdown:
    return mistune.create_markdown(escape=False, plugins=["strikethrough"])


def render_inline(text: str) -> str:
    """Render a short piece of markdown (such as a caption) to inline HTML.

    A plain mistune instance is used so that the document's render state is
    never touched. The paragraph wrapper mistune adds is removed.

    >>> render_inline("A *small* caption")
    'A <em>small</em> caption'

    """
    html = _inline_markdown()(text)
    match = _PARAGRAPH_WRAPPER.match(html)
    if match:
        html = match.group(1)
    return html.replace("&amp;", "&")


class BookRenderer(HTMLRenderer):
    """Render mistune tokens to book-style HTML.

    One instance renders one document. Its state (heading counters and the
    open paragraph group) is not reentrant, so a renderer must not be shared
    between documents or used from several threads at once.

    Parameters
    ----------
    options : RendererOptions or None, default = None
        Rendering options

    Examples
    --------
    Usually created through :func:`chaptermark.create_markdown`:

        >>> from chaptermark import create_markdown, RendererOptions
        >>> markdown = create_markdown(RendererOptions(chapter=2))
        >>> html = markdown("## Setup\\n\\nFirst steps.")

    """

    def __init__(self, options: RendererOptions | None = None):
        """Initialize the renderer with options and a fresh render state."""
        if options is not None and not isinstance(options, RendererOptions):
            raise InvalidOptionsError(renderer_name="book", expected_type=RendererOptions, received_type=type(options))
        super().__init__(escape=False)
        self.options: RendererOptions = options or RendererOptions()
        self.state = RenderState(chapter=self.options.chapter)

    def _void_close(self) -> str:
        return " /" if self.options.xhtml else ""

    def finalize(self, content: str) -> str:
        """Close a paragraph group left open at the end of the document."""
        return self.state.finalize(content)

    # ------------------------------------------------------------------
    # Block constructs
    # ------------------------------------------------------------------

    def heading(self, text: str, level: int, **attrs: Any) -> str:
        """Render a numbered heading.

        The number links to itself. A trailing ``{#identifier}`` in the text
        becomes the element id and wraps the remaining text in a link to it.

        """
        prefix = self.state.before_construct(ConstructKind.HEADING, level)
        number = self.state.heading_number(level)

        custom_id = parse_custom_id(text)
        if custom_id is not None:
            id_attr = f' id="{custom_id.identifier}"'
            title = f'<a href="#{custom_id.identifier}">{custom_id.text}</a>'
        else:
            id_attr = ""
            title = text

        return (
            f"{prefix}\n"
            f"<h{level}{id_attr}>"
            f'<span id="{number}"><a href="#{number}">{number}</a></span> '
            f"{title}"
            f"</h{level}>\n"
        )

    def paragraph(self, text: str) -> str:
        """Render a paragraph, a footnote definition, or pass raw block content through."""
        prefix = self.state.before_construct(ConstructKind.PARAGRAPH)
        stripped = text.strip()

        if stripped.startswith("<") and not stripped.startswith(_INLINE_TAG_PREFIXES):
            return prefix + text

        if is_footnote_definition(text):
            return f'{prefix}<span class="footnote">{interpolate_footnotes(text)}</span>\n'

        return f"{prefix}<p>{text}</p>\n"

    def block_quote(self, text: str) -> str:
        """Render a blockquote with its em-dash citation as a footer.

        A paragraph group opened by the quote's first paragraph is dropped:
        quotes never take part in grouping.

        """
        if text.startswith(PARAGRAPH_GROUP_OPEN):
            self.state.discard_paragraph_group()
            text = text[len(PARAGRAPH_GROUP_OPEN) :]

        prefix = self.state.before_construct(ConstructKind.BLOCKQUOTE)

        body, citation = split_citation(text)
        footer = autolink(f"<footer>{citation}</footer>") if citation is not None else ""

        return f"\n{prefix}<blockquote>\n<p>{strip_quote_marks(body)}</p>{footer}</blockquote>\n"

    def block_code(self, code: str, info: str | None = None, escaped: bool = False) -> str:
        """Render a code listing.

        ``escaped`` is accepted for interface compatibility and ignored: the
        raw text is always what gets highlighted.

        """
        prefix = self.state.before_construct(ConstructKind.CODE)
        # mistune keeps the newline before the closing fence
        if code.endswith("\n"):
            code = code[:-1]
        return prefix + render_code_listing(code, info, tab_replace=self.options.tab_replace)

    def block_html(self, html: str) -> str:
        prefix = self.state.before_construct(ConstructKind.HTML)
        return prefix + html

    def thematic_break(self) -> str:
        prefix = self.state.before_construct(ConstructKind.HR)
        return f"{prefix}<hr{self._void_close()}>\n"

    def list(self, text: str, ordered: bool, **attrs: Any) -> str:
        prefix = self.state.before_construct(ConstructKind.LIST)
        tag = "ol" if ordered else "ul"
        start = attrs.get("start")
        start_attr = f' start="{start}"' if ordered and start is not None and start != 1 else ""
        return f"{prefix}<{tag}{start_attr}>\n{text}</{tag}>\n"

    def list_item(self, text: str) -> str:
        prefix = self.state.before_construct(ConstructKind.LIST_ITEM)
        return f"{prefix}<li>{text}</li>\n"

    def task_list_item(self, text: str, checked: bool = False) -> str:
        return self.list_item(self.checkbox(checked) + text)

    def checkbox(self, checked: bool) -> str:
        prefix = self.state.before_construct(ConstructKind.CHECKBOX)
        checked_attr = 'checked="" ' if checked else ""
        return f'{prefix}<input {checked_attr}disabled="" type="checkbox"{self._void_close()}> '

    # Rows and cells render before their table; only the table itself
    # consults the state so a closing group fragment lands outside it.
    def table(self, text: str) -> str:
        prefix = self.state.before_construct(ConstructKind.TABLE)
        return f"{prefix}<table>\n{text}</table>\n"

    def table_head(self, text: str) -> str:
        return f"<thead>\n<tr>\n{text}</tr>\n</thead>\n"

    def table_body(self, text: str) -> str:
        return f"<tbody>\n{text}</tbody>\n"

    def table_row(self, text: str) -> str:
        return f"<tr>\n{text}</tr>\n"

    def table_cell(self, text: str, align: str | None = None, head: bool = False) -> str:
        tag = "th" if head else "td"
        align_attr = f' style="text-align:{align}"' if align else ""
        return f"<{tag}{align_attr}>{text}</{tag}>\n"

    # ------------------------------------------------------------------
    # Inline constructs
    # ------------------------------------------------------------------

    def text(self, text: str) -> str:
        """Escape text, join its last two words and interpolate footnote references."""
        prefix = self.state.before_construct(ConstructKind.TEXT)
        return prefix + interpolate_references(prevent_widow(escape_text(text)))

    def emphasis(self, text: str) -> str:
        prefix = self.state.before_construct(ConstructKind.EM)
        return f"{prefix}<em>{text}</em>"

    def strong(self, text: str) -> str:
        prefix = self.state.before_construct(ConstructKind.STRONG)
        return f"{prefix}<strong>{text}</strong>"

    def strikethrough(self, text: str) -> str:
        prefix = self.state.before_construct(ConstructKind.DEL)
        return f"{prefix}<del>{text}</del>"

    def codespan(self, text: str) -> str:
        prefix = self.state.before_construct(ConstructKind.CODESPAN)
        return f"{prefix}<code>{escape_html(text, encode=True)}</code>"

    def linebreak(self) -> str:
        prefix = self.state.before_construct(ConstructKind.BR)
        return f"{prefix}<br{self._void_close()}>\n"

    def inline_html(self, html: str) -> str:
        prefix = self.state.before_construct(ConstructKind.INLINE_HTML)
        return prefix + html

    def link(self, text: str, url: str, title: str | None = None) -> str:
        """Render a link.

        Link text containing an iframe is a pre-rendered embed and is passed
        through. A target rejected by sanitization degrades to the bare text.

        """
        prefix = self.state.before_construct(ConstructKind.LINK)

        if "iframe" in (text or ""):
            return prefix + text

        href = clean_url(self.options.sanitize, self.options.base_url, url)
        if href is None:
            return prefix + text

        title_attr = f' title="{escape_html(title)}"' if title else ""
        return f'{prefix}<a href="{escape_html(href)}"{title_attr}>{text}</a>'

    def image(self, text: str, url: str, title: str | None = None) -> str:
        """Render an image or video URL as a captioned figure.

        Local images are probed for their dimensions so the figure can
        reserve space before the image loads; probing failures only cost
        the size attributes. Video URLs become responsive iframes.

        """
        prefix = self.state.before_construct(ConstructKind.IMAGE)
        # Alt text arrives through the text hook; undo its widow join
        alt = escape_html(strip_html_tags(text or "").replace(NBSP, " "))

        if self.options.sanitize and is_url_scheme_dangerous(url):
            logger.warning('Dropped image with unsafe source "%s"', url)
            return prefix + alt

        is_video = is_embeddable_video(url)
        size = None if is_video else self._probe_image(url)

        caption_text, credit = split_credit(title or "")
        caption = ""
        if caption_text:
            caption = (
                "<figcaption>\n"
                f"<p>{render_inline(autolink(caption_text))}</p>{render_credit(credit)}\n"
                "</figcaption>\n"
            )

        classes = []
        if not caption_text:
            classes.append("no-caption")
        if size is not None and size.width <= self.options.small_image_max_width:
            classes.append("small")

        if is_video:
            content = render_video_embed(url)
        else:
            content = render_still_image(escape_html(url), alt, size, xhtml=self.options.xhtml)

        return prefix + render_figure(
            content,
            classes=classes,
            placeholder=render_ratio_placeholder(size),
            caption=caption,
        )

    def _probe_image(self, url: str) -> ImageSize | None:
        path = resolve_image_path(self.options.basedir, url)
        try:
            return probe_image_size(path)
        except (ImageProbeError, DependencyError) as e:
            if self.options.fail_on_resource_errors:
                raise RenderingError(
                    f'Unable to read size of "{url}"', rendering_stage="image", original_error=e
                ) from e
            logger.warning('Unable to read size of "%s": %s', url, e.message)
            return None


__all__ = ["BookRenderer", "render_inline"]
