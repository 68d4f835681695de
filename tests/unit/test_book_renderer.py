"""Unit tests for the BookRenderer construct hooks.

The hooks are called directly, in the order mistune would call them
(children first), so each test pins the exact markup of one construct.
"""

import pytest

from chaptermark import BookRenderer, InvalidOptionsError, RendererOptions
from chaptermark.constants import PARAGRAPH_GROUP_CLOSE, PARAGRAPH_GROUP_OPEN
from chaptermark.quotes import strip_quote_marks


@pytest.mark.unit
class TestRendererInit:
    """Tests for renderer construction."""

    def test_default_options(self):
        """Test that a renderer without options uses the defaults."""
        renderer = BookRenderer()
        assert renderer.options == RendererOptions()
        assert renderer.state.chapter == 1

    def test_chapter_seeds_state(self):
        """Test that the chapter option seeds the render state."""
        renderer = BookRenderer(RendererOptions(chapter=5))
        assert renderer.state.chapter == 5

    def test_wrong_options_type(self):
        """Test that passing the wrong options class is rejected."""
        with pytest.raises(InvalidOptionsError) as exc_info:
            BookRenderer({"chapter": 2})

        assert exc_info.value.parameter_name == "options"
        assert "RendererOptions" in str(exc_info.value)


@pytest.mark.unit
class TestHeadings:
    """Tests for numbered headings."""

    def test_chapter_heading(self, renderer):
        """Test the markup of a level-1 heading."""
        assert renderer.heading("Introduction", 1) == (
            '\n<h1><span id="1"><a href="#1">1</a></span> Introduction</h1>\n'
        )

    def test_section_numbers(self):
        """Test that section and subsection numbers include the chapter."""
        renderer = BookRenderer(RendererOptions(chapter=3))
        renderer.heading("Chapter", 1)
        section = renderer.heading("Section", 2)
        subsection = renderer.heading("Subsection", 3)

        assert '<h2><span id="3.1"><a href="#3.1">3.1</a></span> Section</h2>' in section
        assert '<h3><span id="3.1.1"><a href="#3.1.1">3.1.1</a></span> Subsection</h3>' in subsection

    def test_custom_id(self, renderer):
        """Test that a trailing {#id} becomes the heading id and a self link."""
        html = renderer.heading("Getting started&nbsp;{#start}", 2)
        assert html == (
            '\n<h2 id="start"><span id="1.1"><a href="#1.1">1.1</a></span> '
            '<a href="#start">Getting started</a></h2>\n'
        )

    def test_empty_custom_id_is_ignored(self, renderer):
        """Test that an empty {#} marker leaves the heading text alone."""
        html = renderer.heading("Odd {#}", 2)
        assert "Odd {#}</h2>" in html
        assert " id=" not in html.split("<span")[0]

    def test_heading_closes_paragraph_group(self, renderer):
        """Test that a heading after a paragraph closes the group first."""
        renderer.paragraph("Text")
        assert renderer.heading("Next", 2).startswith(PARAGRAPH_GROUP_CLOSE + "\n<h2>")


@pytest.mark.unit
class TestParagraphs:
    """Tests for paragraphs and their grouping."""

    def test_first_paragraph_opens_group(self, renderer):
        """Test that the first paragraph is prefixed with the group opener."""
        assert renderer.paragraph("Hello") == PARAGRAPH_GROUP_OPEN + "<p>Hello</p>\n"

    def test_second_paragraph_joins_group(self, renderer):
        """Test that the second paragraph gets no prefix."""
        renderer.paragraph("One")
        assert renderer.paragraph("Two") == "<p>Two</p>\n"

    def test_block_markup_passes_through(self, renderer):
        """Test that paragraph text starting with a block tag is not wrapped."""
        html = renderer.paragraph('\n<figure>\n<div class="image"></div>\n</figure>\n')
        assert html == PARAGRAPH_GROUP_OPEN + '\n<figure>\n<div class="image"></div>\n</figure>\n'

    @pytest.mark.parametrize(
        "text",
        ["<em>Quietly</em> done", "<strong>Note</strong> this", '<a href="#x">Link</a> first', "<del>old</del> new"],
    )
    def test_inline_markup_is_wrapped(self, renderer, text):
        """Test that paragraphs starting with inline tags are still wrapped."""
        assert renderer.paragraph(text).endswith(f"<p>{text}</p>\n")

    def test_finalize_closes_group(self, renderer):
        """Test that finalize closes a group left open by the last paragraph."""
        html = renderer.paragraph("Last")
        assert renderer.finalize(html).endswith("<p>Last</p>\n" + PARAGRAPH_GROUP_CLOSE)


@pytest.mark.unit
class TestFootnotes:
    """Tests for footnote references and definitions."""

    def test_reference_in_text(self, renderer):
        """Test that a reference becomes a superscript pointing at the note."""
        html = renderer.text("A claim[^1]")
        assert html == (
            'A&nbsp;claim<sup class="footnote-mark" data-number="1" id="footnote-reference:1">'
            '<a href="#footnote:1">1</a></sup>'
        )

    def test_definition_paragraph(self, renderer):
        """Test that a definition paragraph becomes a footnote span."""
        html = renderer.paragraph("[^1]: Explanation.")
        assert html == (
            PARAGRAPH_GROUP_OPEN + '<span class="footnote"><sup class="footnote-text" data-number="1" '
            'id="footnote:1"><a href="#footnote-reference:1">1</a></sup> Explanation.</span>\n'
        )

    def test_reference_and_definition_link_each_other(self, renderer):
        """Test that the reference and the note carry matching ids and hrefs."""
        reference = renderer.paragraph(renderer.text("See the note[^n2]"))
        definition = renderer.paragraph(renderer.text("[^n2]: The note."))

        assert 'id="footnote-reference:n2"' in reference
        assert 'href="#footnote:n2"' in reference
        assert 'id="footnote:n2"' in definition
        assert 'href="#footnote-reference:n2"' in definition

    def test_definition_marker_is_not_a_reference(self, renderer):
        """Test that the [^label]: form is left for the definition rule."""
        assert "footnote-mark" not in renderer.text("[^1]: body")


@pytest.mark.unit
class TestBlockquotes:
    """Tests for blockquotes with citations."""

    def test_citation_becomes_footer(self, renderer):
        """Test that a trailing em-dash line is moved into a footer."""
        html = renderer.block_quote('<p>"Quote text"\n— Author Name</p>\n')
        assert html == "\n<blockquote>\n<p>Quote text</p><footer>\n— Author Name</footer></blockquote>\n"

    def test_curly_quotes_are_stripped(self, renderer):
        """Test that typographic quote marks around the body are removed."""
        html = renderer.block_quote("<p>“Brevity.”</p>\n")
        assert "<p>Brevity.</p></blockquote>" in html
        assert "<footer>" not in html

    def test_leading_quote_only_is_stripped(self, renderer):
        """Test that only the first and last characters are considered."""
        html = renderer.block_quote('<p>"Air quotes" are overused</p>\n')
        assert '<p>Air quotes" are overused</p>' in html

    def test_trailing_opening_tag_is_cut(self):
        """Test that a body ending in an opening paragraph tag loses its last four characters."""
        assert strip_quote_marks("<p>First.</p>\n<p>") == "First.</p>"
        assert strip_quote_marks("<p>\u201cFirst.\u201d</p>") == "First."

    def test_citation_url_is_autolinked(self, renderer):
        """Test that a URL in the citation becomes a link."""
        html = renderer.block_quote("<p>Words.\n— https://example.com/talk</p>\n")
        assert '<footer>\n— <a href="https://example.com/talk">https://example.com/talk</a></footer>' in html

    def test_quote_paragraph_group_is_dropped(self, renderer):
        """Test that a group opened by the quote's paragraph is discarded."""
        inner = renderer.paragraph("Inside")
        html = renderer.block_quote(inner)

        assert "paragraphs" not in html
        assert not renderer.state.paragraph_group_open
        assert renderer.finalize(html) == html

    def test_quote_closes_outer_group(self, renderer):
        """Test that a quote after ordinary paragraphs closes their group."""
        renderer.paragraph("Before")
        html = renderer.block_quote(renderer.paragraph("Quoted."))
        assert html.startswith("\n" + PARAGRAPH_GROUP_CLOSE + "<blockquote>")


@pytest.mark.unit
class TestOtherBlocks:
    """Tests for lists, rules, raw HTML and tables."""

    def test_unordered_list(self, renderer):
        """Test an unordered list wrapping its items."""
        items = renderer.list_item("a") + renderer.list_item("b")
        assert renderer.list(items, ordered=False) == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"

    def test_ordered_list_start(self, renderer):
        """Test that an ordered list keeps a start other than 1."""
        assert renderer.list("", ordered=True, start=3).startswith('<ol start="3">')
        assert renderer.list("", ordered=True, start=1).startswith("<ol>")

    def test_task_list_item(self, renderer):
        """Test that task items render a disabled checkbox."""
        assert renderer.task_list_item("done", checked=True) == (
            '<li><input checked="" disabled="" type="checkbox"> done</li>\n'
        )
        assert renderer.task_list_item("todo") == '<li><input disabled="" type="checkbox"> todo</li>\n'

    def test_xhtml_void_elements(self):
        """Test that xhtml mode self-closes void elements."""
        renderer = BookRenderer(RendererOptions(xhtml=True))
        assert renderer.thematic_break() == "<hr />\n"
        assert renderer.linebreak() == "<br />\n"
        assert renderer.checkbox(False) == '<input disabled="" type="checkbox" /> '

    def test_block_html_closes_group(self, renderer):
        """Test that raw block HTML counts as a block construct."""
        renderer.paragraph("Before")
        assert renderer.block_html("<aside>x</aside>\n") == PARAGRAPH_GROUP_CLOSE + "<aside>x</aside>\n"

    def test_inline_html_keeps_group(self, renderer):
        """Test that inline HTML does not close the group."""
        renderer.paragraph("Before")
        assert renderer.inline_html("<kbd>") == "<kbd>"
        assert renderer.state.paragraph_group_open

    def test_table_closes_group_before_table(self, renderer):
        """Test that the closer lands in front of the table, not inside a cell."""
        renderer.paragraph("Before")
        cell = renderer.table_cell("1")
        row = renderer.table_row(cell)
        body = renderer.table_body(row)
        html = renderer.table(body)

        assert cell == "<td>1</td>\n"
        assert html == PARAGRAPH_GROUP_CLOSE + "<table>\n<tbody>\n<tr>\n<td>1</td>\n</tr>\n</tbody>\n</table>\n"

    def test_aligned_header_cell(self, renderer):
        """Test header cells with alignment."""
        assert renderer.table_cell("a", align="center", head=True) == '<th style="text-align:center">a</th>\n'


@pytest.mark.unit
class TestInlineConstructs:
    """Tests for text, emphasis and code spans."""

    def test_text_is_escaped_and_widow_protected(self, renderer):
        """Test that text is escaped and its last two words joined."""
        assert renderer.text("Fish & chips <now>") == "Fish &amp; chips&nbsp;&lt;now&gt;"

    def test_text_keeps_entities(self, renderer):
        """Test that entities typed by the author survive escaping."""
        assert renderer.text("&copy;2025") == "&copy;2025"

    def test_emphasis_family(self, renderer):
        """Test emphasis, strong and strikethrough markup."""
        assert renderer.emphasis("a") == "<em>a</em>"
        assert renderer.strong("b") == "<strong>b</strong>"
        assert renderer.strikethrough("c") == "<del>c</del>"

    def test_codespan_is_escaped(self, renderer):
        """Test that code span contents are escaped."""
        assert renderer.codespan("a < b & c") == "<code>a &lt; b &amp; c</code>"


@pytest.mark.unit
class TestLinks:
    """Tests for link rendering."""

    def test_plain_link(self, renderer):
        """Test a simple absolute link."""
        assert renderer.link("Docs", "https://example.com/docs") == '<a href="https://example.com/docs">Docs</a>'

    def test_link_title(self, renderer):
        """Test that a title is rendered as an escaped attribute."""
        html = renderer.link("Home", "https://example.com", 'The "home" page')
        assert html == '<a href="https://example.com" title="The &quot;home&quot; page">Home</a>'

    def test_link_is_percent_encoded(self, renderer):
        """Test that spaces in targets are encoded."""
        assert 'href="https://example.com/a%20b"' in renderer.link("x", "https://example.com/a b")

    def test_iframe_text_passes_through(self, renderer):
        """Test that link text containing an iframe is returned unchanged."""
        embed = '<iframe src="https://player.example.com/1"></iframe>'
        assert renderer.link(embed, "https://example.com") == embed

    @pytest.mark.parametrize(
        "url",
        ["javascript:alert(1)", "JAVASCRIPT:alert(1)", "java&#115;cript:alert(1)", "vbscript:msgbox", "data:text/html,x"],
    )
    def test_sanitize_rejects_dangerous_targets(self, url):
        """Test that rejected targets degrade to the bare text."""
        renderer = BookRenderer(RendererOptions(sanitize=True))
        assert renderer.link("click", url) == "click"

    def test_dangerous_target_kept_without_sanitize(self, renderer):
        """Test that targets are not rejected when sanitization is off."""
        assert renderer.link("click", "javascript:void(0)").startswith('<a href="javascript:void(0)"')

    def test_base_url_resolution(self):
        """Test that relative targets are resolved against the base URL."""
        renderer = BookRenderer(RendererOptions(base_url="https://example.com/book/"))
        assert 'href="https://example.com/book/chapter-2.html"' in renderer.link("Next", "chapter-2.html")
        assert 'href="https://example.com/about"' in renderer.link("About", "/about")
        assert 'href="#notes"' in renderer.link("Notes", "#notes")
