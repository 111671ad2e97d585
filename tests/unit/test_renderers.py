#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_renderers.py
"""Unit tests for the AsciiDoc, Writerside and Zendesk renderers.

Post-passes are disabled here so each test sees the renderer output alone.

Tests cover:
- Headings, paragraphs and inline formatting
- Text escaping per format
- Links, cross-reference rewriting and images
- Code blocks, tables and block quotes
- Admonitions and collapsible sections
- Writing output to paths and streams

"""

import io

import pytest

from flare2markup import parse_html
from flare2markup.renderers import AsciiDocRenderer, WritersideRenderer, ZendeskRenderer


@pytest.fixture
def render(convert):
    """Convert HTML with post-passes disabled."""

    def _render(html, target_format="asciidoc", **kwargs):
        return convert(html, target_format, apply_post_passes=False, **kwargs)

    return _render


@pytest.mark.unit
class TestAsciiDocRenderer:
    """Tests for AsciiDoc output."""

    def test_heading_and_paragraph(self, render):
        assert render("<h1>Title</h1><p>Body text.</p>") == "= Title\n\nBody text.\n"

    def test_heading_levels(self, render):
        assert render("<h3>Deep</h3>") == "=== Deep\n"

    def test_inline_formatting(self, render):
        html = "<p><b>Bold</b> and <i>italic</i> and <code>a+b</code></p>"
        assert render(html) == "*Bold* and _italic_ and +a++b+\n"

    def test_escaping(self, render):
        assert render("<p>Use *stars* and [brackets]</p>") == "Use \\*stars\\* and \\[brackets\\]\n"

    def test_line_start_prefixes_escaped(self, render):
        html = "<p>. not a list</p><p>== not a heading</p><p>- dash</p><p>+</p><p>3. third</p>"
        assert render(html) == (
            "{empty}. not a list\n\n{empty}== not a heading\n\n{empty}- dash\n\n{empty}+\n\n{empty}3. third\n"
        )

    def test_line_start_prefix_after_line_break(self, render):
        assert render("<p>One<br>- two</p>") == "One +\n{empty}- two\n"

    def test_callout_label_not_escaped(self, render):
        assert render("<p>NOTE: Keep this label.</p>") == "NOTE: Keep this label.\n"

    def test_mid_line_prefix_untouched(self, render):
        assert render("<p>Step 1. then - done</p>") == "Step 1. then - done\n"

    def test_line_break(self, render):
        assert render("<p>One<br>Two</p>") == "One +\nTwo\n"

    def test_superscript_and_subscript(self, render):
        assert render("<p>x<sup>2</sup> H<sub>2</sub>O</p>") == "x^2^ H~2~O\n"

    @pytest.mark.parametrize(
        "html,expected",
        [
            ('<p><a href="#intro">Intro</a></p>', "<<intro,Intro>>\n"),
            ('<p><a href="https://example.com">Site</a></p>', "link:https://example.com[Site]\n"),
            ('<p><a href="mailto:docs@example.com">Mail</a></p>', "mailto:docs@example.com[Mail]\n"),
            ('<p><a name="anchor">Anchor</a></p>', "Anchor\n"),
            ('<p><a href="https://example.com"></a></p>', "link:https://example.com[https://example.com]\n"),
        ],
    )
    def test_links(self, render, html, expected):
        assert render(html) == expected

    def test_cross_reference_rewrite(self, render):
        html = '<p><a href="topic.htm#sec">See topic</a></p>'
        result = render(html, cross_references={"topic.htm": "topic.adoc"})
        assert result == "xref:topic.adoc#sec[See topic]\n"

    def test_code_block_with_language(self, render):
        assert render('<pre class="language-python">print(1)</pre>') == "[source,python]\n----\nprint(1)\n----\n"

    def test_code_block_brush_class(self, render):
        assert render('<pre class="brush: js">x = 1</pre>') == "[source,js]\n----\nx = 1\n----\n"

    def test_code_block_is_verbatim(self, render):
        assert render("<pre>a *b* [c]</pre>") == "----\na *b* [c]\n----\n"

    def test_code_block_delimiter_longer_than_content(self, render):
        assert render("<pre>a\n----\nb</pre>") == "-----\na\n----\nb\n-----\n"

    def test_table_with_header(self, render):
        html = "<table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table>"
        assert render(html) == '[options="header"]\n|===\n| A | B\n\n| 1 | 2\n|===\n'

    def test_table_caption_colspan_and_pipes(self, render):
        html = '<table><caption>Ports</caption><tr><td colspan="2">a|b</td></tr></table>'
        assert render(html) == ".Ports\n|===\n2+| a\\|b\n|===\n"

    def test_block_image(self, render):
        assert render('<p><img src="Images/photo.png" width="400"></p>') == "image::Images/photo.png[,width=400]\n"

    def test_icon_image(self, render):
        html = '<p>Click <img src="Images/icons/save.png" alt="Save"> to save.</p>'
        assert render(html) == "Click image:Images/icons/save.png[Save,role=icon] to save.\n"

    def test_inline_image_by_context(self, render):
        html = '<p>Press <img src="Images/key.png" alt="Key"> now.</p>'
        assert render(html) == "Press image:Images/key.png[Key,role=inline] now.\n"

    def test_image_alt_with_comma_is_quoted(self, render):
        html = '<p><img src="Images/photo.png" alt="A, B" width="400"></p>'
        assert render(html) == 'image::Images/photo.png["A, B",width=400]\n'

    def test_image_target_rewritten(self, render):
        html = '<p><img src="Images/photo.png" width="400"></p>'
        result = render(html, cross_references={"Images/photo.png": "assets/photo.png"})
        assert result == "image::assets/photo.png[,width=400]\n"

    def test_admonition_single_paragraph(self, render):
        assert render('<div class="note"><p>Save your work.</p></div>') == "NOTE: Save your work.\n"

    def test_admonition_several_paragraphs(self, render):
        html = '<div class="warning"><p>First.</p><p>Second.</p></div>'
        assert render(html) == "[WARNING]\n====\nFirst.\n\nSecond.\n====\n"

    def test_admonition_from_label_span(self, render):
        assert render('<p><span class="noteInDiv">Note:</span> Hot</p>') == "NOTE: Hot\n"

    def test_admonition_vendor_class_prefix(self, render):
        assert render('<div class="mc-tip"><p>Try it.</p></div>') == "TIP: Try it.\n"

    def test_details_collapsible(self, render):
        html = "<details><summary>More info</summary><p>Hidden text.</p></details>"
        assert render(html) == ".More info\n[%collapsible]\n====\nHidden text.\n====\n"

    def test_vendor_dropdown(self, render):
        html = (
            "<madcap:dropdown><madcap:dropdownhead>Options</madcap:dropdownhead>"
            "<madcap:dropdownbody><p>Body.</p></madcap:dropdownbody></madcap:dropdown>"
        )
        assert render(html) == ".Options\n[%collapsible]\n====\nBody.\n====\n"

    def test_dropdown_heading_as_title(self, render):
        html = '<div class="dropdown"><h3>Advanced</h3><p>Body.</p></div>'
        assert render(html) == ".Advanced\n[%collapsible]\n====\nBody.\n====\n"

    def test_block_quote_and_rule(self, render):
        assert render("<blockquote><p>Quoted.</p></blockquote><hr>") == "____\nQuoted.\n____\n\n'''\n"

    def test_hidden_elements_and_comments_skipped(self, render):
        assert render("<p hidden>Secret</p><p>A<!-- c -->B</p>") == "AB\n"

    def test_empty_document(self, render):
        assert render("") == ""


@pytest.mark.unit
class TestWritersideRenderer:
    """Tests for Writerside Markdown output."""

    def test_heading(self, render):
        assert render("<h2>Sub</h2>", "writerside") == "## Sub\n"

    def test_inline_formatting(self, render):
        html = "<p><b>Bold</b> <i>it</i> <code>a`b</code></p>"
        assert render(html, "writerside") == "**Bold** _it_ ``a`b``\n"

    def test_escaping(self, render):
        assert render("<p>a *b* [c]</p>", "writerside") == "a \\*b\\* \\[c\\]\n"

    def test_line_start_prefixes_escaped(self, render):
        html = "<p>- not a list</p><p>1. not a list</p><p>&gt; not a quote</p><p>+ plus</p><p>2) paren</p>"
        assert render(html, "writerside") == (
            "\\- not a list\n\n1\\. not a list\n\n\\> not a quote\n\n\\+ plus\n\n2\\) paren\n"
        )

    def test_line_start_prefix_after_line_break(self, render):
        assert render("<p>One<br>&gt; two</p>", "writerside") == "One\\\n\\> two\n"

    def test_link_spaces_encoded(self, render):
        assert render('<p><a href="my page.htm">Page</a></p>', "writerside") == "[Page](my%20page.htm)\n"

    def test_cross_reference_rewrite(self, render):
        html = '<p><a href="topic.htm#sec">See topic</a></p>'
        result = render(html, "writerside", cross_references={"topic.htm": "topic.md"})
        assert result == "[See topic](topic.md#sec)\n"

    def test_line_break(self, render):
        assert render("<p>One<br>Two</p>", "writerside") == "One\\\nTwo\n"

    def test_code_fence(self, render):
        assert render('<pre class="language-bash">make</pre>', "writerside") == "```bash\nmake\n```\n"

    def test_code_fence_longer_than_backtick_runs(self, render):
        assert render("<pre>```</pre>", "writerside") == "````\n```\n````\n"

    def test_pipe_table(self, render):
        html = "<table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table>"
        assert render(html, "writerside") == "| A | B |\n| --- | --- |\n| 1 | 2 |\n"

    def test_pipe_table_without_header_uses_first_row(self, render):
        html = "<table><tr><td>1</td><td>2</td></tr></table>"
        assert render(html, "writerside") == "| 1 | 2 |\n| --- | --- |\n"

    def test_block_image(self, render):
        html = '<p><img src="Images/photo.png" alt="Photo" width="400"></p>'
        assert render(html, "writerside") == '![Photo](Images/photo.png){width="400"}\n'

    def test_inline_image(self, render):
        html = '<p>Click <img src="Images/icons/save.png" alt="Save"> to save.</p>'
        assert render(html, "writerside") == 'Click ![Save](Images/icons/save.png){style="inline"} to save.\n'

    def test_admonition(self, render):
        html = '<div class="note"><p>Save your work.</p></div>'
        assert render(html, "writerside") == '> Save your work.\n{style="note"}\n'

    def test_caution_uses_warning_style(self, render):
        html = '<div class="caution"><p>Hot.</p><p>Really hot.</p></div>'
        assert render(html, "writerside") == '> Hot.\n>\n> Really hot.\n{style="warning"}\n'

    def test_collapsible(self, render):
        html = "<details><summary>More info</summary><p>Hidden text.</p></details>"
        assert render(html, "writerside") == '<collapsible title="More info">\n\nHidden text.\n\n</collapsible>\n'

    def test_collapsible_title_escaped(self, render):
        html = '<details><summary>Say "hi"</summary><p>x</p></details>'
        assert render(html, "writerside").startswith('<collapsible title="Say &quot;hi&quot;">')

    def test_block_quote_and_rule(self, render):
        assert render("<blockquote><p>Quoted.</p></blockquote><hr>", "writerside") == "> Quoted.\n\n---\n"


@pytest.mark.unit
class TestZendeskRenderer:
    """Tests for Zendesk HTML output."""

    def test_heading_and_paragraph(self, render):
        assert render("<h2>Sub</h2><p>Text</p>", "zendesk") == "<h2>Sub</h2>\n\n<p>Text</p>\n"

    def test_text_is_html_escaped(self, render):
        assert render("<p>a &lt; b &amp; c</p>", "zendesk") == "<p>a &lt; b &amp; c</p>\n"

    def test_inline_formatting(self, render):
        html = "<p><b>B</b> <code>x&lt;y</code></p>"
        assert render(html, "zendesk") == "<p><strong>B</strong> <code>x&lt;y</code></p>\n"

    def test_link_attribute_escaped(self, render):
        html = '<p><a href="a.htm?x=1&amp;y=2">L</a></p>'
        assert render(html, "zendesk") == '<p><a href="a.htm?x=1&amp;y=2">L</a></p>\n'

    def test_code_block(self, render):
        html = '<pre class="language-html">&lt;b&gt;</pre>'
        assert render(html, "zendesk") == '<pre><code class="language-html">&lt;b&gt;</code></pre>\n'

    def test_table_sections(self, render):
        html = "<table><thead><tr><th>A</th></tr></thead><tbody><tr><td>1</td></tr></tbody></table>"
        assert render(html, "zendesk").split("\n") == [
            "<table>",
            "<thead>",
            "<tr><th>A</th></tr>",
            "</thead>",
            "<tbody>",
            "<tr><td>1</td></tr>",
            "</tbody>",
            "</table>",
            "",
        ]

    def test_image(self, render):
        html = '<p><img src="Images/photo.png" alt="Photo" width="400"></p>'
        assert render(html, "zendesk") == '<p><img src="Images/photo.png" alt="Photo" width="400"></p>\n'

    def test_callout(self, render):
        html = '<div class="note"><p>Save your work.</p></div>'
        assert render(html, "zendesk") == (
            '<div class="callout callout-note">\n<p><strong>Note:</strong></p>\n<p>Save your work.</p>\n</div>\n'
        )

    def test_callout_from_label_paragraph(self, render):
        html = '<p><span class="warningInDiv">Warning:</span> Hot</p>'
        assert render(html, "zendesk") == (
            '<div class="callout callout-warning">\n<p><strong>Warning:</strong></p>\n<p>Hot</p>\n</div>\n'
        )

    def test_details(self, render):
        html = "<details><summary>More info</summary><p>Hidden text.</p></details>"
        assert render(html, "zendesk") == "<details>\n<summary>More info</summary>\n<p>Hidden text.</p>\n</details>\n"

    def test_block_quote_rule_and_break(self, render):
        html = "<blockquote><p>Quoted.</p></blockquote><hr><p>a<br>b</p>"
        assert render(html, "zendesk") == "<blockquote>\n<p>Quoted.</p>\n</blockquote>\n\n<hr>\n\n<p>a<br>b</p>\n"


@pytest.mark.unit
class TestRendererOutput:
    """Tests for render_to_string and render."""

    def test_render_to_string(self):
        root = parse_html("<h1>Title</h1>")
        assert AsciiDocRenderer().render_to_string(root) == "= Title\n"

    def test_render_to_path(self, tmp_path):
        target = tmp_path / "out.md"
        WritersideRenderer().render(parse_html("<h1>Title</h1>"), target)
        assert target.read_text(encoding="utf-8") == "# Title\n"

    def test_render_to_text_stream(self):
        stream = io.StringIO()
        ZendeskRenderer().render(parse_html("<p>Hi</p>"), stream)
        assert stream.getvalue() == "<p>Hi</p>\n"

    def test_render_to_binary_stream(self):
        stream = io.BytesIO()
        ZendeskRenderer().render(parse_html("<p>Café</p>"), stream)
        assert stream.getvalue() == "<p>Café</p>\n".encode("utf-8")

    def test_lookups_passed_through(self):
        root = parse_html('<p>Version <span data-variable="Product.Version">X</span></p>')
        result = AsciiDocRenderer().render_to_string(root, variables={"Product.Version": "2.0"})
        assert result == "Version 2.0\n"

    def test_renderer_is_reusable(self):
        renderer = AsciiDocRenderer()
        first = renderer.convert(parse_html('<p><span data-variable="A.B">x</span></p>'))
        second = renderer.convert(parse_html("<p>Clean</p>"))
        assert len(first.metadata.warnings) == 1
        assert second.metadata.warnings == ()
