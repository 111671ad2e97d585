#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_list_generator.py
"""Unit tests for list generation across the three target formats.

Post-passes are disabled here so the generator output is checked as rendered.

Tests cover:
- Depth-scaled markers and list-level style attributes
- Continuation content (explicit token, re-indent, line break)
- Orphan repair and the nesting depth limit
- Flat sibling lists nested under the preceding item
- Definition lists

"""

import pytest

from flare2markup import convert_html


def _content(html, target_format="asciidoc", **kwargs):
    kwargs.setdefault("apply_post_passes", False)
    return convert_html(html, target_format, **kwargs).content


@pytest.mark.unit
class TestAsciiDocLists:
    """Tests for AsciiDoc list layout."""

    def test_nested_unordered(self):
        html = "<ul><li>One<ul><li>Sub</li></ul></li><li>Two</li></ul>"
        assert _content(html) == "* One\n** Sub\n* Two\n"

    def test_ordered_alpha_uses_style_attribute(self):
        html = "<ol type='a'><li>One</li><li>Two</li></ol>"
        assert _content(html) == "[loweralpha]\n. One\n. Two\n"

    def test_nested_roman_list(self):
        html = "<ol><li>Step<ol class='lowerroman'><li>Detail</li></ol></li></ol>"
        assert _content(html) == ". Step\n[lowerroman]\n.. Detail\n"

    def test_literal_markers_without_alphabetical_markers(self):
        """Test literal letter and roman labels when style attributes are disabled."""
        assert _content("<ol type='a'><li>One</li><li>Two</li></ol>", use_alphabetical_markers=False) == (
            "a. One\nb. Two\n"
        )
        assert _content("<ol type='i'><li>One</li><li>Two</li></ol>", use_alphabetical_markers=False) == (
            "i) One\nii) Two\n"
        )

    def test_literal_roman_labels_up_to_3999(self):
        html = "<ol type='I' start='3998'><li>One</li><li>Two</li></ol>"
        result = convert_html(html, "asciidoc", use_alphabetical_markers=False, apply_post_passes=False)
        assert result.content == "[start=3998]\nMMMCMXCVIII) One\nMMMCMXCIX) Two\n"
        assert result.metadata.warnings == ()

    @pytest.mark.parametrize(
        "start,items,expected",
        [
            (4000, "<li>x</li>", "[start=4000]\n. x\n"),
            (3999, "<li>One</li><li>Two</li>", "[start=3999]\n. One\n. Two\n"),
        ],
    )
    def test_roman_labels_past_3999_fall_back_to_decimal(self, start, items, expected):
        html = f"<ol type='i' start='{start}'>{items}</ol>"
        result = convert_html(html, "asciidoc", use_alphabetical_markers=False, apply_post_passes=False)
        assert result.content == expected
        assert result.metadata.warnings == (
            f"Roman numerals stop at 3999; list starting at {start} rendered with decimal markers",
        )

    def test_start_number(self):
        assert _content("<ol start='3'><li>Three</li></ol>") == "[start=3]\n. Three\n"

    def test_block_continuation_uses_token(self):
        html = "<ol><li><p>Run the installer:</p><pre class='language-bash'>./install.sh</pre></li></ol>"
        assert _content(html) == ". Run the installer:\n+\n[source,bash]\n----\n./install.sh\n----\n"

    def test_blank_lines_in_attached_block_are_bridged(self):
        """Test blank lines inside continuation content become tokens."""
        html = "<ul><li>A<div><p>B</p><p>C</p></div></li></ul>"
        assert _content(html) == "* A\n+\nB\n+\nC\n"

    def test_line_break_policy_without_continuation_markers(self):
        html = "<ul><li>A<p>B</p></li></ul>"
        assert _content(html, use_continuation_markers=False) == "* A\nB\n"

    def test_empty_item_gets_placeholder(self):
        assert _content("<ul><li></li></ul>") == "* {empty}\n"

    def test_definition_list(self):
        html = "<dl><dt>Term</dt><dd>Definition</dd></dl>"
        assert _content(html) == "Term::\nDefinition\n"


@pytest.mark.unit
class TestWritersideLists:
    """Tests for Writerside Markdown list layout."""

    def test_nested_list_is_reindented(self):
        html = "<ul><li>One<ul><li>Sub</li></ul></li><li>Two</li></ul>"
        assert _content(html, "writerside") == "- One\n    - Sub\n- Two\n"

    def test_ordered_alpha_attribute_line(self):
        html = "<ol type='a'><li>One</li><li>Two</li></ol>"
        assert _content(html, "writerside") == '1. One\n2. Two\n{type="alpha-lower"}\n'

    def test_alpha_attribute_dropped_without_alphabetical_markers(self):
        html = "<ol type='a'><li>One</li></ol>"
        assert _content(html, "writerside", use_alphabetical_markers=False) == "1. One\n"

    def test_start_number_offsets_markers(self):
        assert _content("<ol start='3'><li>Three</li><li>Four</li></ol>", "writerside") == "3. Three\n4. Four\n"

    def test_code_block_indented_under_item(self):
        html = "<ol><li><p>Run:</p><pre class='language-bash'>make</pre></li></ol>"
        assert _content(html, "writerside") == "1. Run:\n\n    ```bash\n    make\n    ```\n"

    def test_indent_size_option(self):
        html = "<ul><li>One<ul><li>Sub</li></ul></li></ul>"
        assert _content(html, "writerside", indent_size=2) == "- One\n  - Sub\n"

    def test_definition_groups(self):
        html = "<dl><dt>A</dt><dd>First</dd><dt>B</dt><dd>Second</dd></dl>"
        assert _content(html, "writerside") == "A\n: First\n\nB\n: Second\n"


@pytest.mark.unit
class TestZendeskLists:
    """Tests for Zendesk HTML list layout."""

    def test_nested_list_inside_item(self):
        html = "<ul><li>One<ul><li>Sub</li></ul></li></ul>"
        assert _content(html, "zendesk") == "<ul>\n<li>One\n<ul>\n<li>Sub</li>\n</ul></li>\n</ul>\n"

    def test_type_and_start_attributes(self):
        html = "<ol type='a' start='2'><li>B</li></ol>"
        assert _content(html, "zendesk") == '<ol type="a" start="2">\n<li>B</li>\n</ol>\n'

    def test_definition_list(self):
        html = "<dl><dt>Term</dt><dd>Definition</dd></dl>"
        assert _content(html, "zendesk") == "<dl>\n<dt>Term</dt>\n<dd>Definition</dd>\n</dl>\n"


@pytest.mark.unit
class TestOrphanRepair:
    """Tests for non-item children of list containers."""

    def test_leading_text_becomes_item(self):
        result = convert_html("<ul>Loose text<li>One</li></ul>", "asciidoc")
        assert result.content == "* Loose text\n* One\n"
        assert result.metadata.warnings == ("1 orphaned elements converted to list items",)

    def test_block_folded_into_preceding_item(self):
        result = convert_html("<ul><li>One</li><p>Orphan para</p><li>Two</li></ul>", "asciidoc")
        assert result.content == "* One\n+\nOrphan para\n* Two\n"
        assert result.metadata.warnings == ("1 orphaned blocks folded into preceding list items",)

    def test_leading_block_becomes_item(self):
        result = convert_html("<ul><p>Lead</p><li>One</li></ul>", "asciidoc")
        assert result.content == "* Lead\n* One\n"

    def test_repair_disabled_keeps_orphans_after_list(self):
        result = convert_html(
            "<ul><li>One</li><p>Orphan para</p></ul>", "asciidoc", handle_orphaned_content=False
        )
        assert result.content == "* One\n\nOrphan para\n"
        assert result.metadata.warnings == ()

    def test_orphans_are_logged(self, caplog):
        """Test repair warnings are logged as well as returned."""
        with caplog.at_level("WARNING", logger="flare2markup"):
            convert_html("<ul>Loose<li>One</li></ul>", "writerside")
        assert "orphaned elements converted to list items" in caplog.text


@pytest.mark.unit
class TestNestingLimit:
    """Tests for max_nesting_depth."""

    def test_deep_list_clamped_with_warning(self):
        html = "<ul><li>A<ul><li>B<ul><li>C</li></ul></li></ul></li></ul>"
        result = convert_html(html, "asciidoc", max_nesting_depth=2)
        assert result.content == "* A\n** B\n** C\n"
        assert result.metadata.warnings == ("List nesting depth 3 exceeds maximum of 2; rendering at depth 2",)
        assert result.metadata.max_depth == 2

    def test_within_limit_has_no_warning(self):
        html = "<ul><li>A<ul><li>B<ul><li>C</li></ul></li></ul></li></ul>"
        result = convert_html(html, "asciidoc")
        assert result.content == "* A\n** B\n*** C\n"
        assert result.metadata.max_depth == 3
        assert result.metadata.warnings == ()


@pytest.mark.unit
class TestSiblingLists:
    """Tests for flat sibling lists marked as sub-lists."""

    HTML = "<ul><li>One</li><li>Two</li></ul>\n<ul class='sub-list'><li>Sub</li></ul>"

    def test_asciidoc_nests_under_last_item(self):
        result = convert_html(self.HTML, "asciidoc")
        assert result.content == "* One\n* Two\n+\n** Sub\n"
        assert result.metadata.list_count == 2
        assert result.metadata.max_depth == 2

    def test_writerside_nests_under_last_item(self):
        assert _content(self.HTML, "writerside") == "- One\n- Two\n    - Sub\n"

    def test_zendesk_nests_inside_last_item(self):
        assert _content(self.HTML, "zendesk") == (
            "<ul>\n<li>One</li>\n<li>Two\n<ul>\n<li>Sub</li>\n</ul></li>\n</ul>\n"
        )

    def test_unmarked_sibling_stays_top_level_in_strict_mode(self):
        html = "<ul><li>One</li></ul><ul><li>Other</li></ul>"
        assert _content(html) == "* One\n\n* Other\n"

    def test_loose_mode_chains_unmarked_sibling(self):
        html = "<ul><li>One</li></ul><ul><li>Other</li></ul>"
        assert _content(html, sibling_list_mode="loose") == "* One\n+\n** Other\n"

    def test_detection_disabled(self):
        assert _content(self.HTML, detect_sibling_lists=False) == "* One\n* Two\n\n* Sub\n"
