#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_list_analyzer.py
"""Unit tests for list structure analysis.

Tests cover:
- Numbering style and start detection
- Item splitting into primary and continuation content
- Orphaned and mixed content detection
- Sibling-chain detection in strict and loose modes

"""

import pytest

from flare2markup.ast import Comment, Element, Text, TreeIndex
from flare2markup.lists.analyzer import (
    analyze_list,
    collect_sibling_chain,
    detect_numbering_style,
    detect_start,
    is_sub_list_marked,
    split_item,
)


def _li(*children):
    return Element("li", children=list(children))


def _text_li(text):
    return _li(Text(text))


@pytest.mark.unit
class TestNumberingStyle:
    """Tests for detect_numbering_style."""

    @pytest.mark.parametrize(
        "attributes,expected",
        [
            ({}, "decimal"),
            ({"type": "1"}, "decimal"),
            ({"type": "a"}, "lower-alpha"),
            ({"type": "A"}, "upper-alpha"),
            ({"type": "i"}, "lower-roman"),
            ({"type": "I"}, "upper-roman"),
            ({"style": "margin: 0; list-style-type: lower-latin"}, "lower-alpha"),
            ({"style": "list-style-type:upper-roman"}, "upper-roman"),
            ({"class": "steps loweralpha"}, "lower-alpha"),
            ({"class": "LowerRoman"}, "lower-roman"),
        ],
    )
    def test_ordered_list_signals(self, attributes, expected):
        assert detect_numbering_style(Element("ol", attributes)) == expected

    def test_type_attribute_wins_over_class(self):
        """Test the type attribute is checked before class names."""
        element = Element("ol", {"type": "i", "class": "loweralpha"})
        assert detect_numbering_style(element) == "lower-roman"

    def test_unordered_lists_have_no_style(self):
        assert detect_numbering_style(Element("ul", {"type": "a"})) is None

    @pytest.mark.parametrize("value,expected", [(None, 1), ("3", 3), (" 12 ", 12), ("0", 1), ("x", 1)])
    def test_detect_start(self, value, expected):
        attributes = {"start": value} if value is not None else {}
        assert detect_start(Element("ol", attributes)) == expected


@pytest.mark.unit
class TestSplitItem:
    """Tests for split_item."""

    def test_inline_only_item(self):
        """Test an item without blocks is all primary content."""
        item = _li(Text("Click "), Element("b", children=[Text("Save")]))
        content = split_item(item)
        assert len(content.primary) == 2
        assert content.continuation == ()

    def test_split_at_first_block(self):
        """Test content from the first block element onward is continuation."""
        nested = Element("ul", children=[_text_li("Sub")])
        item = _li(Text("Parent"), nested)
        content = split_item(item)
        assert [node.content for node in content.primary] == ["Parent"]
        assert content.continuation == (nested,)

    def test_leading_paragraph_becomes_primary(self):
        """Test a leading paragraph is unwrapped into the primary content."""
        code = Element("pre", children=[Text("make")])
        item = _li(Text("\n  "), Element("p", children=[Text("Run:")]), code)
        content = split_item(item)
        assert [node.content for node in content.primary] == ["Run:"]
        assert content.continuation == (code,)


@pytest.mark.unit
class TestAnalyzeList:
    """Tests for analyze_list."""

    def test_simple_unordered_list(self):
        element = Element("ul", children=[_text_li("One"), Text("\n"), _text_li("Two")])
        shape = analyze_list(element, TreeIndex(Element("body", children=[element])))
        assert shape.list_type == "unordered"
        assert shape.depth == 0
        assert shape.item_count == 2
        assert shape.style is None
        assert not shape.has_nested_lists
        assert not shape.has_orphaned_content
        assert not shape.is_sibling_continuation

    def test_ordered_alpha_with_start(self):
        element = Element("ol", {"type": "a", "start": "3"}, [_text_li("One")])
        shape = analyze_list(element, TreeIndex(Element("body", children=[element])))
        assert shape.list_type == "ordered"
        assert shape.style == "lower-alpha"
        assert shape.is_alphabetical
        assert shape.start == 3

    def test_depth_counts_list_ancestors(self):
        inner = Element("ol", children=[_text_li("Sub")])
        outer = Element("ul", children=[_li(Text("Parent"), Element("div", children=[inner]))])
        index = TreeIndex(Element("body", children=[outer]))

        assert analyze_list(inner, index).depth == 1
        assert analyze_list(outer, index).has_nested_lists

    def test_orphaned_content(self):
        """Test non-item children are reported as orphans, comments and whitespace are not."""
        clean = Element("ul", children=[_text_li("One"), Comment("x"), Text("  ")])
        orphaned = Element("ul", children=[_text_li("One"), Element("p", children=[Text("Loose")])])
        index = TreeIndex(Element("body", children=[clean, Element("hr"), orphaned]))

        assert not analyze_list(clean, index).has_orphaned_content
        assert analyze_list(orphaned, index).has_orphaned_content

    def test_mixed_content(self):
        element = Element("ul", children=[_li(Text("See "), Element("img", {"src": "a.png"}))])
        shape = analyze_list(element, TreeIndex(Element("body", children=[element])))
        assert shape.has_mixed_content

    def test_definition_list(self):
        element = Element(
            "dl",
            children=[Element("dt", children=[Text("Term")]), Element("dd", children=[Text("Meaning")])],
        )
        shape = analyze_list(element, TreeIndex(Element("body", children=[element])))
        assert shape.list_type == "definition"
        assert shape.item_count == 2
        assert shape.style is None

    def test_non_list_raises(self):
        element = Element("p")
        with pytest.raises(ValueError, match="Expected a list element"):
            analyze_list(element, TreeIndex(Element("body", children=[element])))

    def test_shape_is_recomputed(self):
        """Test analysis reflects the tree at the time of the call."""
        element = Element("ul", children=[_text_li("One")])
        body = Element("body", children=[element])
        assert analyze_list(element, TreeIndex(body)).item_count == 1
        element.children.append(_text_li("Two"))
        assert analyze_list(element, TreeIndex(body)).item_count == 2


@pytest.mark.unit
class TestSiblingChains:
    """Tests for flat sibling-list detection."""

    def _siblings(self, *second_attributes):
        first = Element("ul", children=[_text_li("One")])
        rest = [Element("ul", attributes, [_text_li("Sub")]) for attributes in second_attributes]
        body = Element("body", children=[first, Text("\n"), *rest])
        return first, rest, TreeIndex(body)

    @pytest.mark.parametrize(
        "attributes",
        [{"class": "sub-list"}, {"class": "SubList"}, {"data-list-depth": "2"}, {"data-level": "1"}],
    )
    def test_marker_recognized(self, attributes):
        assert is_sub_list_marked(Element("ul", attributes))

    def test_strict_requires_marker(self):
        first, rest, index = self._siblings({})
        assert collect_sibling_chain(first, index, "strict") == []
        assert not analyze_list(first, index).is_sibling_continuation

    def test_strict_chain_with_marker(self):
        first, rest, index = self._siblings({"class": "sub-list"}, {"data-depth": "2"})
        assert collect_sibling_chain(first, index, "strict") == rest
        assert analyze_list(first, index).is_sibling_continuation

    def test_loose_accepts_any_same_tag_sibling(self):
        first, rest, index = self._siblings({})
        assert collect_sibling_chain(first, index, "loose") == rest

    def test_chain_stops_at_different_tag(self):
        first = Element("ul", children=[_text_li("One")])
        ordered = Element("ol", {"class": "sub-list"}, [_text_li("Step")])
        index = TreeIndex(Element("body", children=[first, ordered]))
        assert collect_sibling_chain(first, index, "strict") == []

    def test_chain_stops_at_unmarked_sibling(self):
        first, rest, index = self._siblings({"class": "sub-list"}, {}, {"class": "sub-list"})
        assert collect_sibling_chain(first, index, "strict") == rest[:1]

    def test_excluded_siblings_are_not_collected(self):
        first, rest, index = self._siblings({"class": "sub-list"})
        assert collect_sibling_chain(first, index, "strict", exclude={id(rest[0])}) == []

    def test_detection_can_be_disabled(self):
        first, rest, index = self._siblings({"class": "sub-list"})
        assert not analyze_list(first, index, detect_siblings=False).is_sibling_continuation
