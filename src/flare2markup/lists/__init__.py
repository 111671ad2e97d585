#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/lists/__init__.py
"""List analysis and generation shared by all target formats."""

from flare2markup.lists.analyzer import (
    ListItemContent,
    ListShape,
    analyze_list,
    collect_sibling_chain,
    detect_numbering_style,
    split_item,
)
from flare2markup.lists.continuation import (
    ContinuationBlock,
    ContinuationPolicy,
    ExplicitTokenContinuation,
    LineBreakContinuation,
    ReindentContinuation,
)
from flare2markup.lists.generator import ListGenerator
from flare2markup.lists.layouts import AsciiDocListLayout, HtmlListLayout, ListLayout, MarkdownListLayout
from flare2markup.lists.markers import (
    ASCIIDOC_MARKERS,
    MARKDOWN_MARKERS,
    MarkerSyntax,
    from_roman,
    marker,
    to_alpha,
    to_roman,
)

__all__ = [
    "ASCIIDOC_MARKERS",
    "MARKDOWN_MARKERS",
    "AsciiDocListLayout",
    "ContinuationBlock",
    "ContinuationPolicy",
    "ExplicitTokenContinuation",
    "HtmlListLayout",
    "LineBreakContinuation",
    "ListGenerator",
    "ListItemContent",
    "ListLayout",
    "ListShape",
    "MarkdownListLayout",
    "MarkerSyntax",
    "ReindentContinuation",
    "analyze_list",
    "collect_sibling_chain",
    "detect_numbering_style",
    "from_roman",
    "marker",
    "split_item",
    "to_alpha",
    "to_roman",
]
