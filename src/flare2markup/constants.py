#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/constants.py
"""Constants and default values for the flare2markup library.

This module centralizes hardcoded values, thresholds and keyword tables used
across the conversion core. Constants are organized by category:

1. Type Definitions - Literal types and type aliases
2. Document Tree Tags - tag sets used by the dispatcher and list analyzer
3. List Conversion Defaults - option defaults and marker limits
4. Post-Pass Thresholds - image, section and admonition heuristics
5. Dependencies - optional third-party packages
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

TargetFormat = Literal["asciidoc", "writerside", "zendesk"]
ListType = Literal["ordered", "unordered", "definition"]
NumberingStyle = Literal["decimal", "lower-alpha", "upper-alpha", "lower-roman", "upper-roman"]
SiblingListMode = Literal["strict", "loose"]
AdmonitionLabel = Literal["NOTE", "TIP", "WARNING", "CAUTION", "IMPORTANT"]

TARGET_FORMATS: tuple[str, ...] = ("asciidoc", "writerside", "zendesk")

# =============================================================================
# Document Tree Tags
# =============================================================================

LIST_TAGS: dict[str, str] = {"ol": "ordered", "ul": "unordered", "dl": "definition"}
LIST_ITEM_TAGS: dict[str, frozenset[str]] = {
    "ordered": frozenset({"li"}),
    "unordered": frozenset({"li"}),
    "definition": frozenset({"dt", "dd"}),
}

# The first of these inside a list item starts its continuation content
CONTINUATION_SPLIT_TAGS = frozenset(
    {"p", "div", "blockquote", "pre", "ul", "ol", "dl", "table", "h1", "h2", "h3", "h4", "h5", "h6"}
)

# Elements whose presence inside an item marks the list as having mixed content
MIXED_CONTENT_TAGS = frozenset({"img", "table", "blockquote"})

BLOCK_TAGS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "body",
        "dd",
        "details",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hr",
        "html",
        "li",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "summary",
        "table",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "tr",
        "ul",
        "madcap:dropdown",
        "madcap:dropdownbody",
        "madcap:dropdownhead",
        "madcap:snippetblock",
    }
)

SKIPPED_TAGS = frozenset({"script", "style", "head", "meta", "link", "title", "noscript", "template"})
HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

# Markers identifying a list serialized as a flat sibling of its logical parent
SUB_LIST_CLASSES = frozenset({"sub-list", "sublist"})
SUB_LIST_ATTRIBUTES = ("data-list-depth", "data-depth", "data-level")

# Admonition containers and label spans produced by the authoring tool
ADMONITION_CLASS_LABELS: dict[str, str] = {
    "note": "NOTE",
    "info": "NOTE",
    "example": "NOTE",
    "tip": "TIP",
    "warning": "WARNING",
    "attention": "WARNING",
    "caution": "CAUTION",
    "danger": "CAUTION",
    "error": "CAUTION",
    "important": "IMPORTANT",
    "advisory": "IMPORTANT",
}
ADMONITION_LABEL_SPAN_SUFFIXES = ("indiv", "inpaper")
ADMONITION_LABELS: tuple[str, ...] = ("NOTE", "TIP", "WARNING", "CAUTION", "IMPORTANT")

COLLAPSIBLE_CLASSES = frozenset({"dropdown", "mc-dropdown", "madcap-dropdown-section", "collapsible"})
INLINE_IMAGE_CLASSES = frozenset({"iconinline", "icon-inline", "inline-icon"})

# =============================================================================
# List Conversion Defaults
# =============================================================================

DEFAULT_USE_ALPHABETICAL_MARKERS = True
DEFAULT_USE_CONTINUATION_MARKERS = True
DEFAULT_INDENT_SIZE = 4
DEFAULT_HANDLE_ORPHANED_CONTENT = True
DEFAULT_DETECT_SIBLING_LISTS = True
DEFAULT_SIBLING_LIST_MODE: SiblingListMode = "strict"
DEFAULT_INLINE_IMAGE_THRESHOLD = 32
DEFAULT_MAX_NESTING_DEPTH = 10
DEFAULT_APPLY_POST_PASSES = True
DEFAULT_CLASSIFY_SECTIONS = True

# Depth-scaled markers repeat at most this many times
MAX_MARKER_REPEAT = 5
MAX_ROMAN_VALUE = 3999

ROMAN_NUMERALS: tuple[tuple[int, str], ...] = (
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)

# =============================================================================
# Post-Pass Thresholds
# =============================================================================

# Image classifier
BLOCK_IMAGE_MIN_WIDTH = 100
INLINE_CONTEXT_MIN_TEXT = 20
INLINE_PATH_KEYWORDS = ("icon", "button", "gui")
BLOCK_PATH_KEYWORDS = ("screenshot", "screens")

# Collapsible/heading classifier
PRIMARY_SECTION_KEYWORDS: tuple[str, ...] = (
    "overview",
    "introduction",
    "getting started",
    "setup",
    "configuration",
    "installation",
    "requirements",
    "features",
    "usage",
    "tutorial",
    "guide",
    "workflow",
    "process",
    "procedure",
    "steps",
)
SUPPLEMENTARY_SECTION_KEYWORDS: tuple[str, ...] = (
    "connecting",
    "configuring",
    "related tasks",
    "additional",
    "advanced",
    "optional",
    "details",
    "more information",
    "see also",
    "see-also",
    "troubleshooting",
    "examples",
    "tips",
    "notes",
    "reference",
)
MIN_CLASSIFIED_HEADING_LEVEL = 3
COLLAPSIBLE_MIN_BODY_LINES = 3
COLLAPSIBLE_MAX_BODY_LINES = 15

# Admonition assembler
DEFAULT_ADMONITION_SINGLE_LINE_MIN_LENGTH = 50
DEFAULT_ADMONITION_MERGE_MAX_LENGTH = 150
ADMONITION_SHORT_LINE_LENGTH = 100

# =============================================================================
# Dependencies
# =============================================================================

DEPS_HTML = [("beautifulsoup4", "bs4", ">=4.12.0")]
