#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/lists/layouts.py
"""Per-family list layouts.

A layout decides how markers, item bodies, definition terms and list-level
attributes are laid out as lines for one target-format family. Item splitting,
marker computation and continuation handling are shared and live elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from flare2markup.constants import MAX_ROMAN_VALUE, NumberingStyle
from flare2markup.lists.analyzer import ListShape
from flare2markup.lists.markers import ASCIIDOC_MARKERS, MARKDOWN_MARKERS, MarkerSyntax, marker
from flare2markup.options import ConversionOptions
from flare2markup.utils.escape import escape_html_attribute

_ASCIIDOC_STYLE_NAMES: dict[str, str] = {
    "lower-alpha": "loweralpha",
    "upper-alpha": "upperalpha",
    "lower-roman": "lowerroman",
    "upper-roman": "upperroman",
}

_WRITERSIDE_STYLE_NAMES: dict[str, str] = {
    "lower-alpha": "alpha-lower",
    "upper-alpha": "alpha-upper",
    "lower-roman": "roman-lower",
    "upper-roman": "roman-upper",
}

_HTML_TYPE_ATTRIBUTES: dict[str, str] = {
    "lower-alpha": "a",
    "upper-alpha": "A",
    "lower-roman": "i",
    "upper-roman": "I",
}


class ListLayout(ABC):
    """Line layout for one target-format family."""

    syntax: Optional[MarkerSyntax] = None

    def __init__(self, options: ConversionOptions) -> None:
        self.options = options

    def effective_style(self, shape: ListShape) -> Optional[NumberingStyle]:
        """Return the numbering style actually rendered for ``shape``."""
        return shape.style

    def item_marker(self, shape: ListShape, depth: int, index: int, item_count: int = 0) -> str:
        """Return the marker for item ``index`` (0-based, before the start offset) of ``item_count``."""
        if self.syntax is None:
            return ""
        return marker(shape.list_type, self.effective_style(shape), depth, shape.start - 1 + index, self.syntax)

    def marker_warning(self, shape: ListShape, item_count: int) -> Optional[str]:
        """Return a warning when the list's markers cannot be rendered in its own style."""
        return None

    @abstractmethod
    def format_item(self, item_marker: str, body: str, depth: int) -> str:
        """Lay out one item from its marker and attached body."""

    @abstractmethod
    def format_term(self, text: str, depth: int) -> str:
        """Lay out a definition-list term."""

    @abstractmethod
    def format_description(self, body: str, depth: int) -> str:
        """Lay out a definition-list description."""

    def description_marker_width(self) -> int:
        return 0

    @abstractmethod
    def assemble(self, shape: ListShape, depth: int, entries: Sequence[str]) -> str:
        """Join laid-out entries into the list's text, adding list-level attributes."""


class AsciiDocListLayout(ListLayout):
    """AsciiDoc lists: depth-scaled ``*``/``.`` markers and ``[loweralpha]`` attributes.

    With ``use_alphabetical_markers`` off, alphabetic and roman lists use
    literal markers (``a.``, ``i)``) instead of a style attribute. A roman list
    numbered past 3999 falls back to decimal markers.
    """

    syntax = ASCIIDOC_MARKERS

    def item_marker(self, shape: ListShape, depth: int, index: int, item_count: int = 0) -> str:
        style = shape.style
        if self._uses_literal_labels(shape) and not self._roman_overflow(shape, max(item_count, index + 1)):
            label = marker("ordered", style, depth, shape.start - 1 + index, self.syntax)  # type: ignore[arg-type]
            return f"{label}." if style in ("lower-alpha", "upper-alpha") else f"{label})"
        return marker(shape.list_type, "decimal" if shape.list_type == "ordered" else None, depth, index, self.syntax)

    def marker_warning(self, shape: ListShape, item_count: int) -> Optional[str]:
        if self._uses_literal_labels(shape) and self._roman_overflow(shape, item_count):
            return (
                f"Roman numerals stop at {MAX_ROMAN_VALUE}; list starting at {shape.start} "
                "rendered with decimal markers"
            )
        return None

    def _uses_literal_labels(self, shape: ListShape) -> bool:
        return (
            shape.list_type == "ordered"
            and shape.style not in (None, "decimal")
            and not self.options.use_alphabetical_markers
        )

    @staticmethod
    def _roman_overflow(shape: ListShape, item_count: int) -> bool:
        return shape.style in ("lower-roman", "upper-roman") and shape.start - 1 + item_count > MAX_ROMAN_VALUE

    def format_item(self, item_marker: str, body: str, depth: int) -> str:
        # An item with no inline text still needs something after its marker
        if not body or body.startswith("\n"):
            body = "{empty}" + body
        return f"{item_marker} {body}"

    def format_term(self, text: str, depth: int) -> str:
        return f"{text or '{empty}'}{':' * (2 + min(depth, 2))}"

    def format_description(self, body: str, depth: int) -> str:
        if not body or body.startswith("\n"):
            body = "{empty}" + body
        return body

    def assemble(self, shape: ListShape, depth: int, entries: Sequence[str]) -> str:
        attributes: list[str] = []
        if shape.list_type == "ordered":
            style_name = _ASCIIDOC_STYLE_NAMES.get(shape.style or "")
            if style_name and self.options.use_alphabetical_markers:
                attributes.append(style_name)
            if shape.start != 1:
                attributes.append(f"start={shape.start}")
        lines = [f"[{', '.join(attributes)}]"] if attributes else []
        lines.extend(entries)
        return "\n".join(lines)


class MarkdownListLayout(ListLayout):
    """Writerside Markdown lists: ``-`` and ``1.`` markers, ``{type="alpha-lower"}`` attributes.

    Nesting is expressed by the parent's re-indented continuation, so markers
    themselves are not depth-scaled.
    """

    syntax = MARKDOWN_MARKERS

    def effective_style(self, shape: ListShape) -> Optional[NumberingStyle]:
        # Markdown has no literal letter markers; the style travels in the attribute line
        return "decimal" if shape.list_type == "ordered" else None

    def format_item(self, item_marker: str, body: str, depth: int) -> str:
        return f"{item_marker} {body}" if body else item_marker

    def format_term(self, text: str, depth: int) -> str:
        return text

    def format_description(self, body: str, depth: int) -> str:
        return f": {body}"

    def description_marker_width(self) -> int:
        return 1

    def assemble(self, shape: ListShape, depth: int, entries: Sequence[str]) -> str:
        if shape.list_type == "definition":
            return _join_definition_groups(entries)
        text = "\n".join(entries)
        style_name = _WRITERSIDE_STYLE_NAMES.get(shape.style or "")
        if shape.list_type == "ordered" and style_name and self.options.use_alphabetical_markers:
            text += f'\n{{type="{style_name}"}}'
        return text


class HtmlListLayout(ListLayout):
    """HTML lists for Zendesk article bodies."""

    syntax = None

    def format_item(self, item_marker: str, body: str, depth: int) -> str:
        return f"<li>{body}</li>"

    def format_term(self, text: str, depth: int) -> str:
        return f"<dt>{text}</dt>"

    def format_description(self, body: str, depth: int) -> str:
        return f"<dd>{body}</dd>"

    def assemble(self, shape: ListShape, depth: int, entries: Sequence[str]) -> str:
        tag = {"ordered": "ol", "unordered": "ul", "definition": "dl"}[shape.list_type]
        attributes = ""
        if shape.list_type == "ordered":
            type_attribute = _HTML_TYPE_ATTRIBUTES.get(shape.style or "")
            if type_attribute and self.options.use_alphabetical_markers:
                attributes += f' type="{escape_html_attribute(type_attribute)}"'
            if shape.start != 1:
                attributes += f' start="{shape.start}"'
        return "\n".join([f"<{tag}{attributes}>", *entries, f"</{tag}>"])


def _join_definition_groups(entries: Sequence[str]) -> str:
    # A blank line goes before each term that follows a description
    lines: list[str] = []
    previous_was_description = False
    for entry in entries:
        is_description = entry.startswith(": ")
        if lines and not is_description and previous_was_description:
            lines.append("")
        lines.append(entry)
        previous_was_description = is_description
    return "\n".join(lines)
