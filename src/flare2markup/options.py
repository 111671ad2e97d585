#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/options.py
"""Configuration options for flare2markup conversions.

Each target format has its own frozen options class so that defaults are
format-specific: AsciiDoc output uses explicit continuation tokens and
``[loweralpha]`` list attributes, Writerside Markdown re-indents continuation
content, and Zendesk HTML keeps structure in the markup itself.

Options objects are immutable. Use ``create_updated`` to derive a modified copy.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from flare2markup.constants import (
    DEFAULT_ADMONITION_MERGE_MAX_LENGTH,
    DEFAULT_ADMONITION_SINGLE_LINE_MIN_LENGTH,
    DEFAULT_APPLY_POST_PASSES,
    DEFAULT_CLASSIFY_SECTIONS,
    DEFAULT_DETECT_SIBLING_LISTS,
    DEFAULT_HANDLE_ORPHANED_CONTENT,
    DEFAULT_INDENT_SIZE,
    DEFAULT_INLINE_IMAGE_THRESHOLD,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_SIBLING_LIST_MODE,
    DEFAULT_USE_ALPHABETICAL_MARKERS,
    DEFAULT_USE_CONTINUATION_MARKERS,
    SiblingListMode,
    TargetFormat,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ConversionOptions(CloneFrozenMixin):
    """Options shared by every target format.

    Parameters
    ----------
    use_alphabetical_markers : bool
        Honour alphabetic and roman numbering requests (``type="a"``, ``lower-alpha``
        classes). AsciiDoc emits structural markers with a ``[loweralpha]`` style
        line; when False it writes literal ``a.`` / ``i)`` markers instead.
        Markdown and HTML carry the style as an attribute and fall back to decimal
        numbering when False.
    use_continuation_markers : bool
        Attach continuation content with the format's explicit continuation token
        (AsciiDoc ``+``). When False the format falls back to re-indenting or joining.
    indent_size : int
        Minimum indentation width for re-indented continuation content.
    handle_orphaned_content : bool
        Repair non-item children of list containers by folding them into items.
    detect_sibling_lists : bool
        Render flat sibling lists marked as sub-lists nested under the preceding list.
    sibling_list_mode : {"strict", "loose"}
        ``strict`` requires an explicit sub-list marker on the sibling, ``loose``
        chains any adjacent list with the same tag.
    inline_image_threshold : int
        Images whose declared width and height are both at or below this many
        pixels are treated as inline icons.
    max_nesting_depth : int
        Lists deeper than this render at the maximum depth with a warning.
    apply_post_passes : bool
        Run the text normalizers over the rendered document.
    classify_sections : bool
        Enable the collapsible/heading classifier pass.
    admonition_single_line_min_length : int
        A label line whose text is longer than this is kept as a single-line admonition.
    admonition_merge_max_length : int
        Accumulated admonition text at or below this length is merged onto one line.

    """

    use_alphabetical_markers: bool = field(
        default=DEFAULT_USE_ALPHABETICAL_MARKERS,
        metadata={"help": "Honour alphabetic numbering requests on ordered lists", "importance": "core"},
    )
    use_continuation_markers: bool = field(
        default=DEFAULT_USE_CONTINUATION_MARKERS,
        metadata={"help": "Attach continuation blocks with the explicit continuation token", "importance": "core"},
    )
    indent_size: int = field(
        default=DEFAULT_INDENT_SIZE,
        metadata={"help": "Indentation width for re-indented continuation content", "importance": "advanced"},
    )
    handle_orphaned_content: bool = field(
        default=DEFAULT_HANDLE_ORPHANED_CONTENT,
        metadata={"help": "Fold non-item list children into list items", "importance": "advanced"},
    )
    detect_sibling_lists: bool = field(
        default=DEFAULT_DETECT_SIBLING_LISTS,
        metadata={"help": "Nest flat sibling lists marked as sub-lists", "importance": "core"},
    )
    sibling_list_mode: SiblingListMode = field(
        default=DEFAULT_SIBLING_LIST_MODE,
        metadata={
            "help": "Sibling list detection: 'strict' needs a sub-list marker, 'loose' chains any same-tag list",
            "choices": ["strict", "loose"],
            "importance": "advanced",
        },
    )
    inline_image_threshold: int = field(
        default=DEFAULT_INLINE_IMAGE_THRESHOLD,
        metadata={"help": "Maximum icon size in pixels for inline images", "importance": "advanced"},
    )
    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={"help": "Deepest list nesting rendered before clamping", "importance": "advanced"},
    )
    apply_post_passes: bool = field(
        default=DEFAULT_APPLY_POST_PASSES,
        metadata={"help": "Run the text normalizers over rendered output", "importance": "core"},
    )
    classify_sections: bool = field(
        default=DEFAULT_CLASSIFY_SECTIONS,
        metadata={"help": "Turn keyword-matched sections into collapsible blocks", "importance": "core"},
    )
    admonition_single_line_min_length: int = field(
        default=DEFAULT_ADMONITION_SINGLE_LINE_MIN_LENGTH,
        metadata={"help": "Label text longer than this stays a single-line admonition", "importance": "advanced"},
    )
    admonition_merge_max_length: int = field(
        default=DEFAULT_ADMONITION_MERGE_MAX_LENGTH,
        metadata={"help": "Longest accumulated admonition text merged onto one line", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and choices.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.indent_size < 1:
            raise ValueError(f"indent_size must be at least 1, got {self.indent_size}")
        if self.inline_image_threshold < 0:
            raise ValueError(f"inline_image_threshold must be non-negative, got {self.inline_image_threshold}")
        if self.max_nesting_depth < 1:
            raise ValueError(f"max_nesting_depth must be at least 1, got {self.max_nesting_depth}")
        if self.sibling_list_mode not in ("strict", "loose"):
            raise ValueError(f"sibling_list_mode must be 'strict' or 'loose', got {self.sibling_list_mode!r}")
        if self.admonition_single_line_min_length < 0:
            raise ValueError(
                f"admonition_single_line_min_length must be non-negative, got {self.admonition_single_line_min_length}"
            )
        if self.admonition_merge_max_length < 0:
            raise ValueError(
                f"admonition_merge_max_length must be non-negative, got {self.admonition_merge_max_length}"
            )


@dataclass(frozen=True)
class AsciiDocOptions(ConversionOptions):
    """AsciiDoc output options.

    Depth-scaled markers, ``+`` continuation tokens and ``[loweralpha]`` style
    attributes are used by default.
    """


@dataclass(frozen=True)
class WritersideOptions(ConversionOptions):
    """Writerside Markdown output options.

    Continuation content is re-indented under the item marker, and alphabetic
    lists are tagged with a ``{type="alpha-lower"}`` attribute line.
    """

    use_continuation_markers: bool = field(
        default=False,
        metadata={"help": "Markdown has no continuation token; content is re-indented", "importance": "core"},
    )


@dataclass(frozen=True)
class ZendeskOptions(ConversionOptions):
    """Zendesk HTML output options.

    HTML keeps list structure in the markup, so continuation content is joined
    with line breaks inside the ``<li>`` and the text normalizers are skipped.
    """

    use_continuation_markers: bool = field(
        default=False,
        metadata={"help": "HTML lists need no continuation token", "importance": "core"},
    )
    apply_post_passes: bool = field(
        default=False,
        metadata={"help": "HTML output is not line-oriented; normalizers are skipped", "importance": "core"},
    )


OPTIONS_CLASSES: dict[str, type[ConversionOptions]] = {
    "asciidoc": AsciiDocOptions,
    "writerside": WritersideOptions,
    "zendesk": ZendeskOptions,
}


def default_options(target_format: TargetFormat) -> ConversionOptions:
    """Return the default options object for ``target_format``."""
    return OPTIONS_CLASSES[target_format]()


def option_field_names() -> frozenset[str]:
    """Return the names of all recognized option fields."""
    return frozenset(f.name for f in fields(ConversionOptions))
