#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/lists/analyzer.py
"""List structure analysis.

Classifies a list container before it is rendered: its category, nesting
depth, items, and the authoring-tool quirks the generator has to repair
(orphaned children, mixed content, and nested lists serialized as flat
siblings of their parent list).

Shapes are computed fresh every time a list is visited and are never cached.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, cast

from flare2markup.ast.nodes import DocumentNode, Element, Text, is_blank, is_element
from flare2markup.ast.tree import TreeIndex
from flare2markup.constants import (
    CONTINUATION_SPLIT_TAGS,
    LIST_ITEM_TAGS,
    LIST_TAGS,
    MIXED_CONTENT_TAGS,
    SUB_LIST_ATTRIBUTES,
    SUB_LIST_CLASSES,
    ListType,
    NumberingStyle,
    SiblingListMode,
)

logger = logging.getLogger(__name__)

_LIST_STYLE_TYPE_RE = re.compile(r"list-style-type\s*:\s*([a-z-]+)", re.IGNORECASE)

_TYPE_ATTRIBUTE_STYLES: dict[str, NumberingStyle] = {
    "1": "decimal",
    "a": "lower-alpha",
    "A": "upper-alpha",
    "i": "lower-roman",
    "I": "upper-roman",
}

_CSS_STYLES: dict[str, NumberingStyle] = {
    "decimal": "decimal",
    "lower-alpha": "lower-alpha",
    "lower-latin": "lower-alpha",
    "upper-alpha": "upper-alpha",
    "upper-latin": "upper-alpha",
    "lower-roman": "lower-roman",
    "upper-roman": "upper-roman",
}

_CLASS_STYLES: dict[str, NumberingStyle] = {
    "loweralpha": "lower-alpha",
    "lower-alpha": "lower-alpha",
    "upperalpha": "upper-alpha",
    "upper-alpha": "upper-alpha",
    "lowerroman": "lower-roman",
    "lower-roman": "lower-roman",
    "upperroman": "upper-roman",
    "upper-roman": "upper-roman",
}


@dataclass(frozen=True)
class ListShape:
    """Analysis result for one list container.

    Parameters
    ----------
    list_type : {"ordered", "unordered", "definition"}
        Category from the container's own tag
    depth : int
        Number of list-container ancestors
    item_count : int
        Number of direct item children (``li``, or ``dt``/``dd`` for definition lists)
    has_nested_lists : bool
        Whether any item contains a list
    has_orphaned_content : bool
        Whether the container has non-blank direct children that are not items
    has_mixed_content : bool
        Whether any item contains an image, table, block quote or nested div
    is_alphabetical : bool
        Whether alphabetic numbering was requested
    is_sibling_continuation : bool
        Whether the container is followed by marked sibling lists that belong
        nested under its last item
    style : str or None
        Numbering style for ordered lists
    start : int
        First item number for ordered lists

    """

    list_type: ListType
    depth: int
    item_count: int
    has_nested_lists: bool = False
    has_orphaned_content: bool = False
    has_mixed_content: bool = False
    is_alphabetical: bool = False
    is_sibling_continuation: bool = False
    style: Optional[NumberingStyle] = None
    start: int = 1


@dataclass(frozen=True)
class ListItemContent:
    """An item split into inline primary content and block continuation content."""

    primary: tuple[DocumentNode, ...]
    continuation: tuple[DocumentNode, ...]


def is_list(node: object) -> bool:
    """Return True for ``ol``/``ul``/``dl`` elements."""
    return isinstance(node, Element) and node.tag in LIST_TAGS


def list_type_of(element: Element) -> ListType:
    """Return the list category of a list container element."""
    return LIST_TAGS[element.tag]  # type: ignore[return-value]


def is_item(list_type: ListType, node: object) -> bool:
    """Return True if ``node`` is an item element for lists of ``list_type``."""
    return isinstance(node, Element) and node.tag in LIST_ITEM_TAGS[list_type]


def detect_numbering_style(element: Element) -> Optional[NumberingStyle]:
    """Determine the numbering style requested for an ordered list.

    Signals, in order: the ``type`` attribute, a CSS ``list-style-type``
    declaration, then class names (``loweralpha``, ``upper-roman``, ...).

    Returns
    -------
    str or None
        None for unordered and definition lists, ``"decimal"`` when an ordered
        list carries no signal

    """
    if element.tag != "ol":
        return None

    type_attr = (element.get("type") or "").strip()
    if type_attr in _TYPE_ATTRIBUTE_STYLES:
        return _TYPE_ATTRIBUTE_STYLES[type_attr]
    if type_attr:
        lowered = type_attr.lower()
        if lowered in _CSS_STYLES:
            return _CSS_STYLES[lowered]
        if "alpha" in lowered:
            return "upper-alpha" if "upper" in lowered else "lower-alpha"
        if "roman" in lowered:
            return "upper-roman" if "upper" in lowered else "lower-roman"

    style_match = _LIST_STYLE_TYPE_RE.search(element.get("style") or "")
    if style_match:
        css_style = _CSS_STYLES.get(style_match.group(1).lower())
        if css_style:
            return css_style

    for cls in element.classes:
        class_style = _CLASS_STYLES.get(cls.lower())
        if class_style:
            return class_style

    return "decimal"


def detect_start(element: Element) -> int:
    """Return the ``start`` number of an ordered list (1 when absent or invalid)."""
    value = (element.get("start") or "").strip()
    try:
        start = int(value)
    except ValueError:
        return 1
    return start if start >= 1 else 1


def is_sub_list_marked(element: Element) -> bool:
    """Return True if ``element`` carries an explicit sub-list marker."""
    if element.has_class(*SUB_LIST_CLASSES):
        return True
    return any(name in element.attributes for name in SUB_LIST_ATTRIBUTES)


def list_depth(element: Element, index: TreeIndex) -> int:
    """Count list-container ancestors of ``element``."""
    return sum(1 for ancestor in index.ancestors(element) if ancestor.tag in LIST_TAGS)


def collect_sibling_chain(
    element: Element,
    index: TreeIndex,
    mode: SiblingListMode = "strict",
    exclude: Optional[set[int]] = None,
) -> list[Element]:
    """Collect the flat sibling lists that belong nested under ``element``.

    Follows next-sibling while the sibling has the same tag as ``element`` and,
    in ``strict`` mode, carries a sub-list marker. Stops at the first sibling
    that does not qualify.

    Parameters
    ----------
    element : Element
        The list that owns the chain
    index : TreeIndex
        Sibling lookups for the document
    mode : {"strict", "loose"}, default "strict"
        ``loose`` accepts any adjacent list with the same tag
    exclude : set of int, optional
        ``id()`` values of lists already claimed by another chain

    """
    chain: list[Element] = []
    current = element
    while True:
        sibling = index.next_element_sibling(current)
        if sibling is None or sibling.tag != element.tag:
            break
        if exclude is not None and id(sibling) in exclude:
            break
        if mode == "strict" and not is_sub_list_marked(sibling):
            break
        chain.append(sibling)
        current = sibling
    return chain


def split_item(item: Element) -> ListItemContent:
    """Split a list item into primary and continuation content.

    The split point is the first block-level child (paragraph, div, block quote,
    code block, nested list, table or heading). When nothing precedes it and
    that child is a paragraph, the paragraph's own children become the primary
    content.
    """
    children = item.children
    split_at = len(children)
    for position, child in enumerate(children):
        if is_element(child, *CONTINUATION_SPLIT_TAGS):
            split_at = position
            break

    primary = list(children[:split_at])
    continuation = list(children[split_at:])

    if continuation and all(is_blank(node) for node in primary) and is_element(continuation[0], "p"):
        lead = cast(Element, continuation.pop(0))
        primary = list(lead.children)

    return ListItemContent(primary=tuple(primary), continuation=tuple(continuation))


def _has_mixed_content(item: Element) -> bool:
    for descendant in item.iter_elements():
        if descendant.tag in MIXED_CONTENT_TAGS or descendant.tag == "div":
            return True
    return False


def _is_orphan(list_type: ListType, node: DocumentNode) -> bool:
    if is_blank(node):
        return False
    if isinstance(node, Text):
        return True
    return not is_item(list_type, node)


def analyze_list(
    element: Element,
    index: TreeIndex,
    detect_siblings: bool = True,
    mode: SiblingListMode = "strict",
    exclude: Optional[set[int]] = None,
) -> ListShape:
    """Classify a list container.

    Parameters
    ----------
    element : Element
        An ``ol``, ``ul`` or ``dl`` element
    index : TreeIndex
        Parent/sibling lookups for the document containing ``element``
    detect_siblings : bool, default True
        Look for flat sibling lists marked as sub-lists
    mode : {"strict", "loose"}, default "strict"
        Sibling detection mode
    exclude : set of int, optional
        ``id()`` values of lists already claimed by another chain

    Returns
    -------
    ListShape
        Freshly computed shape

    Raises
    ------
    ValueError
        If ``element`` is not a list container

    """
    if not is_list(element):
        raise ValueError(f"Expected a list element (ol, ul, dl), got <{element.tag}>")

    list_type = list_type_of(element)
    items = [child for child in element.children if is_item(list_type, child)]
    style = detect_numbering_style(element)

    shape = ListShape(
        list_type=list_type,
        depth=list_depth(element, index),
        item_count=len(items),
        has_nested_lists=any(item.find(*LIST_TAGS) is not None for item in items),  # type: ignore[union-attr]
        has_orphaned_content=any(_is_orphan(list_type, child) for child in element.children),
        has_mixed_content=any(_has_mixed_content(item) for item in items),  # type: ignore[arg-type]
        is_alphabetical=style in ("lower-alpha", "upper-alpha"),
        is_sibling_continuation=detect_siblings and bool(collect_sibling_chain(element, index, mode, exclude)),
        style=style,
        start=detect_start(element) if list_type == "ordered" else 1,
    )
    logger.debug(
        "Analyzed <%s>: depth=%d items=%d orphaned=%s sibling_chain=%s",
        element.tag,
        shape.depth,
        shape.item_count,
        shape.has_orphaned_content,
        shape.is_sibling_continuation,
    )
    return shape
