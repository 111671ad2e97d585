#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/ast/__init__.py
"""Document tree model consumed by the conversion core.

Examples
--------
    >>> from flare2markup.ast import Element, Text
    >>> tree = Element("body", children=[
    ...     Element("ul", children=[Element("li", children=[Text("First")])]),
    ... ])

"""

from __future__ import annotations

from flare2markup.ast.nodes import Comment, DocumentNode, Element, Text, is_blank, is_element
from flare2markup.ast.tree import TreeIndex

__all__ = [
    "Comment",
    "DocumentNode",
    "Element",
    "Text",
    "TreeIndex",
    "is_blank",
    "is_element",
]
