#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/ast/nodes.py
"""Document tree node classes.

The conversion core consumes a small tagged tree produced by the upstream
cleaning service (or by :func:`flare2markup.parsers.html.parse_html`):

- ``Element``: a tag with ordered attributes and ordered children
- ``Text``: character data
- ``Comment``: markup comments, which render as nothing

Children are owned exclusively by their parent. Nodes carry no parent or
sibling pointers; those lookups are computed by
:class:`flare2markup.ast.tree.TreeIndex` from the owning parent's children.

Nodes compare by identity so they can be used as keys in per-conversion
bookkeeping (claimed sibling lists, tree indexes).

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Union

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(eq=False)
class Text:
    """Character data node.

    Parameters
    ----------
    content : str
        The raw text

    """

    content: str

    def is_whitespace(self) -> bool:
        """Return True when the text contains only whitespace."""
        return not self.content.strip()


@dataclass(eq=False)
class Comment:
    """Markup comment node. Comments never produce output."""

    content: str = ""


@dataclass(eq=False)
class Element:
    """Tagged element node.

    Parameters
    ----------
    tag : str
        Lower-cased tag name (vendor tags keep their prefix, e.g. ``madcap:dropdown``)
    attributes : dict[str, str], default = empty dict
        Attribute map in document order
    children : list of DocumentNode, default = empty list
        Child nodes in document order

    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[DocumentNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.tag = self.tag.lower()

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return an attribute value, or ``default`` when it is absent."""
        return self.attributes.get(name, default)

    @property
    def classes(self) -> list[str]:
        """Class names from the ``class`` attribute, in order."""
        return self.attributes.get("class", "").split()

    def has_class(self, *names: str) -> bool:
        """Return True if any of ``names`` is one of this element's classes (case-insensitive)."""
        wanted = {name.lower() for name in names}
        return any(cls.lower() in wanted for cls in self.classes)

    def element_children(self) -> list[Element]:
        """Return only the child elements, skipping text and comments."""
        return [child for child in self.children if isinstance(child, Element)]

    def iter(self) -> Iterator[DocumentNode]:
        """Iterate over this node and all descendants in document order."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()
            else:
                yield child

    def iter_elements(self, *tags: str) -> Iterator[Element]:
        """Iterate over descendant elements (not including self), optionally filtered by tag."""
        for node in self.iter():
            if node is self or not isinstance(node, Element):
                continue
            if not tags or node.tag in tags:
                yield node

    def find(self, *tags: str) -> Element | None:
        """Return the first descendant element with one of ``tags``."""
        return next(self.iter_elements(*tags), None)

    def text_content(self, collapse: bool = True) -> str:
        """Return the concatenated descendant text.

        Parameters
        ----------
        collapse : bool, default True
            Collapse runs of whitespace to single spaces and strip the result

        """
        parts = [node.content for node in self.iter() if isinstance(node, Text)]
        text = "".join(parts)
        if collapse:
            return _WHITESPACE_RE.sub(" ", text).strip()
        return text


DocumentNode = Union[Element, Text, Comment]


def is_element(node: object, *tags: str) -> bool:
    """Return True if ``node`` is an Element (optionally with one of ``tags``)."""
    return isinstance(node, Element) and (not tags or node.tag in tags)


def is_blank(node: DocumentNode) -> bool:
    """Return True for whitespace-only text and for comments."""
    return isinstance(node, Comment) or (isinstance(node, Text) and node.is_whitespace())
