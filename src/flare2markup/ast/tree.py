#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/ast/tree.py
"""Parent, sibling and ancestor queries over a document tree.

Nodes do not point at their parents. A :class:`TreeIndex` is built once per
conversion and maps each node to its owning parent and position, so the
next-sibling lookahead used for sibling-list detection is answered from the
parent's child sequence rather than from back-references.
"""

from __future__ import annotations

from typing import Iterator

from flare2markup.ast.nodes import DocumentNode, Element, is_blank


class TreeIndex:
    """Non-owning positional index over a document tree.

    Parameters
    ----------
    root : Element
        Root of the tree to index

    """

    def __init__(self, root: Element) -> None:
        self._positions: dict[int, tuple[Element, int]] = {}
        self._nodes: dict[int, DocumentNode] = {}
        self.add_subtree(root)

    def add_subtree(self, root: Element, parent: Element | None = None) -> None:
        """Index ``root`` and its descendants.

        Used for the document itself and for pre-loaded snippet trees that are
        rendered in place of a reference element, in which case ``parent`` is the
        element they are attached under.
        """
        if parent is not None:
            self._positions[id(root)] = (parent, 0)
            self._nodes[id(root)] = root
        stack: list[Element] = [root]
        while stack:
            element = stack.pop()
            for index, child in enumerate(element.children):
                self._positions[id(child)] = (element, index)
                # Keep the node alive so id() values stay unique for the index's lifetime
                self._nodes[id(child)] = child
                if isinstance(child, Element):
                    stack.append(child)

    def parent(self, node: DocumentNode) -> Element | None:
        """Return the owning parent of ``node``, or None for the root."""
        position = self._positions.get(id(node))
        return position[0] if position else None

    def ancestors(self, node: DocumentNode) -> Iterator[Element]:
        """Yield ancestors of ``node`` from nearest to farthest."""
        current = self.parent(node)
        while current is not None:
            yield current
            current = self.parent(current)

    def next_element_sibling(self, node: DocumentNode) -> Element | None:
        """Return the next sibling element, skipping whitespace text and comments.

        Returns None if the next non-blank sibling is text or there is none.
        """
        position = self._positions.get(id(node))
        if position is None:
            return None
        parent, index = position
        for sibling in parent.children[index + 1 :]:
            if is_blank(sibling):
                continue
            return sibling if isinstance(sibling, Element) else None
        return None
