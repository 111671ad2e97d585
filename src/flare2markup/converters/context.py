#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/converters/context.py
"""Per-conversion state threaded through the rule dispatcher.

A :class:`ConversionContext` is created once per document conversion and
discarded at the end. It is owned by that single call and must never be
shared between concurrent conversions. The lookup maps for variables, snippets
and cross-references are filled by the preprocessing service before the
conversion starts and are exposed read-only.

"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from flare2markup.ast.nodes import DocumentNode, Element
from flare2markup.ast.tree import TreeIndex
from flare2markup.constants import ListType, NumberingStyle
from flare2markup.options import ConversionOptions

logger = logging.getLogger(__name__)


@dataclass
class ListFrame:
    """Bookkeeping for one list nesting level.

    Parameters
    ----------
    depth : int
        0-based nesting depth the list is rendered at
    list_type : {"ordered", "unordered", "definition"}
        Category of the list container
    style : str or None
        Numbering style for ordered lists
    item_index : int, default 0
        Index of the item currently being rendered

    """

    depth: int
    list_type: ListType
    style: Optional[NumberingStyle] = None
    item_index: int = 0


@dataclass
class ConversionStats:
    """Counters reported in the conversion metadata."""

    list_count: int = 0
    deepest_level: int = -1
    has_alphabetical: bool = False
    has_mixed_content: bool = False

    def record_list(self, depth: int, is_alphabetical: bool, has_mixed_content: bool) -> None:
        """Record one rendered list container."""
        self.list_count += 1
        self.deepest_level = max(self.deepest_level, depth)
        self.has_alphabetical = self.has_alphabetical or is_alphabetical
        self.has_mixed_content = self.has_mixed_content or has_mixed_content

    @property
    def max_depth(self) -> int:
        """Number of list nesting levels (0 when no list was rendered)."""
        return self.deepest_level + 1


@dataclass
class ConversionContext:
    """Mutable state for one conversion.

    Parameters
    ----------
    options : ConversionOptions
        Options in effect for this conversion
    index : TreeIndex
        Parent/sibling lookups for the document being converted
    variables : Mapping[str, str]
        Resolved variable values keyed by ``Set.Name``
    snippets : Mapping[str, Element]
        Pre-loaded snippet trees keyed by snippet path
    cross_references : Mapping[str, str]
        Link target rewrites (source path to output path)

    """

    options: ConversionOptions
    index: TreeIndex
    variables: Mapping[str, str] = field(default_factory=dict)
    snippets: Mapping[str, Element] = field(default_factory=dict)
    cross_references: Mapping[str, str] = field(default_factory=dict)
    list_stack: list[ListFrame] = field(default_factory=list)
    in_table: bool = False
    in_admonition: bool = False
    in_code_block: bool = False
    warnings: list[str] = field(default_factory=list)
    stats: ConversionStats = field(default_factory=ConversionStats)
    _claimed: set[int] = field(default_factory=set, repr=False)
    _active_snippets: list[str] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.variables = MappingProxyType(dict(self.variables))
        self.snippets = MappingProxyType(dict(self.snippets))
        self.cross_references = MappingProxyType(dict(self.cross_references))

    # List frames

    @property
    def list_depth(self) -> int:
        """Number of list frames currently on the stack."""
        return len(self.list_stack)

    @property
    def current_frame(self) -> ListFrame | None:
        return self.list_stack[-1] if self.list_stack else None

    @contextmanager
    def list_frame(self, frame: ListFrame) -> Iterator[ListFrame]:
        """Push ``frame`` for the duration of the block, restoring the stack on exit."""
        self.list_stack.append(frame)
        try:
            yield frame
        finally:
            self.list_stack.pop()

    # Scoped flags

    @contextmanager
    def table(self) -> Iterator[None]:
        previous = self.in_table
        self.in_table = True
        try:
            yield
        finally:
            self.in_table = previous

    @contextmanager
    def admonition(self) -> Iterator[None]:
        previous = self.in_admonition
        self.in_admonition = True
        try:
            yield
        finally:
            self.in_admonition = previous

    @contextmanager
    def code_block(self) -> Iterator[None]:
        previous = self.in_code_block
        self.in_code_block = True
        try:
            yield
        finally:
            self.in_code_block = previous

    @contextmanager
    def snippet(self, path: str) -> Iterator[bool]:
        """Track snippet expansion; yields False when ``path`` is already being expanded."""
        if path in self._active_snippets:
            yield False
            return
        self._active_snippets.append(path)
        try:
            yield True
        finally:
            self._active_snippets.pop()

    # Sibling lists rendered by a preceding list

    def claim(self, node: DocumentNode) -> None:
        """Mark ``node`` as already rendered elsewhere."""
        self._claimed.add(id(node))

    def is_claimed(self, node: DocumentNode) -> bool:
        return id(node) in self._claimed

    def claimed_ids(self) -> set[int]:
        """Return the ``id()`` values of claimed nodes (a live view, do not mutate)."""
        return self._claimed

    # Diagnostics

    def warn(self, message: str) -> None:
        """Record an advisory warning and log it."""
        logger.warning(message)
        self.warnings.append(message)
