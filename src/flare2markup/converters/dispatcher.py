#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/converters/dispatcher.py
"""Recursive-descent entry point over the document tree.

The dispatcher owns no state of its own: it consults a frozen
:class:`~flare2markup.converters.rules.RuleTable` and a text-escaping function,
and threads the per-conversion :class:`ConversionContext` through every call.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable

from flare2markup.ast.nodes import Comment, DocumentNode, Element, Text
from flare2markup.converters.context import ConversionContext
from flare2markup.converters.rules import RuleTable

_WHITESPACE_RE = re.compile(r"\s+")


class RuleDispatcher:
    """Render nodes by the first matching rule.

    Parameters
    ----------
    rules : RuleTable
        Rule table; frozen on construction
    escape : Callable[[str], str]
        Target-format escaping applied to text nodes outside code blocks

    """

    def __init__(self, rules: RuleTable, escape: Callable[[str], str]) -> None:
        self.rules = rules.freeze()
        self.escape = escape

    def render(self, node: DocumentNode, context: ConversionContext) -> str:
        """Render ``node`` to target text.

        - ``Text``: whitespace collapsed and escaped (kept verbatim inside code blocks)
        - ``Comment``: empty string
        - ``Element``: the handler of the highest-priority matching rule; without
          a match, the concatenated rendering of its children

        Never raises for a well-formed tree.
        """
        if isinstance(node, Text):
            if context.in_code_block:
                return node.content
            return self.escape(_WHITESPACE_RE.sub(" ", node.content))
        if isinstance(node, Comment):
            return ""
        if context.is_claimed(node):
            return ""

        rule = self.rules.match(node)
        if rule is not None:
            return rule.handler(node, context)
        return self.render_children(node, context)

    def render_children(self, element: Element, context: ConversionContext) -> str:
        """Concatenate the renderings of ``element``'s children, in order."""
        return self.render_all(element.children, context)

    def render_all(self, nodes: Iterable[DocumentNode], context: ConversionContext) -> str:
        """Concatenate the renderings of ``nodes`` with no separator."""
        return "".join(self.render(node, context) for node in nodes)
