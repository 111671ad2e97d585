#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/lists/generator.py
"""List generation.

Turns an analyzed list container into target-format text. The generator is
format-agnostic: item splitting, orphan repair, sibling-chain nesting and
marker selection are shared, while a :class:`~flare2markup.lists.layouts.ListLayout`
and a :class:`~flare2markup.lists.continuation.ContinuationPolicy` supply the
format-specific pieces.

"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence, cast

from flare2markup.ast.nodes import DocumentNode, Element, is_blank, is_element
from flare2markup.constants import LIST_TAGS
from flare2markup.converters.context import ConversionContext, ListFrame
from flare2markup.lists.analyzer import ListItemContent, ListShape, analyze_list, collect_sibling_chain, is_item, split_item
from flare2markup.lists.continuation import ContinuationBlock, ContinuationPolicy
from flare2markup.lists.layouts import ListLayout

logger = logging.getLogger(__name__)


class ListHost(Protocol):
    """Rendering callbacks the generator needs from a renderer."""

    def render_inline(self, nodes: Sequence[DocumentNode], context: ConversionContext) -> str: ...

    def render_block(self, node: DocumentNode, context: ConversionContext) -> str: ...

    def render_paragraph(self, nodes: Sequence[DocumentNode], context: ConversionContext) -> str: ...

    def is_block(self, node: DocumentNode) -> bool: ...


class ListGenerator:
    """Render list containers through a layout and a continuation policy.

    Parameters
    ----------
    host : ListHost
        Renderer used for item content
    layout : ListLayout
        Format-family line layout
    continuation : ContinuationPolicy
        How block content attaches to items

    """

    def __init__(self, host: ListHost, layout: ListLayout, continuation: ContinuationPolicy) -> None:
        self.host = host
        self.layout = layout
        self.continuation = continuation

    def render_list(self, element: Element, context: ConversionContext) -> str:
        """Analyze ``element`` and generate its text."""
        options = context.options
        shape = analyze_list(
            element,
            context.index,
            detect_siblings=options.detect_sibling_lists,
            mode=options.sibling_list_mode,
            exclude=context.claimed_ids(),
        )
        return self.generate(element, shape, context)

    def generate(self, element: Element, shape: ListShape, context: ConversionContext) -> str:
        """Generate text for an analyzed list container.

        Parameters
        ----------
        element : Element
            The list container
        shape : ListShape
            Its analysis result
        context : ConversionContext
            Per-conversion state; a list frame is pushed for the duration

        Returns
        -------
        str
            The rendered list, without surrounding blank lines

        """
        depth = self._resolve_depth(shape, context)
        context.stats.record_list(depth, shape.is_alphabetical, shape.has_mixed_content)

        frame = ListFrame(depth=depth, list_type=shape.list_type, style=shape.style)
        trailing: list[str] = []
        with context.list_frame(frame):
            if shape.list_type == "definition":
                entries = self._definition_entries(element, depth, context, trailing)
            else:
                entries = self._item_entries(element, shape, depth, frame, context, trailing)

        text = self.layout.assemble(shape, depth, entries)
        if trailing:
            # Orphans left in place when repair is disabled follow the list as plain blocks
            text = "\n\n".join([text, *trailing])
        return text

    def _resolve_depth(self, shape: ListShape, context: ConversionContext) -> int:
        # Chained sibling lists are tree-level siblings but render one level deeper
        depth = max(shape.depth, context.list_depth)
        limit = context.options.max_nesting_depth
        if depth + 1 > limit:
            context.warn(f"List nesting depth {depth + 1} exceeds maximum of {limit}; rendering at depth {limit}")
            depth = limit - 1
        return depth

    # Ordered and unordered lists

    def _item_entries(
        self,
        element: Element,
        shape: ListShape,
        depth: int,
        frame: ListFrame,
        context: ConversionContext,
        trailing: list[str],
    ) -> list[str]:
        items, orphans = self._collect_items(element, shape, context)

        chained: list[Element] = []
        if shape.is_sibling_continuation and items:
            chained = collect_sibling_chain(
                element, context.index, context.options.sibling_list_mode, exclude=context.claimed_ids()
            )
            # Claim the whole chain first so chained lists do not collect each other
            for sibling in chained:
                context.claim(sibling)
            if chained:
                logger.debug("Nesting %d sibling list(s) under the last item of <%s>", len(chained), element.tag)
                last = items[-1]
                items[-1] = ListItemContent(last.primary, last.continuation + tuple(chained))

        warning = self.layout.marker_warning(shape, len(items))
        if warning:
            context.warn(warning)

        chained_ids = {id(node) for node in chained}
        entries: list[str] = []
        for position, item in enumerate(items):
            frame.item_index = position
            item_marker = self.layout.item_marker(shape, depth, position, len(items))
            body = self._render_item_body(item, len(item_marker), context, chained_ids)
            entries.append(self.layout.format_item(item_marker, body, depth))

        for node in orphans:
            text = self.host.render_block(node, context)
            if text.strip():
                trailing.append(text)
        return entries

    def _collect_items(
        self, element: Element, shape: ListShape, context: ConversionContext
    ) -> tuple[list[ListItemContent], list[DocumentNode]]:
        items: list[ListItemContent] = []
        orphans: list[DocumentNode] = []
        folded = 0
        promoted = 0

        for child in element.children:
            if is_blank(child):
                continue
            if is_item(shape.list_type, child):
                items.append(split_item(cast(Element, child)))
                continue

            if not context.options.handle_orphaned_content:
                orphans.append(child)
                continue

            if items and self.host.is_block(child):
                last = items[-1]
                items[-1] = ListItemContent(last.primary, last.continuation + (child,))
                folded += 1
            else:
                items.append(ListItemContent(primary=(child,), continuation=()))
                promoted += 1

        if promoted:
            context.warn(f"{promoted} orphaned elements converted to list items")
        if folded:
            context.warn(f"{folded} orphaned blocks folded into preceding list items")
        return items, orphans

    def _render_item_body(
        self,
        item: ListItemContent,
        marker_width: int,
        context: ConversionContext,
        chained_ids: set[int],
    ) -> str:
        primary = self.host.render_inline(item.primary, context)
        blocks: list[ContinuationBlock] = []
        run: list[DocumentNode] = []

        def flush() -> None:
            if run:
                text = self.host.render_paragraph(run, context)
                if text.strip():
                    blocks.append(ContinuationBlock(text))
                run.clear()

        for node in item.continuation:
            if id(node) in chained_ids:
                flush()
                text = self.render_list(cast(Element, node), context)
                if text.strip():
                    blocks.append(ContinuationBlock(text, is_list=True, attach=True))
            elif self.host.is_block(node):
                flush()
                nested_list = is_element(node, *LIST_TAGS)
                text = self.host.render_block(node, context)
                if text.strip():
                    blocks.append(ContinuationBlock(text, is_list=nested_list, attach=not nested_list))
            else:
                run.append(node)
        flush()
        return self.continuation.attach(primary, blocks, marker_width)

    # Definition lists

    def _definition_entries(
        self, element: Element, depth: int, context: ConversionContext, trailing: list[str]
    ) -> list[str]:
        entries: list[str] = []
        folded = 0
        for child in element.children:
            if is_blank(child):
                continue
            if is_element(child, "dt"):
                term = cast(Element, child)
                entries.append(self.layout.format_term(self.host.render_inline(term.children, context), depth))
            elif is_element(child, "dd"):
                content = split_item(cast(Element, child))
                body = self._render_item_body(content, self.layout.description_marker_width(), context, set())
                entries.append(self.layout.format_description(body, depth))
            elif context.options.handle_orphaned_content:
                text = self.host.render_block(child, context)
                if text.strip():
                    entries.append(self.layout.format_description(text, depth))
                    folded += 1
            else:
                text = self.host.render_block(child, context)
                if text.strip():
                    trailing.append(text)
        if folded:
            context.warn(f"{folded} orphaned elements converted to list items")
        return entries
