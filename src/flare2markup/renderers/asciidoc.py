#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/renderers/asciidoc.py
"""AsciiDoc rendering from a Flare document tree.

This module provides the AsciiDocRenderer class which converts a cleaned
MadCap Flare HTML tree to AsciiDoc text. Lists use depth-scaled ``*`` and
``.`` markers, block content is attached to list items with ``+`` continuation
tokens, and callouts become AsciiDoc admonitions.

"""

from __future__ import annotations

import logging

from flare2markup.lists.continuation import (
    ContinuationPolicy,
    ExplicitTokenContinuation,
    LineBreakContinuation,
)
from flare2markup.lists.layouts import AsciiDocListLayout, ListLayout
from flare2markup.options import AsciiDocOptions
from flare2markup.postprocess.dialects import delimiter_for
from flare2markup.renderers.base import BaseRenderer, ImageSpec, TableCell
from flare2markup.utils.escape import escape_asciidoc, escape_asciidoc_attribute, escape_asciidoc_line_start

logger = logging.getLogger(__name__)


class AsciiDocRenderer(BaseRenderer):
    """Render Flare document trees to AsciiDoc text.

    Parameters
    ----------
    options : AsciiDocOptions or None, default = None
        AsciiDoc rendering options

    Examples
    --------
    Basic usage:

        >>> from flare2markup.ast import Element, Text
        >>> from flare2markup.renderers.asciidoc import AsciiDocRenderer
        >>> body = Element("body", children=[Element("h1", children=[Text("Title")])])
        >>> print(AsciiDocRenderer().render_to_string(body))
        = Title
        <BLANKLINE>

    """

    format_name = "asciidoc"
    options_class = AsciiDocOptions

    def escape_text(self, text: str) -> str:
        return escape_asciidoc(text)

    def escape_line_start(self, text: str) -> str:
        return escape_asciidoc_line_start(text)

    def create_list_layout(self) -> ListLayout:
        return AsciiDocListLayout(self.options)

    def create_continuation_policy(self) -> ContinuationPolicy:
        if self.options.use_continuation_markers:
            return ExplicitTokenContinuation("+")
        return LineBreakContinuation()

    def heading(self, level: int, text: str) -> str:
        """Render a heading.

        Flare topics have a single ``h1`` that is the document title, so HTML
        heading levels map one-to-one onto AsciiDoc levels (``h1`` is ``=``).
        """
        return f"{'=' * level} {text}"

    def code_block(self, code: str, language: str) -> str:
        delimiter = delimiter_for(code.split("\n"), char="-")
        lines = [f"[source,{language}]"] if language else []
        lines.extend([delimiter, code, delimiter])
        return "\n".join(lines)

    def block_quote(self, body: str) -> str:
        delimiter = delimiter_for(body.split("\n"), char="_")
        return f"{delimiter}\n{body}\n{delimiter}"

    def thematic_break(self) -> str:
        return "'''"

    def table(self, rows: list[list[TableCell]], header_rows: int, title: str) -> str:
        lines: list[str] = []
        if title:
            lines.append(f".{title}")
        if header_rows:
            lines.append('[options="header"]')
        lines.append("|===")
        for position, row in enumerate(rows):
            cells = [self._cell(cell) for cell in row]
            if any(cell.block for cell in row):
                lines.extend(cells)
            else:
                lines.append(" ".join(cells))
            # AsciiDoc takes only the first row as the header
            if header_rows and position == 0:
                lines.append("")
        lines.append("|===")
        return "\n".join(lines)

    @staticmethod
    def _cell(cell: TableCell) -> str:
        span = f"{cell.colspan}+" if cell.colspan > 1 else ""
        style = "a" if cell.block else ""
        text = cell.text.replace("|", "\\|")
        return f"{span}{style}| {text}".rstrip()

    def image(self, spec: ImageSpec) -> str:
        alt = spec.alt
        if "," in alt or "=" in alt or '"' in alt:
            alt = f'"{escape_asciidoc_attribute(alt)}"'
        attributes = [alt] if alt else [""]
        if spec.width is not None:
            attributes.append(f"width={spec.width}")
        if spec.height is not None:
            attributes.append(f"height={spec.height}")
        if spec.title:
            attributes.append(f'title="{escape_asciidoc_attribute(spec.title)}"')
        if spec.inline:
            # The role carries the inline decision through the image pass
            attributes.append("role=icon" if spec.icon else "role=inline")
            return f"image:{spec.src}[{','.join(attributes)}]"
        if attributes == [""]:
            attributes = []
        return f"image::{spec.src}[{','.join(attributes)}]"

    def admonition(self, label: str, body: str) -> str:
        if "\n" not in body:
            return f"{label}: {body}"
        delimiter = delimiter_for(body.split("\n"))
        return f"[{label}]\n{delimiter}\n{body}\n{delimiter}"

    def collapsible(self, title: str, body: str) -> str:
        delimiter = delimiter_for(body.split("\n"))
        return f".{title}\n[%collapsible]\n{delimiter}\n{body}\n{delimiter}"

    def strong(self, text: str) -> str:
        return f"*{text}*"

    def emphasis(self, text: str) -> str:
        return f"_{text}_"

    def inline_code(self, text: str) -> str:
        # AsciiDoc standard uses +text+ for monospaced inline; + is escaped by doubling
        return f"+{text.replace('+', '++')}+"

    def link(self, href: str, text: str, rewritten: bool = False) -> str:
        if href.startswith("#"):
            return f"<<{href[1:]},{text}>>"
        if rewritten:
            return f"xref:{href}[{text}]"
        if href.startswith("mailto:"):
            return f"{href}[{text}]"
        return f"link:{href}[{text}]"

    def line_break(self) -> str:
        return " +\n"

    def superscript(self, text: str) -> str:
        return f"^{text}^"

    def subscript(self, text: str) -> str:
        return f"~{text}~"
