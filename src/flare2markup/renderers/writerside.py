#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/renderers/writerside.py
"""Writerside Markdown rendering from a Flare document tree.

Writerside extends CommonMark with attribute lines (``{style="note"}``,
``{type="alpha-lower"}``) and a ``<collapsible>`` element. List continuation
content is re-indented under the item marker.

"""

from __future__ import annotations

import logging
import re

from flare2markup.lists.continuation import ContinuationPolicy, ReindentContinuation
from flare2markup.lists.layouts import ListLayout, MarkdownListLayout
from flare2markup.options import WritersideOptions
from flare2markup.renderers.base import BaseRenderer, ImageSpec, TableCell
from flare2markup.utils.escape import escape_html_attribute, escape_markdown, escape_markdown_line_start

logger = logging.getLogger(__name__)

_BACKTICK_RUN_RE = re.compile(r"`+")

_ADMONITION_STYLES: dict[str, str] = {
    "NOTE": "note",
    "TIP": "tip",
    "WARNING": "warning",
    "CAUTION": "warning",
    "IMPORTANT": "warning",
}


class WritersideRenderer(BaseRenderer):
    """Render Flare document trees to Writerside Markdown.

    Parameters
    ----------
    options : WritersideOptions or None, default = None
        Writerside rendering options

    """

    format_name = "writerside"
    options_class = WritersideOptions

    def escape_text(self, text: str) -> str:
        return escape_markdown(text)

    def escape_line_start(self, text: str) -> str:
        return escape_markdown_line_start(text)

    def create_list_layout(self) -> ListLayout:
        return MarkdownListLayout(self.options)

    def create_continuation_policy(self) -> ContinuationPolicy:
        return ReindentContinuation(self.options.indent_size)

    def heading(self, level: int, text: str) -> str:
        return f"{'#' * level} {text}"

    def code_block(self, code: str, language: str) -> str:
        fence = "`" * max(3, _longest_backtick_run(code) + 1)
        return f"{fence}{language}\n{code}\n{fence}"

    def block_quote(self, body: str) -> str:
        return "\n".join(f"> {line}" if line.strip() else ">" for line in body.split("\n"))

    def thematic_break(self) -> str:
        return "---"

    def table(self, rows: list[list[TableCell]], header_rows: int, title: str) -> str:
        """Render a pipe table.

        Pipe tables always have exactly one header row; without a marked
        header the first row is used. Block cell content is flattened with
        ``<br/>`` since a pipe-table cell is a single line.
        """
        expanded = [self._expand(row) for row in rows]
        width = max(len(row) for row in expanded)
        expanded = [row + [""] * (width - len(row)) for row in expanded]

        lines: list[str] = []
        if title:
            lines.extend([f"**{title}**", ""])
        lines.append(self._row(expanded[0]))
        lines.append("|" + "|".join(" --- " for _ in range(width)) + "|")
        lines.extend(self._row(row) for row in expanded[1:])
        return "\n".join(lines)

    @staticmethod
    def _expand(row: list[TableCell]) -> list[str]:
        cells: list[str] = []
        for cell in row:
            text = cell.text.replace("|", "\\|")
            text = re.sub(r"\n\s*\n", "<br/><br/>", text) if cell.block else text
            cells.append(text.replace("\n", "<br/>"))
            # Spanned columns are padded with empty cells
            cells.extend([""] * (cell.colspan - 1))
        return cells

    @staticmethod
    def _row(cells: list[str]) -> str:
        return "| " + " | ".join(cells) + " |"

    def image(self, spec: ImageSpec) -> str:
        title = f' "{spec.title}"' if spec.title else ""
        attributes: list[str] = []
        if spec.inline:
            attributes.append('style="inline"')
        if spec.width is not None:
            attributes.append(f'width="{spec.width}"')
        suffix = "{" + " ".join(attributes) + "}" if attributes else ""
        return f"![{escape_markdown(spec.alt)}]({spec.src}{title}){suffix}"

    def admonition(self, label: str, body: str) -> str:
        quoted = self.block_quote(body)
        return f'{quoted}\n{{style="{_ADMONITION_STYLES.get(label, "note")}"}}'

    def collapsible(self, title: str, body: str) -> str:
        return f'<collapsible title="{escape_html_attribute(title)}">\n\n{body}\n\n</collapsible>'

    def strong(self, text: str) -> str:
        return f"**{text}**"

    def emphasis(self, text: str) -> str:
        return f"_{text}_"

    def inline_code(self, text: str) -> str:
        fence = "`" * (_longest_backtick_run(text) + 1)
        if text.startswith("`") or text.endswith("`"):
            return f"{fence} {text} {fence}"
        return f"{fence}{text}{fence}"

    def link(self, href: str, text: str, rewritten: bool = False) -> str:
        return f"[{text}]({href.replace(' ', '%20')})"

    def line_break(self) -> str:
        return "\\\n"

    def superscript(self, text: str) -> str:
        return f"<sup>{text}</sup>"

    def subscript(self, text: str) -> str:
        return f"<sub>{text}</sub>"


def _longest_backtick_run(text: str) -> int:
    return max((len(run) for run in _BACKTICK_RUN_RE.findall(text)), default=0)
