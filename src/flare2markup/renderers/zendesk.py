#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/renderers/zendesk.py
"""Zendesk Help Center HTML rendering from a Flare document tree.

Produces article-body HTML: plain semantic tags, ``callout`` divs for
admonitions and ``<details>`` for collapsible sections. The output is final;
no text normalizers run over it.

"""

from __future__ import annotations

import logging
import re

from flare2markup.lists.continuation import ContinuationPolicy, LineBreakContinuation
from flare2markup.lists.layouts import HtmlListLayout, ListLayout
from flare2markup.options import ZendeskOptions
from flare2markup.renderers.base import BaseRenderer, ImageSpec, TableCell
from flare2markup.utils.escape import escape_html_attribute, escape_html_text

logger = logging.getLogger(__name__)

_BLOCK_HTML_RE = re.compile(r"^<(?:p|div|ul|ol|dl|table|pre|blockquote|h[1-6]|details|hr|img)\b")


class ZendeskRenderer(BaseRenderer):
    """Render Flare document trees to Zendesk article HTML.

    Parameters
    ----------
    options : ZendeskOptions or None, default = None
        Zendesk rendering options

    """

    format_name = "zendesk"
    options_class = ZendeskOptions

    def escape_text(self, text: str) -> str:
        return escape_html_text(text)

    def create_list_layout(self) -> ListLayout:
        return HtmlListLayout(self.options)

    def create_continuation_policy(self) -> ContinuationPolicy:
        return LineBreakContinuation()

    def paragraph(self, text: str) -> str:
        return f"<p>{text}</p>"

    def heading(self, level: int, text: str) -> str:
        return f"<h{level}>{text}</h{level}>"

    def code_block(self, code: str, language: str) -> str:
        css_class = f' class="language-{escape_html_attribute(language)}"' if language else ""
        return f"<pre><code{css_class}>{escape_html_text(code)}</code></pre>"

    def block_quote(self, body: str) -> str:
        return f"<blockquote>\n{self._as_block(body)}\n</blockquote>"

    def thematic_break(self) -> str:
        return "<hr>"

    def table(self, rows: list[list[TableCell]], header_rows: int, title: str) -> str:
        lines = ["<table>"]
        if title:
            lines.append(f"<caption>{title}</caption>")
        if header_rows:
            lines.append("<thead>")
            lines.extend(self._row(row) for row in rows[:header_rows])
            lines.append("</thead>")
        lines.append("<tbody>")
        lines.extend(self._row(row) for row in rows[header_rows:])
        lines.append("</tbody>")
        lines.append("</table>")
        return "\n".join(lines)

    @staticmethod
    def _row(row: list[TableCell]) -> str:
        cells = []
        for cell in row:
            tag = "th" if cell.header else "td"
            span = f' colspan="{cell.colspan}"' if cell.colspan > 1 else ""
            cells.append(f"<{tag}{span}>{cell.text}</{tag}>")
        return f"<tr>{''.join(cells)}</tr>"

    def image(self, spec: ImageSpec) -> str:
        attributes = [f'src="{escape_html_attribute(spec.src)}"', f'alt="{escape_html_attribute(spec.alt)}"']
        if spec.width is not None:
            attributes.append(f'width="{spec.width}"')
        if spec.height is not None:
            attributes.append(f'height="{spec.height}"')
        if spec.title:
            attributes.append(f'title="{escape_html_attribute(spec.title)}"')
        return f"<img {' '.join(attributes)}>"

    def admonition(self, label: str, body: str) -> str:
        name = label.lower()
        return (
            f'<div class="callout callout-{name}">\n'
            f"<p><strong>{label.capitalize()}:</strong></p>\n"
            f"{self._as_block(body)}\n"
            "</div>"
        )

    def collapsible(self, title: str, body: str) -> str:
        return f"<details>\n<summary>{title}</summary>\n{self._as_block(body)}\n</details>"

    def strong(self, text: str) -> str:
        return f"<strong>{text}</strong>"

    def emphasis(self, text: str) -> str:
        return f"<em>{text}</em>"

    def inline_code(self, text: str) -> str:
        return f"<code>{escape_html_text(text)}</code>"

    def link(self, href: str, text: str, rewritten: bool = False) -> str:
        return f'<a href="{escape_html_attribute(href)}">{text}</a>'

    def line_break(self) -> str:
        return "<br>"

    def superscript(self, text: str) -> str:
        return f"<sup>{text}</sup>"

    def subscript(self, text: str) -> str:
        return f"<sub>{text}</sub>"

    def _as_block(self, body: str) -> str:
        # Inline-only bodies (from a callout paragraph) still need a paragraph
        if not body or _BLOCK_HTML_RE.match(body.lstrip()):
            return body
        return self.paragraph(body)
