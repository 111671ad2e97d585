#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/postprocess/admonitions.py
"""Admonition assembler.

Collects the content that belongs to a ``LABEL:`` line (NOTE, TIP, WARNING,
CAUTION, IMPORTANT) and rewrites it as a single-line or a delimited
admonition.

A label line carrying text stops collecting at the first blank line; a bare
label collects across blank lines. Collection also stops at a heading, another
label, a table row, an attribute line, or a list item or block delimiter at or
left of the label's column. Content with lists, code, images or several
paragraphs always becomes a delimited block; otherwise it is merged onto the
label line when short enough.

"""

from __future__ import annotations

import logging
import textwrap
from enum import Enum
from typing import Optional

from flare2markup.constants import ADMONITION_SHORT_LINE_LENGTH
from flare2markup.options import ConversionOptions
from flare2markup.postprocess.base import TextPass, VerbatimTracker
from flare2markup.postprocess.dialects import indentation

logger = logging.getLogger(__name__)


class AdmonitionState(Enum):
    SCANNING = "scanning"
    COLLECTING = "collecting"
    VERBATIM = "verbatim"


class AdmonitionAssembler(TextPass):
    """Rewrite label paragraphs as admonitions."""

    name = "admonitions"

    def run(self, text: str) -> str:
        lines = text.split("\n")
        out: list[str] = []
        tracker = VerbatimTracker(self.dialect, code_only=True)
        assembled = 0
        position = 0

        while position < len(lines):
            line = lines[position]
            if tracker.feed(line):
                out.append(line)
                position += 1
                continue

            match = self.dialect.admonition_label_re.match(line)
            if match is None:
                out.append(line)
                position += 1
                continue

            indent, label, rest = match.group(1), match.group(2), match.group(3) or ""
            if len(rest) > self.options.admonition_single_line_min_length:
                if self.dialect.single_line_is_native:
                    out.append(line)
                else:
                    out.extend(self.dialect.format_admonition_line(label, rest, indent))
                position += 1
                continue

            content, end = self._collect(lines, position, len(indent), stop_at_blank=bool(rest))
            if rest:
                content.insert(0, indent + rest)
            if not any(entry.strip() for entry in content):
                out.append(line)
                position += 1
                continue

            out.extend(self._assemble(label, indent, content))
            assembled += 1
            position = end

        if assembled:
            logger.debug("Assembled %d admonition(s)", assembled)
        return "\n".join(out)

    def _collect(self, lines: list[str], start: int, column: int, stop_at_blank: bool) -> tuple[list[str], int]:
        """Collect continuation lines after the label at ``start``.

        Returns the collected lines (trailing blank lines excluded) and the
        index of the first line not consumed.
        """
        dialect = self.dialect
        state = AdmonitionState.COLLECTING
        closer: Optional[str] = None
        content: list[str] = []
        position = start + 1

        while position < len(lines):
            line = lines[position]
            stripped = line.strip()

            if state is AdmonitionState.VERBATIM:
                content.append(line)
                position += 1
                if closer is not None and dialect.closes_delimited_block(line, closer):
                    state = AdmonitionState.COLLECTING
                continue

            if not stripped:
                if stop_at_blank:
                    break
                content.append("")
                position += 1
                continue

            if (
                dialect.admonition_label_re.match(line)
                or dialect.heading(line)
                or dialect.is_table_row(line)
                or dialect.is_attribute_line(line)
                or dialect.is_token(line)
            ):
                break
            if dialect.is_list_item(line) and indentation(line) <= column:
                break
            if dialect.is_code_fence(line):
                closer = dialect.opens_delimited_block(line)
                state = AdmonitionState.VERBATIM
            elif dialect.opens_delimited_block(line) is not None and indentation(line) <= column:
                break

            content.append(line)
            position += 1

        while content and not content[-1].strip():
            content.pop()
            position -= 1
        # Lines skipped over at the front of a bare label belong to it
        while content and not content[0].strip():
            content.pop(0)
        return content, position

    def is_complex(self, content: list[str]) -> bool:
        """Return True when ``content`` needs a delimited block."""
        dialect = self.dialect
        seen_text = False
        blank_after_text = False
        for line in content:
            if not line.strip():
                blank_after_text = seen_text
                continue
            if blank_after_text:
                return True
            seen_text = True
            if dialect.is_list_item(line) or dialect.is_code_fence(line) or dialect.find_images(line):
                return True
        return False

    def _assemble(self, label: str, indent: str, content: list[str]) -> list[str]:
        first, rest = content[0].strip(), content[1:]
        body = [first, *textwrap.dedent("\n".join(rest)).split("\n")] if rest else [first]

        if not self.is_complex(body):
            paragraphs = [line.strip() for line in body if line.strip()]
            joined = " ".join(paragraphs)
            if len(paragraphs) == 1 and len(joined) < ADMONITION_SHORT_LINE_LENGTH:
                return self.dialect.format_admonition_line(label, joined, indent)
            if len(joined) <= self.options.admonition_merge_max_length:
                return self.dialect.format_admonition_line(label, joined, indent)

        reindented = [f"{indent}{line}" if line.strip() else "" for line in body]
        return self.dialect.format_admonition_block(label, reindented, indent)


def assemble_admonitions(
    text: str, format_name: str = "asciidoc", options: Optional[ConversionOptions] = None
) -> str:
    """Run the admonition assembler over ``text`` for ``format_name``."""
    from flare2markup.postprocess.dialects import get_dialect

    return AdmonitionAssembler(get_dialect(format_name), options).run(text)
