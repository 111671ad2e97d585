#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/lists/continuation.py
"""Continuation policies: how block content is attached to a list item.

Exactly one policy is active per conversion, chosen by the target format:

- :class:`ExplicitTokenContinuation` puts a continuation token (AsciiDoc ``+``)
  on its own line before each attached block
- :class:`ReindentContinuation` indents block lines under the item marker
  (Markdown)
- :class:`LineBreakContinuation` joins blocks with line breaks (HTML, where the
  ``<li>`` element already delimits the item)

"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

_DELIMITER_RE = re.compile(r"^(-{4,}|={4,}|_{4,}|\.{4,}|\*{4,}|\+{4,}|\|={3,}|`{3,}.*)$")


@dataclass(frozen=True)
class ContinuationBlock:
    """One rendered block of continuation content.

    Parameters
    ----------
    text : str
        Rendered block text (no leading or trailing blank lines)
    is_list : bool, default False
        The block is a nested list
    attach : bool, default True
        Emit the explicit continuation token before this block. Nested lists
        nest by marker depth and do not need it; chained sibling lists do.

    """

    text: str
    is_list: bool = False
    attach: bool = True


class ContinuationPolicy(ABC):
    """Join an item's primary text with its continuation blocks."""

    name: str = ""

    @abstractmethod
    def attach(self, primary: str, blocks: Sequence[ContinuationBlock], marker_width: int) -> str:
        """Return the item body: ``primary`` followed by ``blocks``.

        Parameters
        ----------
        primary : str
            Rendered inline primary content
        blocks : sequence of ContinuationBlock
            Rendered continuation content, in document order
        marker_width : int
            Width of the item marker, for policies that indent

        """


class ExplicitTokenContinuation(ContinuationPolicy):
    """Attach blocks with a continuation token on its own line.

    Blank lines inside an attached block would end the list item, so outside
    delimited blocks they are replaced by the token as well.
    """

    name = "explicit"

    def __init__(self, token: str = "+") -> None:
        self.token = token

    def attach(self, primary: str, blocks: Sequence[ContinuationBlock], marker_width: int) -> str:
        parts = [primary]
        for block in blocks:
            if block.attach:
                parts.append(f"\n{self.token}\n")
            else:
                parts.append("\n")
            parts.append(self._bridge_blank_lines(block.text))
        return "".join(parts)

    def _bridge_blank_lines(self, text: str) -> str:
        lines: list[str] = []
        open_delimiter: str | None = None
        previous_blank = False
        for line in text.split("\n"):
            stripped = line.strip()
            if open_delimiter is None and _DELIMITER_RE.match(stripped):
                open_delimiter = stripped[:3] if stripped.startswith("```") else stripped
            elif open_delimiter is not None and (
                stripped == open_delimiter or (open_delimiter == "```" and stripped.startswith("```"))
            ):
                open_delimiter = None

            if open_delimiter is None and not stripped:
                if not previous_blank:
                    lines.append(self.token)
                previous_blank = True
                continue
            previous_blank = False
            lines.append(line)
        return "\n".join(lines)


class ReindentContinuation(ContinuationPolicy):
    """Indent continuation lines under the item marker.

    Parameters
    ----------
    indent_size : int
        Minimum indentation; widened to clear the marker and its space

    """

    name = "reindent"

    def __init__(self, indent_size: int = 4) -> None:
        self.indent_size = indent_size

    def width(self, marker_width: int) -> int:
        return max(self.indent_size, marker_width + 1)

    def attach(self, primary: str, blocks: Sequence[ContinuationBlock], marker_width: int) -> str:
        pad = " " * self.width(marker_width)
        parts = [self._indent_tail(primary, pad)]
        for block in blocks:
            # Nested lists stay tight against their item; other blocks need a blank line
            parts.append("\n" if block.is_list else "\n\n")
            parts.append(self._indent(block.text, pad))
        return "".join(parts)

    @staticmethod
    def _indent(text: str, pad: str) -> str:
        return "\n".join(f"{pad}{line}" if line.strip() else "" for line in text.split("\n"))

    @classmethod
    def _indent_tail(cls, text: str, pad: str) -> str:
        head, sep, tail = text.partition("\n")
        return head + sep + cls._indent(tail, pad) if sep else head


class LineBreakContinuation(ContinuationPolicy):
    """Join blocks with single line breaks."""

    name = "linebreak"

    def attach(self, primary: str, blocks: Sequence[ContinuationBlock], marker_width: int) -> str:
        return "\n".join([primary, *(block.text for block in blocks)]) if blocks else primary
