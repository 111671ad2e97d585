#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/postprocess/continuation.py
"""List continuation fixer.

Repairs continuation tokens in rendered list text so that block content stays
attached to its list item:

- a block (image, table, delimited block, attribute line) directly after an
  item gets a token if it has none
- content indented deeper than the item after a blank line is attached with a
  token in place of the blank line
- duplicate tokens collapse, and tokens left before a blank line, a heading or
  the end of the document are removed

The pass is idempotent. Formats without a continuation token pass through
unchanged.

"""

from __future__ import annotations

import logging
from enum import Enum

from flare2markup.postprocess.base import TextPass
from flare2markup.postprocess.dialects import indentation

logger = logging.getLogger(__name__)


class ContinuationState(Enum):
    OUTSIDE = "outside"
    ITEM = "item"
    BLANK = "blank"
    DELIMITED = "delimited"


class ContinuationFixer(TextPass):
    """Insert, collapse and drop list continuation tokens."""

    name = "continuation"

    def run(self, text: str) -> str:
        token = self.dialect.continuation_token
        if token is None:
            return text

        dialect = self.dialect
        out: list[str] = []
        state = ContinuationState.OUTSIDE
        resume = ContinuationState.OUTSIDE
        closer: str | None = None
        column = 0
        inserted = 0

        for line in text.split("\n"):
            stripped = line.strip()

            if state is ContinuationState.DELIMITED:
                out.append(line)
                if closer is not None and dialect.closes_delimited_block(line, closer):
                    state = resume
                continue

            if dialect.heading(line):
                self._drop_dangling(out)
                out.append(line)
                state = ContinuationState.OUTSIDE
                continue

            if stripped == token:
                if out and dialect.is_token(out[-1]):
                    continue
                if state is ContinuationState.BLANK:
                    self._drop_blanks(out)
                    state = ContinuationState.ITEM
                out.append(line)
                continue

            if not stripped:
                if state is not ContinuationState.OUTSIDE and out and dialect.is_token(out[-1]):
                    out.pop()
                out.append(line)
                if state is ContinuationState.ITEM:
                    state = ContinuationState.BLANK
                continue

            item = dialect.list_item_re.match(line)
            if item:
                item_column = len(item.group(1))
                if state is ContinuationState.ITEM and item_column > column:
                    inserted += self._attach(out)
                elif state is ContinuationState.BLANK and item_column > column:
                    self._drop_blanks(out)
                    inserted += self._attach(out)
                column = item_column
                state = ContinuationState.ITEM
                out.append(line)
                continue

            if state is ContinuationState.ITEM:
                if dialect.is_block_start(line):
                    inserted += self._attach(out)
            elif state is ContinuationState.BLANK:
                if (
                    indentation(line) > column
                    and not dialect.is_table_row(line)
                    and not dialect.is_attribute_line(line)
                ):
                    # Indented lines would render as a literal block; attach them flush
                    self._drop_blanks(out)
                    inserted += self._attach(out)
                    line = line.lstrip()
                    state = ContinuationState.ITEM
                else:
                    state = ContinuationState.OUTSIDE

            out.append(line)
            opener = dialect.opens_delimited_block(line)
            if opener is not None:
                closer = opener
                resume = ContinuationState.ITEM if state is ContinuationState.ITEM else ContinuationState.OUTSIDE
                state = ContinuationState.DELIMITED

        self._drop_dangling(out)
        if inserted:
            logger.debug("Inserted %d list continuation token(s)", inserted)
        return "\n".join(out)

    def _attach(self, out: list[str]) -> int:
        # Attribute lines and block titles belong to the block that follows them
        if out:
            previous = out[-1]
            if self.dialect.is_token(previous) or self.dialect.is_attribute_line(previous):
                return 0
            if previous.startswith(".") and self.dialect.is_block_start(previous):
                return 0
        out.append(self.dialect.continuation_token or "")
        return 1

    @staticmethod
    def _drop_blanks(out: list[str]) -> None:
        while out and not out[-1].strip():
            out.pop()

    def _drop_dangling(self, out: list[str]) -> None:
        blanks = 0
        while out and not out[-1].strip():
            out.pop()
            blanks += 1
        while out and self.dialect.is_token(out[-1]):
            out.pop()
        out.extend([""] * blanks)


def fix_list_continuation(text: str, format_name: str = "asciidoc") -> str:
    """Run the continuation fixer over ``text`` for ``format_name``."""
    from flare2markup.postprocess.dialects import get_dialect

    return ContinuationFixer(get_dialect(format_name)).run(text)
