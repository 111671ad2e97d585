#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/postprocess/sections.py
"""Collapsible/heading classifier.

Flare topics use deep headings for everything from full procedures to short
side notes. Headings at level 3 and deeper are re-classified:

- titles with a primary keyword ("overview", "setup", ...) are promoted one
  level, together with their sub-headings
- titles with a supplementary keyword ("troubleshooting", "see also", ...)
  become collapsible sections
- otherwise long sections (more than 15 content lines) or sections with
  sub-headings are promoted, sections of 3 to 15 lines become collapsible,
  and shorter ones are left alone

Sub-headings inside a new collapsible section are demoted: the first level
below the section becomes a bold label, deeper ones become discrete headings.

"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Optional, Sequence

from flare2markup.constants import (
    COLLAPSIBLE_MAX_BODY_LINES,
    COLLAPSIBLE_MIN_BODY_LINES,
    MIN_CLASSIFIED_HEADING_LEVEL,
    PRIMARY_SECTION_KEYWORDS,
    SUPPLEMENTARY_SECTION_KEYWORDS,
)
from flare2markup.options import ConversionOptions
from flare2markup.postprocess.base import TextPass, VerbatimTracker

logger = logging.getLogger(__name__)


class SectionAction(Enum):
    KEEP = "keep"
    PROMOTE = "promote"
    COLLAPSIBLE = "collapsible"


def _keyword_pattern(keywords: Sequence[str]) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(re.escape(keyword) for keyword in keywords) + r")\b")


_PRIMARY_RE = _keyword_pattern(PRIMARY_SECTION_KEYWORDS)
_SUPPLEMENTARY_RE = _keyword_pattern(SUPPLEMENTARY_SECTION_KEYWORDS)


def classify_section(title: str, content_lines: int, has_subheadings: bool) -> SectionAction:
    """Decide what to do with a deep section.

    Parameters
    ----------
    title : str
        Heading text
    content_lines : int
        Number of non-blank lines in the section body
    has_subheadings : bool
        Whether the body contains deeper headings

    Returns
    -------
    SectionAction
        Keyword matches win over the size heuristics; an empty section is kept

    """
    if content_lines == 0:
        return SectionAction.KEEP
    lowered = title.lower()
    if _PRIMARY_RE.search(lowered):
        return SectionAction.PROMOTE
    if _SUPPLEMENTARY_RE.search(lowered):
        return SectionAction.COLLAPSIBLE
    if content_lines > COLLAPSIBLE_MAX_BODY_LINES or has_subheadings:
        return SectionAction.PROMOTE
    if content_lines >= COLLAPSIBLE_MIN_BODY_LINES:
        return SectionAction.COLLAPSIBLE
    return SectionAction.KEEP


class SectionClassifier(TextPass):
    """Promote deep headings or fold their sections into collapsible blocks."""

    name = "sections"

    def run(self, text: str) -> str:
        lines = text.split("\n")
        out: list[str] = []
        tracker = VerbatimTracker(self.dialect)
        promoted = folded = 0
        position = 0

        while position < len(lines):
            line = lines[position]
            if tracker.feed(line):
                out.append(line)
                position += 1
                continue

            heading = self.dialect.heading(line)
            if heading is None or heading[0] < MIN_CLASSIFIED_HEADING_LEVEL:
                out.append(line)
                position += 1
                continue

            level, title = heading
            end, subheadings = self._section_extent(lines, position, level)
            body_end = self._trim_trailing(lines, position + 1, end)
            body = lines[position + 1 : body_end]
            content_lines = sum(1 for body_line in body if body_line.strip())

            action = classify_section(title, content_lines, bool(subheadings))
            if action is SectionAction.PROMOTE:
                out.extend(self.dialect.format_heading(level - 1, title))
                for index in subheadings:
                    sub_level, sub_title = self.dialect.heading(lines[index]) or (level + 1, "")
                    lines[index] = self.dialect.format_heading(sub_level - 1, sub_title)[-1]
                promoted += 1
                position += 1
            elif action is SectionAction.COLLAPSIBLE:
                out.extend(self.dialect.format_collapsible(title, self._demote(body, level)))
                folded += 1
                position = body_end
            else:
                out.append(line)
                position += 1

        if promoted or folded:
            logger.debug("Promoted %d heading(s), folded %d section(s) into collapsible blocks", promoted, folded)
        return "\n".join(out)

    def _section_extent(self, lines: list[str], start: int, level: int) -> tuple[int, list[int]]:
        """Return the end index of the section at ``start`` and its sub-heading indices."""
        tracker = VerbatimTracker(self.dialect)
        subheadings: list[int] = []
        for index in range(start + 1, len(lines)):
            if tracker.feed(lines[index]):
                continue
            heading = self.dialect.heading(lines[index])
            if heading is None:
                continue
            if heading[0] <= level:
                return index, subheadings
            subheadings.append(index)
        return len(lines), subheadings

    def _trim_trailing(self, lines: list[str], start: int, end: int) -> int:
        # Blank lines and attribute lines right before the next heading stay outside the body
        while end > start and (not lines[end - 1].strip() or self.dialect.is_attribute_line(lines[end - 1])):
            if lines[end - 1].strip() and self.dialect.continuation_token is None:
                break
            end -= 1
        return end

    def _demote(self, body: list[str], level: int) -> list[str]:
        tracker = VerbatimTracker(self.dialect)
        result: list[str] = []
        for line in body:
            if tracker.feed(line):
                result.append(line)
                continue
            heading = self.dialect.heading(line)
            if heading is None:
                result.append(line)
            elif heading[0] == level + 1:
                result.append(self.dialect.format_label(heading[1]))
            else:
                result.extend(self.dialect.format_heading(max(2, heading[0] - 1), heading[1], nested=True))
        while result and not result[0].strip():
            result.pop(0)
        return result


def classify_sections(text: str, format_name: str = "asciidoc", options: Optional[ConversionOptions] = None) -> str:
    """Run the section classifier over ``text`` for ``format_name``."""
    from flare2markup.postprocess.dialects import get_dialect

    return SectionClassifier(get_dialect(format_name), options).run(text)
