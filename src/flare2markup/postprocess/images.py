#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/postprocess/images.py
"""Image classifier.

Decides for each image reference whether it is an inline icon or a
standalone block image and rewrites it in the matching form. Signals are
checked in a fixed order and the first one that decides wins:

1. an explicit role or style (``role=icon``, ``{style="inline"}``)
2. the path (``icon``/``button``/``gui`` segments are inline,
   ``screenshot``/``screens`` segments are block)
3. declared dimensions (both within the inline threshold is inline, a width
   over 100 is block)
4. the surrounding text (20 or more characters of preceding inline text is
   inline)

Anything left undecided is a block image. Block images are moved onto a line
of their own and separated from neighbouring text by blank lines.

"""

from __future__ import annotations

import logging
import re
from typing import Optional

from flare2markup.constants import (
    BLOCK_IMAGE_MIN_WIDTH,
    BLOCK_PATH_KEYWORDS,
    INLINE_CONTEXT_MIN_TEXT,
    INLINE_PATH_KEYWORDS,
)
from flare2markup.options import ConversionOptions
from flare2markup.postprocess.base import TextPass, VerbatimTracker
from flare2markup.postprocess.dialects import ImageRef

logger = logging.getLogger(__name__)

_PATH_TOKEN_RE = re.compile(r"[/\\._\-\s]+")
_INLINE_ROLES = frozenset({"icon", "inline"})


def classify_image_path(path: str) -> Optional[bool]:
    """Classify an image by its path.

    Parameters
    ----------
    path : str
        Image source path or URL

    Returns
    -------
    bool or None
        True for inline, False for block, None when the path is not conclusive.
        Only whole path tokens count, so ``guide.png`` is not a ``gui`` image.

    Examples
    --------
        >>> classify_image_path("Resources/Images/icons/save.png")
        True
        >>> classify_image_path("Resources/Screenshots/dialog.png")
        False
        >>> classify_image_path("Resources/Images/guide-overview.png") is None
        True

    """
    tokens = [token for token in _PATH_TOKEN_RE.split(path.lower()) if token]
    for token in tokens:
        if token in BLOCK_PATH_KEYWORDS or token.startswith("screenshot"):
            return False
    for token in tokens:
        if token in INLINE_PATH_KEYWORDS or token.rstrip("s") in INLINE_PATH_KEYWORDS:
            return True
    return None


class ImageClassifier(TextPass):
    """Rewrite image references as inline or block images."""

    name = "images"

    def run(self, text: str) -> str:
        lines = text.split("\n")
        out: list[str] = []
        tracker = VerbatimTracker(self.dialect, code_only=True)
        changed = 0
        position = 0

        while position < len(lines):
            line = lines[position]
            position += 1
            if tracker.feed(line):
                out.append(line)
                continue

            refs = self.dialect.find_images(line)
            if not refs:
                out.append(line)
                continue

            following = lines[position] if position < len(lines) else ""
            rewritten = self._rewrite_line(line, refs, out[-1] if out else "", following)
            if rewritten != [line]:
                changed += 1
            if self._is_icon_line(line, refs):
                resume = self._join_surrounding_text(out, lines, position)
                if resume != position:
                    changed += 1
                    position = resume
            out.extend(rewritten)

        if changed:
            logger.debug("Reclassified images on %d line(s)", changed)
        return "\n".join(out)

    def is_inline(self, ref: ImageRef, line: str, previous: str) -> bool:
        """Decide whether ``ref`` found in ``line`` is an inline image."""
        decided = self._signal(ref)
        if decided is not None:
            return decided

        preceding = line[: ref.start].strip()
        if len(preceding) >= INLINE_CONTEXT_MIN_TEXT:
            return True
        if not preceding and self._continues_paragraph(previous):
            return True
        return False

    def _signal(self, ref: ImageRef) -> Optional[bool]:
        """Role, path and dimension signals; None when none of them decides."""
        attributes = ref.attributes
        if attributes.get("role") in _INLINE_ROLES or attributes.get("style") == "inline":
            return True

        by_path = classify_image_path(ref.target)
        if by_path is not None:
            return by_path

        width = _parse_dimension(attributes.get("width"))
        height = _parse_dimension(attributes.get("height"))
        threshold = self.options.inline_image_threshold
        if width is not None and height is not None and width <= threshold and height <= threshold:
            return True
        if width is not None and width > BLOCK_IMAGE_MIN_WIDTH:
            return False
        return None

    def _continues_paragraph(self, previous: str) -> bool:
        return len(previous.strip()) >= INLINE_CONTEXT_MIN_TEXT and self._is_text_line(previous)

    def _is_text_line(self, line: str) -> bool:
        stripped = line.strip()
        if not stripped or stripped.startswith("<"):
            return False
        dialect = self.dialect
        return not (
            dialect.is_token(stripped)
            or dialect.heading(stripped)
            or dialect.is_block_start(stripped)
            or dialect.is_list_item(line)
            or dialect.is_table_row(line)
            or dialect.find_images(stripped)
        )

    def _is_icon_line(self, line: str, refs: list[ImageRef]) -> bool:
        """Return True when ``line`` holds only images that role, path or size make inline."""
        remainder = line
        for ref in reversed(refs):
            remainder = remainder[: ref.start] + remainder[ref.end :]
        return not remainder.strip() and all(self._signal(ref) is True for ref in refs)

    def _join_surrounding_text(self, out: list[str], lines: list[str], position: int) -> int:
        """Drop the blank lines isolating an icon line between two text lines.

        Trailing blanks are removed from ``out`` in place; the returned index is
        where scanning resumes in ``lines``.
        """
        before = len(out)
        while before > 0 and not out[before - 1].strip():
            before -= 1
        after = position
        while after < len(lines) and not lines[after].strip():
            after += 1
        if before == 0 or after == len(lines):
            return position
        if not (self._is_text_line(out[before - 1]) and self._is_text_line(lines[after])):
            return position
        del out[before:]
        return after

    def _rewrite_line(self, line: str, refs: list[ImageRef], previous: str, following: str) -> list[str]:
        indent = line[: len(line) - len(line.lstrip())]
        pieces: list[tuple[str, bool]] = []  # (text, is_block_image)
        buffer = ""
        cursor = 0
        for ref in refs:
            inline = self.is_inline(ref, line, previous)
            buffer += line[cursor : ref.start]
            spelled = self.dialect.format_image(ref, block=not inline)
            if inline:
                buffer += spelled
            else:
                if buffer.strip():
                    pieces.append((buffer.rstrip(), False))
                pieces.append((spelled, True))
                buffer = ""
            cursor = ref.end
        buffer += line[cursor:]
        if buffer.strip():
            pieces.append((buffer.strip() if pieces else buffer.rstrip(), False))

        if not any(is_block for _, is_block in pieces):
            return [pieces[0][0]] if pieces else [line]

        result: list[str] = []
        for index, (text, is_block) in enumerate(pieces):
            text = text.strip()
            if is_block:
                before = result[-1] if result else previous
                if before.strip() and not self._separates(before):
                    result.append("")
                result.append(indent + text)
                after = pieces[index + 1][0] if index + 1 < len(pieces) else following
                if after.strip() and not self._separates(after, after_block=True):
                    result.append("")
            else:
                result.append(indent + text)
        return result

    def _separates(self, neighbour: str, after_block: bool = False) -> bool:
        """Return True when ``neighbour`` needs no blank line next to a block image."""
        dialect = self.dialect
        stripped = neighbour.strip()
        if dialect.is_token(stripped):
            return True
        if dialect.opens_delimited_block(stripped) is not None:
            return True
        # AsciiDoc attribute lines and titles precede their block, Writerside attributes follow it
        explicit = dialect.continuation_token is not None
        if after_block:
            return not explicit and dialect.is_attribute_line(stripped)
        return explicit and (dialect.is_attribute_line(stripped) or stripped.startswith("."))


def _parse_dimension(value: str | None) -> int | None:
    if not value:
        return None
    match = re.match(r"\s*(\d+)", value)
    return int(match.group(1)) if match else None


def classify_images(text: str, format_name: str = "asciidoc", options: Optional[ConversionOptions] = None) -> str:
    """Run the image classifier over ``text`` for ``format_name``."""
    from flare2markup.postprocess.dialects import get_dialect

    return ImageClassifier(get_dialect(format_name), options).run(text)
