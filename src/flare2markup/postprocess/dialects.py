#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/postprocess/dialects.py
"""Line syntax of the line-oriented target formats.

The post-pass normalizers work on rendered text, not on the tree. A
:class:`TextDialect` tells them how the current format spells headings, list
items, block attributes, delimiters, images, collapsible sections and
admonitions, so each normalizer is written once for both AsciiDoc and
Writerside Markdown.

"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from flare2markup.exceptions import FormatError


@dataclass(frozen=True)
class ImageRef:
    """An image reference found in a line of text."""

    start: int
    end: int
    target: str
    alt: str
    attributes: dict[str, str]
    block: bool


def longest_run(lines: Sequence[str], char: str) -> int:
    """Return the length of the longest line consisting only of ``char``."""
    longest = 0
    for line in lines:
        stripped = line.strip()
        if stripped and stripped == char * len(stripped):
            longest = max(longest, len(stripped))
    return longest


def delimiter_for(lines: Sequence[str], char: str = "=", minimum: int = 4) -> str:
    """Return a block delimiter longer than any same-character line in ``lines``."""
    return char * max(minimum, longest_run(lines, char) + 1)


def indentation(line: str) -> int:
    """Return the number of leading whitespace characters."""
    return len(line) - len(line.lstrip())


class TextDialect(ABC):
    """Line syntax for one target format."""

    name: str = ""
    continuation_token: Optional[str] = None
    admonition_label_re = re.compile(r"^(\s*)(NOTE|TIP|WARNING|CAUTION|IMPORTANT):(?:\s+(.*?))?\s*$")

    heading_re: re.Pattern[str]
    list_item_re: re.Pattern[str]
    attribute_re: re.Pattern[str]
    table_row_re = re.compile(r"^\s*\|")

    def heading(self, line: str) -> tuple[int, str] | None:
        """Return ``(level, title)`` when ``line`` is a section heading."""
        match = self.heading_re.match(line)
        if not match:
            return None
        return len(match.group(1)), match.group(2).strip()

    def is_list_item(self, line: str) -> bool:
        return bool(self.list_item_re.match(line))

    def is_attribute_line(self, line: str) -> bool:
        return bool(self.attribute_re.match(line.strip()))

    def is_table_row(self, line: str) -> bool:
        return bool(self.table_row_re.match(line))

    def is_token(self, line: str) -> bool:
        return self.continuation_token is not None and line.strip() == self.continuation_token

    @abstractmethod
    def opens_delimited_block(self, line: str) -> Optional[str]:
        """Return the closing delimiter if ``line`` opens a delimited block."""

    def closes_delimited_block(self, line: str, closer: str) -> bool:
        return line.strip() == closer

    @abstractmethod
    def is_code_fence(self, line: str) -> bool:
        """Return True if ``line`` opens or closes a verbatim code block."""

    @abstractmethod
    def is_block_start(self, line: str) -> bool:
        """Return True for lines that start block content (image, table, fence, attributes)."""

    @abstractmethod
    def find_images(self, line: str) -> list[ImageRef]:
        """Return the image references in ``line``, left to right."""

    @abstractmethod
    def format_image(self, ref: ImageRef, block: bool) -> str:
        """Spell ``ref`` in block or inline form."""

    @abstractmethod
    def format_heading(self, level: int, title: str, nested: bool = False) -> list[str]:
        """Return the lines of a heading.

        ``nested`` headings sit inside a block and may need a marker line.
        """

    @abstractmethod
    def format_label(self, title: str) -> str:
        """Return a bold label line replacing a demoted heading."""

    @abstractmethod
    def format_collapsible(self, title: str, body: Sequence[str]) -> list[str]:
        """Wrap body lines as a collapsible block titled ``title``."""

    @abstractmethod
    def format_admonition_line(self, label: str, text: str, indent: str) -> list[str]:
        """Return the single-line admonition form."""

    @abstractmethod
    def format_admonition_block(self, label: str, body: Sequence[str], indent: str) -> list[str]:
        """Return the delimited admonition form; ``body`` is already re-indented."""

    @property
    def single_line_is_native(self) -> bool:
        """Whether ``LABEL: text`` is already a valid admonition in this format."""
        return False


class AsciiDocDialect(TextDialect):
    """AsciiDoc line syntax."""

    name = "asciidoc"
    continuation_token = "+"
    heading_re = re.compile(r"^(={1,6})\s+(\S.*)$")
    list_item_re = re.compile(
        r"^(\s*)(\*{1,5}|\.{1,5}|-|\d+\.|[a-zA-Z]\.|[ivxlcdmIVXLCDM]+\)|\S.*?(?::{2,4}|;;))(?:\s+(.*)|$)"
    )
    attribute_re = re.compile(r"^\[[^\]]*\]$")
    block_title_re = re.compile(r"^\.[^\s.]")
    _delimiter_re = re.compile(r"^(-{4,}|={4,}|\.{4,}|_{4,}|\*{4,}|\+{4,}|\|={3,}|`{3}.*)$")
    _image_re = re.compile(r"image(::?)([^\s\[\]]+)\[([^\]]*)\]")

    @property
    def single_line_is_native(self) -> bool:
        return True

    def opens_delimited_block(self, line: str) -> Optional[str]:
        stripped = line.strip()
        if not self._delimiter_re.match(stripped):
            return None
        if stripped.startswith("```"):
            return "```"
        return stripped

    def closes_delimited_block(self, line: str, closer: str) -> bool:
        stripped = line.strip()
        return stripped == closer or (closer == "```" and stripped.startswith("```"))

    def is_code_fence(self, line: str) -> bool:
        stripped = line.strip()
        return bool(re.match(r"^(-{4,}|\.{4,}|`{3})", stripped)) and not stripped.strip("-.`")

    def is_block_start(self, line: str) -> bool:
        stripped = line.strip()
        return (
            stripped.startswith("image::")
            or stripped.startswith("|===")
            or self.opens_delimited_block(stripped) is not None
            or self.is_attribute_line(stripped)
            or bool(self.block_title_re.match(stripped))
        )

    def find_images(self, line: str) -> list[ImageRef]:
        refs = []
        for match in self._image_re.finditer(line):
            alt, attributes = _parse_asciidoc_attributes(match.group(3))
            refs.append(
                ImageRef(
                    start=match.start(),
                    end=match.end(),
                    target=match.group(2),
                    alt=alt,
                    attributes=attributes,
                    block=match.group(1) == "::",
                )
            )
        return refs

    def format_image(self, ref: ImageRef, block: bool) -> str:
        attributes = dict(ref.attributes)
        if block and attributes.get("role") in ("icon", "inline"):
            del attributes["role"]
        parts = [ref.alt] if ref.alt or attributes else []
        parts.extend(f"{name}={value}" for name, value in attributes.items())
        return f"image{'::' if block else ':'}{ref.target}[{','.join(parts)}]"

    def format_heading(self, level: int, title: str, nested: bool = False) -> list[str]:
        heading = f"{'=' * level} {title}"
        return ["[discrete]", heading] if nested else [heading]

    def format_label(self, title: str) -> str:
        return f"*{title}*"

    def format_collapsible(self, title: str, body: Sequence[str]) -> list[str]:
        delimiter = delimiter_for(body)
        return [f".{title}", "[%collapsible]", delimiter, *body, delimiter]

    def format_admonition_line(self, label: str, text: str, indent: str) -> list[str]:
        return [f"{indent}{label}: {text}"]

    def format_admonition_block(self, label: str, body: Sequence[str], indent: str) -> list[str]:
        delimiter = delimiter_for(body)
        return [f"{indent}[{label}]", f"{indent}{delimiter}", *body, f"{indent}{delimiter}"]


class WritersideDialect(TextDialect):
    """Writerside Markdown line syntax."""

    name = "writerside"
    continuation_token = None
    heading_re = re.compile(r"^(#{1,6})\s+(\S.*?)\s*$")
    list_item_re = re.compile(r"^(\s*)([-*+]|\d+[.)])(?:\s+(.*)|$)")
    attribute_re = re.compile(r"^\{[^}]*\}$")
    _fence_re = re.compile(r"^(`{3,}|~{3,})")
    _image_re = re.compile(r"!\[([^\]]*)\]\(([^)\s]+)(?:\s+\"[^\"]*\")?\)(\{[^}]*\})?")
    _brace_attribute_re = re.compile(r'([\w-]+)="([^"]*)"')
    _admonition_styles = {
        "NOTE": "note",
        "TIP": "tip",
        "WARNING": "warning",
        "CAUTION": "warning",
        "IMPORTANT": "warning",
    }

    def opens_delimited_block(self, line: str) -> Optional[str]:
        stripped = line.strip()
        if stripped.startswith("<collapsible") and not stripped.endswith("</collapsible>"):
            return "</collapsible>"
        match = self._fence_re.match(stripped)
        return match.group(1) if match else None

    def closes_delimited_block(self, line: str, closer: str) -> bool:
        stripped = line.strip()
        return stripped.startswith(closer) and not stripped[len(closer) :].strip()

    def is_code_fence(self, line: str) -> bool:
        return bool(self._fence_re.match(line.strip()))

    def is_block_start(self, line: str) -> bool:
        stripped = line.strip()
        return (
            (stripped.startswith("![") and not stripped.endswith('style="inline"}'))
            or self.is_table_row(stripped)
            or self.is_code_fence(stripped)
            or self.is_attribute_line(stripped)
            or stripped.startswith("<collapsible")
        )

    def heading(self, line: str) -> tuple[int, str] | None:
        match = self.heading_re.match(line)
        if not match:
            return None
        return len(match.group(1)), match.group(2)

    def find_images(self, line: str) -> list[ImageRef]:
        refs = []
        for match in self._image_re.finditer(line):
            attributes = dict(self._brace_attribute_re.findall(match.group(3) or ""))
            style = attributes.get("style")
            refs.append(
                ImageRef(
                    start=match.start(),
                    end=match.end(),
                    target=match.group(2),
                    alt=match.group(1),
                    attributes=attributes,
                    block=style != "inline",
                )
            )
        return refs

    def format_image(self, ref: ImageRef, block: bool) -> str:
        attributes = {name: value for name, value in ref.attributes.items() if name != "style"}
        if not block:
            attributes = {"style": "inline", **attributes}
        suffix = ""
        if attributes:
            suffix = "{" + " ".join(f'{name}="{value}"' for name, value in attributes.items()) + "}"
        return f"![{ref.alt}]({ref.target}){suffix}"

    def format_heading(self, level: int, title: str, nested: bool = False) -> list[str]:
        return [f"{'#' * level} {title}"]

    def format_label(self, title: str) -> str:
        return f"**{title}**"

    def format_collapsible(self, title: str, body: Sequence[str]) -> list[str]:
        escaped = title.replace('"', "&quot;")
        return [f'<collapsible title="{escaped}">', "", *body, "", "</collapsible>"]

    def format_admonition_line(self, label: str, text: str, indent: str) -> list[str]:
        return [f"{indent}> {text}", f'{indent}{{style="{self._admonition_styles[label]}"}}']

    def format_admonition_block(self, label: str, body: Sequence[str], indent: str) -> list[str]:
        quoted = [f"{indent}> {line[len(indent):]}" if line.strip() else f"{indent}>" for line in body]
        return [*quoted, f'{indent}{{style="{self._admonition_styles[label]}"}}']


def _parse_asciidoc_attributes(raw: str) -> tuple[str, dict[str, str]]:
    alt = ""
    attributes: dict[str, str] = {}
    positional = 0
    for part in (p.strip() for p in raw.split(",")) if raw.strip() else ():
        if "=" in part:
            name, _, value = part.partition("=")
            attributes[name.strip()] = value.strip().strip('"')
            continue
        if positional == 0:
            alt = part
        elif positional == 1:
            attributes["width"] = part
        elif positional == 2:
            attributes["height"] = part
        positional += 1
    return alt, attributes


_DIALECTS: dict[str, TextDialect] = {
    "asciidoc": AsciiDocDialect(),
    "writerside": WritersideDialect(),
}


def get_dialect(format_name: str) -> TextDialect:
    """Return the text dialect for a line-oriented target format.

    Raises
    ------
    FormatError
        If the format has no line-oriented dialect (e.g. ``zendesk``)

    """
    try:
        return _DIALECTS[format_name]
    except KeyError:
        raise FormatError(format_name, sorted(_DIALECTS)) from None
