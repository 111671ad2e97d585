#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/utils/escape.py
"""Format-specific text escaping utilities.

Each target format has a fixed set of control characters that are escaped in
document text so that prose is not mistaken for markup.

"""

from __future__ import annotations

import html
import re

# Emphasis/strong delimiters, inline code, structural prefixes and attribute brackets.
# ``:`` is left alone so that callout labels such as ``NOTE:`` survive for the
# admonition pass.
_ASCIIDOC_SPECIAL_CHARS = {
    "*": r"\*",
    "_": r"\_",
    "`": r"\`",
    "#": r"\#",
    "[": r"\[",
    "]": r"\]",
}

_MARKDOWN_SPECIAL_CHARS = "\\`*_{}[]#"

# Prefixes that turn a paragraph line into a list item, heading, quote or
# continuation. Per line, since hard line breaks start new lines mid-paragraph.
_ASCIIDOC_LINE_PREFIX_RE = re.compile(r"^([ \t]*)(\.{1,5}|-|={1,6}|\d+\.)(?=[ \t])", re.MULTILINE)
_ASCIIDOC_LONE_PLUS_RE = re.compile(r"^([ \t]*)\+[ \t]*$", re.MULTILINE)
_MARKDOWN_LINE_PREFIX_RE = re.compile(r"^([ \t]*)([-+*](?=[ \t]|$)|>)", re.MULTILINE)
_MARKDOWN_ORDERED_PREFIX_RE = re.compile(r"^([ \t]*\d{1,9})([.)])(?=[ \t]|$)", re.MULTILINE)


def escape_asciidoc(text: str) -> str:
    r"""Escape special AsciiDoc characters in text content.

    Parameters
    ----------
    text : str
        Text to escape

    Returns
    -------
    str
        Escaped text safe for AsciiDoc

    Examples
    --------
        >>> escape_asciidoc("Text with [brackets] and *stars*")
        'Text with \\[brackets\\] and \\*stars\\*'

    """
    if not text:
        return text

    result = text
    for char, escaped in _ASCIIDOC_SPECIAL_CHARS.items():
        result = result.replace(char, escaped)
    return result


def escape_asciidoc_attribute(text: str) -> str:
    r"""Escape text for use in AsciiDoc attribute values and block titles.

    Examples
    --------
        >>> escape_asciidoc_attribute('Title: A "Special" Document')
        'Title: A \\"Special\\" Document'

    """
    if not text:
        return text

    result = text.replace("\\", "\\\\")
    result = result.replace('"', '\\"')
    result = result.replace("\n", " ")
    return result


def escape_markdown(text: str) -> str:
    r"""Escape Markdown control characters with backslashes.

    Examples
    --------
        >>> escape_markdown("a *b* [c]")
        'a \\*b\\* \\[c\\]'

    """
    if not text:
        return text

    return "".join(f"\\{char}" if char in _MARKDOWN_SPECIAL_CHARS else char for char in text)


def escape_asciidoc_line_start(text: str) -> str:
    """Neutralize AsciiDoc block prefixes at the start of each line.

    Ordered/unordered list markers, section title markers and a lone ``+``
    continuation are prefixed with the ``{empty}`` attribute reference.
    Callout labels such as ``NOTE:`` are left alone.

    Examples
    --------
        >>> escape_asciidoc_line_start("== not a title")
        '{empty}== not a title'

    """
    if not text:
        return text
    result = _ASCIIDOC_LINE_PREFIX_RE.sub(r"\1{empty}\2", text)
    return _ASCIIDOC_LONE_PLUS_RE.sub(r"\1{empty}+", result)


def escape_markdown_line_start(text: str) -> str:
    r"""Backslash-escape Markdown block prefixes at the start of each line.

    Examples
    --------
        >>> escape_markdown_line_start("1. not a list")
        '1\\. not a list'

    """
    if not text:
        return text
    result = _MARKDOWN_LINE_PREFIX_RE.sub(r"\1\\\2", text)
    return _MARKDOWN_ORDERED_PREFIX_RE.sub(r"\1\\\2", result)


def escape_html_text(text: str) -> str:
    """Escape text for HTML element content (quotes are left alone)."""
    if not text:
        return text
    return html.escape(text, quote=False)


def escape_html_attribute(text: str) -> str:
    """Escape text for a double-quoted HTML attribute value."""
    if not text:
        return text
    return html.escape(text, quote=True)
