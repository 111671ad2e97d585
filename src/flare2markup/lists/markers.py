#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/lists/markers.py
"""List marker generation.

All functions here are pure. :func:`marker` is shared by every target format;
format differences are expressed by a :class:`MarkerSyntax` value.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from flare2markup.constants import MAX_MARKER_REPEAT, MAX_ROMAN_VALUE, ROMAN_NUMERALS, ListType, NumberingStyle

_ROMAN_RE = re.compile(r"^[MDCLXVI]+$")


@dataclass(frozen=True)
class MarkerSyntax:
    """Marker characters for one target-format family.

    Parameters
    ----------
    bullet : str
        Unordered bullet character
    structural : str or None
        Character repeated by depth for ordered lists (AsciiDoc ``.``). None means
        ordered lists are numbered (``1.``)
    punctuation : str, default "."
        Suffix after a numbered marker
    scale_bullets : bool, default True
        Repeat the bullet by depth (AsciiDoc ``**``) instead of using it once

    """

    bullet: str
    structural: Optional[str] = None
    punctuation: str = "."
    scale_bullets: bool = True


ASCIIDOC_MARKERS = MarkerSyntax(bullet="*", structural=".")
MARKDOWN_MARKERS = MarkerSyntax(bullet="-", structural=None, punctuation=".", scale_bullets=False)


def _repeat_count(depth: int) -> int:
    return min(max(depth, 0) + 1, MAX_MARKER_REPEAT)


def to_roman(value: int) -> str:
    """Convert an integer to an upper-case Roman numeral.

    Parameters
    ----------
    value : int
        Number in the range 1..3999

    Raises
    ------
    ValueError
        If ``value`` is outside 1..3999

    Examples
    --------
        >>> to_roman(1994)
        'MCMXCIV'

    """
    if not 1 <= value <= MAX_ROMAN_VALUE:
        raise ValueError(f"Roman numerals are defined for 1..{MAX_ROMAN_VALUE}, got {value}")
    parts = []
    remaining = value
    for number, symbol in ROMAN_NUMERALS:
        count, remaining = divmod(remaining, number)
        parts.append(symbol * count)
    return "".join(parts)


def from_roman(numeral: str) -> int:
    """Convert a canonical Roman numeral (either case) to an integer.

    Raises
    ------
    ValueError
        If ``numeral`` is empty, contains other characters, or is not in
        canonical subtractive form (e.g. ``IIII`` or ``IC``)

    """
    upper = numeral.strip().upper()
    if not upper or not _ROMAN_RE.match(upper):
        raise ValueError(f"Invalid Roman numeral: {numeral!r}")

    total = 0
    position = 0
    for number, symbol in ROMAN_NUMERALS:
        while upper.startswith(symbol, position):
            total += number
            position += len(symbol)
    if position != len(upper) or total == 0 or total > MAX_ROMAN_VALUE or to_roman(total) != upper:
        raise ValueError(f"Invalid Roman numeral: {numeral!r}")
    return total


def to_alpha(index: int, upper: bool = False) -> str:
    """Convert a 0-based index to an alphabetic label.

    Indexes past ``z`` continue in bijective base-26: ``aa``, ``ab``, ... ``az``,
    ``ba``, ...

    Examples
    --------
        >>> to_alpha(0), to_alpha(25), to_alpha(26), to_alpha(701)
        ('a', 'z', 'aa', 'zz')

    """
    if index < 0:
        raise ValueError(f"Alphabetic markers need a non-negative index, got {index}")
    letters = []
    remaining = index + 1
    while remaining > 0:
        remaining, offset = divmod(remaining - 1, 26)
        letters.append(chr(ord("a") + offset))
    label = "".join(reversed(letters))
    return label.upper() if upper else label


def marker(
    list_type: ListType,
    style: Optional[NumberingStyle],
    depth: int,
    index: int,
    syntax: MarkerSyntax = ASCIIDOC_MARKERS,
) -> str:
    """Return the item marker for a list item.

    Parameters
    ----------
    list_type : {"ordered", "unordered", "definition"}
        List category
    style : str or None
        Numbering style for ordered lists; None is treated as decimal
    depth : int
        0-based nesting depth
    index : int
        0-based item index (already offset by any start number)
    syntax : MarkerSyntax, default ASCIIDOC_MARKERS
        Format-family marker characters

    Returns
    -------
    str
        - unordered: the bullet, repeated ``min(depth + 1, 5)`` times when the
          syntax scales bullets
        - ordered decimal: the structural character repeated by depth, or
          ``index + 1`` followed by the punctuation
        - ordered alpha: ``a``, ``b``, ... (``A``, ``B``, ... for upper-alpha)
        - ordered roman: ``i``, ``ii``, ... (``I``, ``II``, ... for upper-roman)
        - definition: an empty string

    """
    if list_type == "definition":
        return ""
    if list_type == "unordered":
        return syntax.bullet * (_repeat_count(depth) if syntax.scale_bullets else 1)

    if style == "lower-alpha":
        return to_alpha(index)
    if style == "upper-alpha":
        return to_alpha(index, upper=True)
    if style == "lower-roman":
        return to_roman(index + 1).lower()
    if style == "upper-roman":
        return to_roman(index + 1)

    if syntax.structural:
        return syntax.structural * _repeat_count(depth)
    return f"{index + 1}{syntax.punctuation}"
