#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/converters/result.py
"""Conversion output containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ConversionMetadata:
    """Diagnostic metadata returned alongside converted content.

    Parameters
    ----------
    list_count : int
        Number of list containers rendered, chained sibling lists included
    max_depth : int
        Number of list nesting levels in the output (0 when there are no lists)
    has_alphabetical : bool
        Whether any rendered list requested alphabetic numbering
    has_mixed_content : bool
        Whether any list item contained images, tables, quotes or nested divs
    warnings : tuple of str
        Advisory repair messages, in the order they were raised

    """

    list_count: int = 0
    max_depth: int = 0
    has_alphabetical: bool = False
    has_mixed_content: bool = False
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Return the metadata with the camelCase keys used by downstream tooling."""
        return {
            "listCount": self.list_count,
            "maxDepth": self.max_depth,
            "hasAlphabetical": self.has_alphabetical,
            "hasMixedContent": self.has_mixed_content,
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class ConversionResult:
    """Converted text plus its metadata."""

    content: str
    metadata: ConversionMetadata
    target_format: str = ""

    def __str__(self) -> str:
        return self.content
