#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/postprocess/base.py
"""Shared pieces of the post-pass normalizers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from flare2markup.options import ConversionOptions
from flare2markup.postprocess.dialects import TextDialect


class TextPass(ABC):
    """A normalizer over rendered target-format text.

    Parameters
    ----------
    dialect : TextDialect
        Line syntax of the target format
    options : ConversionOptions or None, default None
        Options supplying the pass thresholds; defaults when None

    """

    name: str = ""

    def __init__(self, dialect: TextDialect, options: Optional[ConversionOptions] = None) -> None:
        self.dialect = dialect
        self.options = options or ConversionOptions()

    @abstractmethod
    def run(self, text: str) -> str:
        """Return the normalized text."""

    def __call__(self, text: str) -> str:
        return self.run(text)


class VerbatimTracker:
    """Follow delimited blocks while scanning lines.

    Parameters
    ----------
    dialect : TextDialect
        Line syntax used to recognize delimiters
    code_only : bool, default False
        Track only verbatim code blocks; other delimited blocks are scanned as text

    """

    def __init__(self, dialect: TextDialect, code_only: bool = False) -> None:
        self.dialect = dialect
        self.code_only = code_only
        self.closer: Optional[str] = None

    @property
    def inside(self) -> bool:
        return self.closer is not None

    def feed(self, line: str) -> bool:
        """Consume ``line``; return True when it is a delimiter or lies inside a tracked block."""
        if self.closer is not None:
            if self.dialect.closes_delimited_block(line, self.closer):
                self.closer = None
            return True
        if self.code_only and not self.dialect.is_code_fence(line):
            return False
        opener = self.dialect.opens_delimited_block(line)
        if opener is None:
            return False
        self.closer = opener
        return True
