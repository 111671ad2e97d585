#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/parsers/__init__.py
"""Input adapters that build document trees for the conversion core."""

from flare2markup.parsers.html import parse_html

__all__ = ["parse_html"]
