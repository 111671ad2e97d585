#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/utils/__init__.py
"""Utility modules for the flare2markup package.

This package contains text escaping, dependency checking and timing helpers
shared by the parser front end, the renderers and the text normalizers.
"""

from flare2markup.utils.decorators import debug_timer, requires_dependencies
from flare2markup.utils.escape import (
    escape_asciidoc,
    escape_asciidoc_attribute,
    escape_html_attribute,
    escape_html_text,
    escape_markdown,
)

__all__ = [
    "debug_timer",
    "escape_asciidoc",
    "escape_asciidoc_attribute",
    "escape_html_attribute",
    "escape_html_text",
    "escape_markdown",
    "requires_dependencies",
]
