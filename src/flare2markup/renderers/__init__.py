#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/renderers/__init__.py
"""Target-format renderers."""

from flare2markup.renderers.asciidoc import AsciiDocRenderer
from flare2markup.renderers.base import BaseRenderer, ImageSpec, TableCell
from flare2markup.renderers.writerside import WritersideRenderer
from flare2markup.renderers.zendesk import ZendeskRenderer

RENDERERS: dict[str, type[BaseRenderer]] = {
    "asciidoc": AsciiDocRenderer,
    "writerside": WritersideRenderer,
    "zendesk": ZendeskRenderer,
}

__all__ = [
    "RENDERERS",
    "AsciiDocRenderer",
    "BaseRenderer",
    "ImageSpec",
    "TableCell",
    "WritersideRenderer",
    "ZendeskRenderer",
]
