#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/converters/__init__.py
"""Rule dispatcher, conversion rules and per-conversion context."""

from flare2markup.converters.context import ConversionContext, ConversionStats, ListFrame
from flare2markup.converters.dispatcher import RuleDispatcher
from flare2markup.converters.result import ConversionMetadata, ConversionResult
from flare2markup.converters.rules import (
    PRIORITY_BLOCK,
    PRIORITY_CONTAINER,
    PRIORITY_INLINE,
    PRIORITY_SKIP,
    PRIORITY_STRUCTURE,
    PRIORITY_VENDOR,
    ConversionRule,
    RuleTable,
)

__all__ = [
    "PRIORITY_BLOCK",
    "PRIORITY_CONTAINER",
    "PRIORITY_INLINE",
    "PRIORITY_SKIP",
    "PRIORITY_STRUCTURE",
    "PRIORITY_VENDOR",
    "ConversionContext",
    "ConversionMetadata",
    "ConversionResult",
    "ConversionRule",
    "ConversionStats",
    "ListFrame",
    "RuleDispatcher",
    "RuleTable",
]
