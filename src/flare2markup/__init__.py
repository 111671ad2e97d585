"""flare2markup - Convert MadCap Flare topics to AsciiDoc, Writerside Markdown and Zendesk HTML.

flare2markup takes a cleaned MadCap Flare HTML document tree and renders it in
one of three target formats. A prioritized rule table maps each element to a
format-specific handler; a shared list analyzer and generator turn Flare's
often-irregular list markup (orphaned paragraphs, flat sibling sub-lists,
alphabetic and roman numbering) into well-formed nested lists; and a set of
text normalizers repairs list continuation, classifies images, restructures
deep sections and assembles admonitions in the rendered output.

Target Formats
--------------
- **asciidoc**: depth-scaled ``*``/``.`` markers and ``+`` list continuation
- **writerside**: Markdown with Writerside attribute lines and ``<collapsible>``
- **zendesk**: Help Center article HTML

Requirements
------------
- Python 3.10+
- ``beautifulsoup4`` for :func:`convert_html` (the ``html`` extra)

Examples
--------
Convert HTML directly:

    >>> from flare2markup import convert_html
    >>> result = convert_html("<ul><li>One</li><li>Two</li></ul>", "writerside")
    >>> print(result.content)
    - One
    - Two
    <BLANKLINE>
    >>> result.metadata.list_count
    1

Convert a tree built elsewhere:

    >>> from flare2markup import Element, Text, convert_document
    >>> body = Element("body", children=[Element("p", children=[Text("Hello")])])
    >>> convert_document(body, "zendesk").content
    '<p>Hello</p>\\n'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "flare2markup requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from flare2markup.api import convert_document, convert_html, get_renderer  # noqa: E402
from flare2markup.ast import Comment, Element, Text, TreeIndex  # noqa: E402
from flare2markup.config import load_options, options_from_mapping  # noqa: E402
from flare2markup.converters.result import ConversionMetadata, ConversionResult  # noqa: E402
from flare2markup.exceptions import (  # noqa: E402
    ConfigError,
    DependencyError,
    Flare2MarkupError,
    FormatError,
    InvalidOptionsError,
    ParsingError,
    ValidationError,
)
from flare2markup.logging_utils import configure_logging  # noqa: E402
from flare2markup.options import (  # noqa: E402
    AsciiDocOptions,
    ConversionOptions,
    WritersideOptions,
    ZendeskOptions,
)
from flare2markup.parsers import parse_html  # noqa: E402
from flare2markup.postprocess import run_post_passes  # noqa: E402

__all__ = [
    "__version__",
    "AsciiDocOptions",
    "Comment",
    "ConfigError",
    "ConversionMetadata",
    "ConversionOptions",
    "ConversionResult",
    "DependencyError",
    "Element",
    "Flare2MarkupError",
    "FormatError",
    "InvalidOptionsError",
    "ParsingError",
    "Text",
    "TreeIndex",
    "ValidationError",
    "WritersideOptions",
    "ZendeskOptions",
    "configure_logging",
    "convert_document",
    "convert_html",
    "get_renderer",
    "load_options",
    "options_from_mapping",
    "parse_html",
    "run_post_passes",
]
