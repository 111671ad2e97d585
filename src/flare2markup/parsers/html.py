#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/parsers/html.py
"""HTML to document tree adapter.

Builds the ``Element``/``Text``/``Comment`` tree consumed by the conversion core
from an HTML string using BeautifulSoup. Upstream tree cleaning (vendor
namespace normalization, variable and snippet resolution) is expected to have
happened already; this adapter only mirrors the markup structure.

"""

from __future__ import annotations

import logging
from typing import Any

from flare2markup.ast.nodes import Comment, DocumentNode, Element, Text
from flare2markup.constants import DEPS_HTML, SKIPPED_TAGS
from flare2markup.exceptions import DependencyError, ParsingError, ValidationError
from flare2markup.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


@requires_dependencies("html", DEPS_HTML)
def parse_html(html: str, parser: str = "html.parser") -> Element:
    """Parse an HTML string into a document tree.

    Parameters
    ----------
    html : str
        HTML markup (a full document or a fragment)
    parser : str, default "html.parser"
        BeautifulSoup tree builder to use (``html.parser``, ``lxml`` or ``html5lib``)

    Returns
    -------
    Element
        The ``<body>`` element when present, otherwise a synthetic ``body``
        element wrapping the top-level nodes

    Raises
    ------
    ValidationError
        If ``html`` is not a string
    DependencyError
        If BeautifulSoup (or the requested tree builder) is not installed
    ParsingError
        If the markup cannot be parsed

    Examples
    --------
        >>> tree = parse_html("<ol><li>One</li><li>Two</li></ol>")
        >>> tree.children[0].tag
        'ol'

    """
    if not isinstance(html, str):
        raise ValidationError(
            f"HTML input must be a string, got {type(html).__name__}",
            parameter_name="html",
            parameter_value=type(html).__name__,
        )

    from bs4 import BeautifulSoup
    from bs4.exceptions import FeatureNotFound

    try:
        soup = BeautifulSoup(html, parser)
    except FeatureNotFound as e:
        raise DependencyError(
            "html",
            missing_packages=[(parser, "")],
            message=f"HTML tree builder {parser!r} is not available: {e}",
        ) from e
    except Exception as e:
        raise ParsingError(f"Failed to parse HTML: {e}", original_error=e) from e

    body = soup.find("body")
    if body is not None:
        root = _convert_tag(body)
    else:
        root = Element("body", children=_convert_children(soup))

    logger.debug("Parsed HTML into tree with %d top-level nodes", len(root.children))
    return root


def _convert_children(tag: Any) -> list[DocumentNode]:
    children: list[DocumentNode] = []
    for child in tag.children:
        node = _convert_node(child)
        if node is not None:
            children.append(node)
    return children


def _convert_node(node: Any) -> DocumentNode | None:
    from bs4.element import Comment as SoupComment
    from bs4.element import Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

    if isinstance(node, SoupComment):
        return Comment(str(node))
    if isinstance(node, (Doctype, Declaration, ProcessingInstruction)):
        return None
    if isinstance(node, NavigableString):
        return Text(str(node))
    if isinstance(node, Tag):
        if node.name in SKIPPED_TAGS:
            return None
        return _convert_tag(node)
    return None


def _convert_tag(tag: Any) -> Element:
    attributes: dict[str, str] = {}
    for name, value in tag.attrs.items():
        # Multi-valued attributes (class, rel) arrive as lists
        attributes[name.lower()] = " ".join(value) if isinstance(value, list) else str(value)
    return Element(tag.name, attributes, _convert_children(tag))
