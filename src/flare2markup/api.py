#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/api.py
"""The exported API functions for converting Flare documents."""

from __future__ import annotations

import logging
from dataclasses import fields
from functools import lru_cache
from typing import Any, Mapping, Optional

from flare2markup.ast.nodes import Element
from flare2markup.constants import TARGET_FORMATS
from flare2markup.converters.result import ConversionResult
from flare2markup.exceptions import FormatError, ValidationError
from flare2markup.options import OPTIONS_CLASSES, ConversionOptions
from flare2markup.parsers.html import parse_html
from flare2markup.renderers import RENDERERS, BaseRenderer

logger = logging.getLogger(__name__)


def _check_format(target_format: str) -> None:
    if target_format not in RENDERERS:
        raise FormatError(target_format, list(TARGET_FORMATS))


def _resolve_options(target_format: str, options: Optional[ConversionOptions], **kwargs: Any) -> ConversionOptions:
    """Return the options for ``target_format`` with keyword overrides applied.

    Raises
    ------
    ValidationError
        If a keyword does not name an option field or its value is out of range

    """
    options = options or OPTIONS_CLASSES[target_format]()
    if not kwargs:
        return options

    known = {f.name for f in fields(options)}
    unknown = sorted(set(kwargs) - known)
    if unknown:
        raise ValidationError(
            f"Unknown option(s) for {target_format}: {', '.join(unknown)}",
            parameter_name=unknown[0],
            parameter_value=kwargs[unknown[0]],
        )
    try:
        return options.create_updated(**kwargs)
    except ValueError as e:
        raise ValidationError(str(e), original_error=e) from e


@lru_cache(maxsize=32)
def _cached_renderer(target_format: str, options: ConversionOptions) -> BaseRenderer:
    logger.debug("Building %s renderer", target_format)
    return RENDERERS[target_format](options)


def get_renderer(target_format: str, options: Optional[ConversionOptions] = None) -> BaseRenderer:
    """Return a renderer for ``target_format``.

    Renderers hold only their frozen rule table and options, so instances are
    cached per (format, options) pair and shared between conversions.

    Parameters
    ----------
    target_format : {"asciidoc", "writerside", "zendesk"}
        Target-format selector
    options : ConversionOptions, optional
        Options for the format; must be the format's options class

    Returns
    -------
    BaseRenderer
        Renderer instance

    Raises
    ------
    FormatError
        If ``target_format`` is not a known format
    InvalidOptionsError
        If ``options`` is of the wrong class for the format

    """
    _check_format(target_format)
    options = options or OPTIONS_CLASSES[target_format]()
    return _cached_renderer(target_format, options)


def convert_document(
    root: Element,
    target_format: str,
    options: Optional[ConversionOptions] = None,
    *,
    variables: Optional[Mapping[str, str]] = None,
    snippets: Optional[Mapping[str, Element]] = None,
    cross_references: Optional[Mapping[str, str]] = None,
    **kwargs: Any,
) -> ConversionResult:
    """Convert a cleaned document tree to target-format text.

    Parameters
    ----------
    root : Element
        Root of the document tree, typically the ``body`` element
    target_format : {"asciidoc", "writerside", "zendesk"}
        Target-format selector
    options : ConversionOptions, optional
        Options for the format; defaults for the format when omitted
    variables : Mapping[str, str], optional
        Resolved variable values keyed by ``Set.Name``
    snippets : Mapping[str, Element], optional
        Pre-loaded snippet trees keyed by snippet path
    cross_references : Mapping[str, str], optional
        Link target rewrites, e.g. ``{"topic.htm": "topic.adoc"}``
    **kwargs
        Individual option overrides applied on top of ``options``

    Returns
    -------
    ConversionResult
        The converted content and its metadata

    Raises
    ------
    FormatError
        If ``target_format`` is not a known format
    ValidationError
        If ``root`` is missing or an option override is invalid

    Examples
    --------
        >>> from flare2markup import convert_html
        >>> result = convert_html("<ol type='a'><li>One</li></ol>", "asciidoc")
        >>> print(result.content)
        [loweralpha]
        . One
        <BLANKLINE>

    """
    _check_format(target_format)
    if root is None:
        raise ValidationError("A document tree is required", parameter_name="root", parameter_value=None)

    resolved = _resolve_options(target_format, options, **kwargs)
    renderer = get_renderer(target_format, resolved)
    result = renderer.convert(root, variables=variables, snippets=snippets, cross_references=cross_references)
    if result.metadata.warnings:
        logger.debug("Conversion to %s finished with %d warning(s)", target_format, len(result.metadata.warnings))
    return result


def convert_html(
    html: str,
    target_format: str,
    options: Optional[ConversionOptions] = None,
    *,
    parser: str = "html.parser",
    **kwargs: Any,
) -> ConversionResult:
    """Parse an HTML string and convert it to target-format text.

    Parameters
    ----------
    html : str
        Cleaned topic HTML
    target_format : {"asciidoc", "writerside", "zendesk"}
        Target-format selector
    options : ConversionOptions, optional
        Options for the format
    parser : str, default "html.parser"
        BeautifulSoup tree builder
    **kwargs
        Lookup maps (``variables``, ``snippets``, ``cross_references``) and
        option overrides, as for :func:`convert_document`

    Returns
    -------
    ConversionResult
        The converted content and its metadata

    """
    _check_format(target_format)
    root = parse_html(html, parser=parser)
    return convert_document(root, target_format, options, **kwargs)
