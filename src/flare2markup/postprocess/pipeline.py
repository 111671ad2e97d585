#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/postprocess/pipeline.py
"""Post-pass pipeline for line-oriented target formats.

The passes run in a fixed order over the finished document text:

1. :class:`~flare2markup.postprocess.continuation.ContinuationFixer`
2. :class:`~flare2markup.postprocess.images.ImageClassifier`
3. :class:`~flare2markup.postprocess.sections.SectionClassifier` (when
   ``classify_sections`` is enabled)
4. :class:`~flare2markup.postprocess.admonitions.AdmonitionAssembler`

Zendesk HTML is produced in its final form by the renderer and is returned
unchanged.

"""

from __future__ import annotations

import logging
from typing import Optional

from flare2markup.options import ConversionOptions
from flare2markup.postprocess.admonitions import AdmonitionAssembler
from flare2markup.postprocess.base import TextPass
from flare2markup.postprocess.continuation import ContinuationFixer
from flare2markup.postprocess.dialects import get_dialect
from flare2markup.postprocess.images import ImageClassifier
from flare2markup.postprocess.sections import SectionClassifier
from flare2markup.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

LINE_ORIENTED_FORMATS = frozenset({"asciidoc", "writerside"})


def build_passes(format_name: str, options: Optional[ConversionOptions] = None) -> list[TextPass]:
    """Return the passes that apply to ``format_name``, in execution order."""
    if format_name not in LINE_ORIENTED_FORMATS:
        return []
    options = options or ConversionOptions()
    dialect = get_dialect(format_name)
    passes: list[TextPass] = [ContinuationFixer(dialect, options), ImageClassifier(dialect, options)]
    if options.classify_sections:
        passes.append(SectionClassifier(dialect, options))
    passes.append(AdmonitionAssembler(dialect, options))
    return passes


def run_post_passes(content: str, format_name: str, options: Optional[ConversionOptions] = None) -> str:
    """Run every applicable post-pass over ``content``.

    Parameters
    ----------
    content : str
        Rendered document text
    format_name : str
        Target format the text was rendered for
    options : ConversionOptions or None, default None
        Options supplying pass thresholds and the section-classifier switch

    Returns
    -------
    str
        Normalized text; unchanged for formats without post-passes

    """
    passes = build_passes(format_name, options)
    if not passes:
        return content

    trailing_newline = content.endswith("\n")
    text = content[:-1] if trailing_newline else content
    for text_pass in passes:
        with debug_timer(logger, f"Post-pass {text_pass.name} ({format_name})"):
            text = text_pass.run(text)
    return text + "\n" if trailing_newline else text
