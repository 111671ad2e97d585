#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/postprocess/__init__.py
"""Text normalizers run over rendered AsciiDoc and Writerside output."""

from flare2markup.postprocess.admonitions import AdmonitionAssembler, assemble_admonitions
from flare2markup.postprocess.base import TextPass
from flare2markup.postprocess.continuation import ContinuationFixer, fix_list_continuation
from flare2markup.postprocess.dialects import AsciiDocDialect, TextDialect, WritersideDialect, get_dialect
from flare2markup.postprocess.images import ImageClassifier, classify_image_path, classify_images
from flare2markup.postprocess.pipeline import build_passes, run_post_passes
from flare2markup.postprocess.sections import SectionAction, SectionClassifier, classify_section, classify_sections

__all__ = [
    "AdmonitionAssembler",
    "AsciiDocDialect",
    "ContinuationFixer",
    "ImageClassifier",
    "SectionAction",
    "SectionClassifier",
    "TextDialect",
    "TextPass",
    "WritersideDialect",
    "assemble_admonitions",
    "build_passes",
    "classify_image_path",
    "classify_images",
    "classify_section",
    "classify_sections",
    "fix_list_continuation",
    "get_dialect",
    "run_post_passes",
]
