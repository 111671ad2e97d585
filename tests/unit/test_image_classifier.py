#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_image_classifier.py
"""Unit tests for the image classifier pass.

Tests cover:
- Path keyword classification on whole path tokens
- Signal order: role/style, path, dimensions, surrounding text
- Splitting block images out of running text
- Verbatim blocks left untouched

"""

import pytest

from flare2markup.options import AsciiDocOptions
from flare2markup.postprocess.dialects import AsciiDocDialect
from flare2markup.postprocess.images import ImageClassifier, classify_image_path, classify_images

FORTY_CHARS = "This paragraph has forty characters in it"


@pytest.mark.unit
class TestClassifyImagePath:
    """Tests for classify_image_path."""

    @pytest.mark.parametrize(
        "path",
        [
            "Resources/Images/icons/save.png",
            "Resources/Images/gui/menu.png",
            "Resources/Images/save_button.png",
            "images/Icon-Warning.png",
        ],
    )
    def test_inline_paths(self, path):
        assert classify_image_path(path) is True

    @pytest.mark.parametrize(
        "path",
        ["Resources/Screenshots/dialog.png", "images/screens/main.png", "img/screenshot_2024.png"],
    )
    def test_block_paths(self, path):
        assert classify_image_path(path) is False

    @pytest.mark.parametrize(
        "path", ["Resources/Images/guide.png", "img/iconography/cover.jpg", "Resources/Images/photo.png"]
    )
    def test_inconclusive_paths(self, path):
        """Test keywords only count as whole path tokens."""
        assert classify_image_path(path) is None

    def test_block_keyword_wins(self):
        assert classify_image_path("screenshots/icons/toolbar.png") is False


@pytest.mark.unit
class TestAsciiDocImages:
    """Tests for AsciiDoc image classification."""

    def test_role_icon_after_long_text_is_inline_regardless_of_width(self):
        text = f"{FORTY_CHARS} image::Images/photo.png[Photo,width=400,role=icon] here."
        result = classify_images(text)
        assert result == f"{FORTY_CHARS} image:Images/photo.png[Photo,width=400,role=icon] here."

    def test_wide_standalone_image_is_block(self):
        text = "Intro paragraph.\n\nimage:Images/photo.png[Photo,width=400]\n\nNext paragraph."
        result = classify_images(text)
        assert result == "Intro paragraph.\n\nimage::Images/photo.png[Photo,width=400]\n\nNext paragraph."

    def test_small_dimensions_are_inline(self):
        text = "image::Images/tick.png[Tick,16,16]"
        assert classify_images(text) == "image:Images/tick.png[Tick,width=16,height=16]"

    def test_threshold_comes_from_options(self):
        text = "image::Images/tick.png[Tick,width=40,height=40]"
        assert classify_images(text).startswith("image::")
        options = AsciiDocOptions(inline_image_threshold=48)
        assert classify_images(text, options=options) == "image:Images/tick.png[Tick,width=40,height=40]"

    def test_path_keyword_beats_dimensions(self):
        text = "image:Images/screenshots/main.png[Main,width=20,height=20]"
        assert classify_images(text) == "image::Images/screenshots/main.png[Main,width=20,height=20]"

    def test_inline_by_preceding_text(self):
        text = "Select the option shown next to image:Images/flag.png[] and continue."
        assert classify_images(text) == text

    def test_inline_when_continuing_paragraph_line(self):
        text = "The toolbar shows the current state of the job:\nimage::Images/state.png[]"
        assert classify_images(text) == "The toolbar shows the current state of the job:\nimage:Images/state.png[]"

    def test_block_image_split_out_of_short_text(self):
        text = "Click the image:Images/x.png[] button to continue."
        assert classify_images(text).split("\n") == [
            "Click the",
            "",
            "image::Images/x.png[]",
            "",
            "button to continue.",
        ]

    def test_explicit_role_beats_path_keyword(self):
        text = "image:Images/screenshots/main.png[Main,role=inline]"
        assert classify_images(text) == "image:Images/screenshots/main.png[Main,role=inline]"

    def test_no_blank_line_after_continuation_token(self):
        text = "* Step\n+\nimage:Images/photo.png[Photo,width=400]\n* Next"
        assert classify_images(text) == "* Step\n+\nimage::Images/photo.png[Photo,width=400]\n\n* Next"

    def test_block_title_stays_attached(self):
        text = ".Main window\nimage:Images/photo.png[Photo,width=400]"
        assert classify_images(text) == ".Main window\nimage::Images/photo.png[Photo,width=400]"

    def test_isolated_icon_joins_surrounding_text(self):
        text = "Click the\n\nimage:images/icons/save.png[Save]\n\nbutton to save your work."
        assert classify_images(text) == "Click the\nimage:images/icons/save.png[Save]\nbutton to save your work."

    def test_isolated_small_image_joins_surrounding_text(self):
        text = "Look for\n\nimage::Images/tick.png[Tick,16,16]\n\nin the status bar."
        assert classify_images(text) == "Look for\nimage:Images/tick.png[Tick,width=16,height=16]\nin the status bar."

    def test_isolated_icon_next_to_heading_keeps_blank_lines(self):
        text = "== Toolbar\n\nimage:images/icons/save.png[Save]\n\nSaves the file."
        assert classify_images(text) == text

    def test_isolated_icon_after_list_item_keeps_blank_lines(self):
        text = "* Save\n\nimage:images/icons/save.png[Save]\n\nSaves the file."
        assert classify_images(text) == text

    def test_context_only_image_keeps_blank_lines(self):
        """Test blank lines stay when no role, path or size signal decides the image."""
        text = "Intro.\n\nimage:Images/photo.png[Photo]\n\nNext."
        assert classify_images(text) == "Intro.\n\nimage::Images/photo.png[Photo]\n\nNext."

    def test_images_in_code_blocks_untouched(self):
        text = "----\nimage:Images/photo.png[Photo,width=400]\n----"
        assert classify_images(text) == text

    def test_pass_object_is_callable(self):
        text = "image::Images/tick.png[Tick,16,16]"
        assert ImageClassifier(AsciiDocDialect())(text) == classify_images(text)


@pytest.mark.unit
class TestWritersideImages:
    """Tests for Writerside image classification."""

    def test_button_path_is_inline(self):
        text = "Press ![Save](Images/save_button.png) to keep your changes."
        assert classify_images(text, "writerside") == (
            'Press ![Save](Images/save_button.png){style="inline"} to keep your changes.'
        )

    def test_explicit_inline_style_kept(self):
        text = f'{FORTY_CHARS} ![Logo](Images/logo.png){{style="inline" width="400"}}'
        assert classify_images(text, "writerside") == text

    def test_wide_image_becomes_block(self):
        text = 'See ![Main](Images/main.png){width="400"}'
        assert classify_images(text, "writerside").split("\n") == ["See", "", '![Main](Images/main.png){width="400"}']

    def test_isolated_icon_joins_surrounding_text(self):
        text = "Press\n\n![Save](Images/icons/save.png)\n\nto keep your changes."
        assert classify_images(text, "writerside") == (
            'Press\n![Save](Images/icons/save.png){style="inline"}\nto keep your changes.'
        )

    def test_block_image_without_attributes(self):
        text = "Intro.\n\n![Main](Images/screenshots/main.png)\n\nMore."
        assert classify_images(text, "writerside") == text

    def test_attribute_line_after_block_stays_attached(self):
        text = 'Short text ![Main](Images/screens/main.png)\n{width="400"}'
        assert classify_images(text, "writerside").split("\n") == [
            "Short text",
            "",
            "![Main](Images/screens/main.png)",
            '{width="400"}',
        ]
