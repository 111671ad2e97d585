#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_config.py
"""Unit tests for configuration loading.

Tests cover:
- Key normalization (camelCase, kebab-case)
- Building options from mappings with per-format overrides
- Loading JSON, TOML, YAML and pyproject.toml files
- Error reporting for missing, malformed and invalid configuration

"""

import json

import pytest

from flare2markup.config import (
    discover_config_file,
    load_config_file,
    load_options,
    merge_configs,
    normalize_key,
    options_from_mapping,
)
from flare2markup.exceptions import ConfigError, FormatError, ValidationError
from flare2markup.options import AsciiDocOptions, WritersideOptions, ZendeskOptions


@pytest.mark.unit
class TestNormalizeKey:
    """Tests for normalize_key."""

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("useAlphabeticalMarkers", "use_alphabetical_markers"),
            ("maxNestingDepth", "max_nesting_depth"),
            ("indent-size", "indent_size"),
            ("detect_sibling_lists", "detect_sibling_lists"),
        ],
    )
    def test_normalize(self, key, expected):
        assert normalize_key(key) == expected


@pytest.mark.unit
class TestOptionsFromMapping:
    """Tests for options_from_mapping."""

    def test_empty_mapping_gives_defaults(self):
        assert options_from_mapping("asciidoc", {}) == AsciiDocOptions()

    def test_camel_case_keys(self):
        options = options_from_mapping("writerside", {"useAlphabeticalMarkers": False, "indentSize": 2})
        assert isinstance(options, WritersideOptions)
        assert options.use_alphabetical_markers is False
        assert options.indent_size == 2

    def test_format_section_overrides_top_level(self):
        mapping = {"indent_size": 3, "writerside": {"indent_size": 2}, "zendesk": {"indent_size": 8}}
        assert options_from_mapping("asciidoc", mapping).indent_size == 3
        assert options_from_mapping("writerside", mapping).indent_size == 2
        assert options_from_mapping("zendesk", mapping).indent_size == 8

    def test_unknown_key_raises(self):
        with pytest.raises(ValidationError, match="Unknown option") as exc_info:
            options_from_mapping("asciidoc", {"useColors": True})
        assert exc_info.value.parameter_name == "useColors"

    def test_wrong_value_type_raises(self):
        with pytest.raises(ValidationError, match="expects int"):
            options_from_mapping("asciidoc", {"indent_size": "4"})
        with pytest.raises(ValidationError, match="expects bool"):
            options_from_mapping("asciidoc", {"detect_sibling_lists": 1})

    def test_out_of_range_value_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            options_from_mapping("asciidoc", {"max_nesting_depth": 0})
        assert isinstance(exc_info.value.original_error, ValueError)

    def test_format_section_must_be_mapping(self):
        with pytest.raises(ValidationError):
            options_from_mapping("asciidoc", {"asciidoc": [1, 2]})

    def test_unknown_format_raises(self):
        with pytest.raises(FormatError):
            options_from_mapping("markdown", {})


@pytest.mark.unit
class TestMergeConfigs:
    """Tests for merge_configs."""

    def test_nested_merge(self):
        base = {"asciidoc": {"indent_size": 2}, "detect_sibling_lists": True}
        override = {"asciidoc": {"use_alphabetical_markers": False}, "detect_sibling_lists": False}
        assert merge_configs(base, override) == {
            "asciidoc": {"indent_size": 2, "use_alphabetical_markers": False},
            "detect_sibling_lists": False,
        }
        assert base == {"asciidoc": {"indent_size": 2}, "detect_sibling_lists": True}


@pytest.mark.unit
class TestLoadConfigFile:
    """Tests for reading configuration files."""

    def test_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"indentSize": 2}), encoding="utf-8")
        assert load_config_file(path) == {"indentSize": 2}

    def test_toml(self, tmp_path):
        path = tmp_path / ".flare2markup.toml"
        path.write_text("detect_sibling_lists = false\n\n[writerside]\nindent_size = 2\n", encoding="utf-8")
        assert load_config_file(path) == {"detect_sibling_lists": False, "writerside": {"indent_size": 2}}

    def test_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("sibling_list_mode: loose\nasciidoc:\n  max_nesting_depth: 4\n", encoding="utf-8")
        assert load_config_file(path) == {"sibling_list_mode": "loose", "asciidoc": {"max_nesting_depth": 4}}

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_pyproject_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[project]\nname = "docs"\n\n[tool.flare2markup]\nclassify_sections = false\n', encoding="utf-8"
        )
        assert load_config_file(path) == {"classify_sections": False}

    def test_pyproject_without_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "docs"\n', encoding="utf-8")
        assert load_config_file(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="does not exist") as exc_info:
            load_config_file(tmp_path / "missing.toml")
        assert exc_info.value.config_path.endswith("missing.toml")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "settings.ini"
        path.write_text("[x]\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Unsupported"):
            load_config_file(path)

    @pytest.mark.parametrize(
        "filename,content",
        [("bad.json", "{not json"), ("bad.toml", "a = = 1"), ("bad.yaml", "a: [1, 2")],
    )
    def test_malformed_files(self, tmp_path, filename, content):
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)
        assert exc_info.value.original_error is not None

    def test_json_must_be_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError, match="must contain an object"):
            load_config_file(path)


@pytest.mark.unit
class TestDiscoveryAndLoadOptions:
    """Tests for discover_config_file and load_options."""

    def test_dedicated_file_preferred_over_pyproject(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.flare2markup]\nindent_size = 3\n", encoding="utf-8")
        dedicated = tmp_path / ".flare2markup.yaml"
        dedicated.write_text("indent_size: 2\n", encoding="utf-8")
        assert discover_config_file(tmp_path) == dedicated.resolve()

    def test_pyproject_with_section_found_from_subdirectory(self, tmp_path):
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.flare2markup]\nindent_size = 3\n", encoding="utf-8")
        nested = tmp_path / "topics" / "install"
        nested.mkdir(parents=True)
        assert discover_config_file(nested) == pyproject.resolve()

    def test_pyproject_without_section_is_skipped(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "docs"\n', encoding="utf-8")
        assert discover_config_file(tmp_path) != (tmp_path / "pyproject.toml").resolve()

    def test_load_options_from_path(self, tmp_path):
        path = tmp_path / ".flare2markup.toml"
        path.write_text("useAlphabeticalMarkers = false\n\n[zendesk]\nmaxNestingDepth = 3\n", encoding="utf-8")
        options = load_options("zendesk", path)
        assert isinstance(options, ZendeskOptions)
        assert options.use_alphabetical_markers is False
        assert options.max_nesting_depth == 3

    def test_load_options_discovers_from_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".flare2markup.json").write_text(json.dumps({"indent_size": 6}), encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert load_options("writerside").indent_size == 6

    def test_load_options_rejects_unknown_keys(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("bogus_option: 1\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_options("asciidoc", path)
