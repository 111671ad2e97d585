#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/config.py
"""Configuration file discovery and loading.

Options can be stored in JSON, TOML or YAML files, or in the
``[tool.flare2markup]`` table of a ``pyproject.toml``. Top-level keys apply to
every target format; a sub-table named after a format (``asciidoc``,
``writerside``, ``zendesk``) overrides them for that format:

.. code-block:: toml

    [tool.flare2markup]
    detect_sibling_lists = true

    [tool.flare2markup.writerside]
    indent_size = 2

Keys may be written in snake_case, kebab-case or camelCase
(``useAlphabeticalMarkers``).

"""

from __future__ import annotations

import json
import logging
import re
import sys
from dataclasses import MISSING, fields
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from flare2markup.constants import TARGET_FORMATS
from flare2markup.exceptions import ConfigError, FormatError, ValidationError
from flare2markup.options import OPTIONS_CLASSES, ConversionOptions

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = [
    ".flare2markup.toml",
    ".flare2markup.yaml",
    ".flare2markup.yml",
    ".flare2markup.json",
    "pyproject.toml",
]

_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")


def normalize_key(key: str) -> str:
    """Return the snake_case option name for a configuration key.

    Examples
    --------
        >>> normalize_key("useAlphabeticalMarkers")
        'use_alphabetical_markers'
        >>> normalize_key("indent-size")
        'indent_size'

    """
    return _CAMEL_BOUNDARY_RE.sub("_", key).replace("-", "_").lower()


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.flare2markup]`` table, or an empty dict when absent."""
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)

    config = data.get("tool", {}).get("flare2markup", {})
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.flare2markup] section must be a table, got {type(config).__name__}",
            config_path=str(pyproject_path),
        )
    return config


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    with open(config_path, "rb") as f:
        return tomllib.load(f)


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    with open(config_path, "r", encoding="utf-8") as f:
        config = json.load(f)
    if not isinstance(config, dict):
        raise ConfigError(
            f"JSON config file must contain an object, got {type(config).__name__}", config_path=str(config_path)
        )
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"YAML config file must contain a mapping, got {type(config).__name__}", config_path=str(config_path)
        )
    return config


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a configuration mapping from JSON, TOML, YAML or pyproject.toml.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Raw configuration mapping

    Raises
    ------
    ConfigError
        If the file does not exist, has an unsupported extension or cannot be parsed

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", config_path=str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    try:
        if filename == "pyproject.toml":
            return _load_pyproject_section(config_path)
        elif ext == ".toml":
            return _load_toml_config(config_path)
        elif ext in (".yaml", ".yml"):
            return _load_yaml_config(config_path)
        elif ext == ".json":
            return _load_json_config(config_path)
        else:
            raise ConfigError(
                f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", config_path=str(config_path)
            )
    except ConfigError:
        raise
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}", config_path=str(config_path), original_error=e) from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}", config_path=str(config_path), original_error=e) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}", config_path=str(config_path), original_error=e) from e
    except OSError as e:
        raise ConfigError(
            f"Error reading config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file in ``start_dir`` or its parents.

    Dedicated ``.flare2markup.*`` files win over ``pyproject.toml`` in the same
    directory; a ``pyproject.toml`` only counts when it has a
    ``[tool.flare2markup]`` table.
    """
    current = (start_dir or Path.cwd()).resolve()
    for directory in [current, *current.parents]:
        for filename in CONFIG_FILENAMES[:-1]:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        pyproject = directory / "pyproject.toml"
        if pyproject.is_file():
            try:
                if _load_pyproject_section(pyproject):
                    return pyproject
            except (OSError, tomllib.TOMLDecodeError, ConfigError) as e:
                logger.debug("Ignoring unreadable %s: %s", pyproject, e)
    return None


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries; nested dictionaries merge recursively.

    Examples
    --------
        >>> merge_configs({"asciidoc": {"indent_size": 2}, "a": 1}, {"asciidoc": {"x": 3}})
        {'asciidoc': {'indent_size': 2, 'x': 3}, 'a': 1}

    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def _check_value_type(name: str, value: Any, default: Any) -> None:
    if isinstance(default, bool):
        ok = isinstance(value, bool)
    elif isinstance(default, int):
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif isinstance(default, str):
        ok = isinstance(value, str)
    else:
        ok = True
    if not ok:
        raise ValidationError(
            f"Option {name!r} expects {type(default).__name__}, got {type(value).__name__}",
            parameter_name=name,
            parameter_value=value,
        )


def options_from_mapping(target_format: str, mapping: Mapping[str, Any]) -> ConversionOptions:
    """Build the options object for ``target_format`` from a configuration mapping.

    Parameters
    ----------
    target_format : {"asciidoc", "writerside", "zendesk"}
        Target-format selector
    mapping : Mapping[str, Any]
        Option values; sub-mappings keyed by format name override the
        top-level values for that format

    Returns
    -------
    ConversionOptions
        Instance of the format's options class

    Raises
    ------
    FormatError
        If ``target_format`` is unknown
    ValidationError
        If a key is not an option, a value has the wrong type, or a value is out of range

    """
    if target_format not in OPTIONS_CLASSES:
        raise FormatError(target_format, list(TARGET_FORMATS))

    options_class = OPTIONS_CLASSES[target_format]
    option_fields = {f.name: f for f in fields(options_class)}

    flat = {key: value for key, value in mapping.items() if key not in TARGET_FORMATS}
    section = mapping.get(target_format) or {}
    if not isinstance(section, Mapping):
        raise ValidationError(
            f"Configuration for {target_format} must be a mapping, got {type(section).__name__}",
            parameter_name=target_format,
            parameter_value=section,
        )
    merged = merge_configs(flat, dict(section))

    values: dict[str, Any] = {}
    for key, value in merged.items():
        name = normalize_key(key)
        option_field = option_fields.get(name)
        if option_field is None:
            raise ValidationError(f"Unknown option {key!r} for {target_format}", parameter_name=key, parameter_value=value)
        default = option_field.default if option_field.default is not MISSING else None
        _check_value_type(name, value, default)
        values[name] = value

    try:
        return options_class(**values)
    except ValueError as e:
        raise ValidationError(str(e), original_error=e) from e


def load_options(target_format: str, path: Path | str | None = None) -> ConversionOptions:
    """Load options for ``target_format`` from a configuration file.

    Parameters
    ----------
    target_format : {"asciidoc", "writerside", "zendesk"}
        Target-format selector
    path : Path or str, optional
        Configuration file; when omitted the nearest configuration file is
        discovered from the working directory, and defaults are used if none exists

    Returns
    -------
    ConversionOptions
        Instance of the format's options class

    Raises
    ------
    ConfigError
        If the file is missing or unreadable
    ValidationError
        If the file contains unknown keys or invalid values

    """
    config_path = Path(path) if path is not None else discover_config_file()
    if config_path is None:
        logger.debug("No configuration file found; using %s defaults", target_format)
        return options_from_mapping(target_format, {})

    logger.debug("Loading %s options from %s", target_format, config_path)
    return options_from_mapping(target_format, load_config_file(config_path))
