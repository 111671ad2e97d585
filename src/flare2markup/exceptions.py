#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/exceptions.py
"""Custom exceptions for the flare2markup library.

This module defines the exception classes raised by the conversion core and
its collaborators. The conversion core repairs rather than rejects malformed
document trees, so these exceptions signal caller programming errors
(missing tree, unknown target format, wrong options class) and failures in the
surrounding layers (HTML parsing, configuration loading, optional packages).

Exception Hierarchy
-------------------
- Flare2MarkupError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a target format)

  - FormatError (unknown target format)

  - ParsingError (HTML could not be turned into a document tree)

  - ConfigError (configuration file missing or unreadable)

  - DependencyError (missing/incompatible packages)

"""

from typing import Any


class Flare2MarkupError(Exception):
    """Base exception class for all flare2markup-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Flare2MarkupError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an options object of the wrong class is supplied.

    For example, passing ``WritersideOptions`` to the AsciiDoc renderer.

    Parameters
    ----------
    format_name : str
        Target format that received the invalid options
    expected_type : type
        The expected options class
    received_type : type
        The options class that was actually received
    message : str, optional
        Custom error message. If not provided, a helpful one is generated

    """

    def __init__(
        self,
        format_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the error with the expected and received options types."""
        if message is None:
            message = (
                f"Invalid options type for '{format_name}' output. "
                f"Expected {expected_type.__name__}, got {received_type.__name__}."
            )
        super().__init__(
            message,
            parameter_name="options",
            parameter_value=received_type,
            original_error=original_error,
        )
        self.format_name = format_name
        self.expected_type = expected_type
        self.received_type = received_type


class FormatError(Flare2MarkupError):
    """Exception raised for an unknown or unsupported target format.

    Parameters
    ----------
    format_name : str
        The format selector that was requested
    supported_formats : list of str, optional
        The selectors that are available

    """

    def __init__(self, format_name: str, supported_formats: list[str] | None = None):
        """Initialize the error with the requested and supported formats."""
        self.format_name = format_name
        self.supported_formats = supported_formats or []
        message = f"Unknown target format: {format_name!r}"
        if self.supported_formats:
            message += f". Supported formats: {', '.join(self.supported_formats)}"
        super().__init__(message)


class ParsingError(Flare2MarkupError):
    """Exception raised when input markup cannot be turned into a document tree.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    original_error : Exception, optional
        The underlying parser exception

    """


class ConfigError(Flare2MarkupError):
    """Exception raised when a configuration file cannot be found or read.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        Path of the offending configuration file
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the error with the configuration path."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


class DependencyError(Flare2MarkupError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    converter_name : str
        Name of the component requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    Attributes
    ----------
    install_command : str
        Command to install missing dependencies

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error

        packages_to_install = [f"{name}{spec}" if spec else name for name, spec in missing_packages]
        packages_to_install.extend(f"{name}{required}" for name, required, _ in version_mismatches)
        self.install_command = f"pip install {' '.join(packages_to_install)}" if packages_to_install else ""

        if message is None:
            message_parts = []
            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{converter_name.upper()} support requires the following packages: {pkg_list}")
            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{converter_name.upper()} support has version mismatches: {mismatch_str}")
            message = ". ".join(message_parts) or f"Missing dependencies for {converter_name}"
            if self.install_command:
                message += f". Install with: {self.install_command}"

        super().__init__(message, original_error=original_import_error)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
