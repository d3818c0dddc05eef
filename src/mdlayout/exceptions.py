#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdlayout library.

This module defines specialized exception classes for the error conditions
that can occur while turning a Markdown AST into a layout element tree.

Exception Hierarchy
-------------------
- MdLayoutError (base exception)

  - ValidationError (parameter/option validation)
    - ConfigError (configuration file problems)

  - ParsingError (Markdown source parsing failures)

  - RenderingError (layout backend failures)

  - TransformError (content transform failures, recovered by fallbacks)
    - DiagramRenderError (diagram rasterization failures)

  - StructuralError (programming errors that abort a conversion)
    - StackUnderflowError (pop past the floor of a context stack)
    - NoOpenTableError (table-scoped processor outside a table)

  - DependencyError (missing/incompatible packages)

"""

from __future__ import annotations

from typing import Any


class MdLayoutError(Exception):
    """Base exception class for all mdlayout-specific errors.

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


class ValidationError(MdLayoutError):
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


class ConfigError(ValidationError):
    """Exception raised when a configuration file cannot be loaded or applied.

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
        """Initialize the configuration error."""
        super().__init__(message, parameter_name="config", parameter_value=config_path, original_error=original_error)
        self.config_path = config_path


class ParsingError(MdLayoutError):
    """Exception raised when the Markdown source cannot be turned into an AST."""


class RenderingError(MdLayoutError):
    """Exception raised when the layout backend fails to produce output.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class TransformError(MdLayoutError):
    """Exception raised when a content transform cannot process its input.

    Content transforms report failures with this exception so that a
    fallback combinator can substitute another transform.

    Parameters
    ----------
    message : str
        Description of the failure
    language : str, optional
        Language tag of the verbatim block being transformed
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(self, message: str, language: str | None = None, original_error: Exception | None = None):
        """Initialize the transform error."""
        super().__init__(message, original_error)
        self.language = language


class DiagramRenderError(TransformError):
    """Exception raised when a diagram description cannot be rasterized."""


class StructuralError(MdLayoutError):
    """Exception raised when a structural invariant of the conversion is violated.

    These are programming errors: the conversion is aborted instead of
    producing a structurally invalid element tree.
    """


class StackUnderflowError(StructuralError):
    """Exception raised when popping past the floor of a render context stack.

    Parameters
    ----------
    stack_name : str
        Name of the stack ("font", "table" or "cell-styler")

    """

    def __init__(self, stack_name: str):
        """Initialize the underflow error."""
        super().__init__(f"Cannot pop from the {stack_name} stack: no scoped entry left")
        self.stack_name = stack_name


class NoOpenTableError(StructuralError):
    """Exception raised when a table-scoped processor runs outside of a table.

    Parameters
    ----------
    what : str
        The table state that was requested

    """

    def __init__(self, what: str = "table"):
        """Initialize the error."""
        super().__init__(f"No open {what}: table rows and cells must be processed inside a table")
        self.what = what


class DependencyError(MdLayoutError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    converter_name : str
        Name of the component requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    install_command : str, optional
        Suggested pip install command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_import_error : ImportError, optional
        The first ImportError encountered

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{converter_name} requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_details = [
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                ]
                message_parts.append(f"{converter_name} has version mismatches: {', '.join(mismatch_details)}")

            message = "\n".join(message_parts)

            if install_command:
                message += f"\nInstall with: {install_command}"
            else:
                all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
                if all_packages:
                    packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                    message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message, original_error=original_import_error)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
