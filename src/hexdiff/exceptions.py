#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the hexdiff library.

This module defines specialized exception classes for the error conditions
that can occur while loading memory images, configuring a comparison and
writing its output. The diff engine itself never raises; every fallible step
lives at the boundary (file I/O, parsing, configuration, rendering).

Exception Hierarchy
-------------------
- HexDiffError (base exception)

  - ValidationError (parameter/option validation)
    - IgnoreRangeError (ignore-range specification errors)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - FileAccessError (permissions, directories, unreadable files)

  - ParsingError (unrecoverable hex content)

  - RenderingError (output generation failures)
    - OutputWriteError (file write failures)

  - DependencyError (missing optional packages)

"""

from typing import Any


class HexDiffError(Exception):
    """Base exception class for all hexdiff-specific errors.

    Catching this will catch all library-specific errors.

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


class ValidationError(HexDiffError):
    """Exception raised for invalid input parameters or options.

    This covers invalid memory words, out-of-order sequences, unknown
    output formats and malformed configuration values.

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

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

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


class IgnoreRangeError(ValidationError):
    """Exception raised for invalid ignore-range specifications.

    Parameters
    ----------
    message : str
        Description of the range error
    parameter_value : any, optional
        The invalid range specification
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, parameter_value: Any = None, original_error: Exception | None = None):
        """Initialize the ignore range error."""
        super().__init__(
            message, parameter_name="ignore", parameter_value=parameter_value, original_error=original_error
        )


class FileError(HexDiffError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    file_path : str or None
        Path to the file that caused the error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when a file cannot be found.

    Parameters
    ----------
    file_path : str
        Path to the file that was not found
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when a file exists but cannot be read.

    Parameters
    ----------
    file_path : str
        Path to the file that cannot be accessed
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class ParsingError(HexDiffError):
    """Exception raised when a memory image cannot be built from hex input.

    Malformed individual records are skipped rather than reported; this
    error is reserved for content that cannot be represented at all, such
    as two data records writing the same byte.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    Attributes
    ----------
    parsing_stage : str or None
        Where in the parsing process the error occurred

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(HexDiffError):
    """Exception raised when output rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    Attributes
    ----------
    rendering_stage : str or None
        Where in the rendering process the error occurred

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """Exception raised when rendered output cannot be written.

    Parameters
    ----------
    message : str
        Description of the write failure
    output_path : str, optional
        Path of the output file
    original_error : Exception, optional
        The underlying exception that caused the failure

    """

    def __init__(self, message: str, output_path: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        super().__init__(message, rendering_stage="write", original_error=original_error)
        self.output_path = output_path


class DependencyError(HexDiffError):
    """Exception raised when an optional dependency is not available.

    Parameters
    ----------
    feature_name : str
        Name of the feature requiring the dependency
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    install_command : str, optional
        Suggested pip install command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_import_error : ImportError, optional
        The import failure that triggered this error

    Attributes
    ----------
    feature_name : str
        The feature that has missing dependencies
    missing_packages : list[tuple[str, str]]
        Packages that need to be installed
    install_command : str
        Command to install missing dependencies

    """

    def __init__(
        self,
        feature_name: str,
        missing_packages: list[tuple[str, str]],
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        if message is None:
            pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
            message = f"{feature_name} requires the following packages: {pkg_list}"
            if install_command:
                message += f". Install with: {install_command}"

        super().__init__(message, original_error=original_import_error)
        self.feature_name = feature_name
        self.missing_packages = missing_packages
        self.install_command = install_command
        self.original_import_error = original_import_error
