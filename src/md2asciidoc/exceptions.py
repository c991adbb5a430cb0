#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the md2asciidoc library.

This module defines specialized exception classes for the error conditions
that can occur during a Markdown to AsciiDoc conversion. Content anomalies
(unmatched TOC markers, duplicate IDs, out-of-range heading levels) are
normalized silently and never raise.

Exception Hierarchy
-------------------
- Md2AsciiDocError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (invalid option value or combination)

  - FileError (file access and I/O)
    - OutputWriteError (file write failures)

  - ParsingError (Markdown parsing failures)

  - TransformError (tree transformation failures)

  - RenderingError (AsciiDoc generation failures)

"""

from typing import Any


class Md2AsciiDocError(Exception):
    """Base exception class for all md2asciidoc-specific errors.

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


class ValidationError(Md2AsciiDocError):
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
    """Exception raised when conversion options are invalid.

    This is the configuration error of the conversion facade: it is raised
    before any transformation begins and is distinct from content errors.

    Parameters
    ----------
    message : str
        Description of the invalid option
    parameter_name : str, optional
        Name of the offending option field
    parameter_value : any, optional
        The rejected value
    original_error : Exception, optional
        The original exception that caused this error

    """


class FileError(Md2AsciiDocError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path of the file involved
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error."""
        super().__init__(message, original_error)
        self.file_path = file_path


class OutputWriteError(FileError):
    """Exception raised when writing the output file fails."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class ParsingError(Md2AsciiDocError):
    """Exception raised when Markdown parsing fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class TransformError(Md2AsciiDocError):
    """Exception raised when a tree transformation fails unexpectedly.

    Parameters
    ----------
    message : str
        Description of the transform failure
    transform_name : str, optional
        Name of the transform that failed
    original_error : Exception, optional
        The underlying exception that caused the transform failure

    """

    def __init__(self, message: str, transform_name: str | None = None, original_error: Exception | None = None):
        """Initialize the transform error."""
        super().__init__(message, original_error)
        self.transform_name = transform_name


class RenderingError(Md2AsciiDocError):
    """Exception raised when AsciiDoc rendering fails.

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


__all__ = [
    "Md2AsciiDocError",
    "ValidationError",
    "InvalidOptionsError",
    "FileError",
    "OutputWriteError",
    "ParsingError",
    "TransformError",
    "RenderingError",
]
