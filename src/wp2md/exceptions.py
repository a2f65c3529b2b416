#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wp2md/exceptions.py
"""Custom exceptions for the wp2md library.

This module defines the exception classes raised while reading a WordPress
export, converting post bodies to Markdown and caching embedded assets.

Exception Hierarchy
-------------------
- Wp2MdError (base exception)

  - ValidationError (parameter/option validation)

  - ExportFormatError (unreadable or malformed export file)

  - RecordError (metadata problems fatal to a single export record)
    - UnknownCategoryDomainError (category with an unrecognized domain)
    - MissingPostDateError (post date fields absent or unparseable)

  - ConversionError (HTML to Markdown conversion failures)
    - ImageInBlockquoteError (image inside a blockquote, fail policy)

  - AssetFetchError (recoverable, one per failed asset download)

  - OutputWriteError (converted post cannot be written)

"""

from typing import Any


class Wp2MdError(Exception):
    """Base exception class for all wp2md-specific errors.

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


class ValidationError(Wp2MdError):
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


class ExportFormatError(Wp2MdError):
    """Exception raised when an export file cannot be read or parsed.

    Parameters
    ----------
    message : str
        Description of the problem
    file_path : str, optional
        Path of the offending export file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the export format error."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class RecordError(Wp2MdError):
    """Base exception for metadata errors that abort a single export record.

    Parameters
    ----------
    message : str
        Description of the problem
    post_label : str, optional
        Identifier of the offending record (post id, name or title)
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, post_label: str | None = None, original_error: Exception | None = None):
        """Initialize the record error."""
        super().__init__(message, original_error=original_error)
        self.post_label = post_label


class UnknownCategoryDomainError(RecordError):
    """Exception raised when a category element has an unrecognized domain.

    Only ``category`` and ``post_tag`` are understood; anything else would
    silently misfile the term, so the whole record is rejected.
    """

    def __init__(self, domain: str | None, post_label: str | None = None):
        """Initialize with the offending domain value."""
        super().__init__(f"Unknown category domain: {domain!r}", post_label=post_label)
        self.domain = domain


class MissingPostDateError(RecordError):
    """Exception raised when a record has no usable post date."""

    def __init__(
        self, message: str = "No date info", post_label: str | None = None, original_error: Exception | None = None
    ):
        """Initialize the missing date error."""
        super().__init__(message, post_label=post_label, original_error=original_error)


class ConversionError(Wp2MdError):
    """Exception raised when an HTML fragment cannot be converted.

    Parameters
    ----------
    message : str
        Description of the conversion failure
    post_label : str, optional
        Identifier of the post being converted
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, post_label: str | None = None, original_error: Exception | None = None):
        """Initialize the conversion error."""
        super().__init__(message, original_error=original_error)
        self.post_label = post_label


class ImageInBlockquoteError(ConversionError):
    """Exception raised for an image nested in a blockquote under the fail policy.

    Blockquotes are emitted as literal text in a fenced block, which cannot
    carry image syntax. The image has to be moved out of the quote by hand.

    Parameters
    ----------
    image_source : str
        Effective source of the offending image
    post_label : str, optional
        Identifier of the post being converted

    """

    def __init__(self, image_source: str, post_label: str | None = None):
        """Initialize with the offending image source."""
        where = f" in {post_label}" if post_label else ""
        super().__init__(
            f"Found IMG in Blockquote{where}: {image_source}. Need to resolve it manually.",
            post_label=post_label,
        )
        self.image_source = image_source


class AssetFetchError(Wp2MdError):
    """Exception raised when a remote asset cannot be downloaded or stored.

    Parameters
    ----------
    message : str
        Description of the failure
    uri : str
        Source URI of the asset
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, uri: str, original_error: Exception | None = None):
        """Initialize the asset fetch error."""
        super().__init__(message, original_error=original_error)
        self.uri = uri


class OutputWriteError(Wp2MdError):
    """Exception raised when a converted post cannot be written to disk.

    Parameters
    ----------
    message : str
        Description of the failure
    output_path : str, optional
        Path that could not be written
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, output_path: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        super().__init__(message, original_error=original_error)
        self.output_path = output_path


__all__ = [
    "Wp2MdError",
    "ValidationError",
    "ExportFormatError",
    "RecordError",
    "UnknownCategoryDomainError",
    "MissingPostDateError",
    "ConversionError",
    "ImageInBlockquoteError",
    "AssetFetchError",
    "OutputWriteError",
]
