#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the htmlstitch library.

This module defines the exception classes raised while parsing documents,
resolving fragment placeholders and hoisting elements into the document head.

Exception Hierarchy
-------------------
- StitchError (base exception)

  - ValidationError (option/configuration validation)

  - DependencyError (missing BeautifulSoup tree builder)

  - ParsingError (top-level document parsing failures)

  - ResolutionError (a single placeholder could not be resolved)
    - MissingSourceError (no usable ``src`` attribute)
    - FragmentTransportError (DNS, connection, timeout)
    - UpstreamStatusError (non-200 response)
    - FragmentParseError (response body not parseable)
    - FragmentDepthError (nesting limit exceeded)

  - SectionNotFoundError (required document section is missing)

Resolution errors never escape ``Composer.compose_node``; they are turned into
fallback content where they occur.

"""

from typing import Any


class StitchError(Exception):
    """Base exception class for all htmlstitch-specific errors.

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


class ValidationError(StitchError):
    """Exception raised for invalid options or configuration values.

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


class DependencyError(StitchError):
    """Exception raised when a configured HTML tree builder is not installed.

    Parameters
    ----------
    parser_name : str
        BeautifulSoup tree builder that was requested (e.g. ``"lxml"``)
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        parser_name: str,
        missing_packages: list[tuple[str, str]],
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with package details."""
        if message is None:
            message = f"HTML parser '{parser_name}' is not available"
            if missing_packages:
                packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in missing_packages)
                message += f"\nInstall with: pip install {packages_str}"
        super().__init__(message, original_error=original_error)
        self.parser_name = parser_name
        self.missing_packages = missing_packages


class ParsingError(StitchError):
    """Exception raised when the input document cannot be parsed.

    Raised by ``Composer.compose`` before any placeholder is touched.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred (``"read"``, ``"parse"``)
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class ResolutionError(StitchError):
    """Base exception for a placeholder that could not be resolved.

    Parameters
    ----------
    message : str
        Description of the failure
    url : str, optional
        Source URL of the placeholder, when one was present
    original_error : Exception, optional
        The underlying exception

    Attributes
    ----------
    url : str or None
        The ``src`` the resolver attempted

    """

    def __init__(self, message: str, url: str | None = None, original_error: Exception | None = None):
        """Initialize the resolution error."""
        super().__init__(message, original_error)
        self.url = url


class MissingSourceError(ResolutionError):
    """Exception raised when a placeholder has no usable ``src`` attribute."""

    def __init__(self, message: str | None = None):
        """Initialize the missing source error."""
        super().__init__(message or "Fragment has no src attribute")


class FragmentTransportError(ResolutionError):
    """Exception raised when the fragment source could not be reached.

    Wraps the HTTP client's error (DNS failure, refused connection, timeout,
    invalid URL) in ``original_error``.

    """

    def __init__(self, url: str, original_error: Exception | None = None):
        """Initialize the transport error."""
        super().__init__(
            f"Could not fetch fragment from {url}: {original_error}", url=url, original_error=original_error
        )


class UpstreamStatusError(ResolutionError):
    """Exception raised when the fragment source answers with a non-200 status.

    Attributes
    ----------
    status_code : int
        HTTP status code returned by the source

    """

    def __init__(self, url: str, status_code: int):
        """Initialize the upstream status error."""
        super().__init__(f"Fragment source {url} responded with status {status_code}", url=url)
        self.status_code = status_code


class FragmentParseError(ResolutionError):
    """Exception raised when a fetched fragment body cannot be parsed."""


class FragmentDepthError(ResolutionError):
    """Exception raised when placeholders are nested deeper than allowed.

    Attributes
    ----------
    depth : int
        Nesting depth of the rejected placeholder
    max_depth : int
        Configured limit

    """

    def __init__(self, depth: int, max_depth: int, url: str | None = None):
        """Initialize the depth error."""
        super().__init__(f"Fragment nesting depth {depth} exceeds limit of {max_depth}", url=url)
        self.depth = depth
        self.max_depth = max_depth


class SectionNotFoundError(StitchError):
    """Exception raised when a named document section cannot be located.

    Parameters
    ----------
    section : str
        Tag name of the section that was searched for (e.g. ``"head"``)
    message : str, optional
        Custom error message

    """

    def __init__(self, section: str, message: str | None = None):
        """Initialize the section not found error."""
        super().__init__(message or f"Could not find <{section}> section in document")
        self.section = section
