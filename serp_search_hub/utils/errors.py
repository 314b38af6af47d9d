"""Error handling utilities.

This module provides the exception hierarchy for the SERP Search Hub. Every
fatal condition of a search call is raised as a subclass of SearchError so
callers can catch a single base type, while malformed entries inside a decoded
provider response never surface as exceptions at all.
"""

import http
import traceback
from typing import Any, TypeVar

# Type variable for self-referential return types
T = TypeVar("T", bound="SearchError")


class SearchError(Exception):
    """Base class for all search-related exceptions in the application."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int = http.HTTPStatus.INTERNAL_SERVER_ERROR,
        original_error: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize the error with context information.

        Args:
            message: Human-readable error message
            provider: Name of the provider that raised the error, if applicable
            status_code: HTTP status code describing the failure
            original_error: The original exception that caused this error, if any
            details: Additional structured details about the error
        """
        self.message = message
        self.provider = provider
        self.status_code = status_code
        self.original_error = original_error
        self.details = details or {}
        super().__init__(message)

    @classmethod
    def from_exception(
        cls: type[T], exc: Exception, message: str | None = None, **kwargs
    ) -> T:
        """Create an error instance from another exception.

        Args:
            exc: The exception to wrap
            message: Custom message to use (defaults to str(exc))
            **kwargs: Additional arguments to pass to the constructor

        Returns:
            A new instance of the error class
        """
        return cls(message=message or str(exc), original_error=exc, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dictionary representation."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }

        if self.provider:
            result["provider"] = self.provider

        if self.details:
            result["details"] = self.details

        return result


# Configuration errors


class ConfigurationError(SearchError):
    """Error raised when there's an issue with the application configuration."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        status_code: int = http.HTTPStatus.INTERNAL_SERVER_ERROR,
        **kwargs,
    ):
        """Initialize a configuration error.

        Args:
            message: Error message
            config_key: The configuration key with the issue
            status_code: HTTP status code (defaults to 500 Internal Server Error)
            **kwargs: Additional arguments passed to SearchError
        """
        details = kwargs.pop("details", {})

        if config_key:
            details["config_key"] = config_key

        super().__init__(message, status_code=status_code, details=details, **kwargs)


class MissingConfigurationError(ConfigurationError):
    """Error raised when a required configuration value is missing."""

    def __init__(self, config_key: str, message: str | None = None, **kwargs):
        message = message or f"Required configuration '{config_key}' is missing"
        super().__init__(message, config_key, **kwargs)


# Request and response errors


class RequestBuildError(SearchError):
    """Error raised when an outgoing provider request cannot be constructed."""

    def __init__(
        self,
        message: str,
        query: str | None = None,
        provider: str | None = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})

        if query is not None:
            details["query"] = query

        super().__init__(message, provider, details=details, **kwargs)


class DecodeError(SearchError):
    """Error raised when a provider response body is not a JSON object."""

    def __init__(
        self,
        message: str | None = None,
        query: str | None = None,
        provider: str | None = None,
        status_code: int = http.HTTPStatus.BAD_GATEWAY,
        **kwargs,
    ):
        """Initialize a decode error.

        Args:
            message: Error message (defaults to a standard message)
            query: The query whose response failed to decode
            provider: Name of the provider that returned the body
            status_code: HTTP status code (defaults to 502 Bad Gateway)
            **kwargs: Additional arguments passed to SearchError
        """
        details = kwargs.pop("details", {})

        if query is not None:
            details["query"] = query

        if message is None:
            message = "Provider response is not a JSON object"
            if query is not None:
                message = f"Provider response for query '{query}' is not a JSON object"

        super().__init__(
            message, provider, status_code=status_code, details=details, **kwargs
        )


class ExpansionError(SearchError):
    """Error raised when a prompt cannot be expanded into sub-queries."""

    def __init__(self, message: str, prompt: str | None = None, **kwargs):
        details = kwargs.pop("details", {})

        if prompt is not None:
            details["prompt"] = prompt

        super().__init__(message, details=details, **kwargs)


# Network and I/O errors


class NetworkError(SearchError):
    """Error raised when a network operation fails."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int = http.HTTPStatus.BAD_GATEWAY,
        **kwargs,
    ):
        """Initialize a network error.

        Args:
            message: Error message
            url: The URL that failed
            status_code: HTTP status code (defaults to 502 Bad Gateway)
            **kwargs: Additional arguments passed to SearchError
        """
        details = kwargs.pop("details", {})

        if url:
            details["url"] = url

        super().__init__(message, status_code=status_code, details=details, **kwargs)


class NetworkConnectionError(NetworkError):
    """Error raised when a connection cannot be established."""

    def __init__(self, message: str | None = None, url: str | None = None, **kwargs):
        if message is None:
            message = "Failed to establish connection"
            if url:
                message = f"Failed to establish connection to {url}"

        super().__init__(message, url, **kwargs)


class NetworkTimeoutError(NetworkError):
    """Error raised when a network operation times out."""

    def __init__(
        self,
        message: str | None = None,
        url: str | None = None,
        timeout: float | None = None,
        status_code: int = http.HTTPStatus.GATEWAY_TIMEOUT,
        **kwargs,
    ):
        """Initialize a timeout error.

        Args:
            message: Error message (defaults to a standard message)
            url: The URL that timed out
            timeout: The timeout value in seconds
            status_code: HTTP status code (defaults to 504 Gateway Timeout)
            **kwargs: Additional arguments passed to NetworkError
        """
        details = kwargs.pop("details", {})

        if timeout:
            details["timeout_seconds"] = timeout

        if message is None:
            message = "Network operation timed out"
            if url:
                message = f"Request to {url} timed out"
            if timeout:
                message += f" after {timeout} seconds"

        super().__init__(
            message, url, status_code=status_code, details=details, **kwargs
        )


# Utility functions


def format_exception(e: Exception) -> dict[str, Any]:
    """Format an exception for structured logging.

    Args:
        e: The exception to format

    Returns:
        A dictionary containing error details suitable for logging
    """
    if isinstance(e, SearchError):
        result = e.to_dict()
        result["traceback"] = traceback.format_exc()
        return result

    return {
        "error_type": e.__class__.__name__,
        "message": str(e),
        "traceback": traceback.format_exc(),
    }
