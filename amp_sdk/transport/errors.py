"""
Error mapping utilities for transports.

This module converts httpx exceptions and unsuccessful responses into
TransportError instances with a consistent ErrorCategory.
"""

import asyncio
from typing import Any, Dict

import httpx

from ..errors import ErrorCategory, TransportError
from .base import TransportResponse


class ErrorMapper:
    """Maps transport failures to standardized TransportError."""

    @staticmethod
    def categorize(error: Exception) -> ErrorCategory:
        """Categorize an exception raised while talking to an agent."""
        if isinstance(error, (httpx.TimeoutException, asyncio.TimeoutError)):
            return ErrorCategory.TIMEOUT
        if isinstance(error, (httpx.NetworkError, httpx.ProxyError, httpx.UnsupportedProtocol)):
            return ErrorCategory.NETWORK
        if isinstance(error, httpx.InvalidURL):
            return ErrorCategory.CLIENT_ERROR
        return ErrorCategory.UNKNOWN

    @staticmethod
    def categorize_status(status_code: int) -> ErrorCategory:
        if status_code >= 500:
            return ErrorCategory.SERVER_ERROR
        if status_code >= 400:
            return ErrorCategory.CLIENT_ERROR
        return ErrorCategory.UNKNOWN

    @staticmethod
    def map_httpx_error(error: Exception, url: str) -> TransportError:
        """
        Map an httpx (or asyncio timeout) exception to TransportError.

        Args:
            error: The exception raised by the HTTP client
            url: The URL being requested

        Returns:
            TransportError with category and original error attached
        """
        category = ErrorMapper.categorize(error)
        if category == ErrorCategory.TIMEOUT:
            message = f"request to {url} timed out"
        else:
            message = f"request to {url} failed: {type(error).__name__}: {error}"
        return TransportError(message, category=category, original_error=error)

    @staticmethod
    def map_status(response: TransportResponse) -> TransportError:
        """Build the error for an agent that answered with a non-200 status."""
        status = f"{response.status_code} {response.reason}".strip()
        return TransportError(
            f"amp agent returned: {status} : {response.text}",
            status_code=response.status_code,
            category=ErrorMapper.categorize_status(response.status_code)
        )

    @staticmethod
    def get_error_classification(error: TransportError) -> Dict[str, Any]:
        """Get error classification details for logging."""
        return {
            'status_code': error.status_code,
            'category': error.category.value,
            'error_type': type(error.original_error).__name__ if error.original_error else None,
        }
