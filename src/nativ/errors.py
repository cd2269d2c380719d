# SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for the Nativ API client.

Every error carries the HTTP status code and the parsed response body
when it originates from the API. Errors raised locally (missing API key,
empty update payload) have neither.
"""

from __future__ import annotations

from typing import Any


class NativError(Exception):
    """Base exception for the Nativ client."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class AuthenticationError(NativError):
    """Missing or invalid API key (HTTP 401)."""


class InsufficientCreditsError(NativError):
    """Account balance too low for the request (HTTP 402)."""


class ValidationError(NativError):
    """Invalid request parameters (HTTP 400 / 422 and other 4xx)."""


class NotFoundError(NativError):
    """Resource not found (HTTP 404)."""


class RateLimitError(NativError):
    """Too many requests (HTTP 429)."""


class ServerError(NativError):
    """Server-side failure (HTTP 5xx)."""


STATUS_ERRORS: dict[int, type[NativError]] = {
    400: ValidationError,
    401: AuthenticationError,
    402: InsufficientCreditsError,
    404: NotFoundError,
    422: ValidationError,
    429: RateLimitError,
}


def error_for_status(status: int) -> type[NativError]:
    """Return the exception class for a non-2xx status code.

    Args:
        status: HTTP status code.

    Returns:
        Exception class. Unlisted 4xx codes map to ValidationError,
        everything else to ServerError.
    """
    if status in STATUS_ERRORS:
        return STATUS_ERRORS[status]
    if 400 <= status < 500:
        return ValidationError
    return ServerError


def error_message(status: int, body: dict[str, Any]) -> str:
    """Pick a human-readable message from an error response body."""
    for key in ("detail", "message"):
        value = body.get(key)
        if value is not None:
            return value if isinstance(value, str) else str(value)
    return f"HTTP {status}"


def raise_for_status(status: int, body: dict[str, Any]) -> None:
    """Raise the matching NativError for a non-2xx status.

    Args:
        status: HTTP status code.
        body: Parsed response body.

    Raises:
        NativError: Subclass chosen by error_for_status().
    """
    if 200 <= status < 300:
        return
    error_class = error_for_status(status)
    raise error_class(error_message(status, body), status_code=status, body=body)
