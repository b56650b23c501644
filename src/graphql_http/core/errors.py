"""
Custom exceptions for the GraphQL HTTP adapter.

Every error carries the HTTP status it should be reported with. Errors that
are not instances of these classes are reported with status 500.
"""

from __future__ import annotations

from typing import Optional


class GraphQLHTTPError(Exception):
    """Base exception for all transport-level errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        if status_code is not None:
            self.status_code = status_code
        self.message = message
        self.headers = dict(headers or {})
        super().__init__(message)


class ConfigurationError(GraphQLHTTPError):
    """Raised when middleware options are missing or invalid."""
    status_code = 500


class BadRequest(GraphQLHTTPError):
    """Raised when the request does not carry usable GraphQL parameters."""
    status_code = 400


class MethodNotAllowed(GraphQLHTTPError):
    """Raised when the HTTP method cannot serve the requested operation."""

    status_code = 405

    def __init__(self, message: str, *, allow: str):
        self.allow = allow
        super().__init__(message, headers={"Allow": allow})


class UnsupportedMediaType(GraphQLHTTPError):
    """Raised when the request body uses an unsupported charset or encoding."""
    status_code = 415
