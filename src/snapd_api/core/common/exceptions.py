"""
Common exception classes for the daemon API.

Domain exceptions carry the HTTP status, error kind and value the exception
handlers need to render them as error envelopes. Infrastructure exceptions
(encoding, reading) are reported through logging by the responses that hit
them and never reach a client as a structured body.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from snapd_api.core.domain.error_kinds import ErrorKind

if TYPE_CHECKING:
    from snapd_api.core.domain.envelope import ErrorResult


class SnapdAPIError(Exception):
    """Base exception class for all daemon API errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        *,
        status_code: int | None = None,
        kind: ErrorKind | None = None,
        value: Any = None,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
            status_code: Optional HTTP status code hint for transport adapters
            kind: Optional machine-readable error kind
            value: Optional payload identifying the offending object
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code or 500
        self.kind = kind
        self.value = value

    def to_error_result(self) -> ErrorResult:
        from snapd_api.core.domain.envelope import ErrorResult

        return ErrorResult(message=self.message, kind=self.kind, value=self.value)


class BadRequestError(SnapdAPIError):
    """Raised when a request is malformed."""

    def __init__(self, message: str = "bad request", **kwargs: Any):
        super().__init__(message, status_code=400, **kwargs)


class UnauthorizedError(SnapdAPIError):
    """Raised when the request needs an authenticated user."""

    def __init__(self, message: str = "access denied", **kwargs: Any):
        kwargs.setdefault("kind", ErrorKind.LOGIN_REQUIRED)
        super().__init__(message, status_code=401, **kwargs)


class ForbiddenError(SnapdAPIError):
    """Raised when the user is known but not allowed."""

    def __init__(self, message: str = "forbidden", **kwargs: Any):
        super().__init__(message, status_code=403, **kwargs)


class NotFoundError(SnapdAPIError):
    """Raised when the requested object does not exist."""

    def __init__(self, message: str = "not found", **kwargs: Any):
        super().__init__(message, status_code=404, **kwargs)


class SnapNotFoundError(NotFoundError):
    """Raised when an operation is requested on a snap that doesn't exist."""

    def __init__(self, snap_name: str, message: str | None = None, **kwargs: Any):
        super().__init__(
            message or f"snap {snap_name!r} not found",
            kind=ErrorKind.SNAP_NOT_FOUND,
            value=snap_name,
            **kwargs,
        )
        self.snap_name = snap_name


class AppNotFoundError(NotFoundError):
    """Raised when an operation is requested on an app that doesn't exist."""

    def __init__(self, message: str = "app not found", **kwargs: Any):
        super().__init__(message, kind=ErrorKind.APP_NOT_FOUND, **kwargs)


class ConflictError(SnapdAPIError):
    """Raised when the request conflicts with the current state."""

    def __init__(self, message: str = "conflict", **kwargs: Any):
        super().__init__(message, status_code=409, **kwargs)


class ConfigurationError(SnapdAPIError):
    """Raised when there's a configuration issue."""

    def __init__(self, message: str = "configuration error", **kwargs: Any):
        super().__init__(message, status_code=500, **kwargs)


class ResponseEncodingError(SnapdAPIError):
    """Raised when a response body cannot be encoded."""

    def __init__(self, message: str = "cannot encode response", **kwargs: Any):
        super().__init__(message, status_code=500, **kwargs)


class LogReadError(SnapdAPIError):
    """Raised by log readers when the next record cannot be read."""

    def __init__(self, message: str = "cannot read log", **kwargs: Any):
        super().__init__(message, status_code=500, **kwargs)
