"""
Response constructors and error responders.

``sync_response`` is the single entry point for handler results: it passes
already-built responses through untouched and turns exceptions into internal
errors, so a handler can hand back a value, a response or an error alike.

An error responder is bound to one HTTP status. Calling it formats a message
(``%``-style, like logging calls) and yields an error envelope with that
status::

    return not_found("cannot find snap %r", name)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from snapd_api.core.constants import GENERIC_INTERNAL_ERROR
from snapd_api.core.domain.envelope import ErrorResult, Meta
from snapd_api.core.domain.error_kinds import ErrorKind
from snapd_api.core.transport.fastapi.responses import (
    ApiResponse,
    AsyncResponse,
    ErrorResponse,
    SyncResponse,
)

ErrorResponder = Callable[..., ErrorResponse]


def _format_message(fmt: str, args: tuple[Any, ...]) -> str:
    if not args:
        return fmt
    try:
        return fmt % args
    except (TypeError, ValueError):
        # stray "%" in the format string
        return " ".join([fmt, *(str(arg) for arg in args)])


def sync_response(result: Any, meta: Meta | None = None) -> ApiResponse:
    """Build a "sync" response from the given result."""
    if isinstance(result, BaseException):
        return internal_error(GENERIC_INTERNAL_ERROR, result)

    if isinstance(result, ApiResponse):
        return result

    return SyncResponse(result, meta)


def async_response(result: Mapping[str, Any], meta: Meta | None = None) -> AsyncResponse:
    """Build an "async" response describing a background operation."""
    return AsyncResponse(result, meta)


def error_response(
    status: int,
    message: str,
    kind: ErrorKind | None = None,
    value: Any = None,
) -> ErrorResponse:
    """Build an error response with an explicitly chosen kind and value."""
    return ErrorResponse(ErrorResult(message=message, kind=kind, value=value), status)


def make_error_responder(status: int) -> ErrorResponder:
    """Build an error responder for the given status."""
    kind = ErrorKind.LOGIN_REQUIRED if status == 401 else None

    def responder(fmt: str, *args: Any) -> ErrorResponse:
        return error_response(status, _format_message(fmt, args), kind=kind)

    responder.__name__ = f"error_responder_{status}"
    return responder


# standard error responses
unauthorized = make_error_responder(401)
not_found = make_error_responder(404)
bad_request = make_error_responder(400)
method_not_allowed = make_error_responder(405)
internal_error = make_error_responder(500)
not_implemented = make_error_responder(501)
forbidden = make_error_responder(403)
conflict = make_error_responder(409)

STANDARD_RESPONDERS: Mapping[int, ErrorResponder] = MappingProxyType(
    {
        400: bad_request,
        401: unauthorized,
        403: forbidden,
        404: not_found,
        405: method_not_allowed,
        409: conflict,
        500: internal_error,
        501: not_implemented,
    }
)


def snap_not_found(snap_name: str, err: BaseException | str) -> ErrorResponse:
    """Error response for an operation requested on a snap that doesn't exist."""
    return error_response(404, str(err), kind=ErrorKind.SNAP_NOT_FOUND, value=snap_name)


def app_not_found(fmt: str, *args: Any) -> ErrorResponse:
    """Error response for an operation requested on an app that doesn't exist."""
    return error_response(404, _format_message(fmt, args), kind=ErrorKind.APP_NOT_FOUND)
