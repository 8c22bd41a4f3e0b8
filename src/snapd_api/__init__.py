"""
snapd-api: response protocol core of the daemon's HTTP API.

Turns handler results into wire responses: the sync/async/error JSON
envelope, streaming JSON sequences of log records, assertion bundles and
file downloads.
"""

from snapd_api.core.common.exceptions import SnapdAPIError
from snapd_api.core.domain.envelope import ErrorResult, Meta, Paging, ResponseType
from snapd_api.core.domain.error_kinds import ErrorKind
from snapd_api.core.domain.log_record import LogRecord
from snapd_api.core.transport.fastapi.responders import (
    app_not_found,
    async_response,
    bad_request,
    conflict,
    error_response,
    forbidden,
    internal_error,
    make_error_responder,
    method_not_allowed,
    not_found,
    not_implemented,
    snap_not_found,
    sync_response,
    unauthorized,
)
from snapd_api.core.transport.fastapi.responses import (
    ApiResponse,
    AssertionBundleResponse,
    AsyncResponse,
    ErrorResponse,
    FileDownloadResponse,
    LogStreamResponse,
    SyncResponse,
    assertion_bundle_response,
)

__version__ = "0.1.0"
__all__ = [
    "ApiResponse",
    "AssertionBundleResponse",
    "AsyncResponse",
    "ErrorKind",
    "ErrorResponse",
    "ErrorResult",
    "FileDownloadResponse",
    "LogRecord",
    "LogStreamResponse",
    "Meta",
    "Paging",
    "ResponseType",
    "SnapdAPIError",
    "SyncResponse",
    "app_not_found",
    "assertion_bundle_response",
    "async_response",
    "bad_request",
    "conflict",
    "error_response",
    "forbidden",
    "internal_error",
    "make_error_responder",
    "method_not_allowed",
    "not_found",
    "not_implemented",
    "snap_not_found",
    "sync_response",
    "unauthorized",
]
