"""
FastAPI exception adapters.

Domain exceptions raised by handlers are rendered through the same error
envelope the responders build, so a client sees one error shape whether a
handler returned an error response or raised.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from snapd_api.core.common.exceptions import SnapdAPIError
from snapd_api.core.constants import UNEXPECTED_ERROR
from snapd_api.core.transport.fastapi.responders import (
    STANDARD_RESPONDERS,
    error_response,
    internal_error,
)
from snapd_api.core.transport.fastapi.responses import ErrorResponse

logger = logging.getLogger(__name__)


def map_domain_exception_to_response(exc: SnapdAPIError) -> ErrorResponse:
    """Map a domain exception to an error response.

    Args:
        exc: The domain exception to map

    Returns:
        The error response carrying the exception's status, kind and value
    """
    result = exc.to_error_result()
    return error_response(exc.status_code, result.message, result.kind, result.value)


def map_http_exception_to_response(exc: StarletteHTTPException) -> ErrorResponse:
    """Map a Starlette HTTP exception (routing 404/405 etc.) to an error response."""
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    responder = STANDARD_RESPONDERS.get(exc.status_code)
    if responder is not None:
        return responder(message)
    return error_response(exc.status_code, message)


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers for domain exceptions in a FastAPI app.

    Args:
        app: The FastAPI application to register handlers for
    """

    async def domain_exception_handler(request: Request, exc: Exception) -> Response:
        if not isinstance(exc, SnapdAPIError):
            raise exc
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Domain exception %s: %s", type(exc).__name__, exc.message)
        return map_domain_exception_to_response(exc).serve(request)

    async def http_exception_handler(request: Request, exc: Exception) -> Response:
        if not isinstance(exc, StarletteHTTPException):
            raise exc
        response = map_http_exception_to_response(exc).serve(request)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    async def generic_exception_handler(request: Request, exc: Exception) -> Response:
        if logger.isEnabledFor(logging.ERROR):
            logger.error("Unhandled exception: %s", exc, exc_info=True)
        return internal_error(UNEXPECTED_ERROR).serve(request)

    app.add_exception_handler(SnapdAPIError, domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
