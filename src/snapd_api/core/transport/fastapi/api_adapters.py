"""
Adapters between handlers and the FastAPI routing layer.

A handler takes the request and returns whatever it produced: a plain value,
an already-built ``ApiResponse`` or an exception. ``api_endpoint`` turns such a
handler into a Starlette endpoint by passing its result through
``sync_response`` and serving it.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response

from snapd_api.core.common.exceptions import SnapdAPIError
from snapd_api.core.transport.fastapi.exception_adapters import (
    map_domain_exception_to_response,
)
from snapd_api.core.transport.fastapi.responders import sync_response

Handler = Callable[[Request], Any]


def api_endpoint(handler: Handler) -> Callable[[Request], Awaitable[Response]]:
    """Wrap a handler so that its result is served as an API response.

    Sync handlers run in the threadpool. Domain exceptions raised by the
    handler become error envelopes; other exceptions propagate to the
    registered exception handlers.
    """

    @functools.wraps(handler)
    async def endpoint(request: Request) -> Response:
        try:
            if inspect.iscoroutinefunction(handler):
                result = await handler(request)
            else:
                result = await run_in_threadpool(handler, request)
        except SnapdAPIError as exc:
            return map_domain_exception_to_response(exc).serve(request)
        return sync_response(result).serve(request)

    return endpoint
