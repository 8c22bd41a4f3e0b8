"""
The responses handlers hand back.

``ApiResponse`` is a closed union of six variants. Each knows how to serve
itself: given the originating request it produces the Starlette response that
writes status line, headers and body exactly once.

- ``SyncResponse``, ``AsyncResponse`` and ``ErrorResponse`` render the JSON
  envelope.
- ``FileDownloadResponse`` serves a file as an attachment.
- ``LogStreamResponse`` streams log records as a JSON sequence.
- ``AssertionBundleResponse`` serves one or more assertions.
"""

from __future__ import annotations

import json
import logging
import os
import stat
from urllib.parse import quote
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping, Sequence
from typing import Any, ClassVar

from starlette.requests import Request
from starlette.responses import FileResponse, Response, StreamingResponse
from starlette.staticfiles import NotModifiedResponse, StaticFiles

from snapd_api.core.common.exceptions import ResponseEncodingError
from snapd_api.core.config.app_config import AppConfig, ResponseConfig
from snapd_api.core.constants import (
    ASSERTION_ENCODING_ERROR,
    CONTENT_TYPE_ASSERTION,
    CONTENT_TYPE_JSON,
    ENVELOPE_ENCODING_ERROR,
    FIELD_RESOURCE,
    FILE_ACCESS_DENIED_ERROR,
    FILE_NOT_FOUND_ERROR,
    HEADER_ACCEL_BUFFERING,
    HEADER_ASSERTIONS_COUNT,
    HEADER_CACHE_CONTROL,
    HEADER_LOCATION,
    LOCATION_SAFE_CHARS,
    LOCATION_STATUSES,
)
from snapd_api.core.domain.assertions import AssertionBundle, AssertionStreamEncoder
from snapd_api.core.domain.envelope import Envelope, ErrorResult, Meta, ResponseType
from snapd_api.core.interfaces.log_reader_interface import ILogReader
from snapd_api.core.interfaces.signed_document_interface import ISignedDocument
from snapd_api.core.transport.fastapi.json_seq import JSONSeqResponse

logger = logging.getLogger(__name__)


def response_config(request: Request | None) -> ResponseConfig:
    """Return the response settings of the app serving ``request``."""
    app = request.scope.get("app") if request is not None else None
    config = getattr(getattr(app, "state", None), "config", None)
    if isinstance(config, AppConfig):
        return config.responses
    return ResponseConfig()


def format_media_type(media_type: str, params: Mapping[str, str]) -> str:
    parts = [media_type]
    parts.extend(f"{key}={value}" for key, value in sorted(params.items()))
    return "; ".join(parts)


class ApiResponse(ABC):
    """A response that knows how to serve itself.

    The set of variants is closed: subclasses can only be defined in this
    module.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError(
                f"{cls.__qualname__}: ApiResponse variants cannot be extended"
            )

    @abstractmethod
    def serve(self, request: Request | None = None) -> Response:
        """Build the Starlette response for ``request``."""


class _EnvelopeResponse(ApiResponse):
    """Common base of the three envelope variants."""

    response_type: ClassVar[ResponseType]

    def __init__(self, result: Any, status: int, meta: Meta | None = None) -> None:
        self.envelope = Envelope(
            type=self.response_type, status=status, result=result, meta=meta
        )

    @property
    def status(self) -> int:
        return self.envelope.status

    @property
    def result(self) -> Any:
        return self.envelope.result

    @property
    def meta(self) -> Meta | None:
        return self.envelope.meta

    def to_wire(self) -> dict[str, Any]:
        return self.envelope.to_wire()

    def render(self) -> bytes:
        """Encode the envelope.

        Raises:
            ResponseEncodingError: If the result is not JSON-representable.
        """
        try:
            return json.dumps(
                self.to_wire(), allow_nan=False, separators=(",", ":")
            ).encode("utf-8")
        except (TypeError, ValueError, RecursionError) as exc:
            raise ResponseEncodingError(str(exc)) from exc

    def location(self) -> str | None:
        if self.status not in LOCATION_STATUSES:
            return None
        if not isinstance(self.result, Mapping):
            return None
        location = self.result.get(FIELD_RESOURCE)
        if isinstance(location, str) and location:
            # header values must be latin-1
            return quote(location, safe=LOCATION_SAFE_CHARS)
        return None

    def serve(self, request: Request | None = None) -> Response:
        status = self.status
        try:
            body = self.render()
        except ResponseEncodingError as exc:
            logger.warning(ENVELOPE_ENCODING_ERROR, self.envelope, exc)
            body = b""
            status = 500

        headers: dict[str, str] = {}
        location = self.location()
        if location is not None:
            headers[HEADER_LOCATION] = location

        return Response(
            content=body,
            status_code=status,
            headers=headers,
            media_type=CONTENT_TYPE_JSON,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} status={self.status}>"


class SyncResponse(_EnvelopeResponse):
    """A standard return value, always 200."""

    response_type = ResponseType.SYNC

    def __init__(self, result: Any, meta: Meta | None = None) -> None:
        super().__init__(result, 200, meta)


class AsyncResponse(_EnvelopeResponse):
    """A background operation, always 202.

    The result describes the pending operation; its ``resource`` locator, if
    any, becomes the ``Location`` header.
    """

    response_type = ResponseType.ASYNC

    def __init__(self, result: Mapping[str, Any], meta: Meta | None = None) -> None:
        super().__init__(result, 202, meta)


class ErrorResponse(_EnvelopeResponse):
    """An error envelope with the status chosen by its responder."""

    response_type = ResponseType.ERROR

    def __init__(self, result: ErrorResult, status: int) -> None:
        super().__init__(result, status)

    @property
    def error(self) -> ErrorResult:
        return self.envelope.result


# Only used for its conditional request matching.
_conditional_checker = StaticFiles(directory=None, check_dir=False)


class FileDownloadResponse(ApiResponse):
    """Serve a file as a download attachment.

    MIME type guessing, ranges and validators come from Starlette's
    ``FileResponse``.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)

    @property
    def filename(self) -> str:
        return os.path.basename(self.path)

    def serve(self, request: Request | None = None) -> Response:
        from snapd_api.core.transport.fastapi.responders import forbidden, not_found

        try:
            stat_result = os.stat(self.path)
        except (FileNotFoundError, NotADirectoryError):
            return not_found(FILE_NOT_FOUND_ERROR, self.filename).serve(request)
        except PermissionError:
            return forbidden(FILE_ACCESS_DENIED_ERROR, self.filename).serve(request)
        if not stat.S_ISREG(stat_result.st_mode):
            return not_found(FILE_NOT_FOUND_ERROR, self.filename).serve(request)
        if not os.access(self.path, os.R_OK):
            return forbidden(FILE_ACCESS_DENIED_ERROR, self.filename).serve(request)

        response = FileResponse(
            self.path,
            stat_result=stat_result,
            filename=self.filename,
            content_disposition_type="attachment",
        )
        if request is not None and _conditional_checker.is_not_modified(
            response.headers, request.headers
        ):
            return NotModifiedResponse(response.headers)
        return response


class LogStreamResponse(ApiResponse):
    """Stream log records as ``application/json-seq``.

    The response owns the reader from construction on; serving it closes the
    reader once the stream ends, whatever the reason.
    """

    def __init__(self, reader: ILogReader, follow: bool = False) -> None:
        self.reader = reader
        self.follow = follow

    def serve(self, request: Request | None = None) -> Response:
        config = response_config(request)
        headers: dict[str, str] = {}
        if self.follow and config.follow_keepalive_headers:
            headers[HEADER_CACHE_CONTROL] = "no-cache"
            headers[HEADER_ACCEL_BUFFERING] = "no"
        return JSONSeqResponse(
            self.reader,
            follow=self.follow,
            buffer_size=config.stream_buffer_size,
            headers=headers,
        )


class AssertionBundleResponse(ApiResponse):
    """Serve one or a bundle of assertions."""

    def __init__(self, bundle: AssertionBundle) -> None:
        self.bundle = bundle

    @property
    def media_type(self) -> str:
        if self.bundle.bundle:
            return format_media_type(CONTENT_TYPE_ASSERTION, {"bundle": "y"})
        return CONTENT_TYPE_ASSERTION

    def _iter_body(self) -> Iterator[bytes]:
        encoder = AssertionStreamEncoder()
        for assertion in self.bundle.assertions:
            try:
                chunk = encoder.encode(assertion)
            except ResponseEncodingError as exc:
                logger.warning(ASSERTION_ENCODING_ERROR, exc)
                return
            yield chunk

    def serve(self, request: Request | None = None) -> Response:
        return StreamingResponse(
            self._iter_body(),
            status_code=200,
            headers={HEADER_ASSERTIONS_COUNT: str(len(self.bundle.assertions))},
            media_type=self.media_type,
        )


def assertion_bundle_response(
    assertions: Sequence[ISignedDocument], bundle: bool = False
) -> AssertionBundleResponse:
    """Build a response serving one or a bundle of assertions.

    More than one assertion forces a bundle.
    """
    return AssertionBundleResponse(AssertionBundle(assertions=assertions, bundle=bundle))
