"""
Streaming JSON sequences (RFC 7464) of log records.

Each record goes on the wire as an ASCII record separator, the JSON object
and a newline, so a reader can resynchronise after any malformed segment by
scanning for the next separator. ``jq --seq`` reads and writes this format.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from starlette.concurrency import run_in_threadpool
from starlette.responses import Response
from starlette.types import Receive, Scope, Send

from snapd_api.core.constants import (
    CONTENT_TYPE_JSON_SEQ,
    DEFAULT_STREAM_BUFFER_SIZE,
    FIELD_ERROR,
    RECORD_SEPARATOR,
    STREAM_READ_ERROR,
    STREAM_WRITE_ERROR,
)
from snapd_api.core.domain.log_record import LogRecord
from snapd_api.core.interfaces.log_reader_interface import ILogReader

logger = logging.getLogger(__name__)


def encode_frame(data: Mapping[str, Any]) -> bytes:
    """Frame one JSON object as a json-seq record."""
    return RECORD_SEPARATOR + json.dumps(data, allow_nan=False).encode("utf-8") + b"\n"


def error_frame(error: BaseException) -> bytes:
    return encode_frame({FIELD_ERROR: str(error)})


def _read_next(reader: ILogReader) -> LogRecord | None:
    return next(reader, None)


class _ChunkWriter:
    """Buffer body bytes and hand them to the ASGI ``send`` channel.

    Every ``send`` of a body chunk reaches the transport immediately, so
    ``flush`` is the only way bytes leave the process.
    """

    def __init__(self, send: Send, buffer_size: int) -> None:
        self._send = send
        self._buffer = bytearray()
        self._buffer_size = buffer_size

    async def write(self, data: bytes) -> None:
        self._buffer += data
        if len(self._buffer) >= self._buffer_size:
            await self.flush()

    async def flush(self) -> None:
        if not self._buffer:
            return
        chunk = bytes(self._buffer)
        self._buffer.clear()
        await self._send({"type": "http.response.body", "body": chunk, "more_body": True})

    async def close(self) -> None:
        await self.flush()
        await self._send({"type": "http.response.body", "body": b"", "more_body": False})


class JSONSeqResponse(Response):
    """Stream the records of a log reader as ``application/json-seq``.

    In follow mode every record is sent as soon as it is encoded; otherwise
    output is sent whenever the buffer fills and at the end. Reading stops at
    end-of-data, on a read or encode failure (which appends an error frame)
    or when a write fails. The reader is closed exactly once on every path.
    """

    media_type = CONTENT_TYPE_JSON_SEQ

    def __init__(
        self,
        reader: ILogReader,
        *,
        follow: bool = False,
        buffer_size: int = DEFAULT_STREAM_BUFFER_SIZE,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.reader = reader
        self.follow = follow
        self.buffer_size = buffer_size
        self.status_code = 200
        self.background = None
        self._reader_closed = False
        self.init_headers(headers)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await send(
                {
                    "type": "http.response.start",
                    "status": self.status_code,
                    "headers": self.raw_headers,
                }
            )
            writer = _ChunkWriter(send, self.buffer_size)
            await self._stream_records(writer)
            await writer.close()
        except OSError as exc:
            logger.warning(STREAM_WRITE_ERROR, exc)
        finally:
            self._close_reader()

    async def _stream_records(self, writer: _ChunkWriter) -> None:
        error: Exception | None = None
        while True:
            try:
                record = await run_in_threadpool(_read_next, self.reader)
            except Exception as exc:
                error = exc
                break
            if record is None:
                break

            try:
                frame = encode_frame(record.to_wire())
            except (TypeError, ValueError, AttributeError) as exc:
                error = exc
                break

            await writer.write(frame)
            if self.follow:
                await writer.flush()

        if error is not None:
            await writer.write(error_frame(error))
            logger.warning(STREAM_READ_ERROR, error)

    def _close_reader(self) -> None:
        if self._reader_closed:
            return
        self._reader_closed = True
        try:
            self.reader.close()
        except Exception as exc:
            logger.warning("cannot close log reader: %s", exc)
