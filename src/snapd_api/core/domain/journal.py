"""
Log reader over the systemd journal's JSON export.

``journalctl -o json`` writes one JSON object per line. Field values are
usually strings; binary-unsafe values are exported as arrays of byte values.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from datetime import datetime, timedelta, timezone
from typing import IO, Any

from snapd_api.core.common.exceptions import LogReadError
from snapd_api.core.domain.log_record import ZERO_TIME, LogRecord

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MISSING = "-"


def _field(entry: Mapping[str, Any], name: str) -> str | None:
    value = entry.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        try:
            return bytes(value).decode("utf-8", errors="replace")
        except (TypeError, ValueError):
            return None
    return str(value)


def journal_timestamp(entry: Mapping[str, Any]) -> datetime:
    """Return the realtime timestamp of a journal entry.

    ``__REALTIME_TIMESTAMP`` is microseconds since the epoch. A missing or
    malformed value yields the zero timestamp.
    """
    raw = _field(entry, "__REALTIME_TIMESTAMP")
    if raw is None:
        return ZERO_TIME
    try:
        return _EPOCH + timedelta(microseconds=int(raw))
    except (ValueError, OverflowError):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Ignoring malformed journal timestamp %r", raw)
        return ZERO_TIME


def record_from_journal_entry(entry: Mapping[str, Any]) -> LogRecord:
    """Build a LogRecord from one decoded journal entry."""
    sid = _field(entry, "SYSLOG_IDENTIFIER")
    message = _field(entry, "MESSAGE")
    return LogRecord(
        timestamp=journal_timestamp(entry),
        message=_MISSING if message is None else message,
        sid=sid if sid else _MISSING,
        pid=_field(entry, "_PID") or _MISSING,
    )


class JournalLineReader:
    """Read LogRecords from a binary stream of journal JSON lines.

    The stream is typically the stdout pipe of a ``journalctl`` process,
    so closing the reader closes the stream, which in turn lets the process
    wind down.
    """

    def __init__(self, stream: IO[bytes]) -> None:
        self._stream = stream
        self._closed = False

    def __iter__(self) -> Iterator[LogRecord]:
        return self

    def __next__(self) -> LogRecord:
        while True:
            line = self._stream.readline()
            if not line:
                raise StopIteration
            if line.strip():
                break
        try:
            entry = json.loads(line)
        except ValueError as exc:
            raise LogReadError(f"invalid journal entry: {exc}") from exc
        if not isinstance(entry, dict):
            raise LogReadError("invalid journal entry: expected a JSON object")
        return record_from_journal_entry(entry)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._stream.close()
