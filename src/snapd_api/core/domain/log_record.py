"""
Log records as streamed to API clients.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from snapd_api.core.interfaces.model_bases import InternalDTO

# Timestamp used when the source record carries none.
ZERO_TIME = datetime.min.replace(tzinfo=timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """Format a timestamp as RFC 3339 in UTC, trimming trailing zero fractions."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    # strftime drops the zero padding of years below 1000 on some platforms
    text = (
        f"{ts.year:04d}-{ts.month:02d}-{ts.day:02d}"
        f"T{ts.hour:02d}:{ts.minute:02d}:{ts.second:02d}"
    )
    if ts.microsecond:
        text += "." + f"{ts.microsecond:06d}".rstrip("0")
    return text + "Z"


@dataclass(frozen=True)
class LogRecord(InternalDTO):
    timestamp: datetime
    message: str
    sid: str
    pid: str

    def to_wire(self) -> dict[str, Any]:
        return {
            "timestamp": format_timestamp(self.timestamp),
            "message": self.message,
            "sid": self.sid,
            "pid": self.pid,
        }
