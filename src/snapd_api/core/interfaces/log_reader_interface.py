from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from snapd_api.core.domain.log_record import LogRecord


@runtime_checkable
class ILogReader(Protocol):
    """A sequential, possibly unbounded source of log records.

    Iteration ending (``StopIteration``) means end-of-data. Any other
    exception raised while fetching the next record is a read failure.
    The owner of the reader must call ``close`` exactly once.
    """

    def __iter__(self) -> Iterator[LogRecord]: ...

    def __next__(self) -> LogRecord: ...

    def close(self) -> None: ...
