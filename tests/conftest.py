from __future__ import annotations

import contextlib
from collections.abc import Iterator
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from snapd_api.core.app.application_factory import build_app
from snapd_api.core.config.app_config import AppConfig
from snapd_api.core.domain.log_record import LogRecord

RS = b"\x1e"


class ListLogReader:
    """In-memory log reader that can fail after a given number of records."""

    def __init__(
        self,
        records: list[LogRecord],
        *,
        fail_after: int | None = None,
        error: Exception | None = None,
    ) -> None:
        self._records = list(records)
        self._index = 0
        self.fail_after = fail_after
        self.error = error or RuntimeError("read failed")
        self.reads = 0
        self.close_calls = 0

    def __iter__(self) -> Iterator[LogRecord]:
        return self

    def __next__(self) -> LogRecord:
        self.reads += 1
        if self.fail_after is not None and self._index >= self.fail_after:
            raise self.error
        if self._index >= len(self._records):
            raise StopIteration
        record = self._records[self._index]
        self._index += 1
        return record

    def close(self) -> None:
        self.close_calls += 1


class FakeAssertion:
    """Signed document stand-in with a fixed encoding."""

    def __init__(self, encoded: bytes, *, error: Exception | None = None) -> None:
        self.encoded = encoded
        self.error = error

    def encode(self) -> bytes:
        if self.error is not None:
            raise self.error
        return self.encoded


def make_records(count: int) -> list[LogRecord]:
    base = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    return [
        LogRecord(
            timestamp=base + timedelta(seconds=i),
            message=f"line {i}",
            sid="snapd",
            pid=str(100 + i),
        )
        for i in range(count)
    ]


def split_json_seq(body: bytes) -> list[bytes]:
    """Split a json-seq body into its records, separators stripped."""
    assert body == b"" or body.startswith(RS)
    return body.split(RS)[1:]


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def app(app_config: AppConfig) -> FastAPI:
    return build_app(app_config, setup_logging=False)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    client = TestClient(app, raise_server_exceptions=False)
    try:
        yield client
    finally:
        with contextlib.suppress(Exception):
            client.close()
