"""
Tests for serving files as download attachments.
"""

import json
import os
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from snapd_api.core.transport.fastapi.api_adapters import api_endpoint
from snapd_api.core.transport.fastapi.responses import FileDownloadResponse


@pytest.fixture
def download(tmp_path: Path) -> Path:
    path = tmp_path / "hello_1.0_amd64.txt"
    path.write_bytes(b"hello world")
    return path


def _route(app: FastAPI, path: Path) -> None:
    app.add_route(
        "/v2/download", api_endpoint(lambda request: FileDownloadResponse(path)), methods=["GET"]
    )


class TestFileDownloadResponse:
    """Tests for FileDownloadResponse."""

    def test_attachment(self, app: FastAPI, client: TestClient, download: Path) -> None:
        _route(app, download)

        response = client.get("/v2/download")

        assert response.status_code == 200
        assert response.content == b"hello world"
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="hello_1.0_amd64.txt"'
        )
        assert response.headers["content-type"].startswith("text/plain")

    def test_non_ascii_filename(self, app: FastAPI, client: TestClient, tmp_path: Path) -> None:
        path = tmp_path / "café_ü_日本.txt"
        path.write_bytes(b"bonjour")
        _route(app, path)

        response = client.get("/v2/download")

        assert response.status_code == 200
        assert response.content == b"bonjour"
        assert (
            response.headers["content-disposition"]
            == "attachment; filename*=utf-8''caf%C3%A9_%C3%BC_%E6%97%A5%E6%9C%AC.txt"
        )

    def test_missing_file(self, app: FastAPI, client: TestClient, tmp_path: Path) -> None:
        _route(app, tmp_path / "gone.snap")

        response = client.get("/v2/download")

        assert response.status_code == 404
        body = json.loads(response.content)
        assert body["type"] == "error"
        assert "gone.snap" in body["result"]["message"]

    def test_directory_is_not_served(self, app: FastAPI, client: TestClient, tmp_path: Path) -> None:
        _route(app, tmp_path)

        assert client.get("/v2/download").status_code == 404

    def test_path_below_a_file(self, app: FastAPI, client: TestClient, download: Path) -> None:
        _route(app, download / "child")

        response = client.get("/v2/download")

        assert response.status_code == 404
        assert json.loads(response.content)["type"] == "error"

    def test_stat_permission_denied(self, download: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def denied(path, *args, **kwargs):
            raise PermissionError(13, "Permission denied", path)

        monkeypatch.setattr(os, "stat", denied)
        served = FileDownloadResponse(download).serve()
        monkeypatch.undo()

        assert served.status_code == 403
        body = json.loads(served.body)
        assert body["status"] == "Forbidden"
        assert "hello_1.0_amd64.txt" in body["result"]["message"]

    def test_unreadable_file(self, download: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(os, "access", lambda path, mode: False)

        served = FileDownloadResponse(download).serve()

        assert served.status_code == 403

    def test_conditional_get(self, app: FastAPI, client: TestClient, download: Path) -> None:
        _route(app, download)
        etag = client.get("/v2/download").headers["etag"]

        response = client.get("/v2/download", headers={"If-None-Match": etag})

        assert response.status_code == 304
        assert response.content == b""

    def test_range_request(self, app: FastAPI, client: TestClient, download: Path) -> None:
        _route(app, download)

        response = client.get("/v2/download", headers={"Range": "bytes=0-4"})

        assert response.status_code == 206
        assert response.content == b"hello"

    def test_filename(self, download: Path) -> None:
        assert FileDownloadResponse(download).filename == "hello_1.0_amd64.txt"
