"""
Tests for serving handler results through api_endpoint.
"""

import json

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from snapd_api.core.common.exceptions import AppNotFoundError
from snapd_api.core.domain.envelope import Meta
from snapd_api.core.transport.fastapi.api_adapters import api_endpoint
from snapd_api.core.transport.fastapi.responders import async_response, forbidden


class TestApiEndpoint:
    """Tests for api_endpoint."""

    def test_async_handler_value(self, app: FastAPI, client: TestClient) -> None:
        async def handler(request: Request):
            return {"name": request.path_params["name"]}

        app.add_route("/v2/snaps/{name}", api_endpoint(handler), methods=["GET"])

        response = client.get("/v2/snaps/hello")

        assert response.status_code == 200
        assert json.loads(response.content)["result"] == {"name": "hello"}

    def test_sync_handler_value(self, app: FastAPI, client: TestClient) -> None:
        app.add_route("/v2/system-info", api_endpoint(lambda request: {"series": "16"}))

        body = json.loads(client.get("/v2/system-info").content)

        assert body["type"] == "sync"
        assert body["result"] == {"series": "16"}

    def test_returned_error_response(self, app: FastAPI, client: TestClient) -> None:
        app.add_route("/v2/secret", api_endpoint(lambda request: forbidden("no")))

        response = client.get("/v2/secret")

        assert response.status_code == 403
        assert json.loads(response.content)["result"] == {"message": "no"}

    def test_returned_exception(self, app: FastAPI, client: TestClient) -> None:
        app.add_route("/v2/broken", api_endpoint(lambda request: ValueError("bad state")))

        response = client.get("/v2/broken")

        assert response.status_code == 500
        assert json.loads(response.content)["result"]["message"] == "internal error: bad state"

    def test_raised_domain_exception(self, app: FastAPI, client: TestClient) -> None:
        def handler(request: Request):
            raise AppNotFoundError("cannot find app 'svc'")

        app.add_route("/v2/apps", api_endpoint(handler))

        response = client.get("/v2/apps")

        assert response.status_code == 404
        assert json.loads(response.content)["result"]["kind"] == "app-not-found"

    def test_async_operation(self, app: FastAPI, client: TestClient) -> None:
        app.add_route(
            "/v2/snaps",
            api_endpoint(
                lambda request: async_response({"resource": "/v2/changes/3"}, Meta(change="3"))
            ),
            methods=["POST"],
        )

        response = client.post("/v2/snaps")

        assert response.status_code == 202
        assert response.headers["location"] == "/v2/changes/3"
        assert json.loads(response.content)["change"] == "3"

    def test_wraps_handler_name(self) -> None:
        def get_snaps(request: Request):
            return []

        assert api_endpoint(get_snaps).__name__ == "get_snaps"
