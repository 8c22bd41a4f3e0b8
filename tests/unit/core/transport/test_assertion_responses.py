"""
Tests for serving assertion bundles.
"""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from snapd_api.core.transport.fastapi.api_adapters import api_endpoint
from snapd_api.core.transport.fastapi.responses import (
    AssertionBundleResponse,
    assertion_bundle_response,
)
from tests.conftest import FakeAssertion


def _route(app: FastAPI, response: AssertionBundleResponse) -> None:
    app.add_route("/v2/assertions", api_endpoint(lambda request: response), methods=["GET"])


class TestAssertionBundleResponse:
    """Tests for assertion_bundle_response."""

    def test_single_assertion(self, app: FastAPI, client: TestClient) -> None:
        """Test that one assertion uses the plain media type."""
        _route(app, assertion_bundle_response([FakeAssertion(b"type: account\n\nsig")]))

        response = client.get("/v2/assertions")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/x.ubuntu.assertion"
        assert response.headers["x-ubuntu-assertions-count"] == "1"
        assert response.content == b"type: account\n\nsig"

    def test_two_assertions_force_bundle(self, app: FastAPI, client: TestClient) -> None:
        """Test that more than one assertion is always declared a bundle."""
        _route(
            app,
            assertion_bundle_response([FakeAssertion(b"one"), FakeAssertion(b"two")], bundle=False),
        )

        response = client.get("/v2/assertions")

        assert response.headers["content-type"] == "application/x.ubuntu.assertion; bundle=y"
        assert response.headers["x-ubuntu-assertions-count"] == "2"
        assert response.content == b"one\n\ntwo"

    def test_requested_bundle_of_one(self) -> None:
        response = assertion_bundle_response([FakeAssertion(b"one")], bundle=True)

        assert response.media_type == "application/x.ubuntu.assertion; bundle=y"

    def test_no_assertions(self, app: FastAPI, client: TestClient) -> None:
        _route(app, assertion_bundle_response([]))

        response = client.get("/v2/assertions")

        assert response.status_code == 200
        assert response.headers["x-ubuntu-assertions-count"] == "0"
        assert response.content == b""

    def test_failure_keeps_written_assertions(
        self, app: FastAPI, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that a failing assertion stops the body without changing the status."""
        assertions = [
            FakeAssertion(b"one\n"),
            FakeAssertion(b"", error=ValueError("broken signature")),
            FakeAssertion(b"three"),
        ]
        _route(app, assertion_bundle_response(assertions))

        with caplog.at_level(logging.WARNING):
            response = client.get("/v2/assertions")

        assert response.status_code == 200
        assert response.headers["x-ubuntu-assertions-count"] == "3"
        assert response.content == b"one\n"
        assert "cannot write encoded assertion" in caplog.text
