"""Tests for server/middleware.py module.

Covers:
- REQUEST_ID_HEADER constant
- RequestIdMiddleware class
"""

from __future__ import annotations

import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from coral.core.logging import get_request_id
from coral.server.middleware import REQUEST_ID_HEADER, RequestIdMiddleware


async def _echo_request_id(request: Request) -> JSONResponse:
    _ = request
    return JSONResponse({"request_id": get_request_id()})


@pytest.fixture
def client() -> TestClient:
    app = Starlette(
        routes=[Route("/echo", _echo_request_id)],
        middleware=[Middleware(RequestIdMiddleware)],
    )
    return TestClient(app)


class TestRequestIdHeader:
    def test_header_name(self) -> None:
        assert REQUEST_ID_HEADER == "X-Request-ID"


class TestRequestIdMiddleware:
    """Tests for RequestIdMiddleware class."""

    def test_generates_id(self, client: TestClient) -> None:
        """Requests without an ID get a generated one."""
        response = client.get("/echo")

        request_id = response.headers[REQUEST_ID_HEADER]
        assert len(request_id) == 12
        assert response.json() == {"request_id": request_id}

    def test_reuses_incoming_id(self, client: TestClient) -> None:
        response = client.get("/echo", headers={REQUEST_ID_HEADER: "from-proxy"})

        assert response.headers[REQUEST_ID_HEADER] == "from-proxy"
        assert response.json() == {"request_id": "from-proxy"}

    def test_ids_differ_between_requests(self, client: TestClient) -> None:
        first = client.get("/echo").headers[REQUEST_ID_HEADER]
        second = client.get("/echo").headers[REQUEST_ID_HEADER]

        assert first != second

    def test_header_on_404(self, client: TestClient) -> None:
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert REQUEST_ID_HEADER in response.headers
