"""Tests for server.app module.

Tests the Starlette application factory: routing, CORS, and static files.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Mount, Route
from starlette.testclient import TestClient

from coral.domain import GraphModel
from coral.server.app import create_app


@pytest.fixture
def client(user_graph: GraphModel) -> TestClient:
    return TestClient(create_app(user_graph))


class TestCreateApp:
    """Tests for create_app factory function."""

    def test_returns_starlette_app(self, user_graph: GraphModel) -> None:
        assert isinstance(create_app(user_graph), Starlette)

    def test_no_static_mount_by_default(self, user_graph: GraphModel) -> None:
        app = create_app(user_graph)
        assert not any(isinstance(r, Mount) for r in app.routes)

    def test_static_mount_when_configured(self, user_graph: GraphModel, tmp_path: Path) -> None:
        app = create_app(user_graph, static_dir=tmp_path)
        assert isinstance(app.routes[-1], Mount)


class TestGraphApi:
    """Graph API through the full middleware stack."""

    def test_graph_json(self, client: TestClient, user_graph: GraphModel) -> None:
        response = client.get("/api/graph")

        assert response.status_code == 200
        data = response.json()
        assert data == user_graph.to_dict()
        service = next(n for n in data["nodes"] if n["id"] == "user.v1.UserService")
        assert service["type"] == "service"
        assert service["details"]["kind"] == "Service"
        assert service["details"]["methods"][0]["inputType"] == "GetUserRequest"

    def test_unknown_path_is_404(self, client: TestClient) -> None:
        assert client.get("/api/nodes").status_code == 404

    def test_post_not_allowed(self, client: TestClient) -> None:
        assert client.post("/api/graph", json={}).status_code == 405


class TestCors:
    """Browser access from local frontends."""

    def test_preflight_allowed_origin(self, client: TestClient) -> None:
        response = client.options(
            "/api/graph",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert "GET" in response.headers["access-control-allow-methods"]

    def test_preflight_disallowed_origin(self, client: TestClient) -> None:
        response = client.options(
            "/api/graph",
            headers={
                "Origin": "http://evil.example",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    def test_simple_request_allowed_origin(self, client: TestClient) -> None:
        response = client.get("/api/graph", headers={"Origin": "http://127.0.0.1:3000"})

        assert response.headers["access-control-allow-origin"] == "http://127.0.0.1:3000"

    def test_custom_origins(self, user_graph: GraphModel) -> None:
        client = TestClient(create_app(user_graph, cors_origins=["https://coral.example"]))

        response = client.get("/health", headers={"Origin": "https://coral.example"})

        assert response.headers["access-control-allow-origin"] == "https://coral.example"


class TestStaticFiles:
    """Frontend served from a build directory."""

    @pytest.fixture
    def static_client(self, user_graph: GraphModel, tmp_path: Path) -> TestClient:
        (tmp_path / "index.html").write_text("<html><body>coral</body></html>")
        (tmp_path / "app.js").write_text("console.log('coral')")
        return TestClient(create_app(user_graph, static_dir=tmp_path))

    def test_index_served_at_root(self, static_client: TestClient) -> None:
        response = static_client.get("/")

        assert response.status_code == 200
        assert "coral" in response.text
        assert response.headers["content-type"].startswith("text/html")

    def test_assets_served(self, static_client: TestClient) -> None:
        assert static_client.get("/app.js").status_code == 200

    def test_api_takes_precedence(self, static_client: TestClient) -> None:
        assert static_client.get("/api/graph").headers["content-type"] == "application/json"
        assert static_client.get("/health").text == "OK"

    def test_missing_asset_is_404(self, static_client: TestClient) -> None:
        assert static_client.get("/missing.js").status_code == 404


class TestInternalErrors:
    """Unhandled exceptions are answered with an InternalError body."""

    def test_unhandled_exception_is_500_json(self, user_graph: GraphModel) -> None:
        # Given - a handler that fails
        async def boom(request: Request) -> Response:
            _ = request
            raise RuntimeError("graph exploded")

        app = create_app(user_graph)
        app.router.routes.append(Route("/boom", boom))
        client = TestClient(app, raise_server_exceptions=False)

        # When
        response = client.get("/boom")

        # Then
        assert response.status_code == 500
        assert response.json() == {
            "code": 9001,
            "error": "INTERNAL_ERROR",
            "message": "Internal error: RuntimeError",
            "retryable": False,
            "details": {"path": "/boom"},
        }

    def test_normal_requests_unaffected(self, client: TestClient) -> None:
        assert client.get("/health").status_code == 200
