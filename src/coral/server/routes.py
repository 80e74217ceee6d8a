"""HTTP routes for the snapshot service."""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route

from coral.domain import GraphModel


def create_routes(graph: GraphModel) -> list[Route]:
    """Create read-only routes serving ``graph``.

    The graph is serialized once; every request returns the same payload.
    """
    payload = graph.to_dict()

    async def health(request: Request) -> PlainTextResponse:
        """Liveness probe."""
        _ = request  # unused
        return PlainTextResponse("OK")

    async def get_graph(request: Request) -> JSONResponse:
        _ = request  # unused
        return JSONResponse(payload)

    return [
        Route("/health", health, methods=["GET"]),
        Route("/api/graph", get_graph, methods=["GET"]),
    ]
