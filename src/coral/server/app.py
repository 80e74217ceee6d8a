"""Starlette application factory."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import BaseRoute, Mount
from starlette.staticfiles import StaticFiles

from coral.config.constants import DEFAULT_CORS_ORIGINS
from coral.core.errors import InternalError
from coral.core.logging import get_logger
from coral.domain import GraphModel
from coral.server.middleware import RequestIdMiddleware
from coral.server.routes import create_routes

log = get_logger("server")


async def internal_error(request: Request, exc: Exception) -> JSONResponse:
    """Answer an unhandled exception with a 500 and an InternalError body."""
    log.error("request_failed", path=request.url.path, error=repr(exc))
    error = InternalError.unexpected(type(exc).__name__, path=request.url.path)
    return JSONResponse(error.to_dict(), status_code=500)


def create_app(
    graph: GraphModel,
    *,
    static_dir: Path | None = None,
    cors_origins: Sequence[str] = DEFAULT_CORS_ORIGINS,
) -> Starlette:
    """Create the read-only snapshot application for ``graph``.

    When ``static_dir`` is given, the built frontend is served at ``/``
    behind the API routes.
    """
    routes: list[BaseRoute] = list(create_routes(graph))
    if static_dir is not None:
        routes.append(Mount("/", app=StaticFiles(directory=static_dir, html=True), name="ui"))

    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=list(cors_origins),
            allow_methods=["GET", "OPTIONS"],
            allow_headers=["Content-Type"],
        ),
        Middleware(RequestIdMiddleware),
    ]

    return Starlette(
        routes=routes,
        middleware=middleware,
        exception_handlers={Exception: internal_error},
    )
