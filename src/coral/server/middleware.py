"""HTTP middleware for request correlation."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from coral.core.logging import clear_request_id, get_logger, set_request_id

REQUEST_ID_HEADER = "X-Request-ID"

# Type alias for the call_next function
CallNext = Callable[[Request], Awaitable[Response]]

log = get_logger("server")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request's log lines and response with a correlation ID.

    An incoming X-Request-ID header is reused; otherwise one is generated.
    """

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        try:
            response = await call_next(request)
            log.debug(
                "request",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_id()
