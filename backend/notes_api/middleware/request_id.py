"""
Notes API: Request ID Middleware
===================================

What:  Tags each request with a correlation id and echoes it in the response.
How:   Reuses the client's X-Request-ID header when present, otherwise
       generates a short id; stores it in a ContextVar for loggers and
       error handlers and in request.state for route handlers.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    """First 8 hex characters of a UUID4; enough for log correlation."""
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns and propagates the request correlation id."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
