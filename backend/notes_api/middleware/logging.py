"""
Notes API: Request Logging Middleware
========================================

What:  One access log line per HTTP request.
How:   Times the downstream call and logs method, path, status, duration,
       request id and client address on the `notes_api.access` logger.
When:  Runs inside RequestIDMiddleware, so the request id is already set.

Log line:
    PATCH /notes/3 200 4.2ms [a1b2c3d4] from 127.0.0.1

Level by status:
    5xx → ERROR, 4xx → WARNING, otherwise INFO

Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notes_api.middleware.request_id import request_id_var

logger = logging.getLogger("notes_api.access")

# Polled every few seconds by orchestrators
_QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its status and duration."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in _QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        # request.client is None under some test transports
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
