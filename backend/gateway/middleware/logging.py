"""
Document Store Gateway — Request Logging Middleware
=====================================================

What:  One access-log line per HTTP request.
How:   Measures the time from middleware entry to response and logs client,
       method, path, status and duration on the `gateway.access` logger.
When:  Runs inside RequestIDMiddleware, so the request id is available.

Log line:
    127.0.0.1 GET /collections/Lessons 200 3.2ms [a1b2c3d4]

Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from gateway.middleware.request_id import request_id_var

logger = logging.getLogger("gateway.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status and latency of each request.

    Level by status class:
        5xx → ERROR, 4xx → WARNING, everything else → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %s %d %.1fms [%s]",
            client_ip,
            method,
            path,
            status,
            duration_ms,
            rid,
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
