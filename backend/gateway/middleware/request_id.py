"""
Document Store Gateway — Request ID Middleware
================================================

What:  Assigns a short id to each request and returns it in X-Request-ID.
How:   A client-supplied X-Request-ID is reused when it is a plain token
       (letters, digits, ".", "_", "-", at most 64 characters); anything
       else is replaced by a new 8-character UUID prefix. The id is kept in
       a ContextVar so the access log and the exception handlers can
       include it.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Echoed into log lines and error bodies, so no spaces or control characters.
_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")

# Coroutine-local: concurrent requests on the same thread each see their own id.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return str(uuid.uuid4())[:8]


def resolve_request_id(supplied: Optional[str]) -> str:
    """Return the client's id if it is a plain token, else a fresh one."""
    if supplied and _CLIENT_ID_PATTERN.fullmatch(supplied):
        return supplied
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags every request, and its response, with a correlation id."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid

        request_id_var.set(rid)
        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
