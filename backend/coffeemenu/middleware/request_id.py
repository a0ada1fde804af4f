"""
Coffee Menu Backend — Request ID Middleware
=============================================

What:  Assigns a short id to each request and echoes it in X-Request-ID.
Why:   Lets an access-log line, a store failure log line and the client's
       error report be matched to one another.
How:   Reuses the client's X-Request-ID when sent, otherwise generates one;
       stores it in a ContextVar for loggers and exception handlers.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one thread each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a correlation id to the request context and the response headers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
