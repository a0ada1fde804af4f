"""
Coffee Menu Backend — Unexpected Error Middleware
===================================================

What:  Turns any exception no handler claimed into 500 {"error": "Internal server error"}.
Why:   Starlette runs an `Exception` handler in ServerErrorMiddleware, the
       outermost layer, so those responses never pass back through CORS and
       a browser on another origin could not read them. Installed innermost,
       this catch sits below CORSMiddleware and the response gets the
       Access-Control-* headers like any other.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from coffeemenu.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class UnexpectedErrorMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            rid = request_id_var.get("")
            logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
            return JSONResponse(status_code=500, content={"error": "Internal server error"})
