"""
HTTP middleware: request logging and the CORS origin allow-list.
"""

import logging
from typing import Iterable

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every incoming request"""

    async def dispatch(self, request: Request, call_next):
        logger.info(f"Request to {request.method} {request.url.path}")
        response = await call_next(request)
        return response


class OriginAllowListMiddleware(BaseHTTPMiddleware):
    """
    Rejects cross-origin requests whose Origin is not allow-listed.

    Requests without an Origin header (curl, mobile apps, server-to-server)
    pass through. CORS response headers are added by CORSMiddleware further in.
    """

    def __init__(self, app, allowed_origins: Iterable[str]) -> None:
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if origin and origin not in self.allowed_origins:
            logger.warning(f"Blocked request from disallowed origin {origin}: {request.method} {request.url.path}")
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={
                    "error": "CORS policy violation",
                    "message": "Origin not allowed",
                },
            )

        response = await call_next(request)
        return response
