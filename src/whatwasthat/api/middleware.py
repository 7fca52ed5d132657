"""Request logging middleware."""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from whatwasthat.utils.logger import get_logger

logger = get_logger(__name__)

LOGGED_PATHS = ("/ask",)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs lookup requests and their outcome."""

    async def dispatch(self, request: Request, call_next):
        """Log request before processing and response after."""
        if request.url.path not in LOGGED_PATHS:
            return await call_next(request)

        start_time = time.time()
        logger.info(
            "Incoming request",
            method=request.method,
            path=request.url.path,
            content_length=request.headers.get("content-length"),
        )

        response = await call_next(request)

        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.time() - start_time) * 1000, 2),
        )
        return response
