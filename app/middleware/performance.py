"""Performance monitoring middleware."""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.utils.logger import get_logger

logger = get_logger("http")


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Middleware to measure and log request processing time.

    Features:
    - Logs method, path, status code and duration of every request
    - Logs slow requests (>500ms) with warning
    - Adds X-Process-Time header to responses
    - Excludes health check and docs endpoints from request logging
    """

    SLOW_REQUEST_THRESHOLD = 0.5  # 500ms

    EXCLUDED_PATHS = {
        "/healthz",
        "/",
        "/docs",
        "/redoc",
        "/openapi.json",
    }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        path = request.url.path
        if path not in self.EXCLUDED_PATHS:
            summary = f"{request.method} {path} {response.status_code} - {process_time * 1000:.1f}ms"
            if process_time >= self.SLOW_REQUEST_THRESHOLD:
                logger.warning(f"[SLOW REQUEST] {summary}")
            else:
                logger.info(f"[REQUEST] {summary}")

        return response
