"""Request timing middleware for the file manager API."""

import logging
import time
from typing import List, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger(__name__)


class TimingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its status and duration."""

    def __init__(
        self,
        app,
        slow_request_threshold: float = 1.0,  # seconds
        exempt_paths: Optional[List[str]] = None,
    ):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold
        self.exempt_paths = exempt_paths or ["/docs", "/openapi.json"]

    async def dispatch(self, request: Request, call_next) -> Response:
        if any(request.url.path.startswith(path) for path in self.exempt_paths):
            return await call_next(request)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_ms = round((time.perf_counter() - start_time) * 1000, 2)
            logger.error(f"{request.method} {request.url.path} failed after {elapsed_ms}ms: {type(e).__name__}")
            raise

        elapsed = time.perf_counter() - start_time
        elapsed_ms = round(elapsed * 1000, 2)
        response.headers["X-Response-Time"] = f"{elapsed_ms}ms"

        if elapsed > self.slow_request_threshold:
            logger.warning(f"Slow request detected: {request.method} {request.url.path} took {elapsed_ms}ms")
        else:
            logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms}ms")
        return response
