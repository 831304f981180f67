# app/middleware/request_logger.py
import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.rate_limiter import get_client_ip

logger = logging.getLogger("app.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        # Only log POST, PUT, PATCH, DELETE (modify) requests at info
        level = logging.INFO if request.method in ["POST", "PUT", "PATCH", "DELETE"] else logging.DEBUG
        if response.status_code >= 500:
            level = logging.ERROR

        logger.log(
            level,
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.1f} ms) ip={get_client_ip(request)}",
        )
        return response
