"""
Request middleware: correlation id and per-request timing logs.
"""

import time
from typing import Callable

import structlog
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

# Static file mounts; logging every thumbnail fetch drowns the useful lines
UNLOGGED_PREFIXES = ("/images/", "/exports/", "/health")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log the outcome and duration of each API request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path.startswith(UNLOGGED_PREFIXES):
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Request failed",
                method=request.method,
                path=path,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        logger.info(
            "Request completed",
            method=request.method,
            path=path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            client_ip=request.client.host if request.client else "unknown",
        )
        return response


def setup_middleware(app) -> None:
    """Register middleware. Starlette runs them last-added-first."""
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name="X-Request-ID",
        update_request_header=True,
    )
