"""Request logging middleware.

Binds a request id into structlog's context variables so every event logged
while handling the request carries it, and reports the handler's latency in
the log and in an ``X-Process-Time-Ms`` response header.
"""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from src.utils.logging import get_logger

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]

        with structlog.contextvars.bound_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            start = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception:
                logger.error("request_failed", elapsed_ms=_elapsed_ms(start))
                raise

            elapsed = _elapsed_ms(start)
            log_fn = logger.info if response.status_code < 400 else logger.warning
            log_fn("request_completed", status_code=response.status_code, elapsed_ms=elapsed)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time-Ms"] = str(elapsed)
        return response


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)
