"""
FastAPI middleware for observability.

Correlation ID propagation and per-request access logging.

Dependencies: starlette, draftmind.observability
System role: Request/response observability injection
"""

import logging
import re
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from draftmind.observability.correlation import (
    clear_correlation_id,
    set_correlation_id,
)
from draftmind.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Incoming IDs are echoed into logs and headers, so keep them short and plain
_VALID_CORRELATION_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

# Health probes hit these every few seconds
_QUIET_PATH_PREFIX = "/api/v1/health"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log with latency. Health probes are logged at DEBUG."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        method = request.method
        path = request.url.path
        level = logging.DEBUG if path.startswith(_QUIET_PATH_PREFIX) else logging.INFO

        try:
            response: Response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{method} {path} raised",
                e,
                method=method,
                path=path,
                elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        logger.log(
            level,
            f"{method} {path} -> {response.status_code}",
            extra={
                "method": method,
                "path": path,
                "query_string": request.url.query or None,
                "status_code": response.status_code,
                "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Bind a correlation ID to the request context.

    Reuses the caller's X-Correlation-ID when it is well formed, otherwise
    generates one. The ID is returned on the response either way.
    """

    async def dispatch(self, request: Request, call_next):
        incoming = request.headers.get(CORRELATION_HEADER)
        if incoming and not _VALID_CORRELATION_ID.match(incoming):
            incoming = None

        correlation_id = set_correlation_id(incoming)
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
