"""
MemoPad — Access Logging Middleware
====================================

What:  One log line per HTTP request: method, path, status, duration.
How:   Measures wall time around the downstream handler and picks the log
       level from the status code (5xx → ERROR, 4xx → WARNING, else INFO).
       Static asset fetches that succeed are logged at DEBUG. Unhandled
       errors are logged at ERROR and re-raised to the 500 handler.

Request bodies are not logged here; the memo routes log them at DEBUG.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from memopad.middleware.request_id import request_id_var

logger = logging.getLogger("memopad.access")

# Paths served by the memo API; everything else is page/static content
API_PREFIXES = ("/memo", "/server-info")


def _level_for(path: str, status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if path == "/" or path.startswith(API_PREFIXES):
        return logging.INFO
    return logging.DEBUG


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request after its response has been produced."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "%s %s 500 %.1fms [%s] from %s (unhandled error)",
                method,
                path,
                duration_ms,
                rid,
                client_ip,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        logger.log(
            _level_for(path, status),
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
        )
        return response
