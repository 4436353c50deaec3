"""
SocialNet Backend — Access Log Middleware
===========================================

What:  One line on the "socialnet.access" logger per request.
How:   Records method, path, status, duration, request ID and client address;
       request bodies and the Authorization header are never logged.

Levels:
    5xx or an exception escaping the app  → ERROR
    4xx                                   → WARNING
    successful /assets/ downloads         → DEBUG
    anything else                         → INFO
/health is not logged at all.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from socialnet.middleware.request_id import request_id_var

logger = logging.getLogger("socialnet.access")

QUIET_PATHS = frozenset({"/health"})
ASSET_PREFIX = "/assets/"


def level_for(path: str, status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if path.startswith(ASSET_PREFIX):
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, started, exc_info=True)
            raise

        self._log(request, response.status_code, started)
        return response

    @staticmethod
    def _log(request: Request, status: int, started: float, exc_info: bool = False) -> None:
        path = request.url.path
        level = level_for(path, status)
        if not logger.isEnabledFor(level):
            return

        duration_ms = (time.perf_counter() - started) * 1000
        rid = request_id_var.get("")
        client = request.client.host if request.client else "unknown"
        logger.log(
            level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client,
            exc_info=exc_info,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client,
            },
        )
