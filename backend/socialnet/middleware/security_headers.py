"""
SocialNet Backend — Security Headers Middleware
=================================================

What:  Adds hardening headers to every response.
How:   Sets each header unless the route already chose a value.

Cross-Origin-Resource-Policy is "cross-origin" so the frontend, served from a
different origin, can embed pictures from /assets.
"""

from typing import Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

DEFAULT_SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "cross-origin",
    "Origin-Agent-Cluster": "?1",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Applies DEFAULT_SECURITY_HEADERS (or an override mapping) to responses."""

    def __init__(self, app, headers: Dict[str, str] = None, **kwargs):
        super().__init__(app, **kwargs)
        self.headers = dict(headers or DEFAULT_SECURITY_HEADERS)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        return response
