# Middleware package init
"""
SocialNet Backend — Middleware Package
========================================

Cross-cutting concerns applied to every request.

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [Security Headers] → [GZip] → [CORS] → Route Handler

    Responses travel the chain in reverse, so the request ID header and the
    security headers are present on every response, and the access log sees
    the final status code.
"""
