"""
SocialNet Backend — Application Wiring Tests
==============================================

What:  Health check, middleware headers, asset serving and the global
       exception handler shapes.
"""

import logging

import pytest

from socialnet.main import create_app
from socialnet.middleware.logging import level_for
from socialnet.middleware.request_id import resolve_request_id
from socialnet.middleware.security_headers import DEFAULT_SECURITY_HEADERS


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == "1.0.0"
        assert body["uptime_seconds"] >= 0


class TestMiddleware:

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/health")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_unsafe_request_id_replaced(self, test_client):
        response = await test_client.get(
            "/health", headers={"X-Request-ID": "forged line INFO admin logged in"}
        )
        rid = response.headers["X-Request-ID"]
        assert rid != "forged line INFO admin logged in"
        assert len(rid) == 8

    @pytest.mark.parametrize("supplied", [None, "", "a" * 65, "has space", "semi;colon"])
    def test_resolve_request_id_generates(self, supplied):
        rid = resolve_request_id(supplied)
        assert rid != supplied
        assert len(rid) == 8

    @pytest.mark.parametrize("supplied", ["trace-123", "A.b_c-9", "x" * 64])
    def test_resolve_request_id_keeps_safe_values(self, supplied):
        assert resolve_request_id(supplied) == supplied

    @pytest.mark.parametrize(
        "path, status, level",
        [
            ("/posts", 200, logging.INFO),
            ("/assets/2026/01/01/a.png", 200, logging.DEBUG),
            ("/assets/missing.png", 404, logging.WARNING),
            ("/auth/login", 400, logging.WARNING),
            ("/auth/register", 500, logging.ERROR),
        ],
    )
    def test_access_log_level(self, path, status, level):
        assert level_for(path, status) == level

    @pytest.mark.asyncio
    async def test_security_headers(self, test_client):
        response = await test_client.get("/health")
        for name, value in DEFAULT_SECURITY_HEADERS.items():
            assert response.headers[name] == value
        assert response.headers["Cross-Origin-Resource-Policy"] == "cross-origin"

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.get(
            "/assets/2026/01/01/missing.png", headers={"X-Request-ID": "abc12345"}
        )
        assert response.status_code == 404
        assert response.json()["request_id"] == "abc12345"

    def test_create_app_registers_routes(self):
        paths = set(create_app().openapi()["paths"])
        assert {
            "/auth/register",
            "/auth/login",
            "/users/{user_id}",
            "/users/{user_id}/friends",
            "/users/{user_id}/{friend_id}",
            "/posts",
            "/posts/{user_id}/posts",
            "/posts/{post_id}/like",
            "/assets/{file_path}",
            "/health",
        } <= paths

    def test_login_documents_request_body(self):
        operation = create_app().openapi()["paths"]["/auth/login"]["post"]
        schema = operation["requestBody"]["content"]["application/json"]["schema"]
        assert set(schema["required"]) == {"email", "password"}


class TestAssets:

    @pytest.mark.asyncio
    async def test_serves_stored_file(self, test_client, file_service, sample_image_bytes):
        _, relative = await file_service.store_file(sample_image_bytes, ".png")
        response = await test_client.get(f"/assets/{relative}")
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.headers["Cache-Control"] == "public, max-age=86400"

    @pytest.mark.asyncio
    async def test_missing_file(self, test_client):
        response = await test_client.get("/assets/nothing-here.png")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_traversal_rejected(self, test_client):
        response = await test_client.get("/assets/..%2F..%2Fetc%2Fpasswd")
        assert response.status_code in (400, 404)
