# tests/routes/test_app.py
"""Tests for application-level routes, middleware and error handling."""

from unittest.mock import MagicMock

import pytest
from httpx import AsyncClient


class TestRootEndpoints:
    """Root, health and unknown paths."""

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient) -> None:
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json() == {"message": "Welcome to the Blog API"}

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["message"] == "Server is running"
        assert "T" in body["timestamp"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/unknown", "/api/blogs/tags/extra/segments"])
    async def test_unknown_api_path(self, client: AsyncClient, path: str) -> None:
        response = await client.get(path)

        assert response.status_code == 404
        assert response.json() == {"detail": "Endpoint not found"}


class TestMiddleware:
    """Headers added to every response."""

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client: AsyncClient) -> None:
        response = await client.get("/api/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, client: AsyncClient) -> None:
        response = await client.get("/api/health")

        assert len(response.headers["X-Request-ID"]) == 32

    @pytest.mark.asyncio
    async def test_security_headers(self, client: AsyncClient) -> None:
        response = await client.get("/")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    @pytest.mark.asyncio
    async def test_cors_preflight(self, client: AsyncClient) -> None:
        response = await client.options(
            "/api/blogs",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert response.headers["access-control-allow-credentials"] == "true"


class TestUnhandledErrors:
    """Unexpected failures become a generic 500."""

    @pytest.mark.asyncio
    async def test_generic_500(self, lenient_client: AsyncClient, blog_repo: MagicMock) -> None:
        blog_repo.get_tags.side_effect = RuntimeError("connection reset by peer")

        response = await lenient_client.get("/api/blogs/tags")

        assert response.status_code == 500
        assert response.json() == {"detail": "Something went wrong!"}
