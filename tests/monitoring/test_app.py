"""Tests for middleware and the service endpoints."""

from httpx import AsyncClient

from quill.configs import settings


class TestMiddleware:
    async def test_request_id_generated(self, client: AsyncClient) -> None:
        response = await client.get("/")

        assert response.headers["x-request-id"]

    async def test_request_id_propagated(self, client: AsyncClient) -> None:
        response = await client.get("/", headers={"X-Request-ID": "trace-abc"})

        assert response.headers["x-request-id"] == "trace-abc"

    async def test_security_headers(self, client: AsyncClient) -> None:
        response = await client.get("/api/posts")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "DENY"

    async def test_error_responses_carry_request_id(self, client: AsyncClient) -> None:
        response = await client.get("/api/posts/9999")

        assert response.status_code == 404
        assert response.headers["x-request-id"]


class TestServiceEndpoints:
    async def test_root(self, client: AsyncClient) -> None:
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json() == {"message": f"Welcome to {settings.APP_NAME}"}

    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["database"] == "connected"
        assert data["version"] == "1.0.0"

    async def test_openapi_lists_routes(self, client: AsyncClient) -> None:
        paths = (await client.get("/openapi.json")).json()["paths"]

        expected = {"/api/auth/register", "/api/auth/login", "/api/posts", "/api/posts/{post_id}"}
        assert expected <= set(paths)
