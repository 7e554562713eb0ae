# ==============================================================================
# HEALTH ENDPOINT TESTS
# ==============================================================================
# Tests for the health check endpoint and the error envelope
# ==============================================================================

import pytest
from httpx import AsyncClient


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_health_endpoint(self, client: AsyncClient):
        """Test health endpoint reports a connected store."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()

        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_header(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"
        assert "X-Response-Time" in response.headers


class TestErrorEnvelope:
    """Tests for the shared error response shape."""

    @pytest.mark.asyncio
    async def test_malformed_body_uses_error_envelope(self, client: AsyncClient):
        response = await client.post("/api/v1/products", json={"reference": "P1"})

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert "body.name" in body["error"]["details"]["validation_errors"]

    @pytest.mark.asyncio
    async def test_bad_query_param_uses_error_envelope(self, client: AsyncClient):
        response = await client.get("/api/v1/clients", params={"status": "Archived"})

        assert response.status_code == 422
        body = response.json()
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert "query.status" in body["error"]["details"]["validation_errors"]

    @pytest.mark.asyncio
    async def test_unknown_root_path_is_not_found(self, client: AsyncClient):
        response = await client.get("/")
        assert response.status_code == 404
