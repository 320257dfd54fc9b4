"""Tests for the health check endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from ohshop_admin.main import app


@pytest.mark.asyncio
async def test_health_check_returns_200():
    """Health endpoint should return 200 with status, version, and environment."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert "environment" in data


@pytest.mark.asyncio
async def test_protected_routes_require_a_bearer_token():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/main-categories")
        bad_token = await client.get(
            "/api/v1/main-categories", headers={"Authorization": "Bearer nope"}
        )

    assert response.status_code == 401
    assert bad_token.status_code == 401
    assert bad_token.json()["detail"] == "Invalid token"
