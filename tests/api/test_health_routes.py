"""
API tests for health endpoints.
"""

import pytest

from fastapi import status


@pytest.mark.asyncio
async def test_health(test_client):
    response = await test_client.get("/api/health/")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "OK"
    assert data["database"] == "ready"
    assert data["env"]["JWT_SECRET_KEY"] is True
    assert data["env"]["SMTP_USER"] is False


@pytest.mark.asyncio
async def test_readiness(test_client):
    response = await test_client.get("/api/health/ready")

    assert response.json() == {
        "status": "ready",
        "checks": {"api": "ready", "database": "ready"},
    }


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(test_client):
    response = await test_client.get("/api/nope")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["success"] is False
