"""Tests for GET /status and the root endpoint."""

from typing import Any

import pytest


@pytest.mark.asyncio
async def test_status_endpoint_returns_200(client) -> None:
    response = await client.get("/status")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_status_endpoint_has_required_fields(client) -> None:
    response = await client.get("/status")

    data: dict[str, Any] = response.json()
    assert data["status"] == "ok"
    assert isinstance(data["version"], str)
    assert isinstance(data["uptime_seconds"], int)
    assert data["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_response_carries_request_id(client) -> None:
    response = await client.get("/status", headers={"X-Request-ID": "req-123"})
    assert response.headers["x-request-id"] == "req-123"


@pytest.mark.asyncio
async def test_root(client) -> None:
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Welcome to Eventgram API"
    assert response.json()["health"] == "/status"
