"""
Fixtures for end-to-end API tests.

Requests go through the real app, authentication, repositories, image
store and image queue, with DynamoDB, S3 and SQS served by moto.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from eventgram.main import app
from eventgram.repositories.identity_repository import IdentityRepository
from scripts.manage_identities import issue_identity


@pytest.fixture
async def api_client(aws):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client


@pytest.fixture
def issue_token(aws):
    """Issue a fresh credential and return its Authorization header."""

    async def _issue(email: str) -> dict[str, str]:
        _, token = await issue_identity(IdentityRepository(), email)
        return {"Authorization": f"Bearer {token}"}

    return _issue


@pytest.fixture
def register(api_client, issue_token):
    """Issue a credential and register a user under `username`."""

    async def _register(username: str) -> dict[str, str]:
        headers = await issue_token(f"{username}@example.com")
        response = await api_client.post(
            "/u", json={"username": username}, headers=headers
        )
        assert response.status_code == 201
        return headers

    return _register
