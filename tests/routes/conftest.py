"""Fixtures for exercising the API through an in-process HTTP client."""

import pytest
from httpx import ASGITransport, AsyncClient

from eventgram.auth.dependencies import (
    get_current_identity,
    get_optional_identity,
    require_registered_user,
)
from eventgram.main import app


@pytest.fixture
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def signed_in(identity):
    """Authenticate every request as `identity` without a credential lookup."""
    app.dependency_overrides[get_optional_identity] = lambda: identity
    app.dependency_overrides[get_current_identity] = lambda: identity
    return identity


@pytest.fixture
def registered(signed_in, user):
    """Authenticate every request as the registered `user`."""
    app.dependency_overrides[require_registered_user] = lambda: user
    return user
