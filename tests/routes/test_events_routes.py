"""Tests for the /e event endpoints."""

from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import status

from eventgram.exceptions import (
    ForbiddenError,
    NotFoundError,
    PrivateResourceError,
    ValidationFailedError,
)


@pytest.fixture
def event_service():
    with patch("eventgram.routes.events.EventService") as service_class:
        yield service_class.return_value


@pytest.fixture
def event_payload(now) -> dict:
    return {
        "name": "Harbour fireworks",
        "description": "On the pier",
        "start": (now + timedelta(hours=1)).isoformat(),
        "end": (now + timedelta(hours=3)).isoformat(),
        "private": False,
    }


class TestCreateEvent:
    """Tests for POST /e."""

    @pytest.mark.asyncio
    async def test_created(
        self, client, registered, event_service, event_payload, make_event
    ) -> None:
        event_service.create = AsyncMock(return_value=make_event(id="5a1c3e9f0b2d7"))

        response = await client.post("/e", json=event_payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json() == {"ok": True, "id": "5a1c3e9f0b2d7"}
        caller, request = event_service.create.await_args.args
        assert caller == registered
        assert request.name == "Harbour fireworks"

    @pytest.mark.asyncio
    async def test_server_fields_are_ignored(
        self, client, registered, event_service, event_payload, make_event
    ) -> None:
        event_service.create = AsyncMock(return_value=make_event())
        event_payload.update({"id": "forged", "creator": "user-2"})

        response = await client.post("/e", json=event_payload)

        assert response.status_code == status.HTTP_201_CREATED
        request = event_service.create.await_args.args[1]
        assert not hasattr(request, "creator")

    @pytest.mark.asyncio
    async def test_not_signed_in(self, client, event_payload) -> None:
        response = await client.post("/e", json=event_payload)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        data = response.json()
        assert data["status"] == "error"
        assert data["error_code"] == "NOT_SIGNED_IN"

    @pytest.mark.asyncio
    async def test_malformed_timestamp(self, client, registered, event_payload) -> None:
        event_payload["start"] = "next tuesday"

        response = await client.post("/e", json=event_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_invalid_event(
        self, client, registered, event_service, event_payload
    ) -> None:
        event_service.create = AsyncMock(
            side_effect=ValidationFailedError(message="Invalid event data.")
        )

        response = await client.post("/e", json=event_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Invalid event data."


class TestGetEvent:
    """Tests for GET /e/{id}."""

    @pytest.mark.asyncio
    async def test_anonymous_read(self, client, event_service, make_event) -> None:
        event_service.get = AsyncMock(return_value=make_event())

        response = await client.get("/e/evt-1")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == "evt-1"
        assert data["name"] == "Harbour fireworks"
        assert data["creator"] == "user-1"
        assert "is_active" in data
        event_service.get.assert_awaited_once_with("evt-1", None)

    @pytest.mark.asyncio
    async def test_viewer_passed_to_service(
        self, client, signed_in, event_service, make_event
    ) -> None:
        event_service.get = AsyncMock(return_value=make_event(private=True))

        response = await client.get("/e/evt-1")

        assert response.status_code == status.HTTP_200_OK
        event_service.get.assert_awaited_once_with("evt-1", "user-1")

    @pytest.mark.asyncio
    async def test_private(self, client, event_service) -> None:
        event_service.get = AsyncMock(side_effect=PrivateResourceError())

        response = await client.get("/e/evt-1")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["error_code"] == "PRIVATE"

    @pytest.mark.asyncio
    async def test_not_found(self, client, event_service) -> None:
        event_service.get = AsyncMock(
            side_effect=NotFoundError(message="Event nope not found", kind="event", entity_id="nope")
        )

        response = await client.get("/e/nope")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["details"] == {"kind": "event", "id": "nope"}


class TestUpdateEvent:
    """Tests for PUT /e/{id}."""

    @pytest.mark.asyncio
    async def test_updated(
        self, client, registered, event_service, event_payload, make_event
    ) -> None:
        event_service.update = AsyncMock(return_value=make_event())

        response = await client.put("/e/evt-1", json=event_payload)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"ok": True}
        assert event_service.update.await_args.args[1] == "evt-1"

    @pytest.mark.asyncio
    async def test_not_creator(
        self, client, registered, event_service, event_payload
    ) -> None:
        event_service.update = AsyncMock(side_effect=ForbiddenError())

        response = await client.put("/e/evt-1", json=event_payload)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["error_code"] == "FORBIDDEN"


class TestDeleteEvent:
    """Tests for DELETE /e/{id}."""

    @pytest.mark.asyncio
    async def test_deleted_with_posts(self, client, registered, event_service) -> None:
        event_service.delete = AsyncMock(return_value=3)

        response = await client.delete("/e/evt-1")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"ok": True, "id": "evt-1", "deleted_posts": 3}
        event_service.delete.assert_awaited_once_with(registered, "evt-1")


class TestEventPosts:
    """Tests for GET /e/{id}/posts."""

    @pytest.mark.asyncio
    async def test_lists_posts(self, client, event_service, make_post) -> None:
        event_service.list_posts = AsyncMock(
            return_value=[make_post(id="p2"), make_post(id="p1")]
        )

        response = await client.get("/e/evt-1/posts")

        assert response.status_code == status.HTTP_200_OK
        assert [p["id"] for p in response.json()["posts"]] == ["p2", "p1"]
