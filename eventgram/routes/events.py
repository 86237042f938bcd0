"""API routes for event operations and the public event feed."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from eventgram.auth.dependencies import get_optional_identity, require_registered_user
from eventgram.config import settings
from eventgram.models.identity import Identity
from eventgram.models.user import AppUser
from eventgram.schemas.common import CreatedResponse, OkResponse
from eventgram.schemas.event import (
    DeleteEventResponse,
    EventRequest,
    EventResponse,
    FeedResponse,
)
from eventgram.schemas.post import PostListResponse, PostResponse
from eventgram.services.event_service import EventService
from eventgram.utils.clock import utc_now

router = APIRouter(prefix="/e", tags=["Events"])
feed_router = APIRouter(prefix="/feed/e", tags=["Feed"])

_ERROR_RESPONSES = {
    400: {
        "description": "Validation error",
        "content": {
            "application/json": {
                "example": {
                    "status": "error",
                    "error_code": "VALIDATION_ERROR",
                    "message": "Invalid event data.",
                    "details": {},
                }
            }
        },
    },
    403: {
        "description": "Not signed in, not registered, or not allowed",
        "content": {
            "application/json": {
                "example": {
                    "status": "error",
                    "error_code": "FORBIDDEN",
                    "message": "You are not authorized to update this event.",
                    "details": {},
                }
            }
        },
    },
    404: {"description": "Event not found"},
}


def _viewer_id(identity: Optional[Identity]) -> Optional[str]:
    return identity.identity_id if identity is not None else None


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Event created",
            "content": {
                "application/json": {"example": {"ok": True, "id": "5a1c3e9f0b2d7"}}
            },
        },
        **_ERROR_RESPONSES,
    },
)
async def create_event(
    event_request: EventRequest,
    user: AppUser = Depends(require_registered_user),
) -> CreatedResponse:
    """
    Create a new event.

    Start times in the past are moved forward to now. The caller becomes
    the event's creator.

    Raises:
        NotSignedInError: If no credentials were sent (403)
        NotRegisteredError: If the caller has no user record (403)
        ValidationFailedError: If the event data is invalid (400)
    """
    service = EventService()
    event = await service.create(user, event_request)
    return CreatedResponse(id=event.id)


@router.get("/{event_id}", response_model=EventResponse, responses=_ERROR_RESPONSES)
async def get_event(
    event_id: str,
    identity: Optional[Identity] = Depends(get_optional_identity),
) -> EventResponse:
    """
    Retrieve an event.

    Private events are only visible to their creator.

    Raises:
        NotFoundError: If the event does not exist (404)
        PrivateResourceError: If the event is private (403)
    """
    service = EventService()
    event = await service.get(event_id, _viewer_id(identity))
    return EventResponse.from_event(event, utc_now())


@router.put("/{event_id}", response_model=OkResponse, responses=_ERROR_RESPONSES)
async def update_event(
    event_id: str,
    event_request: EventRequest,
    user: AppUser = Depends(require_registered_user),
) -> OkResponse:
    """
    Update an event. Only the creator may update it.

    Raises:
        NotFoundError: If the event does not exist (404)
        ForbiddenError: If the caller is not the creator (403)
        ValidationFailedError: If the event data is invalid (400)
    """
    service = EventService()
    await service.update(user, event_id, event_request)
    return OkResponse()


@router.delete(
    "/{event_id}", response_model=DeleteEventResponse, responses=_ERROR_RESPONSES
)
async def delete_event(
    event_id: str,
    user: AppUser = Depends(require_registered_user),
) -> DeleteEventResponse:
    """
    Delete an event together with all of its posts.

    Raises:
        NotFoundError: If the event does not exist (404)
        ForbiddenError: If the caller is not the creator (403)
    """
    service = EventService()
    deleted_posts = await service.delete(user, event_id)
    return DeleteEventResponse(id=event_id, deleted_posts=deleted_posts)


@router.get(
    "/{event_id}/posts", response_model=PostListResponse, responses=_ERROR_RESPONSES
)
async def list_event_posts(
    event_id: str,
    identity: Optional[Identity] = Depends(get_optional_identity),
) -> PostListResponse:
    """List the newest posts of an event."""
    service = EventService()
    posts = await service.list_posts(event_id, _viewer_id(identity))
    return PostListResponse(posts=[PostResponse.from_post(post) for post in posts])


async def _feed(order: Optional[str], page: Optional[str]) -> FeedResponse:
    service = EventService()
    events, order_by, page_num = await service.feed(order=order, page=page)
    now = utc_now()
    return FeedResponse(
        events=[EventResponse.from_event(event, now) for event in events],
        order=order_by,
        page=page_num,
        page_size=settings.feed_page_size,
    )


@feed_router.get("", response_model=FeedResponse)
async def get_feed() -> FeedResponse:
    """First page of public events in the default order."""
    return await _feed(None, None)


@feed_router.get("/{page}", response_model=FeedResponse)
async def get_feed_page(page: str) -> FeedResponse:
    """
    One page of public events in the default order.

    Unparseable or negative pages fall back to page 0.
    """
    return await _feed(None, page)


@feed_router.get("/{order}/{page}", response_model=FeedResponse)
async def get_ordered_feed_page(order: str, page: str) -> FeedResponse:
    """
    One page of public events in the given order.

    `order` is "Created" or "End", optionally prefixed with "-" for
    descending. Unknown orders fall back to the default order.
    """
    return await _feed(order, page)
