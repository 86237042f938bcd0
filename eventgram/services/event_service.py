"""Event service layer with business logic for event operations."""

from eventgram.config import settings
from eventgram.exceptions import (
    ForbiddenError,
    IdentifierCollisionError,
    InternalError,
    NotFoundError,
    PrivateResourceError,
    ValidationFailedError,
)
from eventgram.logging.config import get_logger
from eventgram.models.event import EVENT_KIND, Event
from eventgram.models.post import Post
from eventgram.models.user import AppUser
from eventgram.repositories.event_repository import EventRepository, valid_feed_order
from eventgram.repositories.post_repository import PostRepository
from eventgram.schemas.event import EventRequest
from eventgram.services.cleanup import delete_post_images
from eventgram.storage.image_store import ImageStore
from eventgram.utils.clock import utc_now
from eventgram.utils.identifiers import new_uid

logger = get_logger(__name__)


def parse_page(page: str | int | None) -> int:
    """Parse a feed page number; anything unusable means page 0."""
    try:
        return max(int(page), 0) if page is not None else 0
    except (TypeError, ValueError):
        return 0


class EventService:
    """
    Service layer for event operations.

    Orchestrates event creation, updates, cascading deletion and feed
    retrieval, and enforces the event time-window rules.
    """

    def __init__(
        self,
        repository: EventRepository | None = None,
        post_repository: PostRepository | None = None,
        image_store: ImageStore | None = None,
    ) -> None:
        """
        Initialize EventService.

        Args:
            repository: EventRepository instance (creates new if None)
            post_repository: PostRepository instance (creates new if None)
            image_store: ImageStore instance (built from settings if None)
        """
        self.repository = repository or EventRepository()
        self.post_repository = post_repository or PostRepository()
        self.image_store = image_store or ImageStore.from_settings()

    async def _fetch(self, event_id: str) -> Event:
        event = await self.repository.get(event_id)
        if event is None:
            raise NotFoundError(
                message=f"Event {event_id} not found", kind=EVENT_KIND, entity_id=event_id
            )
        return event

    async def create(self, user: AppUser, request: EventRequest) -> Event:
        """
        Create a new event.

        A start time in the past is moved forward to now.

        Args:
            user: Registered caller, becomes the creator
            request: Submitted event fields

        Returns:
            The stored Event

        Raises:
            ValidationFailedError: If the request is incomplete or out of policy
            IdentifierCollisionError: If the generated ID is already taken
            InternalError: If the assembled event fails final validation
        """
        now = utc_now()
        if not request.is_valid_request(now):
            logger.info("Invalid event request object")
            raise ValidationFailedError(message="Invalid event data.")

        event_id = new_uid(now)
        if await self.repository.exists(event_id):
            logger.warning(
                "Duplicate event ID generated, aborting",
                extra={"context": {"event_id": event_id}},
            )
            raise IdentifierCollisionError(kind=EVENT_KIND)

        event = Event(
            id=event_id,
            name=request.name,
            description=request.description,
            start=max(request.start, now),
            end=request.end,
            private=request.private,
            creator=user.id,
            created=now,
            modified=now,
        )

        if not event.is_valid(now):
            logger.error(
                "Event failed validation, aborting save",
                extra={"context": {"event_id": event_id}},
            )
            raise InternalError(message="Failed to create a new event.")

        await self.repository.create(event)

        logger.info(
            "Event created",
            extra={"context": {"event_id": event.id, "creator": user.id}},
        )
        return event

    async def get(self, event_id: str, viewer_id: str | None = None) -> Event:
        """
        Get an event the viewer is allowed to see.

        Args:
            event_id: Event ID
            viewer_id: Caller's user ID, None if anonymous

        Returns:
            The Event

        Raises:
            NotFoundError: If the event does not exist
            PrivateResourceError: If the event is private to another user
        """
        event = await self._fetch(event_id)

        if not event.can_view(viewer_id):
            logger.info(
                "Not authorized to view private event",
                extra={"context": {"event_id": event_id, "viewer": viewer_id}},
            )
            raise PrivateResourceError(
                message="This event is private. You are not authorized to view it."
            )

        return event

    async def update(
        self, user: AppUser, event_id: str, request: EventRequest
    ) -> Event:
        """
        Update an event's mutable fields.

        Name, description, visibility and end are replaced. Start is only
        replaced while the stored start is still in the future, and is then
        moved forward to now if it lies in the past.

        Raises:
            NotFoundError: If the event does not exist
            ForbiddenError: If the caller is not the creator, or the event
                has ended and extending ended events is disabled
            ValidationFailedError: If the request is incomplete or out of policy
            InternalError: If the updated event fails final validation
        """
        event = await self._fetch(event_id)

        if event.creator != user.id:
            logger.warning(
                "Update of another user's event denied",
                extra={"context": {"event_id": event_id, "user": user.id, "creator": event.creator}},
            )
            raise ForbiddenError(message="You are not authorized to update this event.")

        now = utc_now()
        if not request.is_valid_request(now):
            logger.info("Invalid event request object")
            raise ValidationFailedError(message="Invalid event data.")

        if not settings.allow_extending_expired_events and event.is_ended(now):
            raise ForbiddenError(message="This event has already ended.")

        event.name = request.name
        event.description = request.description
        event.private = request.private
        event.end = request.end

        if request.start != event.start and event.start > now:
            event.start = request.start

        if event.start < now:
            event.start = now

        event.modified = now

        if not event.is_valid(now):
            logger.error(
                "Event failed validation, aborting update",
                extra={"context": {"event_id": event_id}},
            )
            raise InternalError(message="Failed to update the event.")

        await self.repository.put(event)

        logger.info("Event updated", extra={"context": {"event_id": event_id}})
        return event

    async def delete(self, user: AppUser, event_id: str) -> int:
        """
        Delete an event and every post that references it.

        Image blobs of deleted posts are removed best-effort.

        Returns:
            Number of posts deleted

        Raises:
            NotFoundError: If the event does not exist
            ForbiddenError: If the caller is not the creator
        """
        event = await self._fetch(event_id)

        if event.creator != user.id:
            raise ForbiddenError(message="You are not authorized to delete this event.")

        posts = await self.post_repository.list_for_event(event_id)
        for post in posts:
            await self.post_repository.delete(post.id)
            await delete_post_images(self.image_store, post)

        await self.repository.delete(event_id)

        logger.info(
            "Event deleted",
            extra={"context": {"event_id": event_id, "deleted_posts": len(posts)}},
        )
        return len(posts)

    async def list_posts(self, event_id: str, viewer_id: str | None = None) -> list[Post]:
        """List the newest posts of an event the viewer may see."""
        await self.get(event_id, viewer_id)
        return await self.post_repository.list_for_event(
            event_id, limit=settings.related_posts_limit
        )

    async def feed(
        self, order: str | None = None, page: str | int | None = None
    ) -> tuple[list[Event], str, int]:
        """
        Fetch one page of public events.

        Args:
            order: "Created" or "End", "-" prefix for descending; anything
                else falls back to the default order
            page: Zero-based page number; invalid values mean page 0

        Returns:
            Tuple of (events, applied order, applied page)
        """
        order_by = order if valid_feed_order(order) else settings.default_feed_order
        page_num = parse_page(page)

        events = await self.repository.fetch_feed(
            order=order_by, page=page_num, page_size=settings.feed_page_size
        )
        return events, order_by, page_num
