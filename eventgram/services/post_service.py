"""Post service layer: post CRUD gated on the referenced event being active."""

from eventgram.config import settings
from eventgram.exceptions import (
    ForbiddenError,
    IdentifierCollisionError,
    ImageAlreadyAttachedError,
    ImageQueueError,
    ImageStoreError,
    InactiveEventError,
    InternalError,
    NotFoundError,
    PrivateResourceError,
    UnknownEventError,
    UnsupportedImageError,
    ValidationFailedError,
)
from eventgram.logging.config import get_logger
from eventgram.models.post import POST_KIND, Post, can_create_or_update_post
from eventgram.models.user import USER_KIND, AppUser
from eventgram.repositories.event_repository import EventRepository
from eventgram.repositories.post_repository import PostRepository
from eventgram.repositories.user_repository import UserRepository
from eventgram.schemas.post import PostRequest, PostView
from eventgram.services.cleanup import delete_post_images
from eventgram.storage.image_queue import ImageQueue
from eventgram.storage.image_store import ImageStore
from eventgram.utils.clock import utc_now
from eventgram.utils.identifiers import new_uid

logger = get_logger(__name__)


class PostService:
    """Service layer for post operations."""

    def __init__(
        self,
        repository: PostRepository | None = None,
        event_repository: EventRepository | None = None,
        user_repository: UserRepository | None = None,
        image_store: ImageStore | None = None,
        image_queue: ImageQueue | None = None,
    ) -> None:
        self.repository = repository or PostRepository()
        self.event_repository = event_repository or EventRepository()
        self.user_repository = user_repository or UserRepository()
        self.image_store = image_store or ImageStore.from_settings()
        self.image_queue = image_queue or ImageQueue.from_settings()

    async def _fetch(self, post_id: str) -> Post:
        post = await self.repository.get(post_id)
        if post is None:
            raise NotFoundError(
                message=f"Post {post_id} not found", kind=POST_KIND, entity_id=post_id
            )
        return post

    async def _check_event_eligibility(self, event_id: str) -> None:
        """
        Ensure a post may be written against an event right now.

        Raises:
            UnknownEventError: If the event does not exist
            InactiveEventError: If the event is not currently active
        """
        event = await self.event_repository.get(event_id)
        if event is None:
            logger.info(
                "Post references a missing event",
                extra={"context": {"event_id": event_id}},
            )
            raise UnknownEventError(event_id=event_id)

        if not can_create_or_update_post(event, utc_now()):
            logger.info(
                "Cannot post to inactive event",
                extra={"context": {"event_id": event_id}},
            )
            raise InactiveEventError(event_id=event_id)

    def _check_owner(self, post: Post, user: AppUser) -> None:
        if post.user_id != user.id:
            logger.warning(
                "Access to another user's post denied",
                extra={"context": {"post_id": post.id, "user": user.id, "owner": post.user_id}},
            )
            raise ForbiddenError(message="You can only change your own posts.")

    async def create(self, user: AppUser, request: PostRequest) -> Post:
        """
        Create a post against an active event.

        Raises:
            ValidationFailedError: If no event is referenced
            UnknownEventError: If the event does not exist
            InactiveEventError: If the event is not active
            IdentifierCollisionError: If the generated ID is already taken
        """
        if not request.is_valid_request():
            logger.info("Invalid post request object")
            raise ValidationFailedError(message="Invalid post data.")

        await self._check_event_eligibility(request.event_id)

        now = utc_now()
        post_id = new_uid(now)
        if await self.repository.exists(post_id):
            logger.warning(
                "Duplicate post ID generated, aborting",
                extra={"context": {"post_id": post_id}},
            )
            raise IdentifierCollisionError(kind=POST_KIND)

        post = Post(
            id=post_id,
            user_id=user.id,
            event_id=request.event_id,
            image="",
            text=request.text,
            created=now,
            modified=now,
        )

        if not post.is_valid():
            logger.error("Invalid post object, cannot store")
            raise InternalError(message="Failed to create post.")

        await self.repository.create(post)

        logger.info(
            "Post created",
            extra={"context": {"post_id": post.id, "event_id": post.event_id, "user_id": user.id}},
        )
        return post

    async def get_view(self, post_id: str) -> PostView:
        """
        Get a post together with its author's username.

        Raises:
            NotFoundError: If the post or its author does not exist
        """
        post = await self._fetch(post_id)

        author = await self.user_repository.get(post.user_id)
        if author is None:
            logger.info(
                "Author of post could not be found",
                extra={"context": {"post_id": post_id, "user_id": post.user_id}},
            )
            raise NotFoundError(
                message=f"Post {post_id} not found", kind=POST_KIND, entity_id=post_id
            )

        return PostView(
            username=author.username,
            id=post.id,
            event_id=post.event_id,
            image=post.image,
            text=post.text,
            created=post.created,
            modified=post.modified,
        )

    async def update(self, user: AppUser, post_id: str, request: PostRequest) -> Post:
        """
        Update a post's text.

        The event reference cannot change, and the event must be active.

        Raises:
            NotFoundError: If the post does not exist
            ForbiddenError: If the caller does not own the post
            ValidationFailedError: If the request is invalid or moves the post
            UnknownEventError: If the event no longer exists
            InactiveEventError: If the event is not active
        """
        post = await self._fetch(post_id)
        self._check_owner(post, user)

        if not request.is_valid_request():
            logger.info("Invalid post request object")
            raise ValidationFailedError(message="Invalid post data.")

        if request.event_id != post.event_id:
            logger.info(
                "Cannot move post to a different event",
                extra={"context": {"post_id": post_id, "from": post.event_id, "to": request.event_id}},
            )
            raise ValidationFailedError(message="Cannot move this post to a different event.")

        await self._check_event_eligibility(post.event_id)

        post.text = request.text
        post.modified = utc_now()
        await self.repository.put(post)

        logger.info("Post updated", extra={"context": {"post_id": post_id}})
        return post

    async def delete(self, user: AppUser, post_id: str) -> None:
        """
        Delete a post and, best-effort, its image files.

        Raises:
            NotFoundError: If the post does not exist
            ForbiddenError: If the caller does not own the post
        """
        post = await self._fetch(post_id)
        self._check_owner(post, user)

        if not await self.repository.delete(post_id):
            raise NotFoundError(
                message=f"Post {post_id} not found", kind=POST_KIND, entity_id=post_id
            )

        await delete_post_images(self.image_store, post)

        logger.info(
            "Post deleted",
            extra={"context": {"post_id": post_id, "user_id": user.id}},
        )

    async def attach_image(self, user: AppUser, post_id: str, data: bytes) -> Post:
        """
        Store an image and attach it to a post.

        The image is stored once; an attached image is never overwritten.
        After storing, resizing is queued best-effort.

        Args:
            user: Registered caller, must own the post
            post_id: Post ID
            data: Uploaded image bytes

        Returns:
            The updated Post

        Raises:
            NotFoundError: If the post does not exist
            ForbiddenError: If the caller does not own the post
            ImageAlreadyAttachedError: If the post already has an image
            ValidationFailedError: If the upload is not a supported image
            InternalError: If the image cannot be stored
        """
        post = await self._fetch(post_id)

        if post.user_id != user.id:
            logger.warning(
                "Cannot attach an image to another user's post",
                extra={"context": {"post_id": post_id, "user": user.id, "owner": post.user_id}},
            )
            raise ForbiddenError(message="Cannot post for a different user.")

        if post.image:
            logger.warning(
                "Post already has an image attached",
                extra={"context": {"post_id": post_id, "user_id": user.id}},
            )
            raise ImageAlreadyAttachedError(post_id=post_id)

        filename = post.image_filename
        try:
            await self.image_store.store(filename, data)
        except UnsupportedImageError as exc:
            raise ValidationFailedError(
                message="Invalid file type.",
                details={"allowed": ["image/png", "image/jpeg", "image/gif"]},
            ) from exc
        except ImageStoreError as exc:
            logger.error(
                "Failed to store image",
                exc_info=exc,
                extra={"context": {"filename": filename, "user_id": user.id}},
            )
            raise InternalError(
                message="An error occurred while attempting to save the file."
            ) from exc

        try:
            await self.image_queue.enqueue(filename)
        except ImageQueueError as exc:
            logger.error(
                "Failed to add file to image processing queue",
                exc_info=exc,
                extra={"context": {"filename": filename, "post_id": post_id}},
            )

        post.image = self.image_store.object_link(filename)
        post.modified = utc_now()
        await self.repository.put(post)

        logger.info(
            "Image attached",
            extra={"context": {"post_id": post_id, "filename": filename}},
        )
        return post

    async def list_for_user(self, username: str, viewer_id: str | None = None) -> list[Post]:
        """
        List a user's newest posts.

        Raises:
            NotFoundError: If the user does not exist
            PrivateResourceError: If the profile is private to another user
        """
        author = await self.user_repository.get_by_username(username)
        if author is None:
            raise NotFoundError(message=f"User {username} not found", kind=USER_KIND)

        if author.private and author.id != viewer_id:
            raise PrivateResourceError(message="This user's profile is private.")

        return await self.repository.list_for_user(
            author.id, limit=settings.related_posts_limit
        )
