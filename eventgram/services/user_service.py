"""User service layer: registration and self-service profile management."""

from eventgram.exceptions import (
    ConflictError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    PrivateResourceError,
    ValidationFailedError,
)
from eventgram.logging.config import get_logger
from eventgram.models.identity import Identity
from eventgram.models.user import USER_KIND, AppUser, normalize_username
from eventgram.repositories.user_repository import UserRepository
from eventgram.schemas.user import UserRequest
from eventgram.utils.clock import utc_now

logger = get_logger(__name__)


class UserService:
    """Service layer for user operations."""

    def __init__(self, repository: UserRepository | None = None) -> None:
        self.repository = repository or UserRepository()

    async def _fetch_by_username(self, username: str) -> AppUser:
        user = await self.repository.get_by_username(username)
        if user is None:
            logger.info(
                "Could not find user",
                extra={"context": {"username": normalize_username(username)}},
            )
            raise NotFoundError(message=f"User {username} not found", kind=USER_KIND)
        return user

    async def _check_username_available(self, username: str) -> None:
        if await self.repository.get_by_username(username) is not None:
            logger.info(
                "Username is already in use",
                extra={"context": {"username": username}},
            )
            raise ConflictError(
                message=f"Sorry, the username '{username}' is already taken!"
            )

    async def register(self, identity: Identity, request: UserRequest) -> AppUser:
        """
        Register the caller as a user.

        Raises:
            ValidationFailedError: If no username is given
            ConflictError: If the caller is registered or the username is taken
        """
        if not request.is_valid_request():
            raise ValidationFailedError(message="Invalid user data.")

        existing = await self.repository.get(identity.identity_id)
        if existing is not None:
            raise ConflictError(
                message=f"You already have an account with the username '{existing.username}'."
            )

        username = normalize_username(request.username)
        await self._check_username_available(username)

        now = utc_now()
        user = AppUser(
            id=identity.identity_id,
            email=identity.email,
            username=username,
            first_name=request.first_name,
            last_name=request.last_name,
            private=request.private,
            created=now,
            modified=now,
        )

        if not user.is_valid():
            logger.error(
                "Cannot store invalid user object",
                extra={"context": {"user_id": user.id}},
            )
            raise InternalError(message="An error occurred during registration.")

        await self.repository.create(user)

        logger.info("Created user", extra={"context": {"user_id": user.id}})
        return user

    async def get(self, username: str, viewer_id: str | None = None) -> AppUser:
        """
        Get a user by username.

        Raises:
            NotFoundError: If no such user exists
            PrivateResourceError: If the profile is private to another user
        """
        user = await self._fetch_by_username(username)

        if user.private and user.id != viewer_id:
            raise PrivateResourceError(message="This user's profile is private.")

        return user

    async def update(
        self, identity: Identity, username: str, request: UserRequest
    ) -> AppUser:
        """
        Update the caller's own user record.

        Raises:
            NotFoundError: If no such user exists
            ForbiddenError: If the user is not the caller
            ValidationFailedError: If no username is given
            ConflictError: If the new username is taken
        """
        user = await self._fetch_by_username(username)

        if user.id != identity.identity_id:
            logger.info(
                "Attempt to modify another user denied",
                extra={"context": {"user": identity.identity_id, "target": user.id}},
            )
            raise ForbiddenError(message="Not authorized to change another user!")

        if not request.is_valid_request():
            raise ValidationFailedError(message="Invalid user data.")

        new_username = normalize_username(request.username)
        if new_username != user.username:
            await self._check_username_available(new_username)

        user.username = new_username
        user.first_name = request.first_name
        user.last_name = request.last_name
        user.private = request.private
        user.modified = utc_now()

        await self.repository.put(user)

        logger.info("Updated user", extra={"context": {"user_id": user.id}})
        return user

    async def delete(self, identity: Identity, username: str) -> None:
        """
        Delete the caller's own user record.

        Raises:
            NotFoundError: If no such user exists
            ForbiddenError: If the user is not the caller
        """
        user = await self._fetch_by_username(username)

        if user.id != identity.identity_id:
            logger.warning(
                "Attempt to delete another user denied",
                extra={"context": {"user": identity.identity_id, "target": user.id}},
            )
            raise ForbiddenError(message="You cannot delete another user.")

        await self.repository.delete(user.id)

        logger.info("Deleted user", extra={"context": {"user_id": user.id}})
