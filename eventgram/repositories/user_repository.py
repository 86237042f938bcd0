"""User repository for DynamoDB operations."""

from typing import Any, Optional

from eventgram.config import settings
from eventgram.models.user import USER_KIND, AppUser, normalize_username
from eventgram.repositories.base import BaseRepository


class UserRepository(BaseRepository[AppUser]):
    """Repository for AppUser operations in DynamoDB."""

    kind = USER_KIND
    model = AppUser

    def __init__(
        self,
        table_name: str | None = None,
        client_config: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(table_name or settings.dynamodb_table_users, client_config)

    async def get_by_username(self, username: str) -> Optional[AppUser]:
        """
        Get a user by username.

        Note: This uses a scan with a filter. A GSI on username would
        avoid the scan at scale.

        Args:
            username: Username in any case

        Returns:
            AppUser if found, None otherwise
        """
        users = await self.query(
            filters={"username": normalize_username(username)}, limit=1
        )
        return users[0] if users else None
