"""Post repository for DynamoDB operations."""

from typing import Any

from eventgram.config import settings
from eventgram.models.post import POST_KIND, Post
from eventgram.repositories.base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """Repository for Post operations in DynamoDB."""

    kind = POST_KIND
    model = Post

    def __init__(
        self,
        table_name: str | None = None,
        client_config: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(table_name or settings.dynamodb_table_posts, client_config)

    async def list_for_event(
        self, event_id: str, limit: int | None = None
    ) -> list[Post]:
        """List posts referencing an event, newest first."""
        return await self.query(
            filters={"event_id": event_id}, order="-created", limit=limit
        )

    async def list_for_user(self, user_id: str, limit: int | None = None) -> list[Post]:
        """List posts owned by a user, newest first."""
        return await self.query(
            filters={"user_id": user_id}, order="-created", limit=limit
        )
