"""Event repository for DynamoDB operations."""

from typing import Any

from eventgram.config import settings
from eventgram.models.event import EVENT_KIND, Event
from eventgram.repositories.base import BaseRepository

# Feed order names accepted from clients, mapped to model attributes
FEED_ORDER_FIELDS = {"Created": "created", "End": "end"}


def valid_feed_order(order: str | None) -> bool:
    """
    Check a client-supplied feed order.

    Accepts "Created" or "End", optionally prefixed with "-" for
    descending order.
    """
    if not order:
        return False
    return order.removeprefix("-") in FEED_ORDER_FIELDS


class EventRepository(BaseRepository[Event]):
    """Repository for Event operations in DynamoDB."""

    kind = EVENT_KIND
    model = Event

    def __init__(
        self,
        table_name: str | None = None,
        client_config: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(table_name or settings.dynamodb_table_events, client_config)

    async def fetch_feed(self, order: str, page: int, page_size: int) -> list[Event]:
        """
        Fetch one page of the public event feed.

        Args:
            order: Valid feed order, e.g. "-Created"
            page: Zero-based page number
            page_size: Events per page

        Returns:
            Events on the requested page
        """
        descending = order.startswith("-")
        field = FEED_ORDER_FIELDS[order.removeprefix("-")]
        return await self.query(
            filters={"private": False},
            order=f"-{field}" if descending else field,
            limit=page_size,
            offset=page_size * page,
        )
