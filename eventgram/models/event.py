"""Event model and time-window rules."""

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventgram.config import settings
from eventgram.utils.clock import as_utc, utc_now

EVENT_KIND = "event"


def has_valid_duration(
    start: datetime | None,
    end: datetime | None,
    now: datetime | None = None,
    max_length: timedelta | None = None,
    max_start_future: timedelta | None = None,
) -> bool:
    """
    Check that an event time window is acceptable at time `now`.

    Args:
        start: Event start
        end: Event end
        now: Reference time (defaults to current UTC time)
        max_length: Longest allowed end - start (defaults to settings)
        max_start_future: Furthest allowed start - now (defaults to settings)

    Returns:
        False if either bound is unset, start is after end, end has passed,
        the event is too long, or it starts too far ahead; True otherwise.
    """
    if start is None or end is None:
        return False

    start, end = as_utc(start), as_utc(end)
    now = as_utc(now) if now else utc_now()
    max_length = max_length if max_length is not None else settings.max_event_length
    if max_start_future is None:
        max_start_future = settings.max_start_future

    if start > end or end < now:
        return False

    if end - start > max_length:
        return False

    if start - now > max_start_future:
        return False

    return True


class Event(BaseModel):
    """
    Event stored in the entity store.

    Attributes:
        id: Opaque unique identifier, immutable
        name: Event name
        description: Event description
        start: Start of the active window (UTC)
        end: End of the active window (UTC)
        private: Only the creator may view a private event
        creator: Identifier of the creating user
        created: Creation time, immutable
        modified: Time of last mutation
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "id": "5a1c3e9f0b2d7",
                "name": "Harbour fireworks",
                "description": "New year's eve on the pier",
                "start": "2026-12-31T22:00:00Z",
                "end": "2027-01-01T02:00:00Z",
                "private": False,
                "creator": "user-123",
                "created": "2026-12-01T12:00:00Z",
                "modified": "2026-12-01T12:00:00Z",
            }
        },
    )

    id: str = Field(..., description="Event identifier")
    name: str = Field(..., description="Event name")
    description: str = Field("", description="Event description")
    start: datetime = Field(..., description="Start time (UTC)")
    end: datetime = Field(..., description="End time (UTC)")
    private: bool = Field(default=False, description="Visible to creator only")
    creator: str = Field(..., description="Creating user ID")
    created: datetime = Field(..., description="Creation time (UTC)")
    modified: datetime = Field(..., description="Last modification time (UTC)")

    @field_validator("start", "end", "created", "modified")
    @classmethod
    def normalize_timezone(cls, v: datetime) -> datetime:
        """Store every timestamp as aware UTC."""
        return as_utc(v)

    def has_valid_duration(self, now: datetime | None = None) -> bool:
        """Check the event window against the configured limits."""
        return has_valid_duration(self.start, self.end, now)

    def is_valid(self, now: datetime | None = None) -> bool:
        """
        Determine if the event has everything required to be stored.

        Used as the final gate before persistence, after server-assigned
        fields are filled in.
        """
        if not (self.id and self.name and self.description and self.creator):
            return False

        if self.created is None:
            return False

        return self.has_valid_duration(now)

    def is_active(self, now: datetime | None = None) -> bool:
        """Determine if `now` falls inside the event's validated window."""
        now = as_utc(now) if now else utc_now()
        if not self.has_valid_duration(now):
            return False

        return self.end > now and self.start < now

    def is_ended(self, now: datetime | None = None) -> bool:
        """Determine if the event's end time has passed."""
        return self.end < (as_utc(now) if now else utc_now())

    def can_view(self, viewer_id: str | None) -> bool:
        """Public events are visible to all; private ones to the creator."""
        if not self.private:
            return True
        return viewer_id is not None and viewer_id == self.creator
