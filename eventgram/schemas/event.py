"""Pydantic schemas for event API requests and responses."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventgram.models.event import Event, has_valid_duration
from eventgram.utils.clock import as_utc


class EventRequest(BaseModel):
    """
    Request schema for creating or updating an event.

    Server-assigned fields (id, creator, created, modified) are ignored if
    a client sends them.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "name": "Harbour fireworks",
                "description": "New year's eve on the pier",
                "start": "2026-12-31T22:00:00Z",
                "end": "2027-01-01T02:00:00Z",
                "private": False,
            }
        },
    )

    name: str = Field(default="", description="Event name (required)")
    description: str = Field(default="", description="Event description (required)")
    start: Optional[datetime] = Field(None, description="Start time")
    end: Optional[datetime] = Field(None, description="End time")
    private: bool = Field(default=False, description="Visible to creator only")

    @field_validator("start", "end")
    @classmethod
    def normalize_timezone(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)

    def is_valid_request(self, now: datetime | None = None) -> bool:
        """
        Determine if the submitted event has all required parts.

        Checked before any server-side fields are assigned.
        """
        if not self.name or not self.description:
            return False

        return has_valid_duration(self.start, self.end, now)


class EventResponse(BaseModel):
    """Event as returned to clients, with its derived active flag."""

    id: str = Field(..., description="Event ID")
    name: str = Field(..., description="Event name")
    description: str = Field(..., description="Event description")
    start: datetime = Field(..., description="Start time")
    end: datetime = Field(..., description="End time")
    private: bool = Field(..., description="Visible to creator only")
    creator: str = Field(..., description="Creating user ID")
    created: datetime = Field(..., description="Creation time")
    modified: datetime = Field(..., description="Last modification time")
    is_active: bool = Field(..., description="Event is currently active")

    @classmethod
    def from_event(cls, event: Event, now: datetime | None = None) -> "EventResponse":
        return cls(
            **event.model_dump(),
            is_active=event.is_active(now),
        )


class DeleteEventResponse(BaseModel):
    """Response for a cascading event delete."""

    ok: bool = Field(default=True, description="Operation succeeded")
    id: str = Field(..., description="Deleted event ID")
    deleted_posts: int = Field(..., description="Number of posts removed")


class FeedResponse(BaseModel):
    """
    Response schema for the event feed.

    Attributes:
        events: One page of public events
        order: Sort order actually applied
        page: Zero-based page number
        page_size: Maximum events per page
    """

    events: List[EventResponse] = Field(..., description="Events on this page")
    order: str = Field(..., description="Applied sort order")
    page: int = Field(..., description="Zero-based page number")
    page_size: int = Field(..., description="Events per page")
