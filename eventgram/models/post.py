"""Post model and event eligibility rule."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventgram.models.event import Event
from eventgram.utils.clock import as_utc

POST_KIND = "post"


def can_create_or_update_post(event: Event | None, now: datetime | None = None) -> bool:
    """A post may only be written while its referenced event is active."""
    return event is not None and event.is_active(now)


class Post(BaseModel):
    """
    Post attached to an event.

    Attributes:
        id: Opaque unique identifier
        user_id: Owning user
        event_id: Referenced event, immutable after creation
        image: Link to the attached image, empty until attached
        text: Post body
        created: Creation time
        modified: Time of last mutation
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "id": "5a1c3e9f0b2d8",
                "user_id": "user-123",
                "event_id": "5a1c3e9f0b2d7",
                "image": "",
                "text": "Front row!",
                "created": "2026-12-31T22:10:00Z",
                "modified": "2026-12-31T22:10:00Z",
            }
        },
    )

    id: str = Field(..., description="Post identifier")
    user_id: str = Field(..., description="Owning user ID")
    event_id: str = Field(..., description="Referenced event ID")
    image: str = Field(default="", description="Attached image link")
    text: str = Field(default="", description="Post text")
    created: datetime = Field(..., description="Creation time (UTC)")
    modified: datetime = Field(..., description="Last modification time (UTC)")

    @field_validator("created", "modified")
    @classmethod
    def normalize_timezone(cls, v: datetime) -> datetime:
        return as_utc(v)

    def is_valid(self) -> bool:
        """Check that all server-assigned fields are present."""
        return bool(self.user_id and self.id and self.event_id and self.created)

    @property
    def image_filename(self) -> str:
        """Blob store key of the post's original image."""
        return f"{self.user_id}/{self.id}"
