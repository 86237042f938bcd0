"""Pydantic schemas for post API requests and responses."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from eventgram.models.post import Post


class PostRequest(BaseModel):
    """
    Request schema for creating or updating a post.

    On update `event_id` must repeat the post's existing event.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {"event_id": "5a1c3e9f0b2d7", "text": "Front row!"}
        },
    )

    event_id: str = Field(default="", description="Referenced event ID")
    text: str = Field(default="", description="Post text")

    def is_valid_request(self) -> bool:
        return bool(self.event_id)


class PostResponse(BaseModel):
    """Post as stored."""

    id: str
    user_id: str
    event_id: str
    image: str
    text: str
    created: datetime
    modified: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(**post.model_dump())


class PostView(BaseModel):
    """Post as shown to readers, with the author's username."""

    username: str = Field(..., description="Author username")
    id: str
    event_id: str
    image: str
    text: str
    created: datetime
    modified: datetime


class PostListResponse(BaseModel):
    """A list of posts, newest first."""

    posts: List[PostResponse] = Field(..., description="Posts, newest first")
