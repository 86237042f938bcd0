"""Pydantic schemas for user API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from eventgram.models.user import AppUser


class UserRequest(BaseModel):
    """Request schema for registering or updating a user."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "username": "harbourfan",
                "first_name": "Sam",
                "last_name": "Lee",
                "private": False,
            }
        },
    )

    username: str = Field(default="", description="Username (required)")
    first_name: str = Field(default="", description="First name")
    last_name: str = Field(default="", description="Last name")
    private: bool = Field(default=False, description="Profile visibility")

    def is_valid_request(self) -> bool:
        return bool(self.username.strip())


class UserData(BaseModel):
    """Public user fields. The e-mail address is never included."""

    id: str
    username: str
    first_name: str
    last_name: str
    private: bool
    created: datetime
    modified: datetime

    @classmethod
    def from_user(cls, user: AppUser) -> "UserData":
        return cls(**user.model_dump(exclude={"email"}))


class UserResponse(BaseModel):
    ok: bool = Field(default=True, description="Operation succeeded")
    data: UserData
