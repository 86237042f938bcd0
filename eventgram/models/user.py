"""Application user model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventgram.utils.clock import as_utc

USER_KIND = "user"


def normalize_username(username: str) -> str:
    """Usernames are unique case-insensitively and stored lower-cased."""
    return username.strip().lower()


class AppUser(BaseModel):
    """
    Registered user.

    Attributes:
        id: Identity provider identifier, immutable
        email: E-mail from the identity provider (never returned by the API)
        username: Unique, lower-cased username
        first_name: Optional first name
        last_name: Optional last name
        private: Only the user may view a private profile
        created: Registration time
        modified: Time of last update
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="User ID (identity provider)")
    email: str | None = Field(None, description="E-mail address")
    username: str = Field(..., description="Unique username")
    first_name: str = Field(default="", description="First name")
    last_name: str = Field(default="", description="Last name")
    private: bool = Field(default=False, description="Profile visibility")
    created: datetime = Field(..., description="Registration time (UTC)")
    modified: datetime = Field(..., description="Last modification time (UTC)")

    @field_validator("created", "modified")
    @classmethod
    def normalize_timezone(cls, v: datetime) -> datetime:
        return as_utc(v)

    def is_valid(self) -> bool:
        return bool(self.id and self.username and self.created and self.modified)
