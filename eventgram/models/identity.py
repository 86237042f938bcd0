"""Identity credential model for DynamoDB."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    """
    Access credential issued to a person by the identity provider.

    A bearer token `<key_id>.<secret>` resolves to one Identity; the
    identity_id becomes the id of the AppUser registered with it.

    Attributes:
        key_id: Credential identifier (first half of the bearer token)
        key_hash: Bcrypt hash of the secret
        identity_id: Stable identifier of the person
        email: E-mail address of the person
        status: Credential status (active, revoked)
        created_at: ISO 8601 timestamp of issue
        last_used_at: ISO 8601 timestamp of last use
        description: Optional human-readable description
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "key_id": "660e9500f39c52e5",
                "key_hash": "$2b$12$...",
                "identity_id": "user-123",
                "email": "user@example.com",
                "status": "active",
                "created_at": "2026-10-01T12:00:00Z",
                "last_used_at": None,
                "description": "Laptop",
            }
        },
    )

    key_id: str = Field(..., description="Credential identifier")
    key_hash: str = Field(..., description="Bcrypt hash of the secret")
    identity_id: str = Field(..., description="Identity (user) identifier")
    email: str = Field(..., description="E-mail address")
    status: str = Field(..., description="Credential status: active, revoked")
    created_at: str = Field(..., description="ISO 8601 creation timestamp")
    last_used_at: Optional[str] = Field(None, description="ISO 8601 last used timestamp")
    description: Optional[str] = Field(None, description="Human-readable description")

    @property
    def is_active(self) -> bool:
        return self.status == "active"
