"""Response bodies shared by several routes."""

from pydantic import BaseModel, Field


class OkResponse(BaseModel):
    """Acknowledgement with no payload."""

    ok: bool = Field(default=True, description="Operation succeeded")


class CreatedResponse(BaseModel):
    """Acknowledgement of a newly created entity."""

    ok: bool = Field(default=True, description="Operation succeeded")
    id: str = Field(..., description="Identifier of the new entity")
