"""User schemas."""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.workout import UTCDateTime


class UserSync(BaseModel):
    name: str | None = Field(None, max_length=255)


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str | None = None
    created_at: UTCDateTime
    updated_at: UTCDateTime
