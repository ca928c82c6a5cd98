"""Pydantic schema for user records returned to callers (never includes the password hash)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserOut(BaseModel):
    """Public view of a stored user."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True, frozen=True)

    id: int | None = None
    email: str
    name: str | None = None
    city: str | None = None
    role: str | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")
