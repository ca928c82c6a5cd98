"""Uniform response envelope returned by every account operation."""

from pydantic import BaseModel, ConfigDict, Field

from accounts.schemas.user import UserOut


class ReqRes(BaseModel):
    """
    Status code, message and optional payload for one account operation.

    Immutable: built once per call path. At most one of our_users /
    our_users_list is set; token fields are only set by login and refresh.
    Serialize with by_alias=True, exclude_none=True for the camelCase wire shape.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status_code: int = Field(..., alias="statusCode")
    error: str | None = None
    message: str | None = None
    token: str | None = None
    refresh_token: str | None = Field(default=None, alias="refreshToken")
    expiration_time: str | None = Field(default=None, alias="expirationTime")
    role: str | None = None
    our_users: UserOut | None = Field(default=None, alias="ourUsers")
    our_users_list: list[UserOut] | None = Field(default=None, alias="ourUsersList")

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
