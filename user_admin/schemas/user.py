"""Pydantic schemas for the users API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UserRead(BaseModel):
    """A stored user as returned by the API."""

    id: int = Field(..., description="Store-assigned identifier.")
    name: str = Field(..., description="Display name (at least 3 characters).")
    email: str = Field(..., description="Contact address (local@domain).")
    age: int = Field(..., description="Age in years (18 or older).")

    model_config = ConfigDict(from_attributes=True)


class UserPayload(BaseModel):
    """Body for creating a user.

    Every field is optional at the schema level so that a missing field is
    answered with the API's own 400 message rather than a schema error.
    """

    name: str | None = Field(default=None, examples=["Ann"])
    email: str | None = Field(default=None, examples=["ann@example.com"])
    age: int | None = Field(default=None, examples=[30])


class UserUpdatePayload(UserPayload):
    """Body for replacing a user: the id plus all three fields."""

    id: int | None = Field(default=None, examples=[1])


class UserListResponse(BaseModel):
    message: str
    users: list[UserRead]


class UserCreatedResponse(BaseModel):
    message: str
    user: UserRead


class UserUpdatedResponse(BaseModel):
    message: str
    updated_user: UserRead = Field(..., alias="updatedUser")

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    message: str


class RequestCountResponse(BaseModel):
    count: int = Field(..., ge=0, description="Requests counted in the current window.")
    limit: int = Field(..., description="Requests allowed per window.")
