"""User account schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictBool, StringConstraints

from account_service.models.enums import Role

UserName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]

# bcrypt cannot hash NUL bytes
Password = Annotated[str, StringConstraints(min_length=6, max_length=128, pattern=r"^[^\x00]*$")]


class UserCreate(BaseModel):
    """Admin request to create a user."""

    model_config = ConfigDict(extra="forbid")

    name: UserName
    email: EmailStr = Field(..., max_length=255)
    password: Password
    role: Role = Role.USER


class UserUpdate(BaseModel):
    """Partial update of a user. Unset and null fields are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    name: UserName | None = None
    email: EmailStr | None = None
    role: Role | None = None
    is_active: StrictBool | None = None


class UserResponse(BaseModel):
    """User information response. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: Role
    is_active: bool
    created_at: datetime
    updated_at: datetime
    last_login_at: datetime | None = None


class UserEnvelope(BaseModel):
    """Single user wrapped with a success flag."""

    success: bool = True
    message: str | None = None
    data: UserResponse


class MessageResponse(BaseModel):
    """Success flag and message with no payload."""

    success: bool = True
    message: str


class PageLink(BaseModel):
    """Coordinates of an adjacent page."""

    page: int
    limit: int


class UserListResponse(BaseModel):
    """One page of users.

    ``pagination`` only contains ``next`` and ``prev`` when those pages exist.
    """

    success: bool = True
    count: int
    pagination: dict[str, PageLink]
    data: list[UserResponse]
