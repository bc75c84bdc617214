"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from account_service.schemas.user import Password, UserName, UserResponse


class UserRegister(BaseModel):
    """Self-service registration request."""

    model_config = ConfigDict(extra="forbid")

    name: UserName
    email: EmailStr = Field(..., max_length=255)
    password: Password


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse
