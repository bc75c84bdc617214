"""Pydantic schemas for API requests and responses."""

from account_service.schemas.auth import AuthResponse, UserLogin, UserRegister
from account_service.schemas.user import (
    MessageResponse,
    PageLink,
    UserCreate,
    UserEnvelope,
    UserListResponse,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "AuthResponse",
    "UserLogin",
    "UserRegister",
    "MessageResponse",
    "PageLink",
    "UserCreate",
    "UserEnvelope",
    "UserListResponse",
    "UserResponse",
    "UserUpdate",
]
