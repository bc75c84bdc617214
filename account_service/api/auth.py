"""Authentication API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status

from account_service.api.dependencies import (
    get_current_user,
    get_user_policy,
    get_user_repository,
    raise_for_outcome,
)
from account_service.models.user import User
from account_service.schemas.auth import AuthResponse, UserLogin
from account_service.schemas.user import MessageResponse, UserEnvelope, UserResponse
from account_service.services.identity import authenticate_user
from account_service.services.tokens import TokenService, get_token_service
from account_service.services.user_policy import UserPolicy
from account_service.services.user_repository import UserRepository

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: Annotated[dict[str, Any], Body()],
    policy: Annotated[UserPolicy, Depends(get_user_policy)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
):
    """Register a new user."""
    user = raise_for_outcome(policy.register(user_data))

    access_token = token_service.issue(user.id, user.role)

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    repository: Annotated[UserRepository, Depends(get_user_repository)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
):
    """Login with email and password."""
    user = raise_for_outcome(authenticate_user(repository, credentials.email, credentials.password))

    access_token = token_service.issue(user.id, user.role)

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.put("/me", response_model=UserEnvelope)
def update_me(
    changes: Annotated[dict[str, Any], Body()],
    current_user: Annotated[User, Depends(get_current_user)],
    policy: Annotated[UserPolicy, Depends(get_user_policy)],
):
    """Update the current user's own profile."""
    user = raise_for_outcome(policy.update(current_user.id, changes, current_user))
    return UserEnvelope(
        message="Profile updated successfully",
        data=UserResponse.model_validate(user),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Logout (client should discard token)."""
    return MessageResponse(message="Logged out successfully")
