"""User management API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, status

from account_service.api.dependencies import (
    get_current_user,
    get_user_policy,
    raise_for_outcome,
    require_admin,
)
from account_service.models.user import User
from account_service.schemas.user import (
    MessageResponse,
    PageLink,
    UserEnvelope,
    UserListResponse,
    UserResponse,
)
from account_service.services.user_policy import DEFAULT_PAGE_SIZE, UserPolicy

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=UserListResponse)
def list_users(
    admin: Annotated[User, Depends(require_admin)],
    policy: Annotated[UserPolicy, Depends(get_user_policy)],
    page: Annotated[int, Query()] = 1,
    limit: Annotated[int, Query()] = DEFAULT_PAGE_SIZE,
):
    """Get all users, newest first (admin only)."""
    user_page = raise_for_outcome(policy.list(admin, page=page, limit=limit))

    pagination = {}
    if user_page.has_next:
        pagination["next"] = PageLink(page=user_page.page + 1, limit=user_page.limit)
    if user_page.has_prev:
        pagination["prev"] = PageLink(page=user_page.page - 1, limit=user_page.limit)

    return UserListResponse(
        count=len(user_page.items),
        pagination=pagination,
        data=[UserResponse.model_validate(user) for user in user_page.items],
    )


@router.get("/{user_id}", response_model=UserEnvelope)
def get_user(
    user_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    policy: Annotated[UserPolicy, Depends(get_user_policy)],
):
    """Get a single user. Users may only view their own profile unless admin."""
    user = raise_for_outcome(policy.get(user_id, current_user))
    return UserEnvelope(data=UserResponse.model_validate(user))


@router.post("", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: Annotated[dict[str, Any], Body()],
    admin: Annotated[User, Depends(require_admin)],
    policy: Annotated[UserPolicy, Depends(get_user_policy)],
):
    """Create a user (admin only)."""
    user = raise_for_outcome(policy.create(user_data, admin))
    return UserEnvelope(
        message="User created successfully",
        data=UserResponse.model_validate(user),
    )


@router.put("/{user_id}", response_model=UserEnvelope)
def update_user(
    user_id: str,
    changes: Annotated[dict[str, Any], Body()],
    current_user: Annotated[User, Depends(get_current_user)],
    policy: Annotated[UserPolicy, Depends(get_user_policy)],
):
    """Update a user. Only admins may change roles or activation."""
    user = raise_for_outcome(policy.update(user_id, changes, current_user))
    return UserEnvelope(
        message="User updated successfully",
        data=UserResponse.model_validate(user),
    )


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    admin: Annotated[User, Depends(require_admin)],
    policy: Annotated[UserPolicy, Depends(get_user_policy)],
):
    """Delete a user permanently (admin only, never yourself)."""
    raise_for_outcome(policy.delete(user_id, admin))
    return MessageResponse(message="User deleted successfully")
