"""FastAPI dependencies for authentication, authorization and database."""

from typing import Annotated, TypeVar

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from account_service.database import get_db
from account_service.models.enums import Role
from account_service.models.user import User
from account_service.services.access import authenticate, authorize
from account_service.services.identity import IdentityResolver
from account_service.services.outcomes import Outcome, OutcomeKind
from account_service.services.tokens import TokenService, get_token_service
from account_service.services.user_policy import UserPolicy
from account_service.services.user_repository import UserRepository

T = TypeVar("T")

# Missing credentials are reported by the gate as 401, not by HTTPBearer as 403
security = HTTPBearer(auto_error=False)

STATUS_CODES = {
    OutcomeKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    OutcomeKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    OutcomeKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    OutcomeKind.CONFLICT: status.HTTP_409_CONFLICT,
    OutcomeKind.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
    OutcomeKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    OutcomeKind.SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def raise_for_outcome(outcome: Outcome[T]) -> T:
    """Return the payload of a successful outcome or raise the matching HTTP error."""
    if outcome.is_ok:
        return outcome.payload

    if outcome.kind == OutcomeKind.VALIDATION_ERROR:
        raise HTTPException(
            status_code=STATUS_CODES[outcome.kind],
            detail={"message": outcome.message, "errors": outcome.errors},
        )

    if outcome.kind == OutcomeKind.UNAUTHENTICATED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=outcome.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    raise HTTPException(status_code=STATUS_CODES[outcome.kind], detail=outcome.message)


def get_user_repository(
    db: Annotated[Session, Depends(get_db)],
) -> UserRepository:
    """Get the user store bound to the request's session."""
    return UserRepository(db)


def get_user_policy(
    repository: Annotated[UserRepository, Depends(get_user_repository)],
) -> UserPolicy:
    """Get the user mutation policy."""
    return UserPolicy(repository)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    repository: Annotated[UserRepository, Depends(get_user_repository)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> User:
    """Get the current authenticated user from the bearer token."""
    token = credentials.credentials if credentials else None
    return raise_for_outcome(authenticate(token, token_service, IdentityResolver(repository)))


def require_roles(*roles: Role):
    """Build a dependency that requires an authenticated user with one of ``roles``."""

    def dependency(current_user: Annotated[User, Depends(get_current_user)]) -> User:
        return raise_for_outcome(authorize(current_user, roles))

    return dependency


require_admin = require_roles(Role.ADMIN)
