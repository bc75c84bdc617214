"""Resolve callers to live user accounts."""

import logging

from account_service.models.user import User
from account_service.services.outcomes import Outcome
from account_service.services.passwords import verify_password
from account_service.services.tokens import Claims
from account_service.services.user_repository import UserRepository

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Loads the user a token was issued for.

    Authorization always uses the role stored on the freshly loaded record,
    never the role embedded in the token, so a demotion takes effect on the
    next request.
    """

    def __init__(self, repository: UserRepository):
        self.repository = repository

    def resolve(self, claims: Claims) -> Outcome[User]:
        user = self.repository.find_by_id(claims.subject_id)
        if user is None:
            logger.info(f"Token subject {claims.subject_id} no longer exists")
            return Outcome.unauthenticated()

        if not user.is_active:
            logger.info(f"Token subject {claims.subject_id} is disabled")
            return Outcome.unauthenticated()

        if user.role != claims.role.value:
            logger.debug(
                f"Token role '{claims.role.value}' is stale for user {user.id}, "
                f"using current role '{user.role}'"
            )

        return Outcome.ok(user)


def authenticate_user(repository: UserRepository, email: str, password: str) -> Outcome[User]:
    """Authenticate a user by email and password and record the login."""
    user = repository.find_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        return Outcome.unauthenticated("Incorrect email or password")

    if not user.is_active:
        logger.info(f"Login refused for disabled user {user.id}")
        return Outcome.unauthenticated("Account is disabled")

    return Outcome.ok(repository.touch_last_login(user))
