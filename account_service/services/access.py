"""Authentication and role gates applied before a handler runs."""

import logging
from collections.abc import Iterable

from account_service.models.enums import Role
from account_service.models.user import User
from account_service.services.identity import IdentityResolver
from account_service.services.outcomes import Outcome
from account_service.services.tokens import TokenFailure, TokenService

logger = logging.getLogger(__name__)


def authenticate(
    token: str | None,
    token_service: TokenService,
    resolver: IdentityResolver,
) -> Outcome[User]:
    """Verify a bearer token and load the user it identifies."""
    result = token_service.verify(token)
    if isinstance(result, TokenFailure):
        logger.warning(f"Rejected bearer token: {result.reason.value}")
        return Outcome.unauthenticated()

    return resolver.resolve(result)


def authorize(user: User, allowed_roles: Iterable[Role | str]) -> Outcome[User]:
    """Require the authenticated user to hold one of the allowed roles."""
    allowed = {Role(role).value for role in allowed_roles}
    if user.role not in allowed:
        logger.info(f"User {user.id} with role '{user.role}' denied")
        return Outcome.forbidden("Not authorized to access this resource")
    return Outcome.ok(user)
