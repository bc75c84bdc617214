"""Authorization rules for reading and mutating user accounts."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from account_service.models.enums import Role
from account_service.models.user import User
from account_service.schemas.auth import UserRegister
from account_service.schemas.user import UserCreate, UserUpdate
from account_service.services.outcomes import Outcome
from account_service.services.passwords import hash_password
from account_service.services.user_repository import EmailTakenError, UserRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

EMAIL_EXISTS_MESSAGE = "User with this email already exists"
EMAIL_TAKEN_MESSAGE = "Email is already taken"


@dataclass(frozen=True)
class UserPage:
    """A window of users plus what is needed to link to its neighbours."""

    items: list[User]
    page: int
    limit: int
    total: int

    @property
    def has_next(self) -> bool:
        return self.page * self.limit < self.total

    @property
    def has_prev(self) -> bool:
        return self.page > 1


def validation_errors(exc: ValidationError) -> dict[str, str]:
    """Flatten pydantic errors into one message per field."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "body"
        errors.setdefault(field, error["msg"])
    return errors


class UserPolicy:
    """Decides who may create, read, update and delete which user records.

    Every method returns an Outcome. Expected refusals (forbidden, not found,
    conflict, invalid input) never raise; only store failures propagate.
    Updates are all-or-nothing: either every requested change is written in
    a single commit or nothing is.
    """

    def __init__(self, repository: UserRepository):
        self.repository = repository

    def create(self, fields: Mapping[str, Any], actor: User) -> Outcome[User]:
        """Create a user on behalf of an admin."""
        if not actor.is_admin:
            return Outcome.forbidden("Not authorized to create users")

        try:
            data = UserCreate.model_validate(dict(fields))
        except ValidationError as e:
            return Outcome.validation_error(validation_errors(e))

        return self._create(data.name, data.email, data.password, data.role)

    def register(self, fields: Mapping[str, Any]) -> Outcome[User]:
        """Create a regular user through self-registration."""
        try:
            data = UserRegister.model_validate(dict(fields))
        except ValidationError as e:
            return Outcome.validation_error(validation_errors(e))

        return self._create(data.name, data.email, data.password, Role.USER)

    def get(self, target_id: str, actor: User) -> Outcome[User]:
        """Read a single user. Users may only read themselves."""
        if not actor.is_admin and actor.id != target_id:
            return Outcome.forbidden("Not authorized to view this user")

        user = self.repository.find_by_id(target_id)
        if user is None:
            return Outcome.not_found()
        return Outcome.ok(user)

    def list(self, actor: User, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> Outcome[UserPage]:
        """List users newest first, one page at a time."""
        if not actor.is_admin:
            return Outcome.forbidden("Not authorized to list users")

        errors = {}
        if page < 1:
            errors["page"] = "Page must be at least 1"
        if not 1 <= limit <= MAX_PAGE_SIZE:
            errors["limit"] = f"Limit must be between 1 and {MAX_PAGE_SIZE}"
        if errors:
            return Outcome.validation_error(errors)

        total = self.repository.count()
        items = self.repository.list(skip=(page - 1) * limit, limit=limit)
        return Outcome.ok(UserPage(items=items, page=page, limit=limit, total=total))

    def update(self, target_id: str, fields: Mapping[str, Any], actor: User) -> Outcome[User]:
        """Update a user. Admins may update anyone; users only themselves."""
        if not actor.is_admin and actor.id != target_id:
            return Outcome.forbidden("Not authorized to update this user")

        # Role escalation is refused outright rather than dropped
        if not actor.is_admin and fields.get("role") is not None:
            logger.warning(f"User {actor.id} attempted to change role of {target_id}")
            return Outcome.forbidden("Not authorized to change user roles")

        try:
            data = UserUpdate.model_validate(dict(fields))
        except ValidationError as e:
            return Outcome.validation_error(validation_errors(e))

        changes = data.model_dump(exclude_none=True, mode="json")
        if not actor.is_admin:
            changes.pop("is_active", None)

        user = self.repository.find_by_id(target_id)
        if user is None:
            return Outcome.not_found()

        if "email" in changes:
            if self.repository.find_by_email(changes["email"], exclude_id=target_id):
                return Outcome.conflict(EMAIL_TAKEN_MESSAGE)

        if not changes:
            return Outcome.ok(user)

        try:
            updated = self.repository.update_fields(target_id, changes)
        except EmailTakenError:
            return Outcome.conflict(EMAIL_TAKEN_MESSAGE)

        if updated is None:
            return Outcome.not_found()

        logger.info(f"User {actor.id} updated {target_id}: {sorted(changes)}")
        return Outcome.ok(updated)

    def delete(self, target_id: str, actor: User) -> Outcome[None]:
        """Permanently delete a user on behalf of an admin."""
        if not actor.is_admin:
            return Outcome.forbidden("Not authorized to delete users")

        if actor.id == target_id:
            return Outcome.bad_request("Cannot delete your own account")

        if not self.repository.delete(target_id):
            return Outcome.not_found()

        logger.info(f"User {actor.id} deleted {target_id}")
        return Outcome.ok()

    def _create(self, name: str, email: str, password: str, role: Role) -> Outcome[User]:
        if self.repository.find_by_email(email):
            return Outcome.conflict(EMAIL_EXISTS_MESSAGE)

        try:
            user = self.repository.create(
                name=name,
                email=email,
                password_hash=hash_password(password),
                role=role.value,
            )
        except EmailTakenError:
            return Outcome.conflict(EMAIL_EXISTS_MESSAGE)

        logger.info(f"Created user {user.id} with role '{user.role}'")
        return Outcome.ok(user)
