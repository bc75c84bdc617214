"""Persistence operations for user accounts."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from account_service.models.user import User

logger = logging.getLogger(__name__)


class EmailTakenError(Exception):
    """Raised when a write violates the unique email constraint."""


def normalize_email(email: str) -> str:
    """Normalize an email address for storage and lookup."""
    return email.strip().lower()


class UserRepository:
    """Store for user records backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: str) -> User | None:
        """Get a user by id."""
        return self.db.query(User).filter(User.id == user_id).first()

    def find_by_email(self, email: str, exclude_id: str | None = None) -> User | None:
        """Get a user by email, ignoring case, optionally skipping one id."""
        query = self.db.query(User).filter(func.lower(User.email) == normalize_email(email))
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first()

    def create(self, **fields: Any) -> User:
        """Create a new user."""
        fields["email"] = normalize_email(fields["email"])
        user = User(**fields)
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        return user

    def update_fields(self, user_id: str, fields: dict[str, Any]) -> User | None:
        """Apply a set of field changes to a user in one commit."""
        user = self.find_by_id(user_id)
        if user is None:
            return None
        if "email" in fields:
            fields = {**fields, "email": normalize_email(fields["email"])}
        for key, value in fields.items():
            setattr(user, key, value)
        self._commit()
        self.db.refresh(user)
        return user

    def delete(self, user_id: str) -> bool:
        """Permanently delete a user. Returns False if no such user."""
        user = self.find_by_id(user_id)
        if user is None:
            return False
        self.db.delete(user)
        self.db.commit()
        return True

    def count(self) -> int:
        """Count all users."""
        return self.db.query(func.count(User.id)).scalar() or 0

    def list(self, skip: int, limit: int) -> list[User]:
        """Get a window of users, newest first."""
        return (
            self.db.query(User)
            .order_by(User.created_at.desc(), User.id)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def touch_last_login(self, user: User) -> User:
        """Record a successful login."""
        user.last_login_at = datetime.now(UTC)
        self.db.commit()
        self.db.refresh(user)
        return user

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # The unique index on users.email is the only constraint a valid write can violate
            logger.info(f"Rejected write on users: {e.orig}")
            raise EmailTakenError("Email is already taken") from e
