"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Privilege tier of a user account."""

    USER = "user"
    ADMIN = "admin"

    @property
    def is_admin(self) -> bool:
        """Check if this role grants administrative actions."""
        return self == Role.ADMIN
