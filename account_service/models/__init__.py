"""SQLAlchemy models."""

from account_service.models.enums import Role
from account_service.models.user import User

__all__ = [
    "Role",
    "User",
]
