"""User model."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, String

from account_service.database import Base
from account_service.models.enums import Role
from account_service.models.mixins import TimestampMixin


def generate_user_id() -> str:
    """Generate an opaque identifier for a new user."""
    return str(uuid.uuid4())


class User(Base, TimestampMixin):
    """User account used for authentication and authorization."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_user_id)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)  # Lowercase, trimmed
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.USER.value)  # 'user' | 'admin'
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_admin(self) -> bool:
        """Check if the user currently holds the admin role."""
        return self.role == Role.ADMIN.value
