"""SQLAlchemy ORM models."""

from accounts.models.base import Base
from accounts.models.user import ROLE_ADMIN, ROLE_USER, User

__all__ = ["Base", "ROLE_ADMIN", "ROLE_USER", "User"]
