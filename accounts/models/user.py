"""ORM model for user accounts (auth and RBAC)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from accounts.models.base import Base

ROLE_ADMIN = "ADMIN"
ROLE_USER = "USER"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    email is the login identity and must be unique.
    role: 'ADMIN' or 'USER'
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    city = Column(String(255), nullable=True)
    role = Column(String(32), nullable=False, default=ROLE_USER)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
