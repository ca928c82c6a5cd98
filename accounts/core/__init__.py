"""Core app configuration, database, and security primitives."""

from accounts.core.config import get_settings, settings
from accounts.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
