"""
SQLAlchemy models for the dashboard.

Exposes `Base`, `now_utc`, the ORM classes and the user enums.
"""

from .base import Base, now_utc  # re-export

from .users import User, UserRole, UserStatus
from .audit import AuditLog

__all__ = [
    "Base",
    "now_utc",
    "User",
    "UserRole",
    "UserStatus",
    "AuditLog",
]
