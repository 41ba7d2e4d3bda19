"""
Pydantic schemas for the dashboard, re-exported from the domain modules.
"""

from .common import ActionResult, ErrorType
from .users import (
    UserBase,
    UserCreate,
    UserUpdate,
    User,
    UserFilters,
    UsersResponse,
    UserStats,
    FilterOption,
    PaginationInfo,
    SortField,
    SortOrder,
)
from .audits import AuditLogBase, AuditLogCreate, AuditLog

__all__ = [
    "ActionResult",
    "ErrorType",
    "UserBase",
    "UserCreate",
    "UserUpdate",
    "User",
    "UserFilters",
    "UsersResponse",
    "UserStats",
    "FilterOption",
    "PaginationInfo",
    "SortField",
    "SortOrder",
    "AuditLogBase",
    "AuditLogCreate",
    "AuditLog",
]
