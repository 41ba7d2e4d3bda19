import uuid
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from dashboard.db.models.users import UserRole, UserStatus


SortField = Literal["name", "email", "createdAt", "updatedAt"]
SortOrder = Literal["asc", "desc"]


class UserBase(BaseModel):
    name: str
    email: str
    status: UserStatus = UserStatus.ACTIVE
    role: str = UserRole.USER.value
    avatar: Optional[str] = None


class UserCreate(BaseModel):
    # Required-field errors are reported by the action layer
    name: str = ""
    email: str = ""
    status: Optional[UserStatus] = None
    role: Optional[UserRole] = None
    avatar: Optional[str] = None


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    status: Optional[UserStatus] = None
    role: Optional[UserRole] = None
    avatar: Optional[str] = None


class User(UserBase):
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class UserFilters(BaseModel):
    """Normalized list parameters parsed from a query string."""
    search: str = ""
    status: str = "all"
    role: str = ""
    page: int = 1
    limit: int = 10
    sort_by: SortField = "createdAt"
    sort_order: SortOrder = "desc"


class UsersResponse(BaseModel):
    users: List[User]
    total: int
    page: int
    limit: int
    total_pages: int


class UserStats(BaseModel):
    total: int = 0
    active: int = 0
    pending: int = 0
    inactive: int = 0


class FilterOption(BaseModel):
    label: str
    value: str


class PaginationInfo(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_previous_page: bool
    has_next_page: bool
    start_item: int
    end_item: int
    page_numbers: List[int | Literal["..."]] = Field(default_factory=list)
