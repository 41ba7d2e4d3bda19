import enum
import uuid
from sqlalchemy import Column, String, DateTime, Enum, Index
from sqlalchemy.dialects.postgresql import UUID
from .base import Base, now_utc


class UserStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    INACTIVE = "INACTIVE"


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    USER = "USER"
    MODERATOR = "MODERATOR"


class User(Base):
    __tablename__ = 'users'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    # Stored as plain strings so legacy role values survive until migrated
    status = Column(
        Enum(UserStatus, name="user_status", native_enum=False, validate_strings=True, length=16),
        nullable=False,
        default=UserStatus.ACTIVE,
    )
    role = Column(String(32), nullable=False, default=UserRole.USER.value)
    avatar = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    __table_args__ = (
        Index('ix_users_status', 'status'),
        Index('ix_users_role', 'role'),
        Index('ix_users_created_at', 'created_at'),
    )
