"""
User repository functions.

Implements user CRUD plus the filtered/sorted/paginated listing used by the
dashboard, statistics and distinct-role lookups.
"""
from __future__ import annotations

import math
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from dashboard.db import models, schemas

LIKE_ESCAPE = "\\"

_SORT_COLUMNS = {
    "name": models.User.name,
    "email": models.User.email,
    "createdAt": models.User.created_at,
    "updatedAt": models.User.updated_at,
}


def coerce_user_id(value) -> Optional[uuid.UUID]:
    """Return a UUID for ``value`` or None when it is not a valid id."""
    if isinstance(value, uuid.UUID):
        return value
    if not value:
        return None
    try:
        return uuid.UUID(str(value).strip())
    except ValueError:
        return None


def get_user(db: Session, user_id) -> Optional[models.User]:
    uid = coerce_user_id(user_id)
    if uid is None:
        return None
    return db.query(models.User).filter(models.User.id == uid).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    normalized = (email or "").strip().lower()
    if not normalized:
        return None
    return db.query(models.User).filter(func.lower(models.User.email) == normalized).first()


def _contains_pattern(value: str) -> str:
    """LIKE pattern matching ``value`` literally anywhere in the column."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_user_query(db: Session, filters: schemas.UserFilters):
    """Translate normalized filters into a WHERE clause (no ordering/paging)."""
    query = db.query(models.User)

    if filters.search:
        pattern = _contains_pattern(filters.search)
        query = query.filter(
            or_(
                models.User.name.ilike(pattern, escape=LIKE_ESCAPE),
                models.User.email.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )

    valid_statuses = {s.value for s in models.UserStatus}
    if filters.status and filters.status.upper() in valid_statuses:
        query = query.filter(models.User.status == models.UserStatus(filters.status.upper()))

    if filters.role and filters.role.lower() != "all":
        query = query.filter(models.User.role.ilike(_contains_pattern(filters.role), escape=LIKE_ESCAPE))

    return query


def list_users(db: Session, filters: schemas.UserFilters) -> Tuple[List[models.User], int]:
    query = build_user_query(db, filters)
    total = query.count()

    order_column = _SORT_COLUMNS.get(filters.sort_by, models.User.created_at)
    if filters.sort_order == "asc":
        query = query.order_by(order_column.asc(), models.User.id.asc())
    else:
        query = query.order_by(order_column.desc(), models.User.id.desc())

    skip = (filters.page - 1) * filters.limit
    users = query.offset(skip).limit(filters.limit).all()
    return users, total


def get_users_page(db: Session, filters: schemas.UserFilters) -> schemas.UsersResponse:
    users, total = list_users(db, filters)
    total_pages = math.ceil(total / filters.limit) if filters.limit > 0 else 0
    return schemas.UsersResponse(
        users=[schemas.User.model_validate(u, from_attributes=True) for u in users],
        total=total,
        page=filters.page,
        limit=filters.limit,
        total_pages=total_pages,
    )


def count_users(db: Session, status: Optional[models.UserStatus] = None) -> int:
    query = db.query(func.count(models.User.id))
    if status is not None:
        query = query.filter(models.User.status == status)
    return int(query.scalar() or 0)


def get_user_stats(db: Session) -> schemas.UserStats:
    return schemas.UserStats(
        total=count_users(db),
        active=count_users(db, models.UserStatus.ACTIVE),
        pending=count_users(db, models.UserStatus.PENDING),
        inactive=count_users(db, models.UserStatus.INACTIVE),
    )


def get_distinct_roles(db: Session) -> List[str]:
    rows = db.query(models.User.role).distinct().order_by(models.User.role.asc()).all()
    return [r[0] for r in rows if r[0]]


def create_user(
    db: Session,
    *,
    name: str,
    email: str,
    status: models.UserStatus = models.UserStatus.ACTIVE,
    role: str = models.UserRole.USER.value,
    avatar: Optional[str] = None,
) -> models.User:
    db_user = models.User(name=name, email=email, status=status, role=role, avatar=avatar)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def update_user(db: Session, user_id, changes: dict) -> Optional[models.User]:
    db_user = get_user(db, user_id)
    if db_user:
        for key, value in changes.items():
            setattr(db_user, key, value)
        db.commit()
        db.refresh(db_user)
    return db_user


def delete_user(db: Session, user_id) -> bool:
    """Delete a user; return False when it does not exist."""
    uid = coerce_user_id(user_id)
    if uid is None:
        return False
    try:
        db_user = db.query(models.User).filter(models.User.id == uid).first()
        if not db_user:
            return False
        db.delete(db_user)
        db.commit()
        return True
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete user {uid}: {str(e)}")


def delete_all_users(db: Session) -> int:
    deleted = db.query(models.User).delete(synchronize_session=False)
    db.commit()
    return int(deleted or 0)
