"""
Read-side user queries for the dashboard.

Wraps the repository with the dashboard's failure policy: a broken query is
logged and rendered as an empty result instead of an error page.
"""
from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dashboard.db import models, schemas
from dashboard.db.repositories import users as user_repo
from dashboard.utils.query_params import parse_user_filters

logger = logging.getLogger(__name__)


def get_user_by_id(db: Session, user_id) -> Optional[models.User]:
    if user_repo.coerce_user_id(user_id) is None:
        logger.info("user_id_invalid", extra={"user_id": str(user_id)})
        return None
    try:
        return user_repo.get_user(db, user_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("user_fetch_failed", extra={"user_id": str(user_id)})
        return None


def get_users(db: Session, params: Optional[Mapping] = None) -> schemas.UsersResponse:
    """List users from raw query parameters (search, status, role, paging, sort)."""
    filters = params if isinstance(params, schemas.UserFilters) else parse_user_filters(params)
    try:
        return user_repo.get_users_page(db, filters)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("users_fetch_failed", extra={"filters": filters.model_dump()})
        return schemas.UsersResponse(users=[], total=0, page=1, limit=10, total_pages=0)


def get_user_stats(db: Session) -> schemas.UserStats:
    try:
        return user_repo.get_user_stats(db)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("user_stats_failed")
        return schemas.UserStats()


def get_user_roles(db: Session) -> List[str]:
    try:
        return user_repo.get_distinct_roles(db)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("user_roles_failed")
        return []
