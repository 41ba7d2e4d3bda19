"""
Audit logging helpers and enums.

Central helper to persist normalized audit records for user mutations.
"""
from __future__ import annotations
import logging
import uuid
from enum import Enum
from typing import Any, Optional, Dict
from sqlalchemy.orm import Session

from dashboard.db import schemas
from dashboard.db.repositories import audits as audit_repo

logger = logging.getLogger(__name__)


class AuditAction(str, Enum):
    USER_CREATE = "user_create"
    USER_UPDATE = "user_update"
    USER_DELETE = "user_delete"


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


def log(
    db: Session,
    *,
    action: AuditAction | str,
    status: AuditStatus | str = AuditStatus.SUCCESS,
    target_type: str,
    target_id: Optional[uuid.UUID] = None,
    reason: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
):
    """Central audit logging helper."""
    # Persist pure string values, not Enum reprs (avoid 'AuditAction.XYZ')
    action_value = action.value if isinstance(action, AuditAction) else str(action)
    status_value = status.value if isinstance(status, AuditStatus) else str(status)
    audit_log = schemas.AuditLogCreate(
        action_type=action_value,
        status=status_value,
        target_type=target_type,
        target_id=target_id,
        reason=reason,
        metadata=metadata or {},
    )
    return audit_repo.create_audit_log(db, audit_log=audit_log)


def log_user(
    db: Session,
    *,
    action: AuditAction,
    user_id: Optional[uuid.UUID],
    status: AuditStatus | str = AuditStatus.SUCCESS,
    reason: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
):
    """Record a user mutation; failures are logged, never raised."""
    try:
        return log(
            db,
            action=action,
            status=status,
            target_type="user",
            target_id=user_id,
            reason=reason,
            metadata=metadata,
        )
    except Exception:
        db.rollback()
        logger.exception("audit_log_failed", extra={"action": str(action), "user_id": str(user_id)})
        return None


__all__ = ["AuditAction", "AuditStatus", "log", "log_user"]
