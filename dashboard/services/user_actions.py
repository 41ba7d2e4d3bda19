"""
Server-side user mutations.

Each action validates its input, performs the change and reports the outcome
as an ``ActionResult``; database failures are rolled back, logged and turned
into a generic internal error so callers never see raw exceptions. Successful
mutations are written to the audit log.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, Mapping, Optional

from sqlalchemy.orm import Session

from dashboard.audit import AuditAction, log_user
from dashboard.db import models, schemas
from dashboard.db.repositories import users as user_repo
from dashboard.utils.labels import parse_user_role, parse_user_status

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MSG_NAME_REQUIRED = "Nome é obrigatório"
MSG_EMAIL_REQUIRED = "Email é obrigatório"
MSG_EMAIL_INVALID = "Email deve ter um formato válido"
MSG_EMAIL_TAKEN = "Email já está em uso"
MSG_ID_REQUIRED = "ID do usuário é obrigatório"
MSG_NOT_FOUND = "Usuário não encontrado"
MSG_INTERNAL = "Erro interno do servidor"


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def validate_user_fields(name: Optional[str], email: Optional[str]) -> Dict[str, str]:
    """Return field errors for the required name/email pair."""
    errors: Dict[str, str] = {}
    if not _clean(name):
        errors["name"] = MSG_NAME_REQUIRED
    if not _clean(email):
        errors["email"] = MSG_EMAIL_REQUIRED
    elif not EMAIL_PATTERN.match(_clean(email)):
        errors["email"] = MSG_EMAIL_INVALID
    return errors


def _validation_failure(errors: Dict[str, str]) -> schemas.ActionResult:
    first = next(iter(errors.values()))
    return schemas.ActionResult.fail(first, error_type="validation", errors=errors)


def _duplicate_email() -> schemas.ActionResult:
    return schemas.ActionResult.fail(
        MSG_EMAIL_TAKEN, error_type="duplicate_email", errors={"email": MSG_EMAIL_TAKEN}
    )


def create_user(db: Session, payload: schemas.UserCreate) -> schemas.ActionResult:
    errors = validate_user_fields(payload.name, payload.email)
    if errors:
        return _validation_failure(errors)

    email = _clean(payload.email).lower()
    try:
        if user_repo.get_user_by_email(db, email):
            return _duplicate_email()

        user = user_repo.create_user(
            db,
            name=_clean(payload.name),
            email=email,
            status=payload.status or models.UserStatus.ACTIVE,
            role=(payload.role or models.UserRole.USER).value,
            avatar=_clean(payload.avatar) or None,
        )
    except Exception:
        db.rollback()
        logger.exception("user_create_failed", extra={"email": email})
        return schemas.ActionResult.fail(MSG_INTERNAL, error_type="internal")

    logger.info("user_created", extra={"user_id": str(user.id)})
    log_user(db, action=AuditAction.USER_CREATE, user_id=user.id, metadata={"email": user.email, "role": user.role})
    return schemas.ActionResult.ok(str(user.id))


def update_user(db: Session, user_id, payload: schemas.UserUpdate) -> schemas.ActionResult:
    if not user_id:
        return schemas.ActionResult.fail(MSG_ID_REQUIRED, error_type="validation", errors={"id": MSG_ID_REQUIRED})

    try:
        existing = user_repo.get_user(db, user_id)
        if not existing:
            return schemas.ActionResult.fail(MSG_NOT_FOUND, error_type="not_found")

        changes: Dict[str, object] = {}
        if payload.name is not None and _clean(payload.name):
            changes["name"] = _clean(payload.name)

        new_email = _clean(payload.email).lower()
        if new_email and new_email != existing.email:
            if not EMAIL_PATTERN.match(new_email):
                return _validation_failure({"email": MSG_EMAIL_INVALID})
            if user_repo.get_user_by_email(db, new_email):
                return _duplicate_email()
            changes["email"] = new_email

        if payload.status is not None:
            changes["status"] = payload.status
        if payload.role is not None:
            changes["role"] = payload.role.value
        if payload.avatar is not None:
            changes["avatar"] = _clean(payload.avatar) or None

        user_repo.update_user(db, existing.id, changes)
    except Exception:
        db.rollback()
        logger.exception("user_update_failed", extra={"user_id": str(user_id)})
        return schemas.ActionResult.fail(MSG_INTERNAL, error_type="internal")

    logger.info("user_updated", extra={"user_id": str(existing.id), "fields": sorted(changes)})
    log_user(
        db,
        action=AuditAction.USER_UPDATE,
        user_id=existing.id,
        metadata={"fields": sorted(changes)},
    )
    return schemas.ActionResult.ok()


def delete_user(db: Session, user_id) -> schemas.ActionResult:
    if not user_id:
        return schemas.ActionResult.fail(MSG_ID_REQUIRED, error_type="validation", errors={"id": MSG_ID_REQUIRED})

    try:
        existing = user_repo.get_user(db, user_id)
        if not existing:
            return schemas.ActionResult.fail(MSG_NOT_FOUND, error_type="not_found")
        target_id, email = existing.id, existing.email
        user_repo.delete_user(db, target_id)
    except Exception:
        db.rollback()
        logger.exception("user_delete_failed", extra={"user_id": str(user_id)})
        return schemas.ActionResult.fail(MSG_INTERNAL, error_type="internal")

    logger.info("user_deleted", extra={"user_id": str(target_id)})
    log_user(db, action=AuditAction.USER_DELETE, user_id=target_id, metadata={"email": email})
    return schemas.ActionResult.ok()


# Form submissions

def create_payload_from_form(form: Mapping) -> schemas.UserCreate:
    return schemas.UserCreate(
        name=form.get("name") or "",
        email=form.get("email") or "",
        status=parse_user_status(form.get("status")),
        role=parse_user_role(form.get("role")),
        avatar=form.get("avatar") or None,
    )


def update_payload_from_form(form: Mapping) -> schemas.UserUpdate:
    # Avatar is always submitted by the edit form; an empty value clears it
    return schemas.UserUpdate(
        name=form.get("name"),
        email=form.get("email"),
        status=parse_user_status(form.get("status"), default=None),
        role=parse_user_role(form.get("role")) if form.get("role") else None,
        avatar=form.get("avatar"),
    )


def create_user_action(db: Session, form: Mapping) -> schemas.ActionResult:
    return create_user(db, create_payload_from_form(form))


def update_user_action(db: Session, form: Mapping) -> schemas.ActionResult:
    return update_user(db, form.get("id"), update_payload_from_form(form))


def delete_user_action(db: Session, form: Mapping) -> schemas.ActionResult:
    return delete_user(db, form.get("id"))
