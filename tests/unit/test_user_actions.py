import uuid

import pytest

from dashboard.db import models, schemas
from dashboard.db.repositories import audits as audit_repo
from dashboard.db.repositories import users as user_repo
from dashboard.services import user_actions


def _create(db, **fields):
    payload = {"name": "Maria Santos", "email": "maria@example.com"}
    payload.update(fields)
    return user_actions.create_user(db, schemas.UserCreate(**payload))


@pytest.mark.parametrize(
    "name,email,field,message",
    [
        ("", "a@b.co", "name", "Nome é obrigatório"),
        ("   ", "a@b.co", "name", "Nome é obrigatório"),
        ("Ana", "", "email", "Email é obrigatório"),
        ("Ana", "not-an-email", "email", "Email deve ter um formato válido"),
        ("Ana", "a b@c.io", "email", "Email deve ter um formato válido"),
    ],
)
def test_validate_user_fields(name, email, field, message):
    errors = user_actions.validate_user_fields(name, email)
    assert errors[field] == message


def test_create_user_success_normalizes_and_audits(db):
    result = _create(db, name="  Maria  ", email="Maria@Example.COM", role=models.UserRole.ADMIN)
    assert result.success
    user = user_repo.get_user(db, result.data)
    assert user.name == "Maria"
    assert user.email == "maria@example.com"
    assert user.status is models.UserStatus.ACTIVE
    assert user.role == "ADMIN"
    assert user.avatar is None

    logs = audit_repo.get_audit_logs(db, target_id=user.id)
    assert [log.action_type for log in logs] == ["user_create"]
    assert logs[0].metadata_json["email"] == "maria@example.com"


def test_create_user_validation_error(db):
    result = _create(db, name="", email="bad")
    assert not result.success
    assert result.error_type == "validation"
    assert set(result.errors) == {"name", "email"}
    assert result.error == "Nome é obrigatório"
    assert user_repo.count_users(db) == 0


def test_create_user_duplicate_email(db):
    assert _create(db).success
    result = _create(db, email="MARIA@example.com")
    assert result.error_type == "duplicate_email"
    assert result.error == "Email já está em uso"
    assert result.errors == {"email": "Email já está em uso"}


def test_create_user_internal_error(db, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("db down")

    monkeypatch.setattr(user_repo, "create_user", boom)
    result = _create(db)
    assert result.error_type == "internal"
    assert result.error == "Erro interno do servidor"


def test_update_user_changes_supplied_fields(db, make_user):
    user = make_user(name="Old", email="old@example.com", avatar="https://x/a.png")
    result = user_actions.update_user(
        db, str(user.id), schemas.UserUpdate(name="New", status=models.UserStatus.PENDING, avatar="")
    )
    assert result.success
    db.refresh(user)
    assert user.name == "New"
    assert user.email == "old@example.com"
    assert user.status is models.UserStatus.PENDING
    assert user.avatar is None
    assert audit_repo.get_audit_logs(db, target_id=user.id, action_type="user_update")


def test_update_user_keeps_name_when_blank(db, make_user):
    user = make_user(name="Keep")
    assert user_actions.update_user(db, user.id, schemas.UserUpdate(name="  ")).success
    db.refresh(user)
    assert user.name == "Keep"


def test_update_user_email_checks(db, make_user):
    make_user(email="taken@example.com")
    user = make_user(email="me@example.com")

    dup = user_actions.update_user(db, user.id, schemas.UserUpdate(email="TAKEN@example.com"))
    assert dup.error_type == "duplicate_email"

    invalid = user_actions.update_user(db, user.id, schemas.UserUpdate(email="nope"))
    assert invalid.error_type == "validation"
    assert invalid.errors == {"email": "Email deve ter um formato válido"}

    same = user_actions.update_user(db, user.id, schemas.UserUpdate(email="ME@example.com"))
    assert same.success


def test_update_user_missing(db):
    assert user_actions.update_user(db, None, schemas.UserUpdate()).error == "ID do usuário é obrigatório"
    result = user_actions.update_user(db, uuid.uuid4(), schemas.UserUpdate(name="x"))
    assert result.error_type == "not_found"
    assert result.error == "Usuário não encontrado"


def test_delete_user(db, make_user):
    user = make_user()
    result = user_actions.delete_user(db, str(user.id))
    assert result.success
    assert user_repo.get_user(db, user.id) is None
    assert audit_repo.get_audit_logs(db, target_id=user.id, action_type="user_delete")


def test_delete_user_missing_and_failures(db, make_user, monkeypatch):
    assert user_actions.delete_user(db, "").error_type == "validation"
    assert user_actions.delete_user(db, uuid.uuid4()).error_type == "not_found"

    user = make_user()

    def boom(*args, **kwargs):
        raise RuntimeError("Failed to delete user")

    monkeypatch.setattr(user_repo, "delete_user", boom)
    result = user_actions.delete_user(db, user.id)
    assert result.error_type == "internal"


def test_audit_failure_does_not_break_action(db, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("audit table missing")

    monkeypatch.setattr(audit_repo, "create_audit_log", boom)
    result = _create(db)
    assert result.success
    assert user_repo.get_user(db, result.data) is not None


def test_form_actions(db):
    created = user_actions.create_user_action(db, {
        "name": "Form User",
        "email": "form@example.com",
        "status": "PENDING",
        "role": "moderator",
        "avatar": "",
    })
    assert created.success
    user = user_repo.get_user(db, created.data)
    assert user.status is models.UserStatus.PENDING
    assert user.role == "MODERATOR"

    updated = user_actions.update_user_action(db, {
        "id": str(user.id),
        "name": "Form User 2",
        "email": "form@example.com",
        "status": "",
        "role": "",
        "avatar": "https://i.pravatar.cc/150?u=form",
    })
    assert updated.success
    db.refresh(user)
    assert user.name == "Form User 2"
    assert user.status is models.UserStatus.PENDING
    assert user.avatar == "https://i.pravatar.cc/150?u=form"

    assert user_actions.delete_user_action(db, {"id": str(user.id)}).success
    assert user_actions.delete_user_action(db, {}).error_type == "validation"
