from __future__ import annotations

import runpy
from pathlib import Path

from dashboard.db import models
from dashboard.db.repositories import users as user_repo


SCRIPTS_DIR = Path(__file__).resolve().parents[2] / "scripts"
SEED = runpy.run_path(str(SCRIPTS_DIR / "seed.py"))
MIGRATE = runpy.run_path(str(SCRIPTS_DIR / "migrate_roles.py"))


def test_seed_replaces_existing_users(db, make_user, capsys):
    make_user(email="stale@example.com")
    assert SEED["main"]([]) == 0

    assert user_repo.count_users(db) == 16
    assert user_repo.get_user_by_email(db, "stale@example.com") is None
    joao = user_repo.get_user_by_email(db, "joao@example.com")
    assert joao.role == "ADMIN"
    assert joao.avatar == "https://i.pravatar.cc/150?u=joao"
    assert "Created 16 users" in capsys.readouterr().out


def test_seed_keep_existing_skips_known_emails(db, make_user):
    make_user(email="maria@example.com", name="Already here")
    make_user(email="someone@else.example")
    assert SEED["main"](["--keep-existing"]) == 0

    assert user_repo.count_users(db) == 17
    assert user_repo.get_user_by_email(db, "maria@example.com").name == "Already here"


def test_seed_stats_match_sample_data(db):
    SEED["seed"]()
    stats = user_repo.get_user_stats(db)
    assert (stats.active, stats.pending, stats.inactive) == (9, 4, 3)


def test_normalize_role():
    normalize = MIGRATE["normalize_role"]
    assert normalize("admin") == "ADMIN"
    assert normalize("Administrator") == "ADMIN"
    assert normalize("mod") == "MODERATOR"
    assert normalize("moderator") == "MODERATOR"
    assert normalize("user") == "USER"
    assert normalize("owner") == "USER"
    assert normalize(None) == "USER"


def test_migrate_roles_rewrites_legacy_values(db, make_user, capsys):
    a = make_user(role="admin")
    m = make_user(role="mod")
    o = make_user(role="owner")

    assert MIGRATE["main"]([]) == 0

    db.expire_all()
    assert [user_repo.get_user(db, u.id).role for u in (a, m, o)] == ["ADMIN", "MODERATOR", "USER"]
    out = capsys.readouterr().out
    assert "Migrated: 3" in out
    assert "Errors: 0" in out


def test_migrate_roles_dry_run_writes_nothing(db, make_user):
    user = make_user(role="administrator")
    report = MIGRATE["migrate_roles"](dry_run=True)
    assert (report.total, report.migrated, report.errors) == (1, 1, 0)

    db.expire_all()
    assert user_repo.get_user(db, user.id).role == "administrator"
