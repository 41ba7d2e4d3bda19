import os

os.environ.setdefault("PYTEST_RUNNING", "1")

from contextvars import ContextVar

import pytest
from fastapi.testclient import TestClient

import dashboard.db.database as db_module
from dashboard.db import models
from dashboard.db.repositories import users as user_repo
from dashboard.utils.settings import refresh_settings_cache
from dashboard.api.main import app


_current_session: ContextVar[object] = ContextVar("_current_session", default=None)
# Fallback for threadpool contexts where ContextVar may not propagate
_GLOBAL_SESSION = None


def _clear_tables(session):
    for table in reversed(models.Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()


@pytest.fixture(autouse=True)
def db_session():
    """Per-test session on the shared in-memory database; tables are emptied afterwards."""
    models.Base.metadata.create_all(bind=db_module.engine)
    session = db_module.SessionLocal()
    token = _current_session.set(session)
    global _GLOBAL_SESSION
    _GLOBAL_SESSION = session
    try:
        yield session
    finally:
        _current_session.reset(token)
        _GLOBAL_SESSION = None
        try:
            session.rollback()
            _clear_tables(session)
        finally:
            session.close()


@pytest.fixture(autouse=True)
def _fresh_settings():
    refresh_settings_cache()
    yield
    refresh_settings_cache()


# FastAPI dependency override so app endpoints use the test session
def _override_get_db():
    session = _current_session.get()
    if session is not None:
        yield session
        return
    if _GLOBAL_SESSION is not None:
        yield _GLOBAL_SESSION
        return
    session = db_module.SessionLocal()
    try:
        yield session
    finally:
        session.close()


app.dependency_overrides[db_module.get_db] = _override_get_db


@pytest.fixture
def db(db_session):
    return db_session


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db_session):
    """Factory creating committed users with sensible defaults."""
    counter = {"n": 0}

    def _make(name=None, email=None, status=models.UserStatus.ACTIVE, role="USER", avatar=None):
        counter["n"] += 1
        n = counter["n"]
        return user_repo.create_user(
            db_session,
            name=name or f"User {n}",
            email=email or f"user{n}@example.com",
            status=status,
            role=role,
            avatar=avatar,
        )

    return _make
