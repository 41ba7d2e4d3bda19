import importlib
import uuid
import warnings

from dashboard.api import users as users_api
from dashboard.db import models
from dashboard.db.repositories import users as user_repo


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_users_with_filters(client, make_user):
    make_user(name="Ana Costa", status=models.UserStatus.ACTIVE, role="ADMIN")
    make_user(name="Bruno Mendes", status=models.UserStatus.PENDING)
    make_user(name="Carla Dias", status=models.UserStatus.ACTIVE)

    body = client.get("/api/users", params={"status": "ACTIVE", "sortBy": "name", "sortOrder": "asc"}).json()
    assert body["total"] == 2
    assert body["page"] == 1 and body["limit"] == 10 and body["total_pages"] == 1
    assert [u["name"] for u in body["users"]] == ["Ana Costa", "Carla Dias"]

    body = client.get("/api/users", params={"search": "bruno"}).json()
    assert [u["status"] for u in body["users"]] == ["PENDING"]


def test_list_users_pagination_params(client, make_user):
    for i in range(7):
        make_user(name=f"User {i}")
    body = client.get("/api/users", params={"limit": "5", "page": "2"}).json()
    assert body["total"] == 7
    assert body["total_pages"] == 2
    assert len(body["users"]) == 2


def test_stats_and_roles(client, make_user):
    make_user(status=models.UserStatus.ACTIVE, role="ADMIN")
    make_user(status=models.UserStatus.INACTIVE, role="USER")
    assert client.get("/api/users/stats").json() == {"total": 2, "active": 1, "pending": 0, "inactive": 1}
    assert client.get("/api/users/roles").json() == ["ADMIN", "USER"]


def test_get_user(client, make_user):
    user = make_user(name="Detail")
    body = client.get(f"/api/users/{user.id}").json()
    assert body["id"] == str(user.id)
    assert body["name"] == "Detail"

    assert client.get(f"/api/users/{uuid.uuid4()}").status_code == 404
    assert client.get("/api/users/not-a-uuid").status_code == 404


def test_create_user(client, db):
    response = client.post("/api/users", json={"name": "Nova", "email": "Nova@Example.com", "role": "MODERATOR"})
    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "nova@example.com"
    assert body["status"] == "ACTIVE"
    assert body["role"] == "MODERATOR"
    assert user_repo.get_user(db, body["id"]) is not None


def test_create_user_errors(client, make_user):
    response = client.post("/api/users", json={"name": "", "email": "x"})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["error_type"] == "validation"
    assert detail["errors"]["name"] == "Nome é obrigatório"

    make_user(email="dup@example.com")
    response = client.post("/api/users", json={"name": "Dup", "email": "dup@example.com"})
    assert response.status_code == 409
    assert response.json()["detail"]["error"] == "Email já está em uso"


def test_update_user(client, make_user):
    user = make_user(name="Before")
    response = client.patch(f"/api/users/{user.id}", json={"name": "After", "status": "INACTIVE"})
    assert response.status_code == 200
    assert response.json()["name"] == "After"
    assert response.json()["status"] == "INACTIVE"

    assert client.patch(f"/api/users/{uuid.uuid4()}", json={"name": "x"}).status_code == 404


def test_update_user_conflict(client, make_user):
    make_user(email="taken@example.com")
    user = make_user(email="mine@example.com")
    response = client.patch(f"/api/users/{user.id}", json={"email": "taken@example.com"})
    assert response.status_code == 409


def test_delete_user(client, make_user, db):
    user = make_user()
    response = client.delete(f"/api/users/{user.id}")
    assert response.status_code == 204
    assert user_repo.get_user(db, user.id) is None
    assert client.delete(f"/api/users/{user.id}").status_code == 404


def test_users_api_module_loads_without_deprecation_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        importlib.reload(users_api)
    assert users_api._ERROR_STATUS["validation"] == 422
