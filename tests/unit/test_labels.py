import pytest

from dashboard.db.models import UserRole, UserStatus
from dashboard.utils import labels


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("ADMIN", UserRole.ADMIN),
        ("moderator", UserRole.MODERATOR),
        (" user ", UserRole.USER),
        ("superuser", UserRole.USER),
        ("", UserRole.USER),
        (None, UserRole.USER),
    ],
)
def test_parse_user_role(raw, expected):
    assert labels.parse_user_role(raw) is expected


def test_parse_user_status_defaults():
    assert labels.parse_user_status("pending") is UserStatus.PENDING
    assert labels.parse_user_status("bogus") is UserStatus.ACTIVE
    assert labels.parse_user_status(None) is UserStatus.ACTIVE
    assert labels.parse_user_status("bogus", default=None) is None


def test_labels_in_portuguese():
    assert labels.get_status_label(UserStatus.ACTIVE) == "Ativo"
    assert labels.get_status_label("PENDING") == "Pendente"
    assert labels.get_status_label("INACTIVE") == "Inativo"
    assert labels.get_role_label("ADMIN") == "Administrador"
    assert labels.get_role_label(UserRole.USER) == "Usuário"
    assert labels.get_role_label("moderator") == "Moderador"


def test_unknown_label_values_pass_through():
    assert labels.get_role_label("legacy-owner") == "legacy-owner"


def test_badges():
    assert labels.status_badge("ACTIVE") == "bg-green-100 text-green-800"
    assert labels.status_badge(UserStatus.PENDING) == "bg-yellow-100 text-yellow-800"
    assert labels.role_badge("ADMIN") == "bg-purple-100 text-purple-800"
    assert labels.role_badge("MODERATOR") == "bg-orange-100 text-orange-800"
    assert labels.role_badge("whatever") == "bg-blue-100 text-blue-800"


def test_initial():
    assert labels.initial("maria") == "M"
    assert labels.initial("") == "?"
    assert labels.initial(None) == "?"


def test_filter_options():
    status = labels.status_options()
    assert status[0].value == "all" and status[0].label == "Todos os Status"
    assert [o.value for o in status[1:]] == ["ACTIVE", "PENDING", "INACTIVE"]
    assert [o.value for o in labels.role_options(include_all=False)] == ["ADMIN", "USER", "MODERATOR"]
    assert [o.value for o in labels.sort_options()] == ["createdAt", "name", "email", "updatedAt"]
