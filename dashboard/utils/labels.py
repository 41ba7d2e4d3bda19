"""Display labels, badge styles and select options for users."""
from __future__ import annotations

from typing import List, Optional

from dashboard.db.models import UserRole, UserStatus
from dashboard.db.schemas import FilterOption

STATUS_LABELS = {
    UserStatus.ACTIVE: "Ativo",
    UserStatus.PENDING: "Pendente",
    UserStatus.INACTIVE: "Inativo",
}

ROLE_LABELS = {
    UserRole.ADMIN: "Administrador",
    UserRole.USER: "Usuário",
    UserRole.MODERATOR: "Moderador",
}

STATUS_BADGES = {
    UserStatus.ACTIVE: "bg-green-100 text-green-800",
    UserStatus.PENDING: "bg-yellow-100 text-yellow-800",
    UserStatus.INACTIVE: "bg-red-100 text-red-800",
}

ROLE_BADGES = {
    UserRole.ADMIN: "bg-purple-100 text-purple-800",
    UserRole.MODERATOR: "bg-orange-100 text-orange-800",
    UserRole.USER: "bg-blue-100 text-blue-800",
}

SORT_LABELS = {
    "createdAt": "Data de Criação",
    "name": "Nome",
    "email": "Email",
    "updatedAt": "Última Atualização",
}

LIMIT_OPTIONS = (5, 10, 25, 50)


def _as_status(value) -> Optional[UserStatus]:
    if isinstance(value, UserStatus):
        return value
    try:
        return UserStatus(str(value).upper())
    except ValueError:
        return None


def _as_role(value) -> Optional[UserRole]:
    if isinstance(value, UserRole):
        return value
    try:
        return UserRole(str(value).upper())
    except ValueError:
        return None


def parse_user_role(value: Optional[str]) -> UserRole:
    """Map free-form input to a role, falling back to USER."""
    if not value:
        return UserRole.USER
    return _as_role(value.strip()) or UserRole.USER


def parse_user_status(value: Optional[str], default: Optional[UserStatus] = UserStatus.ACTIVE) -> Optional[UserStatus]:
    if not value:
        return default
    return _as_status(value.strip()) or default


def get_status_label(value) -> str:
    status = _as_status(value)
    return STATUS_LABELS[status] if status else str(value)


def get_role_label(value) -> str:
    role = _as_role(value)
    return ROLE_LABELS[role] if role else str(value)


def status_badge(value) -> str:
    status = _as_status(value)
    return STATUS_BADGES.get(status, STATUS_BADGES[UserStatus.INACTIVE])


def role_badge(value) -> str:
    role = _as_role(value)
    return ROLE_BADGES.get(role, ROLE_BADGES[UserRole.USER])


def initial(name: Optional[str]) -> str:
    return (name or "?").strip()[:1].upper() or "?"


def status_options(include_all: bool = True) -> List[FilterOption]:
    options = [FilterOption(label="Todos os Status", value="all")] if include_all else []
    options.extend(FilterOption(label=label, value=s.value) for s, label in STATUS_LABELS.items())
    return options


def role_options(include_all: bool = True) -> List[FilterOption]:
    options = [FilterOption(label="Todas as Funções", value="all")] if include_all else []
    options.extend(FilterOption(label=label, value=r.value) for r, label in ROLE_LABELS.items())
    return options


def sort_options() -> List[FilterOption]:
    return [FilterOption(label=label, value=key) for key, label in SORT_LABELS.items()]
