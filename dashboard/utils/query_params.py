"""
Query-string state for the users list.

Parses list parameters into normalized filters and builds the links that keep
search, filters, sorting and pagination in sync with the URL.
"""
from __future__ import annotations

from typing import Dict, List, Literal, Mapping, Optional, Union
from urllib.parse import urlencode

from dashboard.db import schemas
from dashboard.db.models import UserStatus
from dashboard.utils.labels import LIMIT_OPTIONS
from dashboard.utils.settings import get_settings

USERS_PATH = "/users"
SORT_FIELDS = ("name", "email", "createdAt", "updatedAt")
_ALIASES = {"sort_by": "sortBy", "sort_order": "sortOrder"}

PageItem = Union[int, Literal["..."]]


def _first(params: Mapping, *names: str) -> Optional[str]:
    for name in names:
        value = params.get(name)
        if value is not None:
            if isinstance(value, (list, tuple)):
                value = value[0] if value else None
                if value is None:
                    continue
            return str(value)
    return None


def _positive_int(value: Optional[str], default: int) -> int:
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= 1 else default


def parse_user_filters(params: Optional[Mapping] = None) -> schemas.UserFilters:
    """Normalize raw query parameters into list filters."""
    params = params or {}
    settings = get_settings()

    search = (_first(params, "search") or "").strip()
    status = (_first(params, "status") or "all").strip() or "all"
    role = (_first(params, "role") or "").strip()
    if role.lower() == "all":
        role = ""

    page = _positive_int(_first(params, "page"), 1)
    limit = _positive_int(_first(params, "limit"), settings.default_page_size)
    limit = min(limit, settings.max_page_size)

    sort_by = _first(params, "sortBy", "sort_by") or "createdAt"
    if sort_by not in SORT_FIELDS:
        sort_by = "createdAt"
    sort_order = (_first(params, "sortOrder", "sort_order") or "desc").lower()
    if sort_order not in ("asc", "desc"):
        sort_order = "desc"

    return schemas.UserFilters(
        search=search,
        status=status,
        role=role,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )


def _copy(params: Optional[Mapping]) -> Dict[str, str]:
    copied: Dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        copied[_ALIASES.get(key, key)] = str(value)
    return copied


def _users_url(params: Dict[str, str]) -> str:
    qs = urlencode(params)
    return f"{USERS_PATH}?{qs}" if qs else USERS_PATH


def page_url(params: Optional[Mapping], page: int) -> str:
    updated = _copy(params)
    updated["page"] = str(page)
    return f"?{urlencode(updated)}"


def limit_url(params: Optional[Mapping], limit: int) -> str:
    """Change page size; always returns to the first page."""
    updated = _copy(params)
    updated["limit"] = str(limit)
    updated["page"] = "1"
    return f"?{urlencode(updated)}"


def filter_url(params: Optional[Mapping], name: str, value: Optional[str]) -> str:
    updated = _copy(params)
    if value and value != "all":
        updated[name] = value
    else:
        updated.pop(name, None)
    updated.pop("page", None)
    return _users_url(updated)


def search_url(params: Optional[Mapping], search: Optional[str]) -> str:
    return filter_url(params, "search", (search or "").strip())


def sort_toggle_url(params: Optional[Mapping], current_order: str) -> str:
    updated = _copy(params)
    updated["sortOrder"] = "desc" if current_order == "asc" else "asc"
    return _users_url(updated)


def has_active_filters(filters: schemas.UserFilters) -> bool:
    """Whether any filter the query actually applies is set."""
    known_status = (filters.status or "").upper() in {s.value for s in UserStatus}
    return bool(filters.search or known_status or filters.role)


def page_numbers(current_page: int, total_pages: int, delta: int = 2) -> List[PageItem]:
    """Page links to show: first, a window around the current page, last."""
    pages: List[PageItem] = [1]

    start = max(2, current_page - delta)
    end = min(total_pages - 1, current_page + delta)

    if start > 2:
        pages.append("...")
    pages.extend(range(start, end + 1))
    if end < total_pages - 1:
        pages.append("...")
    if total_pages > 1:
        pages.append(total_pages)
    return pages


def pagination_info(current_page: int, total_pages: int, total_items: int, items_per_page: int) -> schemas.PaginationInfo:
    start_item = (current_page - 1) * items_per_page + 1 if total_items else 0
    end_item = min(current_page * items_per_page, total_items)
    return schemas.PaginationInfo(
        current_page=current_page,
        total_pages=total_pages,
        total_items=total_items,
        items_per_page=items_per_page,
        has_previous_page=current_page > 1,
        has_next_page=current_page < total_pages,
        start_item=start_item,
        end_item=end_item,
        page_numbers=page_numbers(current_page, total_pages),
    )


def limit_options(current: int) -> List[int]:
    options = list(LIMIT_OPTIONS)
    if current not in options:
        options.append(current)
        options.sort()
    return options
