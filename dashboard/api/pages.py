"""
Server-rendered dashboard pages.

The users list keeps its whole state (search, filters, sorting, paging) in
the query string. Create/edit/delete forms post to actions that redirect back
to the list with a toast, or re-render the form with field errors.
"""
import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from dashboard.db import schemas
from dashboard.db.database import get_db
from dashboard.services import toasts, user_actions, user_queries
from dashboard.api.templating import templates
from dashboard.utils import labels
from dashboard.utils.query_params import (
    has_active_filters,
    pagination_info,
    parse_user_filters,
)

router = APIRouter(tags=["pages"])
logger = logging.getLogger(__name__)

_FORM_STATUS = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "duplicate_email": status.HTTP_409_CONFLICT,
    "not_found": status.HTTP_404_NOT_FOUND,
    "internal": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

TOAST_CREATED = "Usuário criado com sucesso!"
TOAST_UPDATED = "Usuário atualizado com sucesso!"
TOAST_DELETED = "Usuário excluído com sucesso!"
TOAST_DELETE_FAILED = "Erro ao excluir usuário. Tente novamente."


def render(request: Request, name: str, context: Optional[dict] = None, status_code: int = 200):
    """Render ``name`` with any pending toasts, then drop the flash cookie."""
    queue = toasts.pending(request)
    ctx = dict(context or {})
    ctx["toasts"] = queue.stacked()
    response = templates.TemplateResponse(request, name, ctx, status_code=status_code)
    return toasts.clear(request, response)


def redirect_with_toast(request: Request, url: str, message: str, type: str = "success"):
    response = RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
    return toasts.flash(response, message, type, existing=request.cookies.get(toasts.FLASH_COOKIE))


def render_not_found(request: Request):
    return render(request, "users/not_found.html", status_code=status.HTTP_404_NOT_FOUND)


def _form_errors(result: schemas.ActionResult) -> Dict[str, str]:
    if result.error_type in ("validation", "duplicate_email") and result.errors:
        return dict(result.errors)
    if result.error_type == "duplicate_email":
        return {"email": result.error}
    return {"general": result.error or user_actions.MSG_INTERNAL}


def _form_context(mode: str, values: dict, errors: Optional[Dict[str, str]] = None, user=None) -> dict:
    return {
        "mode": mode,
        "user": user,
        "values": values,
        "errors": errors or {},
        "status_options": labels.status_options(include_all=False),
        "role_options": labels.role_options(include_all=False),
    }


@router.get("/", include_in_schema=False)
def root_redirect():
    return RedirectResponse("/users", status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get("/users", response_class=HTMLResponse)
def users_page(request: Request, db: Session = Depends(get_db)):
    params = request.query_params
    filters = parse_user_filters(params)
    page = user_queries.get_users(db, filters)
    context = {
        "filters": filters,
        "params": dict(params),
        "users": page.users,
        "page": page,
        "pagination": pagination_info(page.page, page.total_pages, page.total, page.limit),
        "stats": user_queries.get_user_stats(db),
        "status_options": labels.status_options(),
        "role_options": labels.role_options(),
        "sort_options": labels.sort_options(),
        "has_filters": has_active_filters(filters),
    }
    return render(request, "users/list.html", context)


@router.get("/users/new", response_class=HTMLResponse)
def new_user_page(request: Request):
    values = {"status": "ACTIVE", "role": "USER"}
    return render(request, "users/form.html", _form_context("create", values))


@router.post("/users/new", response_class=HTMLResponse)
def create_user_submit(
    request: Request,
    name: str = Form(default=""),
    email: str = Form(default=""),
    user_status: str = Form(default="", alias="status"),
    role: str = Form(default=""),
    avatar: str = Form(default=""),
    db: Session = Depends(get_db),
):
    form = {"name": name, "email": email, "status": user_status, "role": role, "avatar": avatar}
    result = user_actions.create_user_action(db, form)
    if result.success:
        return redirect_with_toast(request, "/users", TOAST_CREATED)
    logger.info("user_create_rejected", extra={"error_type": result.error_type})
    return render(
        request,
        "users/form.html",
        _form_context("create", form, _form_errors(result)),
        status_code=_FORM_STATUS.get(result.error_type, status.HTTP_400_BAD_REQUEST),
    )


@router.get("/users/{user_id}", response_class=HTMLResponse)
def user_detail_page(request: Request, user_id: str, db: Session = Depends(get_db)):
    user = user_queries.get_user_by_id(db, user_id)
    if not user:
        return render_not_found(request)
    return render(request, "users/detail.html", {"user": user})


@router.get("/users/{user_id}/edit", response_class=HTMLResponse)
def edit_user_page(request: Request, user_id: str, db: Session = Depends(get_db)):
    user = user_queries.get_user_by_id(db, user_id)
    if not user:
        return render_not_found(request)
    values = {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "status": user.status.value,
        "role": labels.parse_user_role(user.role).value,
        "avatar": user.avatar or "",
    }
    return render(request, "users/form.html", _form_context("edit", values, user=user))


@router.post("/users/{user_id}/edit", response_class=HTMLResponse)
def edit_user_submit(
    request: Request,
    user_id: str,
    name: str = Form(default=""),
    email: str = Form(default=""),
    user_status: str = Form(default="", alias="status"),
    role: str = Form(default=""),
    avatar: str = Form(default=""),
    db: Session = Depends(get_db),
):
    form = {"id": user_id, "name": name, "email": email, "status": user_status, "role": role, "avatar": avatar}
    result = user_actions.update_user_action(db, form)
    if result.success:
        return redirect_with_toast(request, "/users", TOAST_UPDATED)
    if result.error_type == "not_found":
        return render_not_found(request)
    return render(
        request,
        "users/form.html",
        _form_context("edit", form, _form_errors(result), user=user_queries.get_user_by_id(db, user_id)),
        status_code=_FORM_STATUS.get(result.error_type, status.HTTP_400_BAD_REQUEST),
    )


@router.get("/users/{user_id}/delete", response_class=HTMLResponse)
def confirm_delete_page(request: Request, user_id: str, db: Session = Depends(get_db)):
    user = user_queries.get_user_by_id(db, user_id)
    if not user:
        return render_not_found(request)
    back = request.headers.get("referer") or f"/users/{user.id}"
    return render(request, "users/confirm_delete.html", {"user": user, "cancel_url": back})


@router.post("/users/{user_id}/delete")
def delete_user_submit(request: Request, user_id: str, db: Session = Depends(get_db)):
    result = user_actions.delete_user_action(db, {"id": user_id})
    if result.success:
        return redirect_with_toast(request, "/users", TOAST_DELETED)
    logger.warning("user_delete_rejected", extra={"user_id": user_id, "error_type": result.error_type})
    if result.error_type == "not_found":
        return redirect_with_toast(request, "/users", result.error, type="error")
    return redirect_with_toast(request, f"/users/{user_id}", TOAST_DELETE_FAILED, type="error")
