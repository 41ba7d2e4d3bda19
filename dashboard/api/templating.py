"""
Jinja2 environment for the server-rendered pages.

Registers the label/badge helpers and URL-state builders as template
globals so templates never rebuild query strings by hand.
"""
from pathlib import Path

from fastapi.templating import Jinja2Templates

from dashboard.services import toasts
from dashboard.utils import labels, query_params
from dashboard.utils.settings import get_settings

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))

_env = templates.env
_env.globals.update(
    status_label=labels.get_status_label,
    role_label=labels.get_role_label,
    status_badge=labels.status_badge,
    role_badge=labels.role_badge,
    initial=labels.initial,
    page_url=query_params.page_url,
    limit_url=query_params.limit_url,
    filter_url=query_params.filter_url,
    search_url=query_params.search_url,
    sort_toggle_url=query_params.sort_toggle_url,
    limit_options=query_params.limit_options,
    toast_timings={
        "enter_delay_ms": toasts.ENTER_DELAY_MS,
        "exit_animation_ms": toasts.EXIT_ANIMATION_MS,
        "duration_ms": get_settings().toast_duration_ms,
    },
)


def _date_br(value) -> str:
    return value.strftime("%d/%m/%Y") if value else ""


def _datetime_br(value) -> str:
    return value.strftime("%d/%m/%Y %H:%M") if value else ""


_env.filters["date_br"] = _date_br
_env.filters["datetime_br"] = _datetime_br
