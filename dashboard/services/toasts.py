"""
Toast notifications.

A small queue modelling the toast lifecycle: a toast is created hidden,
slides in after ``ENTER_DELAY_MS``, starts its exit animation after the
display duration (or when dismissed) and is dropped ``EXIT_ANIMATION_MS``
later. Time is injected so the lifecycle can be driven deterministically.

Toasts raised by form actions travel to the next page through a flash
cookie; the page renders the stack and a tiny script replays the same
timings in the browser.
"""
from __future__ import annotations

import json
import logging
import secrets
import string
import time
from dataclasses import dataclass, asdict
from typing import Callable, Dict, List, Literal, Optional
from urllib.parse import quote, unquote

from dashboard.utils.settings import get_settings

logger = logging.getLogger(__name__)

ToastType = Literal["success", "error", "info", "warning"]
TOAST_TYPES = ("success", "error", "info", "warning")

ENTER_DELAY_MS = 50
EXIT_ANIMATION_MS = 300
STACK_OFFSET_PX = 8
STACK_SCALE_STEP = 0.05
STACK_BRIGHTNESS_STEP = 0.1
STACK_BASE_Z_INDEX = 50

FLASH_COOKIE = "dashboard_toasts"

_ID_ALPHABET = string.ascii_lowercase + string.digits


def _new_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(7))


def _now_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass
class Toast:
    id: str
    message: str
    type: str = "info"
    is_visible: bool = False
    is_removing: bool = False
    created_at: float = 0.0
    removing_since: Optional[float] = None


def stacking_style(index: int) -> Dict[str, str]:
    """Inline style for the toast at ``index`` in the stack (0 = front)."""
    if index <= 0:
        return {}
    scale = round(1 - index * STACK_SCALE_STEP, 4)
    brightness = round(1 - index * STACK_BRIGHTNESS_STEP, 4)
    return {
        "transform": f"translateY(-{index * STACK_OFFSET_PX}px) scale({scale})",
        "z-index": str(STACK_BASE_Z_INDEX - index),
        "filter": f"brightness({brightness})",
    }


def style_attr(style: Dict[str, str]) -> str:
    return "; ".join(f"{k}: {v}" for k, v in style.items())


class ToastQueue:
    """Ordered toasts plus their timers."""

    def __init__(self, clock: Callable[[], float] = _now_ms, duration_ms: Optional[int] = None):
        self._clock = clock
        self.duration_ms = duration_ms if duration_ms is not None else get_settings().toast_duration_ms
        self.toasts: List[Toast] = []

    def show(self, message: str, type: str = "info") -> Toast:
        if type not in TOAST_TYPES:
            type = "info"
        toast = Toast(id=_new_id(), message=message, type=type, created_at=self._clock())
        self.toasts.append(toast)
        return toast

    def remove(self, toast_id: str) -> None:
        """Start the exit animation for ``toast_id``."""
        now = self._clock()
        for toast in self.toasts:
            if toast.id == toast_id and not toast.is_removing:
                toast.is_removing = True
                toast.removing_since = now

    def tick(self, now: Optional[float] = None) -> List[Toast]:
        """Advance every timer to ``now`` and return the toasts still shown."""
        now = self._clock() if now is None else now
        for toast in self.toasts:
            age = now - toast.created_at
            if not toast.is_visible and age >= ENTER_DELAY_MS:
                toast.is_visible = True
            if not toast.is_removing and age >= self.duration_ms:
                toast.is_removing = True
                toast.removing_since = toast.created_at + self.duration_ms
        self.toasts = [
            t for t in self.toasts
            if not (
                t.is_removing
                and t.removing_since is not None
                and now - t.removing_since >= EXIT_ANIMATION_MS
            )
        ]
        return list(self.toasts)

    def stacked(self) -> List[dict]:
        """Toasts with their stacking style, front first."""
        return [
            {**asdict(t), "style": style_attr(stacking_style(i))}
            for i, t in enumerate(self.toasts)
        ]

    def __len__(self) -> int:
        return len(self.toasts)

    # Flash cookie transport

    def dump(self) -> str:
        payload = [{"message": t.message, "type": t.type} for t in self.toasts]
        return quote(json.dumps(payload, ensure_ascii=False))

    @classmethod
    def load(cls, raw: Optional[str], clock: Callable[[], float] = _now_ms) -> "ToastQueue":
        queue = cls(clock=clock)
        if not raw:
            return queue
        try:
            items = json.loads(unquote(raw))
        except (ValueError, TypeError):
            logger.warning("toast_cookie_invalid")
            return queue
        if not isinstance(items, list):
            return queue
        for item in items:
            if isinstance(item, dict) and item.get("message"):
                queue.show(str(item["message"]), str(item.get("type") or "info"))
        return queue


def flash(response, message: str, type: str = "info", existing: Optional[str] = None):
    """Queue a toast on ``response`` for the next page render."""
    queue = ToastQueue.load(existing)
    queue.show(message, type)
    response.set_cookie(FLASH_COOKIE, queue.dump(), httponly=True, samesite="lax", path="/")
    return response


def pending(request) -> ToastQueue:
    """Toasts queued for ``request`` by a previous action."""
    return ToastQueue.load(request.cookies.get(FLASH_COOKIE))


def clear(request, response):
    """Drop the flash cookie once its toasts have been rendered."""
    if request.cookies.get(FLASH_COOKIE):
        response.delete_cookie(FLASH_COOKIE, path="/")
    return response
