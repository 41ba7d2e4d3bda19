"""Runtime settings helpers sourced from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple


_DEFAULT_CORS_ORIGINS: Tuple[str, ...] = (
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:8000",
)


@dataclass(frozen=True)
class Settings:
    log_level: str
    cors_origins: Tuple[str, ...]
    default_page_size: int
    max_page_size: int
    toast_duration_ms: int
    host: str
    port: int
    reload: bool


def _normalize_bool(value: str | None, default: bool = False) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def _positive_int(value: str | None, default: int) -> int:
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def _split_origins(value: str | None) -> Tuple[str, ...]:
    if not value or not value.strip():
        return _DEFAULT_CORS_ORIGINS
    return tuple(o.strip() for o in value.split(",") if o.strip())


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings for this process."""
    return Settings(
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS")),
        default_page_size=_positive_int(os.getenv("DEFAULT_PAGE_SIZE"), 10),
        max_page_size=_positive_int(os.getenv("MAX_PAGE_SIZE"), 100),
        toast_duration_ms=_positive_int(os.getenv("TOAST_DURATION_MS"), 4000),
        host=os.getenv("DASHBOARD_HOST", "127.0.0.1"),
        port=_positive_int(os.getenv("DASHBOARD_PORT"), 8000),
        reload=_normalize_bool(os.getenv("DASHBOARD_RELOAD"), default=False),
    )


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()
