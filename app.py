"""
App assembly entry point.

Re-exports the FastAPI `app` from `dashboard.api.main` so servers can be
pointed at `app:app`.
"""

from dashboard.api.main import app  # noqa: F401
