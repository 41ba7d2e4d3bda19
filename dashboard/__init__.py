"""User management dashboard: FastAPI + SQLAlchemy + Jinja2."""

__version__ = "1.0.0"
