"""Service layer: user queries, user actions and toast notifications."""

from . import toasts, user_actions, user_queries

__all__ = ["toasts", "user_actions", "user_queries"]
