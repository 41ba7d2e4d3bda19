"""Persistence layer: engine/session, ORM models, schemas and repositories."""
