"""Populate the users table with sample data for local development."""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import suppress

from dashboard.db import database, models
from dashboard.db.repositories import users as user_repo


logger = logging.getLogger("dashboard.scripts.seed")


# Access SessionLocal dynamically so test fixtures that rebind the
# sessionmaker are respected.
SessionLocal = lambda: database.SessionLocal()


SAMPLE_USERS = [
    ("João Silva", "joao@example.com", models.UserStatus.ACTIVE, "ADMIN"),
    ("Maria Santos", "maria@example.com", models.UserStatus.ACTIVE, "USER"),
    ("Pedro Oliveira", "pedro@example.com", models.UserStatus.PENDING, "USER"),
    ("Ana Costa", "ana@example.com", models.UserStatus.INACTIVE, "MODERATOR"),
    ("Carlos Mendes", "carlos@example.com", models.UserStatus.ACTIVE, "USER"),
    ("Lucia Ferreira", "lucia@example.com", models.UserStatus.ACTIVE, "USER"),
    ("Roberto Ferreira", "roberto@example.com", models.UserStatus.PENDING, "USER"),
    ("Lucia Almeida", "lucia.almeida@example.com", models.UserStatus.ACTIVE, "MODERATOR"),
    ("Fernando Costa", "fernando@example.com", models.UserStatus.INACTIVE, "USER"),
    ("Patricia Silva", "patricia@example.com", models.UserStatus.ACTIVE, "ADMIN"),
    ("Ricardo Santos", "ricardo@example.com", models.UserStatus.PENDING, "USER"),
    ("Amanda Oliveira", "amanda@example.com", models.UserStatus.ACTIVE, "USER"),
    ("Bruno Mendes", "bruno@example.com", models.UserStatus.INACTIVE, "MODERATOR"),
    ("Camila Lima", "camila@example.com", models.UserStatus.ACTIVE, "USER"),
    ("Diego Rocha", "diego@example.com", models.UserStatus.PENDING, "USER"),
    ("Eduarda Pinto", "eduarda@example.com", models.UserStatus.ACTIVE, "ADMIN"),
]


def avatar_for(email: str) -> str:
    return f"https://i.pravatar.cc/150?u={email.split('@', 1)[0]}"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the users table with sample data")
    parser.add_argument(
        "--keep-existing",
        action="store_true",
        help="Do not clear existing users; skip sample emails that already exist",
    )
    return parser.parse_args(argv)


def seed(keep_existing: bool = False) -> int:
    session = SessionLocal()
    try:
        if not keep_existing:
            removed = user_repo.delete_all_users(session)
            logger.info("Cleared existing users", extra={"deleted_rows": removed})

        created = 0
        for name, email, status, role in SAMPLE_USERS:
            if keep_existing and user_repo.get_user_by_email(session, email):
                continue
            user_repo.create_user(
                session,
                name=name,
                email=email,
                status=status,
                role=role,
                avatar=avatar_for(email),
            )
            created += 1

        print(f"Created {created} users")
        logger.info("Seed finished", extra={"created_rows": created, "keep_existing": keep_existing})
        return created
    finally:
        with suppress(Exception):
            session.close()


def main(argv: list[str] | None = None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    try:
        seed(keep_existing=args.keep_existing)
    except Exception:
        logger.exception("Error seeding database")
        print("Error seeding database", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
