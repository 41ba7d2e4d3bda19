"""Normalize legacy role strings (admin, mod, ...) to ADMIN/USER/MODERATOR."""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import suppress
from dataclasses import dataclass

from dashboard.db import database, models


logger = logging.getLogger("dashboard.scripts.migrate_roles")


# Access SessionLocal dynamically so test fixtures that rebind the
# sessionmaker are respected.
SessionLocal = lambda: database.SessionLocal()


ROLE_MAPPING = {
    "admin": models.UserRole.ADMIN.value,
    "administrator": models.UserRole.ADMIN.value,
    "user": models.UserRole.USER.value,
    "moderator": models.UserRole.MODERATOR.value,
    "mod": models.UserRole.MODERATOR.value,
}


@dataclass
class MigrationReport:
    total: int = 0
    migrated: int = 0
    errors: int = 0


def normalize_role(value: str | None) -> str:
    """Map a legacy role string to its canonical value; unknown roles become USER."""
    return ROLE_MAPPING.get((value or "").strip().lower(), models.UserRole.USER.value)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Normalize legacy user roles")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report the role changes without writing them",
    )
    return parser.parse_args(argv)


def migrate_roles(dry_run: bool = False) -> MigrationReport:
    session = SessionLocal()
    report = MigrationReport()
    try:
        users = session.query(models.User).order_by(models.User.created_at).all()
        report.total = len(users)
        logger.info("Role migration starting", extra={"users": report.total, "dry_run": dry_run})

        for user in users:
            current = user.role
            new_role = normalize_role(current)
            print(f'{user.name}: "{current}" -> "{new_role}"')
            if dry_run:
                report.migrated += 1
                continue
            try:
                user.role = new_role
                session.commit()
                report.migrated += 1
            except Exception:
                session.rollback()
                logger.exception("Failed to migrate user role", extra={"user_id": str(user.id)})
                report.errors += 1

        print(f"Migrated: {report.migrated}")
        print(f"Errors: {report.errors}")
        logger.info(
            "Role migration finished",
            extra={"migrated": report.migrated, "errors": report.errors, "dry_run": dry_run},
        )
        return report
    finally:
        with suppress(Exception):
            session.close()


def main(argv: list[str] | None = None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    report = migrate_roles(dry_run=args.dry_run)
    return 1 if report.errors else 0


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
