"""Utility script to delete every announcement from the database."""

from __future__ import annotations

import argparse
import os

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.announcements import clear_announcements
from app.infrastructure.database import SessionLocal, initialize_database

_CONFIRM_VALUES = {"1", "true", "yes"}


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the clear operation."""

    parser = argparse.ArgumentParser(
        description="Delete all announcements. Notification history is kept.",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Confirm the deletion (or set CONFIRM_RESET=1).",
    )
    return parser.parse_args()


def main() -> None:
    """Clear announcements once the operator confirmed it."""

    args = parse_args()
    confirmed = args.yes or os.environ.get("CONFIRM_RESET", "").lower() in _CONFIRM_VALUES
    if not confirmed:
        raise SystemExit(
            "Refusing to clear announcements without confirmation. "
            "Run with --yes or set CONFIRM_RESET=1."
        )

    initialize_database()

    session = SessionLocal()
    try:
        deleted = clear_announcements(session)
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Failed to clear announcements: {exc}") from exc
    else:
        print(f"Deleted {deleted} announcements.")
    finally:
        session.close()


if __name__ == "__main__":
    main()
