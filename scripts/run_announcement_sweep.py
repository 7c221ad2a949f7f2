"""Run a single announcement sweep outside the API process."""

from __future__ import annotations

import argparse

from app.config import get_settings
from app.infrastructure.database import SessionLocal, initialize_database
from app.infrastructure.log_setup import configure_logging
from app.infrastructure.scheduler import AnnouncementScheduler


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Send scheduled announcements that are due, then exit.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override LOG_LEVEL for this run.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging((args.log_level or get_settings().log_level).upper())
    initialize_database()

    report = AnnouncementScheduler(SessionLocal).run_once()
    print(
        f"Due: {report.due}, dispatched: {report.dispatched}, skipped: {report.skipped}, "
        f"failed: {report.failed}, notifications promoted: {report.promoted_notifications}"
    )


if __name__ == "__main__":
    main()
