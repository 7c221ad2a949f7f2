"""Periodic promotion of due scheduled announcements."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.infrastructure.repositories import AnnouncementRepository, NotificationRepository
from app.utils import ensure_app_naive_datetime, now_in_app_naive_datetime

from .dispatch import SYSTEM_USER_ID, dispatch_announcement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepReport:
    """Counters describing one sweep."""

    due: int = 0
    dispatched: int = 0
    skipped: int = 0
    failed: int = 0
    promoted_notifications: int = 0


def run_scheduled_sweep(session: Session, *, now: datetime | None = None) -> SweepReport:
    """Send every scheduled announcement whose time has come.

    Each due announcement is dispatched on its own; a failure is logged,
    counted on the row and retried by the next sweep. Scheduled notification
    rows created through the bulk endpoint are promoted to sent afterwards.
    """

    moment = ensure_app_naive_datetime(now) or now_in_app_naive_datetime()
    repository = AnnouncementRepository(session)
    due = repository.list_due_scheduled(moment)

    dispatched = skipped = failed = 0
    for announcement in due:
        try:
            result = dispatch_announcement(
                session, announcement, dispatched_by=SYSTEM_USER_ID
            )
        except Exception as exc:
            session.rollback()
            failed += 1
            logger.error(
                "Scheduled announcement %s failed; it will be retried: %s",
                announcement.id,
                exc,
            )
            _record_failure(session, repository, announcement.id, exc)
            continue
        if result is None:
            skipped += 1
        else:
            dispatched += 1

    promoted = 0
    try:
        promoted = NotificationRepository(session).promote_due_scheduled(moment)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to promote scheduled notifications")

    report = SweepReport(
        due=len(due),
        dispatched=dispatched,
        skipped=skipped,
        failed=failed,
        promoted_notifications=promoted,
    )
    if report.due or report.promoted_notifications:
        logger.info("Announcement sweep finished: %s", report)
    return report


def _record_failure(
    session: Session,
    repository: AnnouncementRepository,
    announcement_id: int | None,
    error: Exception,
) -> None:
    if announcement_id is None:
        return
    reason = str(error.__cause__ or error) or error.__class__.__name__
    try:
        repository.record_dispatch_failure(announcement_id, reason)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Could not record dispatch failure for announcement %s", announcement_id)


__all__ = ["SweepReport", "run_scheduled_sweep"]
