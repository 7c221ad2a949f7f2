"""Fan-out of announcements into per-recipient notification rows."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import (
    Announcement,
    AnnouncementStatus,
    DispatchResult,
    Notification,
)
from app.domain.exceptions import DispatchError
from app.infrastructure.repositories import (
    AnnouncementRepository,
    NotificationRepository,
    RegistrationRepository,
)
from app.utils import now_in_app_naive_datetime

logger = logging.getLogger(__name__)

SYSTEM_USER_ID = 0


def fan_out(
    session: Session,
    *,
    recipients: Sequence[int],
    event_id: int | None,
    title: str,
    message: str,
    status: AnnouncementStatus,
    created_by: int | None,
    scheduled_by: int | None = None,
    announcement_id: int | None = None,
    scheduled_at: datetime | None = None,
    commit: bool = True,
) -> DispatchResult:
    """Write one notification per recipient sharing the same content."""

    if not recipients:
        return DispatchResult(inserted=0, requested=0)

    now = now_in_app_naive_datetime()
    sent_at = now if status is AnnouncementStatus.SENT else None
    rows = [
        Notification(
            id=None,
            user_id=user_id,
            event_id=event_id,
            title=title,
            message=message,
            status=status.notification_value,
            is_read=False,
            announcement_id=announcement_id,
            created_by=created_by,
            scheduled_at=scheduled_at,
            scheduled_by=scheduled_by if scheduled_by is not None else created_by,
            attempts=0,
            created_at=now,
            sent_at=sent_at,
        )
        for user_id in recipients
    ]
    inserted = NotificationRepository(session).bulk_create(rows, commit=commit)
    return DispatchResult(inserted=inserted, requested=len(recipients))


def dispatch_announcement(
    session: Session,
    announcement: Announcement,
    *,
    dispatched_by: int,
) -> DispatchResult | None:
    """Mark ``announcement`` as sent and deliver it to the event registrants.

    The status change and the notification rows are committed together. When
    another caller already sent the announcement nothing is written and
    ``None`` is returned. Failures roll everything back and raise
    :class:`DispatchError`, leaving the announcement in its previous state.
    """

    if announcement.id is None:
        raise ValueError("Announcement must be persisted before dispatch")

    announcements = AnnouncementRepository(session)
    notifications = NotificationRepository(session)
    try:
        if not announcements.claim_for_dispatch(
            announcement.id, sent_at=now_in_app_naive_datetime()
        ):
            session.rollback()
            logger.info("Announcement %s already sent; skipping dispatch", announcement.id)
            return None

        recipients = RegistrationRepository(session).list_recipient_ids(announcement.event_id)
        delivered = notifications.recipients_for_announcement(announcement.id)
        pending = [user_id for user_id in recipients if user_id not in delivered]
        result = fan_out(
            session,
            recipients=pending,
            event_id=announcement.event_id,
            title=announcement.title,
            message=announcement.message,
            status=AnnouncementStatus.SENT,
            created_by=dispatched_by,
            scheduled_by=announcement.created_by,
            announcement_id=announcement.id,
            commit=False,
        )
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to dispatch announcement %s", announcement.id)
        raise DispatchError(announcement_id=announcement.id) from exc

    logger.info(
        "Announcement %s dispatched to %s of %s recipients",
        announcement.id,
        result.inserted,
        len(recipients),
    )
    return DispatchResult(inserted=result.inserted, requested=len(recipients))


__all__ = ["SYSTEM_USER_ID", "dispatch_announcement", "fan_out"]
