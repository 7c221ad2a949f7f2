"""Use cases for organizers editing and sending notifications they scheduled."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from app.application.use_cases.announcements.validators import parse_schedule
from app.domain.entities import NOTIFICATION_STATUSES, AnnouncementStatus, Notification
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_naive_datetime

UPDATABLE_FIELDS = frozenset({"title", "message", "status", "scheduled_at"})

_SENT = AnnouncementStatus.SENT.notification_value
_SCHEDULED = AnnouncementStatus.SCHEDULED.notification_value


def _get_owned(repository: NotificationRepository, notification_id: int, owner_id: int) -> Notification:
    notification = repository.get_owned(notification_id, owner_id=owner_id)
    if notification is None:
        raise NotFoundError("Notification not found or not owned by you")
    return notification


def _clean_text(changes: Mapping[str, Any], field: str, current: str) -> str:
    if field not in changes:
        return current
    value = changes[field]
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(f"{field} cannot be empty")
    return text


def _clean_status(changes: Mapping[str, Any], current: str) -> str:
    if "status" not in changes:
        return current
    status = str(changes["status"] or "").strip().lower()
    if status not in NOTIFICATION_STATUSES:
        raise ValidationError(
            f"Invalid status. Allowed: {', '.join(NOTIFICATION_STATUSES)}"
        )
    return status


def update_notification(
    session: Session,
    *,
    notification_id: int,
    owner_id: int,
    changes: Mapping[str, Any],
) -> Notification:
    """Apply ``changes`` to a notification scheduled by ``owner_id``.

    Only the keys present in ``changes`` are touched. Moving the row to
    ``sent`` stamps ``sent_at``; moving it away from ``sent`` clears it.
    """

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValidationError(f"Unsupported fields: {', '.join(sorted(unknown))}")

    repository = NotificationRepository(session)
    current = _get_owned(repository, notification_id, owner_id)
    if not changes:
        return current

    status = _clean_status(changes, current.status)
    scheduled_at = (
        parse_schedule(changes["scheduled_at"])
        if "scheduled_at" in changes
        else current.scheduled_at
    )
    if status == _SCHEDULED and scheduled_at is None:
        raise ValidationError("scheduled_at is required when status is scheduled")

    sent_at = current.sent_at
    if status == _SENT and current.status != _SENT:
        sent_at = now_in_app_naive_datetime()
    elif status != _SENT:
        sent_at = None

    return repository.update(
        replace(
            current,
            title=_clean_text(changes, "title", current.title),
            message=_clean_text(changes, "message", current.message),
            status=status,
            scheduled_at=scheduled_at,
            sent_at=sent_at,
        )
    )


def send_notification(
    session: Session, *, notification_id: int, owner_id: int
) -> Notification:
    """Mark a notification scheduled by ``owner_id`` as sent; repeated calls keep ``sent_at``."""

    repository = NotificationRepository(session)
    current = _get_owned(repository, notification_id, owner_id)
    if current.status == _SENT and current.sent_at is not None:
        return current
    return repository.update(
        replace(current, status=_SENT, sent_at=now_in_app_naive_datetime())
    )


__all__ = ["UPDATABLE_FIELDS", "send_notification", "update_notification"]
