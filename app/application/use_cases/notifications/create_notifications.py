"""Use case for creating notifications for an explicit list of recipients."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.use_cases.announcements import fan_out
from app.application.use_cases.announcements.validators import (
    ensure_title_and_message,
    parse_schedule,
)
from app.domain.entities import NOTIFICATION_STATUSES, AnnouncementStatus, DispatchResult
from app.domain.exceptions import DispatchError, ValidationError

logger = logging.getLogger(__name__)


def _normalize_recipients(recipients: Sequence[Any] | None) -> list[int]:
    if not recipients or isinstance(recipients, (str, bytes)):
        raise ValidationError("recipients (array of user_id) is required")
    normalized: list[int] = []
    seen: set[int] = set()
    for recipient in recipients:
        try:
            user_id = int(recipient)
        except (TypeError, ValueError) as exc:
            raise ValidationError("recipients must contain user ids") from exc
        if user_id in seen:
            continue
        seen.add(user_id)
        normalized.append(user_id)
    return normalized


def create_notifications(
    session: Session,
    *,
    created_by: int,
    recipients: Sequence[Any] | None,
    title: Any,
    message: Any,
    event_id: int | None = None,
    status: str | None = "pending",
    scheduled_at: Any = None,
) -> DispatchResult:
    """Insert one notification per recipient with the requested status."""

    user_ids = _normalize_recipients(recipients)
    clean_title, clean_message = ensure_title_and_message(title, message)

    normalized_status = str(status or "pending").strip().lower()
    if normalized_status not in NOTIFICATION_STATUSES:
        raise ValidationError(
            f"Invalid status. Allowed: {', '.join(NOTIFICATION_STATUSES)}"
        )
    target = AnnouncementStatus.parse(normalized_status)

    schedule = None
    if target is AnnouncementStatus.SCHEDULED:
        schedule = parse_schedule(scheduled_at)
        if schedule is None:
            raise ValidationError("scheduled_at is required when status is scheduled")

    try:
        return fan_out(
            session,
            recipients=user_ids,
            event_id=event_id,
            title=clean_title,
            message=clean_message,
            status=target,
            created_by=created_by,
            scheduled_at=schedule,
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to create notifications for %s recipients", len(user_ids))
        raise DispatchError("Error creating notifications") from exc
