"""Use cases for reading notifications."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.infrastructure.repositories import NotificationRepository


def list_user_notifications(session: Session, *, user_id: int) -> Sequence[Notification]:
    """Return the notifications delivered to ``user_id``, newest first."""

    return NotificationRepository(session).list_for_user(user_id)


def list_owner_notifications(
    session: Session, *, owner_id: int, event_id: int | None = None
) -> Sequence[Notification]:
    """Return the notifications an organizer scheduled, optionally for one event."""

    return NotificationRepository(session).list_for_owner(owner_id, event_id=event_id)
