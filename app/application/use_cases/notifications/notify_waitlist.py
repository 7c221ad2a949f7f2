"""Use case backing the waitlist "notify me" action."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import AnnouncementStatus, Notification
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import (
    EventRepository,
    NotificationRepository,
    RegistrationRepository,
)


@dataclass(frozen=True)
class WaitlistNotification:
    """Whether a waitlist notification was written by this call."""

    created: bool
    notification: Notification | None = None


def notify_waitlist(
    session: Session, *, registration_id: int, user_id: int
) -> WaitlistNotification:
    """Register the caller's interest in a spot opening for a waitlisted event.

    At most one in-app notification exists per user and event; later calls
    report the existing state without writing.
    """

    registration = RegistrationRepository(session).get_for_user(
        registration_id, user_id=user_id
    )
    if registration is None:
        raise NotFoundError("Registration not found")

    notifications = NotificationRepository(session)
    if notifications.exists_for_user_and_event(
        user_id=user_id, event_id=registration.event_id
    ):
        return WaitlistNotification(created=False)

    event_title = EventRepository(session).get_title(registration.event_id)
    if event_title is None:
        raise NotFoundError("Event not found")

    notification = notifications.create(
        Notification(
            id=None,
            user_id=user_id,
            event_id=registration.event_id,
            title=f"Waitlist Notification: {event_title}",
            message=f'You will be notified when a spot opens for "{event_title}".',
            status=AnnouncementStatus.DRAFT.notification_value,
            created_by=user_id,
        )
    )
    return WaitlistNotification(created=True, notification=notification)
