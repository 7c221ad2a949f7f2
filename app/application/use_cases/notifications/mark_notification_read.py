"""Use case for marking a notification as read."""

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.domain.exceptions import ForbiddenError, NotFoundError
from app.infrastructure.repositories import NotificationRepository


def mark_notification_read(
    session: Session, *, notification_id: int, user_id: int
) -> Notification:
    """Flag the caller's notification as read; repeated calls are no-ops."""

    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    if int(notification.user_id) != int(user_id):
        raise ForbiddenError("Forbidden")
    if not notification.is_read:
        repository.mark_as_read(notification_id, user_id=user_id)
        notification.is_read = True
    return notification
