"""Use case for listing announcements derived from delivered notifications."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import AnnouncementView
from app.infrastructure.repositories import NotificationRepository


def list_announcements(session: Session) -> Sequence[AnnouncementView]:
    """Return announcement views grouped by event, title and message."""

    return NotificationRepository(session).list_announcement_views()
