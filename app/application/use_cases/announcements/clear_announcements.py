"""Use case for removing every announcement."""

import logging

from sqlalchemy.orm import Session

from app.infrastructure.repositories import AnnouncementRepository

logger = logging.getLogger(__name__)


def clear_announcements(session: Session) -> int:
    """Delete all announcements while keeping user notification history."""

    deleted = AnnouncementRepository(session).delete_all()
    logger.info("Cleared %s announcements", deleted)
    return deleted
