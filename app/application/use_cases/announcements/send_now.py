"""Use case for broadcasting a message without a stored announcement."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import AnnouncementStatus, DispatchResult
from app.domain.exceptions import DispatchError
from app.infrastructure.repositories import EventRepository, RegistrationRepository

from .dispatch import fan_out
from .validators import ensure_title_and_message

logger = logging.getLogger(__name__)


def send_now(
    session: Session,
    *,
    created_by: int,
    title: Any,
    message: Any,
    event_id: Any = None,
    event_title: Any = None,
    mark_sent: bool = True,
) -> DispatchResult:
    """Deliver ``title``/``message`` to every registrant of the resolved event.

    An unknown event resolves to nobody and reports zero deliveries.
    """

    clean_title, clean_message = ensure_title_and_message(title, message)
    resolved_event_id = EventRepository(session).resolve_event_id(
        event_id=event_id, event_title=event_title
    )
    recipients = RegistrationRepository(session).list_recipient_ids(resolved_event_id)
    try:
        return fan_out(
            session,
            recipients=recipients,
            event_id=resolved_event_id,
            title=clean_title,
            message=clean_message,
            status=AnnouncementStatus.SENT if mark_sent else AnnouncementStatus.DRAFT,
            created_by=created_by,
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to send message to event %s", resolved_event_id)
        raise DispatchError("Failed to send announcement") from exc
