"""Use case for creating announcements."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import Announcement, AnnouncementStatus, DispatchResult
from app.infrastructure.repositories import AnnouncementRepository, EventRepository
from app.utils import now_in_app_naive_datetime

from .dispatch import dispatch_announcement
from .validators import ensure_schedulable, ensure_title_and_message, parse_schedule


@dataclass(frozen=True)
class AnnouncementCreation:
    """Stored announcement plus the delivery counts when it was sent right away."""

    announcement: Announcement
    sent: DispatchResult | None = None


def create_announcement(
    session: Session,
    *,
    created_by: int,
    title: Any,
    message: Any,
    status: AnnouncementStatus | str | None = None,
    event_id: Any = None,
    event_title: Any = None,
    scheduled_at: Any = None,
    mark_sent: bool = False,
) -> AnnouncementCreation:
    """Create an announcement, dispatching it immediately when asked to.

    A row that is sent right away is only flushed here; the dispatch commits it
    together with the notifications, so a failed dispatch leaves nothing behind.
    """

    clean_title, clean_message = ensure_title_and_message(title, message)
    target_status = AnnouncementStatus.parse(status)
    schedule = parse_schedule(scheduled_at)
    send_now = mark_sent or target_status is AnnouncementStatus.SENT
    if target_status is AnnouncementStatus.SCHEDULED and not send_now:
        ensure_schedulable(schedule, now=now_in_app_naive_datetime())

    resolved_event_id = EventRepository(session).resolve_event_id(
        event_id=event_id, event_title=event_title
    )

    repository = AnnouncementRepository(session)
    announcement = repository.create(
        Announcement(
            id=None,
            event_id=resolved_event_id,
            title=clean_title,
            message=clean_message,
            status=AnnouncementStatus.DRAFT if send_now else target_status,
            scheduled_at=schedule,
            created_by=created_by,
        ),
        commit=not send_now,
    )
    if not send_now:
        return AnnouncementCreation(announcement=announcement)

    sent = dispatch_announcement(session, announcement, dispatched_by=created_by)
    refreshed = repository.get(announcement.id) or announcement
    return AnnouncementCreation(announcement=refreshed, sent=sent)
