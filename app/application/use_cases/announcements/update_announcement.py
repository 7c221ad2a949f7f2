"""Use case for partially updating announcements."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import (
    Announcement,
    AnnouncementStatus,
    DispatchResult,
    MaterializedFrom,
    NotFound,
)
from app.domain.exceptions import EvenzaError, NotFoundError, ValidationError
from app.infrastructure.repositories import AnnouncementRepository, EventRepository
from app.utils import now_in_app_naive_datetime

from .dispatch import dispatch_announcement
from .validators import ensure_schedulable, parse_schedule

UPDATABLE_FIELDS = frozenset({"title", "message", "status", "scheduled_at", "event_id"})


@dataclass(frozen=True)
class AnnouncementUpdate:
    """Result of an update, including any dispatch it triggered."""

    announcement: Announcement
    sent: DispatchResult | None = None
    materialized_from: int | None = None


def _clean_text(changes: Mapping[str, Any], field: str, current: str) -> str:
    if field not in changes:
        return current
    value = changes[field]
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(f"{field} cannot be empty")
    return text


def update_announcement(
    session: Session,
    *,
    announcement_id: int,
    updated_by: int,
    changes: Mapping[str, Any],
) -> AnnouncementUpdate:
    """Apply ``changes`` to an announcement and dispatch it when it becomes sent.

    Only keys present in ``changes`` are touched. An identifier that only
    exists as a notification is upgraded into an announcement first.
    """

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValidationError(f"Unsupported fields: {', '.join(sorted(unknown))}")

    requested_status = (
        AnnouncementStatus.parse(changes["status"]) if "status" in changes else None
    )
    schedule_given = "scheduled_at" in changes
    schedule = parse_schedule(changes["scheduled_at"]) if schedule_given else None

    repository = AnnouncementRepository(session)
    lookup = repository.find_or_materialize(
        announcement_id, created_by=updated_by, commit=False
    )
    if isinstance(lookup, NotFound):
        session.rollback()
        raise NotFoundError("Announcement not found")
    current = lookup.announcement

    try:
        if current.is_sent and requested_status not in (None, AnnouncementStatus.SENT):
            raise ValidationError("A sent announcement cannot change status")

        new_status = requested_status or current.status
        new_schedule = schedule if schedule_given else current.scheduled_at
        if new_status is AnnouncementStatus.SCHEDULED:
            if schedule_given or current.status is not AnnouncementStatus.SCHEDULED:
                ensure_schedulable(new_schedule, now=now_in_app_naive_datetime())

        new_event_id = current.event_id
        if "event_id" in changes:
            new_event_id = EventRepository(session).resolve_event_id(
                event_id=changes["event_id"]
            )

        entering_sent = new_status is AnnouncementStatus.SENT and not current.is_sent
        updated = repository.update(
            replace(
                current,
                title=_clean_text(changes, "title", current.title),
                message=_clean_text(changes, "message", current.message),
                event_id=new_event_id,
                scheduled_at=new_schedule,
                status=current.status if entering_sent else new_status,
            )
        )
    except EvenzaError:
        session.rollback()
        raise

    materialized_from = (
        lookup.notification.id if isinstance(lookup, MaterializedFrom) else None
    )
    if not entering_sent:
        return AnnouncementUpdate(announcement=updated, materialized_from=materialized_from)

    sent = dispatch_announcement(session, updated, dispatched_by=updated_by)
    refreshed = repository.get(updated.id) or updated
    return AnnouncementUpdate(
        announcement=refreshed, sent=sent, materialized_from=materialized_from
    )
