"""Persistence helpers for announcement entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.domain.entities import (
    Announcement,
    AnnouncementLookup,
    AnnouncementStatus,
    Found,
    MaterializedFrom,
    NotFound,
)
from app.infrastructure.models import AnnouncementModel, NotificationModel
from app.utils import ensure_app_naive_datetime, now_in_app_naive_datetime

from .notification_repository import NotificationRepository


class AnnouncementRepository:
    """Provide CRUD and lifecycle operations for :class:`Announcement` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, announcement_id: int) -> Announcement | None:
        model = self.session.get(AnnouncementModel, announcement_id)
        if model is None:
            return None
        return self._to_entity(model)

    def create(self, announcement: Announcement, *, commit: bool = True) -> Announcement:
        model = AnnouncementModel()
        self._apply_entity_to_model(model, announcement)
        now = now_in_app_naive_datetime()
        model.created_at = ensure_app_naive_datetime(announcement.created_at) or now
        model.updated_at = now
        self.session.add(model)
        self._persist(model, commit=commit)
        return self._to_entity(model)

    def update(self, announcement: Announcement, *, commit: bool = True) -> Announcement:
        if announcement.id is None:
            raise ValueError("Announcement id is required for updates")
        model = self.session.get(AnnouncementModel, announcement.id)
        if model is None:
            msg = f"Announcement with id {announcement.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, announcement)
        model.updated_at = now_in_app_naive_datetime()
        self.session.add(model)
        self._persist(model, commit=commit)
        return self._to_entity(model)

    def get_by_source_notification(self, notification_id: int) -> Announcement | None:
        model = (
            self.session.query(AnnouncementModel)
            .filter(AnnouncementModel.source_notification_id == notification_id)
            .first()
        )
        if model is None:
            return None
        return self._to_entity(model)

    def find_or_materialize(
        self, announcement_id: int, *, created_by: int, commit: bool = True
    ) -> AnnouncementLookup:
        """Resolve ``announcement_id`` against announcements, then legacy notifications.

        Announcement listings are derived from notification rows, so clients may
        hold a notification id. A notification produced by a dispatch resolves
        to its announcement. Any other notification seeds a draft announcement
        linked to it on the first update; later updates reach the same row
        through the link.

        Announcement and notification ids overlap. An announcement seeded from
        another notification only answers to its own id when no notification
        carries that id.
        """

        linked = self.get_by_source_notification(announcement_id)
        if linked is not None:
            return Found(linked)

        existing = self.get(announcement_id)
        if existing is not None and existing.source_notification_id is None:
            return Found(existing)

        notification = NotificationRepository(self.session).get(announcement_id)
        if notification is None:
            if existing is not None:
                return Found(existing)
            return NotFound(announcement_id)

        if notification.announcement_id is not None:
            owner = self.get(notification.announcement_id)
            if owner is not None:
                return Found(owner)

        seeded = self.create(
            Announcement(
                id=None,
                event_id=notification.event_id,
                title=notification.title,
                message=notification.message,
                status=AnnouncementStatus.DRAFT,
                scheduled_at=None,
                created_by=created_by,
                source_notification_id=notification.id,
            ),
            commit=commit,
        )
        return MaterializedFrom(announcement=seeded, notification=notification)

    def claim_for_dispatch(self, announcement_id: int, *, sent_at: datetime) -> bool:
        """Flip the row to ``sent`` unless it already is; return whether it changed.

        The caller owns the transaction so the claim commits or rolls back
        together with the fan-out rows.
        """

        result = self.session.execute(
            update(AnnouncementModel)
            .where(AnnouncementModel.id == announcement_id)
            .where(AnnouncementModel.status != AnnouncementStatus.SENT.announcement_value)
            .values(
                status=AnnouncementStatus.SENT.announcement_value,
                sent_at=ensure_app_naive_datetime(sent_at),
                updated_at=ensure_app_naive_datetime(sent_at),
                last_error=None,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def list_due_scheduled(self, now: datetime) -> Sequence[Announcement]:
        query = (
            self.session.query(AnnouncementModel)
            .filter(AnnouncementModel.status == AnnouncementStatus.SCHEDULED.announcement_value)
            .filter(AnnouncementModel.scheduled_at.is_not(None))
            .filter(AnnouncementModel.scheduled_at <= ensure_app_naive_datetime(now))
            .order_by(AnnouncementModel.scheduled_at.asc(), AnnouncementModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def record_dispatch_failure(self, announcement_id: int, error: str) -> None:
        self.session.execute(
            update(AnnouncementModel)
            .where(AnnouncementModel.id == announcement_id)
            .values(
                dispatch_attempts=AnnouncementModel.dispatch_attempts + 1,
                last_error=error[:255],
            )
            .execution_options(synchronize_session=False)
        )
        self.session.commit()

    def delete_all(self) -> int:
        # Notification history survives; only its link to the announcement goes.
        self.session.query(NotificationModel).filter(
            NotificationModel.announcement_id.is_not(None)
        ).update({NotificationModel.announcement_id: None}, synchronize_session=False)
        deleted = self.session.query(AnnouncementModel).delete(synchronize_session=False)
        self.session.commit()
        return int(deleted or 0)

    def _persist(self, model: AnnouncementModel, *, commit: bool) -> None:
        if commit:
            self.session.commit()
            self.session.refresh(model)
        else:
            self.session.flush()

    @staticmethod
    def _apply_entity_to_model(model: AnnouncementModel, announcement: Announcement) -> None:
        model.event_id = announcement.event_id
        model.title = announcement.title
        model.message = announcement.message
        model.status = AnnouncementStatus.parse(announcement.status).announcement_value
        model.scheduled_at = ensure_app_naive_datetime(announcement.scheduled_at)
        model.created_by = announcement.created_by
        model.sent_at = ensure_app_naive_datetime(announcement.sent_at)
        model.dispatch_attempts = announcement.dispatch_attempts or 0
        model.last_error = announcement.last_error
        model.source_notification_id = announcement.source_notification_id

    @staticmethod
    def _to_entity(model: AnnouncementModel) -> Announcement:
        return Announcement(
            id=model.id,
            event_id=model.event_id,
            title=model.title,
            message=model.message,
            status=AnnouncementStatus.parse(model.status),
            scheduled_at=model.scheduled_at,
            created_by=model.created_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
            sent_at=model.sent_at,
            dispatch_attempts=model.dispatch_attempts or 0,
            last_error=model.last_error,
            source_notification_id=model.source_notification_id,
        )


__all__ = ["AnnouncementRepository"]
