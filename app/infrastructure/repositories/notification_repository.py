"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Iterable

from sqlalchemy import case, false, func, update
from sqlalchemy.orm import Session

from app.domain.entities import (
    AnnouncementStatus,
    AnnouncementView,
    NOTIFICATION_TYPE_IN_APP,
    Notification,
)
from app.infrastructure.models import NotificationModel
from app.utils import ensure_app_naive_datetime, now_in_app_naive_datetime


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return None
        return self._to_entity(model)

    def list_for_user(self, user_id: int, *, limit: int | None = None) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_for_owner(
        self, owner_id: int, *, event_id: int | None = None
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.scheduled_by == owner_id
        )
        if event_id is not None:
            query = query.filter(NotificationModel.event_id == event_id)
        query = query.order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get_owned(self, notification_id: int, *, owner_id: int) -> Notification | None:
        """Return the notification when ``owner_id`` scheduled it."""

        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .filter(NotificationModel.scheduled_by == owner_id)
            .first()
        )
        if model is None:
            return None
        return self._to_entity(model)

    def update(self, notification: Notification) -> Notification:
        if notification.id is None:
            raise ValueError("Notification id is required for updates")
        model = self.session.get(NotificationModel, notification.id)
        if model is None:
            msg = f"Notification with id {notification.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def bulk_create(self, notifications: Iterable[Notification], *, commit: bool = True) -> int:
        models = []
        for notification in notifications:
            model = NotificationModel()
            self._apply_entity_to_model(model, notification)
            models.append(model)
        if not models:
            return 0
        self.session.add_all(models)
        if commit:
            self.session.commit()
        else:
            self.session.flush()
        return len(models)

    def recipients_for_announcement(self, announcement_id: int) -> set[int]:
        rows = (
            self.session.query(NotificationModel.user_id)
            .filter(NotificationModel.announcement_id == announcement_id)
            .distinct()
            .all()
        )
        return {int(row.user_id) for row in rows}

    def exists_for_user_and_event(
        self, *, user_id: int, event_id: int, notification_type: str = NOTIFICATION_TYPE_IN_APP
    ) -> bool:
        query = self.session.query(NotificationModel.id).filter(
            NotificationModel.user_id == user_id,
            NotificationModel.event_id == event_id,
            NotificationModel.type == notification_type,
        )
        return self.session.query(query.exists()).scalar()

    def mark_as_read(self, notification_id: int, *, user_id: int) -> None:
        self.session.query(NotificationModel).filter(
            NotificationModel.id == notification_id,
            NotificationModel.user_id == user_id,
            NotificationModel.is_read == false(),
        ).update({NotificationModel.is_read: True}, synchronize_session=False)
        self.session.commit()

    def promote_due_scheduled(self, now: datetime) -> int:
        """Mark scheduled notification rows whose time has come as sent."""

        moment = ensure_app_naive_datetime(now)
        result = self.session.execute(
            update(NotificationModel)
            .where(NotificationModel.status == AnnouncementStatus.SCHEDULED.notification_value)
            .where(NotificationModel.scheduled_at.is_not(None))
            .where(NotificationModel.scheduled_at <= moment)
            .values(status=AnnouncementStatus.SENT.notification_value, sent_at=moment)
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        return int(result.rowcount or 0)

    def list_announcement_views(self) -> Sequence[AnnouncementView]:
        """Group in-app notifications into announcement views, newest first."""

        status_rank = func.max(
            case(
                (NotificationModel.status == AnnouncementStatus.SENT.notification_value, 2),
                (NotificationModel.status == AnnouncementStatus.SCHEDULED.notification_value, 1),
                else_=0,
            )
        ).label("status_rank")
        first_created_at = func.min(NotificationModel.created_at).label("first_created_at")
        query = (
            self.session.query(
                func.min(NotificationModel.id).label("announcement_id"),
                NotificationModel.event_id,
                NotificationModel.title,
                NotificationModel.message,
                status_rank,
                first_created_at,
                func.max(NotificationModel.scheduled_at).label("scheduled_at"),
                func.max(NotificationModel.sent_at).label("sent_at"),
            )
            .filter(NotificationModel.type == NOTIFICATION_TYPE_IN_APP)
            .filter(NotificationModel.title.is_not(None))
            .filter(NotificationModel.message.is_not(None))
            .group_by(
                NotificationModel.event_id,
                NotificationModel.title,
                NotificationModel.message,
            )
            .order_by(first_created_at.desc(), func.min(NotificationModel.id).desc())
        )
        return [
            AnnouncementView(
                announcement_id=row.announcement_id,
                event_id=row.event_id,
                title=row.title,
                message=row.message,
                status=AnnouncementStatus.from_rank(row.status_rank),
                created_at=row.first_created_at,
                scheduled_at=row.scheduled_at,
                sent_at=row.sent_at,
            )
            for row in query.all()
        ]

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.user_id = notification.user_id
        model.event_id = notification.event_id
        model.announcement_id = notification.announcement_id
        model.created_by = notification.created_by
        model.type = notification.type or NOTIFICATION_TYPE_IN_APP
        model.title = notification.title
        model.message = notification.message
        model.status = notification.status
        model.is_read = bool(notification.is_read)
        model.scheduled_at = ensure_app_naive_datetime(notification.scheduled_at)
        model.scheduled_by = notification.scheduled_by
        model.attempts = notification.attempts or 0
        model.error_message = notification.error_message
        model.created_at = (
            ensure_app_naive_datetime(notification.created_at)
            or now_in_app_naive_datetime()
        )
        model.sent_at = ensure_app_naive_datetime(notification.sent_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            event_id=model.event_id,
            title=model.title,
            message=model.message,
            status=model.status,
            type=model.type,
            is_read=bool(model.is_read),
            announcement_id=model.announcement_id,
            created_by=model.created_by,
            scheduled_at=model.scheduled_at,
            scheduled_by=model.scheduled_by,
            attempts=model.attempts or 0,
            error_message=model.error_message,
            created_at=model.created_at,
            sent_at=model.sent_at,
        )


__all__ = ["NotificationRepository"]
