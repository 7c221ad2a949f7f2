"""Endpoints for the per-user notification inbox."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    create_notifications as create_notifications_uc,
    list_owner_notifications as list_owner_notifications_uc,
    list_user_notifications as list_user_notifications_uc,
    mark_notification_read as mark_notification_read_uc,
    send_notification as send_notification_uc,
    update_notification as update_notification_uc,
)
from app.domain.entities import Caller, Notification
from app.domain.exceptions import EvenzaError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_caller
from app.interfaces.api.routes_helpers import http_error_from
from app.interfaces.api.schemas import (
    NotificationCreateRequest,
    NotificationCreateResponse,
    NotificationMutationResponse,
    NotificationRead,
    NotificationReadResponse,
    NotificationUpdate,
)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        notification_id=notification.id or 0,
        user_id=notification.user_id,
        event_id=notification.event_id,
        type=notification.type,
        title=notification.title,
        message=notification.message,
        status=notification.status,
        is_read=notification.is_read,
        scheduled_at=notification.scheduled_at,
        scheduled_by=notification.scheduled_by,
        attempts=notification.attempts,
        error_message=notification.error_message,
        created_at=notification.created_at,
        sent_at=notification.sent_at,
    )


@router.get("/user", response_model=list[NotificationRead])
def list_user_notifications(
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> list[NotificationRead]:
    """Return the notifications delivered to the authenticated user."""

    notifications = list_user_notifications_uc(db, user_id=caller.user_id)
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/owner", response_model=list[NotificationRead])
def list_owner_notifications(
    event_id: int | None = Query(None, description="Restrict to a single event"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> list[NotificationRead]:
    """Return notifications scheduled by the authenticated organizer."""

    notifications = list_owner_notifications_uc(
        db, owner_id=caller.user_id, event_id=event_id
    )
    return [_notification_to_schema(notification) for notification in notifications]


@router.post("", response_model=NotificationCreateResponse)
def create_notifications(
    payload: NotificationCreateRequest,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> NotificationCreateResponse:
    """Create one notification per listed recipient."""

    try:
        result = create_notifications_uc(
            db,
            created_by=caller.user_id,
            recipients=payload.recipients,
            title=payload.title,
            message=payload.message,
            event_id=payload.event_id,
            status=payload.status,
            scheduled_at=payload.scheduled_at,
        )
    except EvenzaError as exc:
        raise http_error_from(exc) from exc
    return NotificationCreateResponse(inserted=result.inserted, requested=result.requested)


@router.put("/{notification_id}/read", response_model=NotificationReadResponse)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> NotificationReadResponse:
    """Mark one of the caller's notifications as read."""

    try:
        mark_notification_read_uc(
            db, notification_id=notification_id, user_id=caller.user_id
        )
    except EvenzaError as exc:
        raise http_error_from(exc) from exc
    return NotificationReadResponse(notification_id=notification_id)


def _mutation_response(notification: Notification) -> NotificationMutationResponse:
    return NotificationMutationResponse(
        notification_id=notification.id or 0,
        status=notification.status,
        sent_at=notification.sent_at,
    )


@router.patch("/{notification_id}", response_model=NotificationMutationResponse)
def update_notification(
    notification_id: int,
    payload: NotificationUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> NotificationMutationResponse:
    """Edit a notification the caller scheduled."""

    try:
        notification = update_notification_uc(
            db,
            notification_id=notification_id,
            owner_id=caller.user_id,
            changes=payload.model_dump(exclude_unset=True),
        )
    except EvenzaError as exc:
        raise http_error_from(exc) from exc
    return _mutation_response(notification)


@router.post("/{notification_id}/send", response_model=NotificationMutationResponse)
def send_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> NotificationMutationResponse:
    """Mark a notification the caller scheduled as sent."""

    try:
        notification = send_notification_uc(
            db, notification_id=notification_id, owner_id=caller.user_id
        )
    except EvenzaError as exc:
        raise http_error_from(exc) from exc
    return _mutation_response(notification)
