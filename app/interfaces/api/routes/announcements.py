"""Endpoints for organizer announcements."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.announcements import (
    clear_announcements as clear_announcements_uc,
    create_announcement as create_announcement_uc,
    list_announcements as list_announcements_uc,
    send_now as send_now_uc,
    update_announcement as update_announcement_uc,
)
from app.domain.entities import AnnouncementView, Caller, DispatchResult
from app.domain.exceptions import EvenzaError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_caller
from app.interfaces.api.routes_helpers import http_error_from
from app.interfaces.api.schemas import (
    AnnouncementClearResponse,
    AnnouncementCreate,
    AnnouncementCreateResponse,
    AnnouncementList,
    AnnouncementRead,
    AnnouncementSendRequest,
    AnnouncementUpdate,
    AnnouncementUpdateResponse,
    DispatchCounts,
)

router = APIRouter(prefix="/api/announcements", tags=["announcements"])


def _view_to_schema(view: AnnouncementView) -> AnnouncementRead:
    return AnnouncementRead(
        announcement_id=view.announcement_id,
        event_id=view.event_id,
        title=view.title,
        message=view.message,
        status=view.status.client_label,
        scheduled_at=view.scheduled_at,
        created_at=view.created_at,
        sent_at=view.sent_at,
    )


def _counts(result: DispatchResult | None) -> DispatchCounts | None:
    if result is None:
        return None
    return DispatchCounts(**result.as_dict())


@router.get("", response_model=AnnouncementList)
def list_announcements(db: Session = Depends(get_db)) -> AnnouncementList:
    """Return announcements derived from delivered in-app notifications."""

    views = list_announcements_uc(db)
    return AnnouncementList(announcements=[_view_to_schema(view) for view in views])


@router.post(
    "",
    response_model=AnnouncementCreateResponse,
    response_model_exclude_none=True,
)
def create_announcement(
    payload: AnnouncementCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> AnnouncementCreateResponse:
    """Store an announcement and send it right away when requested."""

    try:
        result = create_announcement_uc(
            db,
            created_by=caller.user_id,
            title=payload.title,
            message=payload.message,
            status=payload.status,
            event_id=payload.event_id,
            event_title=payload.event_title,
            scheduled_at=payload.scheduled_at,
            mark_sent=payload.mark_sent,
        )
    except EvenzaError as exc:
        raise http_error_from(exc) from exc

    return AnnouncementCreateResponse(
        announcement_id=result.announcement.id,
        sent=_counts(result.sent),
    )


@router.post("/send", response_model=DispatchCounts)
def send_announcement(
    payload: AnnouncementSendRequest,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> DispatchCounts:
    """Deliver a message to an event's registrants without storing an announcement."""

    if payload.type != "in-app":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only in-app notifications are supported",
        )
    try:
        result = send_now_uc(
            db,
            created_by=caller.user_id,
            title=payload.title,
            message=payload.message,
            event_id=payload.event_id,
            event_title=payload.event_title,
            mark_sent=payload.mark_sent,
        )
    except EvenzaError as exc:
        raise http_error_from(exc) from exc
    return DispatchCounts(**result.as_dict())


@router.patch(
    "/{announcement_id}",
    response_model=AnnouncementUpdateResponse,
    response_model_exclude_none=True,
)
def update_announcement(
    announcement_id: int,
    payload: AnnouncementUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_current_caller),
) -> AnnouncementUpdateResponse:
    """Apply a partial update; moving to ``Sent`` dispatches the announcement."""

    try:
        result = update_announcement_uc(
            db,
            announcement_id=announcement_id,
            updated_by=caller.user_id,
            changes=payload.model_dump(exclude_unset=True),
        )
    except EvenzaError as exc:
        raise http_error_from(exc) from exc

    return AnnouncementUpdateResponse(
        announcement_id=result.announcement.id,
        status=result.announcement.status.client_label,
        sent=_counts(result.sent),
    )


@router.delete("", response_model=AnnouncementClearResponse)
def clear_announcements(
    db: Session = Depends(get_db),
    _: Caller = Depends(get_current_caller),
) -> AnnouncementClearResponse:
    """Remove every announcement; user notification history is kept."""

    return AnnouncementClearResponse(deleted=clear_announcements_uc(db))
