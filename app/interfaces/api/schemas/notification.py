"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NotificationCreateRequest(BaseModel):
    """Payload used to create notifications for explicit recipients."""

    recipients: list[int | str] | None = Field(
        None, description="User ids that receive the notification"
    )
    event_id: int | None = None
    title: str | None = Field(None, max_length=255)
    message: str | None = None
    status: str | None = Field("pending", description="pending, scheduled or sent")
    scheduled_at: str | None = None


class NotificationCreateResponse(BaseModel):
    ok: bool = True
    inserted: int
    requested: int


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    notification_id: int
    user_id: int
    event_id: int | None = None
    type: str
    title: str
    message: str
    status: str
    is_read: bool
    scheduled_at: datetime | None = None
    scheduled_by: int | None = None
    attempts: int = 0
    error_message: str | None = None
    created_at: datetime | None = None
    sent_at: datetime | None = None


class NotificationUpdate(BaseModel):
    """Partial update of a notification the caller scheduled."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, max_length=255)
    message: str | None = None
    status: str | None = None
    scheduled_at: str | None = None


class NotificationMutationResponse(BaseModel):
    ok: bool = True
    notification_id: int
    status: str
    sent_at: datetime | None = None


class NotificationReadResponse(BaseModel):
    success: bool = True
    notification_id: int


class WaitlistNotifyResponse(BaseModel):
    message: str
    already_notified: bool


__all__ = [
    "NotificationCreateRequest",
    "NotificationCreateResponse",
    "NotificationMutationResponse",
    "NotificationRead",
    "NotificationReadResponse",
    "NotificationUpdate",
    "WaitlistNotifyResponse",
]
