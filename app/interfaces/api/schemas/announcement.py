"""Pydantic models describing announcement payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AnnouncementCreate(BaseModel):
    """Payload used to create an announcement."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(None, max_length=255)
    message: str | None = None
    status: str | None = Field("Draft", description="Draft, Scheduled or Sent")
    event_id: int | str | None = None
    event_title: str | None = None
    scheduled_at: str | None = Field(None, description="ISO 8601 timestamp")
    mark_sent: bool = Field(False, alias="markSent")


class AnnouncementUpdate(BaseModel):
    """Partial update; only the fields sent by the client are applied."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, max_length=255)
    message: str | None = None
    status: str | None = None
    event_id: int | str | None = None
    scheduled_at: str | None = None


class AnnouncementSendRequest(BaseModel):
    """Payload for broadcasting a message straight to an event's registrants."""

    model_config = ConfigDict(populate_by_name=True)

    event_id: int | str | None = None
    event_title: str | None = None
    title: str | None = Field(None, max_length=255)
    message: str | None = None
    type: str = "in-app"
    mark_sent: bool = Field(True, alias="markSent")


class DispatchCounts(BaseModel):
    """Notification rows written versus recipients resolved."""

    inserted: int
    requested: int


class AnnouncementRead(BaseModel):
    """Announcement as shown in the organizer dashboard."""

    announcement_id: int
    event_id: int | None = None
    title: str
    message: str
    status: str
    scheduled_at: datetime | None = None
    created_at: datetime | None = None
    sent_at: datetime | None = None


class AnnouncementList(BaseModel):
    announcements: list[AnnouncementRead]


class AnnouncementCreateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    announcement_id: int = Field(..., alias="announcementId")
    sent: DispatchCounts | None = None


class AnnouncementUpdateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    announcement_id: int = Field(..., alias="announcementId")
    status: str
    sent: DispatchCounts | None = None


class AnnouncementClearResponse(BaseModel):
    ok: bool = True
    deleted: int


__all__ = [
    "AnnouncementClearResponse",
    "AnnouncementCreate",
    "AnnouncementCreateResponse",
    "AnnouncementList",
    "AnnouncementRead",
    "AnnouncementSendRequest",
    "AnnouncementUpdate",
    "AnnouncementUpdateResponse",
    "DispatchCounts",
]
