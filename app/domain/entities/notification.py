"""Domain entity representing a per-user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

NOTIFICATION_TYPE_IN_APP = "in-app"
NOTIFICATION_STATUSES = ("pending", "scheduled", "sent")


@dataclass
class Notification:
    """One recipient's delivery record for an announcement or system message."""

    id: int | None
    user_id: int
    event_id: int | None
    title: str
    message: str
    status: str = "pending"
    type: str = NOTIFICATION_TYPE_IN_APP
    is_read: bool = False
    announcement_id: int | None = None
    created_by: int | None = None
    scheduled_at: datetime | None = None
    scheduled_by: int | None = None
    attempts: int = 0
    error_message: str | None = None
    created_at: datetime | None = None
    sent_at: datetime | None = None


__all__ = ["NOTIFICATION_STATUSES", "NOTIFICATION_TYPE_IN_APP", "Notification"]
