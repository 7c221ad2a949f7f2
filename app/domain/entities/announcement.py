"""Domain entities describing organizer announcements."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AnnouncementStatus(str, Enum):
    """Lifecycle states shared by announcements and their notification rows.

    ``announcements.status`` stores ``draft/scheduled/sent`` while
    ``notifications.status`` stores ``pending/scheduled/sent`` and clients see
    ``Draft/Scheduled/Sent``. Every conversion goes through this enum.
    """

    DRAFT = "draft"
    SCHEDULED = "scheduled"
    SENT = "sent"

    @classmethod
    def parse(cls, value: "AnnouncementStatus | str | None") -> "AnnouncementStatus":
        """Return the status for any external spelling, defaulting to draft."""

        if isinstance(value, AnnouncementStatus):
            return value
        normalized = str(value or "").strip().lower()
        if normalized == "scheduled":
            return cls.SCHEDULED
        if normalized == "sent":
            return cls.SENT
        return cls.DRAFT

    @classmethod
    def from_rank(cls, rank: int | None) -> "AnnouncementStatus":
        """Map an aggregated notification severity rank back to a status."""

        if rank is not None and rank >= 2:
            return cls.SENT
        if rank == 1:
            return cls.SCHEDULED
        return cls.DRAFT

    @property
    def client_label(self) -> str:
        return self.value.capitalize()

    @property
    def announcement_value(self) -> str:
        return self.value

    @property
    def notification_value(self) -> str:
        if self is AnnouncementStatus.DRAFT:
            return "pending"
        return self.value

    @property
    def rank(self) -> int:
        return {"draft": 0, "scheduled": 1, "sent": 2}[self.value]


@dataclass
class Announcement:
    """Message an event organizer broadcasts to the event registrants."""

    id: int | None
    event_id: int | None
    title: str
    message: str
    status: AnnouncementStatus
    scheduled_at: datetime | None
    created_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    sent_at: datetime | None = None
    dispatch_attempts: int = 0
    last_error: str | None = None
    source_notification_id: int | None = None

    @property
    def is_sent(self) -> bool:
        return self.status is AnnouncementStatus.SENT


@dataclass(frozen=True)
class AnnouncementView:
    """Announcement derived by grouping delivered notification rows."""

    announcement_id: int
    event_id: int | None
    title: str
    message: str
    status: AnnouncementStatus
    created_at: datetime | None
    scheduled_at: datetime | None
    sent_at: datetime | None


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of a fan-out: rows written versus recipients resolved."""

    inserted: int
    requested: int

    def as_dict(self) -> dict[str, int]:
        return {"inserted": self.inserted, "requested": self.requested}


EMPTY_DISPATCH = DispatchResult(inserted=0, requested=0)


__all__ = [
    "Announcement",
    "AnnouncementStatus",
    "AnnouncementView",
    "DispatchResult",
    "EMPTY_DISPATCH",
]
