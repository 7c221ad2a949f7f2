"""Domain entities exposed by the application."""

from .announcement import (
    EMPTY_DISPATCH,
    Announcement,
    AnnouncementStatus,
    AnnouncementView,
    DispatchResult,
)
from .announcement_lookup import AnnouncementLookup, Found, MaterializedFrom, NotFound
from .caller import Caller
from .notification import NOTIFICATION_STATUSES, NOTIFICATION_TYPE_IN_APP, Notification
from .registration import Registration

__all__ = [
    "Announcement",
    "AnnouncementLookup",
    "AnnouncementStatus",
    "AnnouncementView",
    "Caller",
    "DispatchResult",
    "EMPTY_DISPATCH",
    "Found",
    "MaterializedFrom",
    "NOTIFICATION_STATUSES",
    "NOTIFICATION_TYPE_IN_APP",
    "NotFound",
    "Notification",
    "Registration",
]
