"""Use cases for the announcement lifecycle."""

from .clear_announcements import clear_announcements
from .create_announcement import AnnouncementCreation, create_announcement
from .dispatch import dispatch_announcement, fan_out
from .list_announcements import list_announcements
from .send_now import send_now
from .sweep import SweepReport, run_scheduled_sweep
from .update_announcement import AnnouncementUpdate, update_announcement

__all__ = [
    "AnnouncementCreation",
    "AnnouncementUpdate",
    "SweepReport",
    "clear_announcements",
    "create_announcement",
    "dispatch_announcement",
    "fan_out",
    "list_announcements",
    "run_scheduled_sweep",
    "send_now",
    "update_announcement",
]
