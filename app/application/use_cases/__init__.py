"""Aggregate application use cases."""

from .announcements import (
    create_announcement,
    run_scheduled_sweep,
    send_now,
    update_announcement,
)
from .notifications import mark_notification_read

__all__ = [
    "create_announcement",
    "mark_notification_read",
    "run_scheduled_sweep",
    "send_now",
    "update_announcement",
]
